"""Notification center package."""
