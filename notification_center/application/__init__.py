"""Application layer orchestrating domain objects and storage."""
