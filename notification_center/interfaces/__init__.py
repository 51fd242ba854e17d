"""Interface adapters exposed to external callers."""
