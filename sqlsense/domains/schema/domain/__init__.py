"""Schema domain types."""
