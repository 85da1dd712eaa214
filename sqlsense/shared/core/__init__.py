"""Core shared infrastructure (file-backed stores)."""
