"""SQL query editing support."""
