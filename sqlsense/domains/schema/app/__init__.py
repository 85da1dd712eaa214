"""Schema cache and fetch execution."""
