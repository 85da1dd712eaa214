"""Shell-level concerns (settings)."""
