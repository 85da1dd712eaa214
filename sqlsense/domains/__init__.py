"""Feature domains for sqlsense."""
