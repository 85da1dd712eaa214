"""CLI command handlers for completion."""
