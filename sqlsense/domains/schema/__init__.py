"""Schema metadata: snapshots, providers, and the schema cache."""
