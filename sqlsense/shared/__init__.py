"""Shared helpers used across sqlsense domains."""
