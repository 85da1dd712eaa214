"""Completion session orchestration."""
