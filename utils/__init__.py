"""Shared helpers for the ofremove CLI: configuration and logging."""
