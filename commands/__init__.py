"""
Command handlers for the ofremove CLI.

Each module defines a handler for one CLI command.
"""
