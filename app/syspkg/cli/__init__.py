"""Command-line interface for syspkg."""
