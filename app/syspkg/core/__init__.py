"""Core configuration and path handling for syspkg."""
