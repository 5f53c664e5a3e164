"""syspkg - structured access to the system package manager."""

__version__ = "0.1.0"
