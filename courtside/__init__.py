"""Courtside basketball league backend."""

__version__ = "1.0.0"
