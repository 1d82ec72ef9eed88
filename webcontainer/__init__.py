"""Embedded web container configured through dependency injection."""

__version__ = "1.0.0"
