"""
Domain Errors

This module defines the error classes raised across the container's
configuration and lifecycle boundaries.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(DomainError):
    """Raised when a required configuration value is missing or invalid."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class LifecycleError(DomainError):
    """Raised when initialize, start or stop of a service fails.

    The underlying failure, if any, is chained as ``__cause__``.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
