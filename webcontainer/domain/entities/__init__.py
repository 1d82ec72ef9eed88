"""Domain entities package."""

from .errors import ConfigurationError, DomainError, LifecycleError
from .webapp import Webapp, normalize_context_path, unique_webapps

__all__ = [
    "ConfigurationError",
    "DomainError",
    "LifecycleError",
    "Webapp",
    "normalize_context_path",
    "unique_webapps",
]
