"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides shared utilities, constants, and enums that are used
across multiple layers of the web container.

Its primary responsibilities include:
- Defining cross-layer constants (environment names, log levels, config keys)
- Centralizing logging configuration
- Serving as a common place for definitions that do not belong
  exclusively to Domain, Infrastructure or Presentation
"""

from .config_keys import ContainerConfigKeys
from .consts import EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "ContainerConfigKeys",
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
