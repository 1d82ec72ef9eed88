"""Infrastructure services package."""

from .servlet_container import ServletContainer

__all__ = ["ServletContainer"]
