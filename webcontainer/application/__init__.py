"""Application module - orchestration of service lifecycles."""

from .lifecycle import LifecycleManager

__all__ = ["LifecycleManager"]
