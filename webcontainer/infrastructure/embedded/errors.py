"""Errors raised by the embedded engine itself."""


class EngineLifecycleError(Exception):
    """Raised when the engine graph cannot be built, started or stopped."""
