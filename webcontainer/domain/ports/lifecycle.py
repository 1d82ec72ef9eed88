"""Domain ports for services whose lifecycle is driven externally."""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable


class LifecycleState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    STARTED = "started"
    STOPPED = "stopped"


@runtime_checkable
class Initializable(Protocol):
    """A service that builds its internal state once, after injection."""

    def initialize(self) -> None:
        """Raises LifecycleError if the service cannot be initialized."""
        ...


@runtime_checkable
class Startable(Protocol):
    """A service that is started on application startup and stopped on exit."""

    def start(self) -> None:
        ...

    def stop(self) -> None:
        ...
