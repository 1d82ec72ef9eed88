"""
Lifecycle manager - Application Layer

Drives registered services through their lifecycle: every Initializable
is initialized in registration order, then every Startable is started;
shutdown stops the started services in reverse order.
"""

from __future__ import annotations

from typing import Any, List, Optional

from webcontainer.domain.entities.errors import LifecycleError
from webcontainer.domain.ports.lifecycle import Initializable, Startable
from webcontainer.shared import get_logger

logger = get_logger(__name__)


class LifecycleManager:
    """Initializes, starts and stops a fixed set of services."""

    def __init__(self, services: Optional[List[Any]] = None) -> None:
        self._services: List[Any] = []
        self._started: List[Startable] = []
        for service in services or []:
            self.register(service)

    @property
    def services(self) -> List[Any]:
        return list(self._services)

    @property
    def started(self) -> List[Startable]:
        return list(self._started)

    def register(self, service: Any) -> None:
        if self._started:
            raise LifecycleError("Cannot register services after startup")
        self._services.append(service)

    def startup(self) -> None:
        """Initialize then start every service.

        A failure aborts startup; services started so far keep running
        and are stopped by :meth:`shutdown`.
        """
        for service in self._services:
            if isinstance(service, Initializable):
                logger.info("lifecycle.initialize", service=type(service).__name__)
                self._call(service.initialize, "initialize", service)

        for service in self._services:
            if isinstance(service, Startable):
                logger.info("lifecycle.start", service=type(service).__name__)
                self._call(service.start, "start", service)
                self._started.append(service)

    def shutdown(self) -> None:
        """Stop started services in reverse order, attempting all of them."""
        first_error: Optional[LifecycleError] = None
        while self._started:
            service = self._started.pop()
            logger.info("lifecycle.stop", service=type(service).__name__)
            try:
                self._call(service.stop, "stop", service)
            except LifecycleError as exc:
                logger.error(
                    "lifecycle.stop.failed",
                    service=type(service).__name__,
                    error=str(exc),
                )
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error

    @staticmethod
    def _call(method: Any, action: str, service: Any) -> None:
        try:
            method()
        except LifecycleError:
            raise
        except Exception as exc:
            raise LifecycleError(
                f"Unable to {action} {type(service).__name__}: {exc}"
            ) from exc
