"""Network connector of the embedded server, backed by uvicorn."""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING, Optional

import uvicorn
from starlette.types import ASGIApp

from .errors import EngineLifecycleError

if TYPE_CHECKING:
    from .engine import Engine

STARTUP_TIMEOUT_SECONDS = 10.0
SHUTDOWN_TIMEOUT_SECONDS = 10.0
_POLL_INTERVAL_SECONDS = 0.01


class _ServerThread(threading.Thread):
    """Runs a uvicorn server off the caller's thread and keeps its failure."""

    def __init__(self, server: uvicorn.Server, name: str) -> None:
        super().__init__(name=name, daemon=True)
        self.server = server
        self.error: Optional[BaseException] = None

    def run(self) -> None:
        try:
            self.server.run()
        except (Exception, SystemExit) as exc:
            # uvicorn exits the process on bind failures; keep it for start().
            self.error = exc


class Connector:
    """Listener binding an address and port (optionally TLS) to an engine."""

    def __init__(
        self,
        address: str,
        port: int,
        secure: bool = False,
        *,
        ssl_certfile: Optional[str] = None,
        ssl_keyfile: Optional[str] = None,
        log_level: str = "info",
    ) -> None:
        self.address = address
        self.port = port
        self.secure = secure
        self.ssl_certfile = ssl_certfile
        self.ssl_keyfile = ssl_keyfile
        self.log_level = log_level
        self.engine: Optional["Engine"] = None
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[_ServerThread] = None

    @property
    def scheme(self) -> str:
        return "https" if self.secure else "http"

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def bound_port(self) -> Optional[int]:
        """Port actually listened on; differs from ``port`` when it is 0."""
        if self._server is None or not self._server.started:
            return None
        for server in getattr(self._server, "servers", []):
            for sock in server.sockets:
                return sock.getsockname()[1]
        return None

    def create_config(self, app: ASGIApp) -> uvicorn.Config:
        if self.secure and not (self.ssl_certfile and self.ssl_keyfile):
            raise EngineLifecycleError(
                f"Secure connector on {self.address}:{self.port} needs a certificate and key"
            )
        return uvicorn.Config(
            app,
            host=self.address,
            port=self.port,
            ssl_certfile=self.ssl_certfile if self.secure else None,
            ssl_keyfile=self.ssl_keyfile if self.secure else None,
            log_config=None,
            log_level=self.log_level,
            lifespan="off",
        )

    def start(self, app: ASGIApp, timeout: float = STARTUP_TIMEOUT_SECONDS) -> None:
        if self.running:
            raise EngineLifecycleError(f"Connector {self} is already running")

        server = uvicorn.Server(self.create_config(app))
        thread = _ServerThread(server, name=f"connector-{self.address}-{self.port}")
        self._server, self._thread = server, thread
        thread.start()

        deadline = time.monotonic() + timeout
        while not server.started:
            if not thread.is_alive():
                raise EngineLifecycleError(
                    f"Connector {self} failed to start"
                ) from thread.error
            if time.monotonic() > deadline:
                server.should_exit = True
                thread.join(SHUTDOWN_TIMEOUT_SECONDS)
                raise EngineLifecycleError(f"Connector {self} did not start in {timeout}s")
            time.sleep(_POLL_INTERVAL_SECONDS)

    def stop(self, timeout: float = SHUTDOWN_TIMEOUT_SECONDS) -> None:
        if self._server is None or self._thread is None:
            raise EngineLifecycleError(f"Connector {self} has not been started")

        self._server.should_exit = True
        self._thread.join(timeout)
        if self._thread.is_alive():
            raise EngineLifecycleError(f"Connector {self} did not stop in {timeout}s")
        error = self._thread.error
        self._server, self._thread = None, None
        if error is not None:
            raise EngineLifecycleError(f"Connector {self} stopped with an error") from error

    def __repr__(self) -> str:
        return f"Connector[{self.scheme}://{self.address}:{self.port}]"
