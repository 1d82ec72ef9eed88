"""
Embedded server - Infrastructure Layer

Facade over Starlette and uvicorn exposing the setup API of an embedded
servlet container: engines, hosts, contexts and connectors are created
and wired by the caller, then the whole graph is started and stopped as
one unit.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Optional

from starlette.types import ASGIApp

from webcontainer.domain.ports.realm import Realm
from webcontainer.shared import get_logger

from .connector import Connector
from .engine import Context, Engine, Host
from .errors import EngineLifecycleError

logger = get_logger(__name__)


class EngineState(str, Enum):
    NEW = "new"
    STARTED = "started"
    STOPPED = "stopped"


class Embedded:
    """The embedded server: owns engines and the connectors bound to them."""

    def __init__(self) -> None:
        self.catalina_home: Optional[str] = None
        self.realm: Optional[Realm] = None
        self.state = EngineState.NEW
        self._engines: List[Engine] = []
        self._connectors: List[Connector] = []
        self._app: Optional[ASGIApp] = None

    @property
    def engines(self) -> List[Engine]:
        return list(self._engines)

    @property
    def connectors(self) -> List[Connector]:
        return list(self._connectors)

    def set_catalina_home(self, path: str) -> None:
        self.catalina_home = str(Path(path).absolute())

    def set_realm(self, realm: Optional[Realm]) -> None:
        self.realm = realm

    def create_engine(self, name: str = "Catalina") -> Engine:
        """Create an engine inheriting the realm set on this server."""
        return Engine(name=name, realm=self.realm)

    def create_host(self, name: str, app_base: str) -> Host:
        return Host(name=name, app_base=app_base)

    def create_context(self, path: str, doc_base: str) -> Context:
        if path and not path.startswith("/"):
            raise EngineLifecycleError(f"Context path must start with '/': {path!r}")
        return Context(path=path, doc_base=doc_base)

    def create_connector(
        self,
        address: str,
        port: int,
        secure: bool = False,
        *,
        ssl_certfile: Optional[str] = None,
        ssl_keyfile: Optional[str] = None,
    ) -> Connector:
        if not 0 <= port <= 65535:
            raise EngineLifecycleError(f"Invalid connector port {port}")
        return Connector(
            address,
            port,
            secure,
            ssl_certfile=ssl_certfile,
            ssl_keyfile=ssl_keyfile,
        )

    def add_engine(self, engine: Engine) -> None:
        self._engines.append(engine)

    def add_connector(self, connector: Connector) -> None:
        """Attach the connector to the most recently added engine."""
        if not self._engines:
            raise EngineLifecycleError("No engines have been defined yet")
        connector.engine = self._engines[-1]
        self._connectors.append(connector)

    def asgi_app(self, engine: Optional[Engine] = None) -> ASGIApp:
        """Build the ASGI application serving ``engine`` (default: the last one)."""
        if engine is None:
            if not self._engines:
                raise EngineLifecycleError("No engines have been defined yet")
            engine = self._engines[-1]
        return engine.build_app()

    def start(self) -> None:
        if self.state is EngineState.STARTED:
            raise EngineLifecycleError("Embedded server has already been started")
        if not self._connectors:
            raise EngineLifecycleError("No connectors have been defined yet")

        apps = {id(engine): engine.build_app() for engine in self._engines}
        started: List[Connector] = []
        try:
            for connector in self._connectors:
                connector.start(apps[id(connector.engine)])
                started.append(connector)
                logger.info(
                    "embedded.connector.started",
                    connector=repr(connector),
                    port=connector.bound_port,
                )
        except EngineLifecycleError:
            for connector in reversed(started):
                connector.stop()
            raise

        self.state = EngineState.STARTED

    def stop(self) -> None:
        if self.state is not EngineState.STARTED:
            raise EngineLifecycleError("Embedded server has not been started")

        errors: List[EngineLifecycleError] = []
        for connector in reversed(self._connectors):
            try:
                connector.stop()
            except EngineLifecycleError as exc:
                logger.error("embedded.connector.stop_failed", connector=repr(connector), error=str(exc))
                errors.append(exc)

        self.state = EngineState.STOPPED
        if errors:
            raise errors[0]

    def __repr__(self) -> str:
        return f"Embedded(catalina_home={self.catalina_home!r}, state={self.state.value})"
