"""
Servlet container service - Infrastructure Layer

Configures and controls the embedded server. Settings and the webapp
descriptors are injected once; ``initialize`` translates them into the
engine graph and ``start``/``stop`` delegate to the engine.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional

from webcontainer.domain.entities.errors import ConfigurationError, LifecycleError
from webcontainer.domain.entities.webapp import Webapp, unique_webapps
from webcontainer.domain.ports.lifecycle import LifecycleState
from webcontainer.infrastructure.embedded import (
    Embedded,
    EngineState,
    FilterDef,
    FilterMap,
)
from webcontainer.presentation.front_controller import (
    FrontControllerFilter,
    create_servlet_application,
)
from webcontainer.shared import get_logger
from webcontainer.shared.consts import (
    DEFAULT_HOST_NAME,
    ROOT_CONTEXT_PATH,
    ROOT_DOC_BASE,
)

if TYPE_CHECKING:
    from webcontainer.main.config import ContainerSettings

logger = get_logger(__name__)

FRONT_CONTROLLER_NAME = FrontControllerFilter.__name__
FRONT_CONTROLLER_PATTERN = "/*"


class ServletContainer:
    """A service which configures and controls an embedded server.

    Lifecycle: ``initialize`` once, then ``start``/``stop``. The engine
    handle returned by :meth:`get` is valid only after ``initialize``.
    """

    def __init__(
        self,
        settings: ContainerSettings,
        webapps: Iterable[Webapp] = (),
        front_controller: Optional[Any] = None,
        embedded_factory: Callable[[], Embedded] = Embedded,
    ) -> None:
        if settings is None:
            raise ConfigurationError("Container settings are required")
        if webapps is None:
            raise ConfigurationError("Webapps must not be None")

        self._settings = settings
        self._webapps = unique_webapps(webapps)
        self._front_controller = (
            front_controller
            if front_controller is not None
            else create_servlet_application()
        )
        self._embedded_factory = embedded_factory
        self._embedded: Optional[Embedded] = None
        self._state = LifecycleState.UNINITIALIZED

    @property
    def settings(self) -> ContainerSettings:
        return self._settings

    @property
    def webapps(self) -> tuple:
        return self._webapps

    @property
    def state(self) -> LifecycleState:
        return self._state

    def initialize(self) -> None:
        if self._state is not LifecycleState.UNINITIALIZED:
            raise LifecycleError(
                "Servlet container has already been initialized",
                details={"state": self._state.value},
            )
        try:
            self._embedded = self._build()
        except LifecycleError:
            raise
        except Exception as exc:
            raise LifecycleError(
                f"Unable to initialize servlet container: {exc}"
            ) from exc
        self._state = LifecycleState.INITIALIZED

    def _build(self) -> Embedded:
        settings = self._settings
        home = Path(settings.catalina_home).absolute()
        app_base = Path(settings.app_base).absolute()

        embedded = self._embedded_factory()

        logger.info("servlet_container.catalina_home", path=str(home))
        embedded.set_catalina_home(str(home))

        logger.info("servlet_container.realm", realm=repr(settings.realm))
        embedded.set_realm(settings.realm)
        if settings.realm is not None:
            settings.realm.load()

        engine = embedded.create_engine()

        logger.info("servlet_container.host.create", app_base=str(app_base))
        localhost = embedded.create_host(DEFAULT_HOST_NAME, str(app_base))
        engine.add_child(localhost)
        engine.set_default_host(localhost.name)

        root = embedded.create_context(ROOT_CONTEXT_PATH, str(app_base / ROOT_DOC_BASE))
        localhost.add_child(root)

        for webapp in self._webapps:
            logger.info("servlet_container.webapp.configure", webapp=str(webapp))
            context = embedded.create_context(webapp.context, webapp.location)

            filter_def = FilterDef(
                filter_name=FRONT_CONTROLLER_NAME,
                filter_class=FrontControllerFilter,
            )
            filter_def.add_init_parameter("application", self._front_controller)
            context.add_filter_def(filter_def)

            filter_map = FilterMap(filter_name=FRONT_CONTROLLER_NAME)
            filter_map.add_url_pattern(FRONT_CONTROLLER_PATTERN)
            context.add_filter_map(filter_map)

            localhost.add_child(context)

        embedded.add_engine(engine)

        logger.info(
            "servlet_container.connector.create",
            address=settings.address,
            port=settings.port,
        )
        connector = embedded.create_connector(
            settings.address,
            settings.port,
            settings.secure,
            ssl_certfile=_optional_path(settings.ssl_certfile),
            ssl_keyfile=_optional_path(settings.ssl_keyfile),
        )
        logger.info(
            "servlet_container.connector.secure",
            connector=repr(connector),
            secure=settings.secure,
        )
        embedded.add_connector(connector)
        return embedded

    def get(self) -> Embedded:
        """Return the engine handle built by ``initialize``."""
        if self._embedded is None:
            raise LifecycleError("Servlet container has not been initialized")
        return self._embedded

    def start(self) -> None:
        embedded = self.get()
        try:
            logger.info("servlet_container.start", embedded=repr(embedded))
            embedded.start()
        except Exception as exc:
            raise LifecycleError(f"Unable to start servlet container: {exc}") from exc
        self._state = LifecycleState.STARTED

    def stop(self) -> None:
        embedded = self.get()
        try:
            logger.info("servlet_container.stop", embedded=repr(embedded))
            embedded.stop()
        except Exception as exc:
            if embedded.state is EngineState.STOPPED:
                self._state = LifecycleState.STOPPED
            raise LifecycleError(f"Unable to stop servlet container: {exc}") from exc
        self._state = LifecycleState.STOPPED


def _optional_path(value: Optional[Path]) -> Optional[str]:
    return str(value) if value is not None else None
