"""
Dependency container injection module - Main Layer

This module implements the dependency injection container that wires
the settings, the deployable webapps and the servlet container service,
and drives their lifecycle.
"""

from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

from dependency_injector import containers, providers

from webcontainer.application.lifecycle import LifecycleManager
from webcontainer.domain.entities.webapp import Webapp
from webcontainer.infrastructure.services.servlet_container import ServletContainer
from webcontainer.presentation.controllers import echo_router, status_router
from webcontainer.presentation.front_controller import create_servlet_application
from webcontainer.shared import get_logger

from .config import AppSettings, ContainerSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    container_settings = providers.Singleton(
        ContainerSettings,
        catalina_home=config.servlet.container.catalina_home,
        app_base=config.servlet.container.app_base,
        address=config.servlet.container.address,
        port=config.servlet.container.port,
        secure=config.servlet.container.secure,
        ssl_certfile=config.servlet.container.ssl_certfile,
        ssl_keyfile=config.servlet.container.ssl_keyfile,
        users_file=config.servlet.container.users_file,
        realm=config.servlet.container.realm,
    )

    # Deployable webapps, contributed by whoever assembles the container
    webapps = providers.List()

    # Handlers reachable inside every webapp through the front controller
    servlet_routers = providers.List(
        providers.Object(echo_router),
        providers.Object(status_router),
    )

    servlet_application = providers.Singleton(
        create_servlet_application,
        routers=servlet_routers,
    )

    # Infrastructure
    servlet_container = providers.Singleton(
        ServletContainer,
        settings=container_settings,
        webapps=webapps,
        front_controller=servlet_application,
    )

    embedded = providers.Callable(
        lambda servlet_container: servlet_container.get(),
        servlet_container,
    )

    # Application
    lifecycle_manager = providers.Singleton(
        LifecycleManager,
        services=providers.List(servlet_container),
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: Optional[AppContainer] = None


def init_container(
    settings: AppSettings, webapps: Iterable[Webapp] = ()
) -> AppContainer:
    """Initialize global container with application settings and webapps.

    Webapps declared in ``settings.servlet.webapps`` come first, followed
    by ``webapps`` in the given order.
    """
    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)

    declared = [webapp.to_webapp() for webapp in settings.servlet.webapps]
    for webapp in [*declared, *webapps]:
        container.webapps.add_args(providers.Object(webapp))

    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@contextmanager
def container_lifespan() -> Iterator[AppContainer]:
    """
    Run the registered services for the duration of the block.

    On enter every service is initialized and started; on exit the
    started services are stopped in reverse order, also when startup
    failed halfway.
    """
    container = get_container()
    manager = container.lifecycle_manager()

    try:
        manager.startup()
        logger.info("container.resources.started")
        yield container
    finally:
        manager.shutdown()
        logger.info("container.resources.shutdown")
