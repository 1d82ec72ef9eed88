"""
Main module - Main/Composition Root Layer

Entry point of the web container, orchestrating the initialization of
all other layers.

Its primary responsibilities include:
- Loading settings (pydantic-settings)
- Configuring dependencies and services (Composition Root)
- Driving the container lifecycle
"""

from .config import AppSettings, ContainerSettings, get_settings
from .container import AppContainer, container_lifespan, get_container, init_container

__all__ = [
    "AppSettings",
    "ContainerSettings",
    "get_settings",
    "AppContainer",
    "container_lifespan",
    "init_container",
    "get_container",
]
