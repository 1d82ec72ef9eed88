"""Embedded server adapter over Starlette routing and the uvicorn engine."""

from .connector import Connector
from .embedded import Embedded, EngineState
from .engine import Context, Engine, FilterDef, FilterMap, Host
from .errors import EngineLifecycleError

__all__ = [
    "Connector",
    "Context",
    "Embedded",
    "Engine",
    "EngineLifecycleError",
    "EngineState",
    "FilterDef",
    "FilterMap",
    "Host",
]
