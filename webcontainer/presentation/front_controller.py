"""
Front-controller filter - Presentation Layer

ASGI middleware installed on every deployed webapp. Requests whose
context-relative path is served by the DI-assembled FastAPI application
are dispatched there; everything else continues to the webapp itself.
"""

from __future__ import annotations

from typing import Iterable

from fastapi import APIRouter, FastAPI
from starlette.routing import Match
from starlette.types import ASGIApp, Receive, Scope, Send

from webcontainer.shared import get_logger

logger = get_logger(__name__)


def create_servlet_application(routers: Iterable[APIRouter] = ()) -> FastAPI:
    """Build the application that holds every handler served inside webapps.

    Docs and schema routes are disabled so they never shadow webapp files.
    """
    application = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)
    for router in routers:
        application.include_router(router)
    return application


class FrontControllerFilter:
    """Route matching requests into ``application``, pass the rest to ``app``."""

    def __init__(self, app: ASGIApp, application: FastAPI) -> None:
        self.app = app
        self.application = application

    def handles(self, scope: Scope) -> bool:
        for route in self.application.router.routes:
            match, _ = route.matches(scope)
            if match is not Match.NONE:
                return True
        return False

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] in ("http", "websocket") and self.handles(scope):
            logger.debug(
                "front_controller.dispatch",
                path=scope.get("path"),
                root_path=scope.get("root_path", ""),
            )
            await self.application(scope, receive, send)
            return
        await self.app(scope, receive, send)
