"""
Engine object graph - Infrastructure Layer

Engine, hosts and contexts of the embedded server. Each node only records
configuration; the Starlette application is assembled from it when the
server is started.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.authentication import AuthenticationMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, RedirectResponse
from starlette.routing import BaseRoute, Host as HostRoute, Mount, Route, Router
from starlette.staticfiles import StaticFiles
from starlette.types import ASGIApp, Receive, Scope, Send

from webcontainer.domain.ports.realm import Realm
from webcontainer.infrastructure.realms.auth_backend import (
    RealmAuthBackend,
    on_auth_error,
)

from .errors import EngineLifecycleError
from .patterns import any_pattern_matches, route_path, validate_url_pattern

FilterFactory = Callable[..., ASGIApp]


@dataclass
class FilterDef:
    """A named filter: an ASGI middleware class plus its init parameters."""

    filter_name: Optional[str] = None
    filter_class: Optional[FilterFactory] = None
    init_params: Dict[str, Any] = field(default_factory=dict)

    def add_init_parameter(self, name: str, value: Any) -> None:
        self.init_params[name] = value

    def create(self, app: ASGIApp) -> ASGIApp:
        if self.filter_class is None:
            raise EngineLifecycleError(f"Filter {self.filter_name!r} has no filter class")
        return self.filter_class(app, **self.init_params)


@dataclass
class FilterMap:
    """Binds a filter name to the URL patterns it intercepts."""

    filter_name: Optional[str] = None
    url_patterns: List[str] = field(default_factory=list)

    def add_url_pattern(self, pattern: str) -> None:
        try:
            self.url_patterns.append(validate_url_pattern(pattern))
        except ValueError as exc:
            raise EngineLifecycleError(str(exc)) from exc


class _MappedFilter:
    """Runs ``filtered`` for paths matching ``patterns``, ``target`` otherwise."""

    def __init__(self, target: ASGIApp, filtered: ASGIApp, patterns: List[str]) -> None:
        self.target = target
        self.filtered = filtered
        self.patterns = list(patterns)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] in ("http", "websocket") and any_pattern_matches(
            self.patterns, route_path(scope)
        ):
            await self.filtered(scope, receive, send)
            return
        await self.target(scope, receive, send)


class Context:
    """A deployed web application: a path on a host and a document base."""

    def __init__(self, path: str, doc_base: str) -> None:
        self.path = path
        self.doc_base = doc_base
        self._filter_defs: Dict[str, FilterDef] = {}
        self._filter_maps: List[FilterMap] = []

    @property
    def name(self) -> str:
        return self.path

    @property
    def filter_defs(self) -> List[FilterDef]:
        return list(self._filter_defs.values())

    @property
    def filter_maps(self) -> List[FilterMap]:
        return list(self._filter_maps)

    def add_filter_def(self, filter_def: FilterDef) -> None:
        if not filter_def.filter_name:
            raise EngineLifecycleError("Filter definitions require a filter name")
        self._filter_defs[filter_def.filter_name] = filter_def

    def find_filter_def(self, name: str) -> Optional[FilterDef]:
        return self._filter_defs.get(name)

    def add_filter_map(self, filter_map: FilterMap) -> None:
        if filter_map.filter_name not in self._filter_defs:
            raise EngineLifecycleError(
                f"Filter mapping references unknown filter {filter_map.filter_name!r}"
            )
        if not filter_map.url_patterns:
            raise EngineLifecycleError(
                f"Filter mapping for {filter_map.filter_name!r} has no URL pattern"
            )
        self._filter_maps.append(filter_map)

    def build_app(self) -> ASGIApp:
        """Assemble the context's ASGI app: static documents behind its filters."""
        app: ASGIApp
        if Path(self.doc_base).is_dir():
            app = StaticFiles(directory=self.doc_base, html=True)
        else:
            app = PlainTextResponse("Not Found", status_code=404)

        # First mapping ends up outermost.
        for filter_map in reversed(self._filter_maps):
            filter_def = self._filter_defs[filter_map.filter_name]
            app = _MappedFilter(app, filter_def.create(app), filter_map.url_patterns)
        return app

    def __repr__(self) -> str:
        return f"Context(path={self.path!r}, doc_base={self.doc_base!r})"


class Host:
    """A virtual host holding contexts under an application base directory."""

    def __init__(self, name: str, app_base: str) -> None:
        self.name = name
        self.app_base = app_base
        self._children: Dict[str, Context] = {}

    def add_child(self, context: Context) -> None:
        if context.path in self._children:
            raise EngineLifecycleError(
                f"Context path {context.path!r} is not unique on host {self.name!r}"
            )
        self._children[context.path] = context

    def find_child(self, path: str) -> Optional[Context]:
        return self._children.get(path)

    def find_children(self) -> List[Context]:
        return list(self._children.values())

    def build_router(self) -> Router:
        """Mount every context, most specific path first, root context last.

        A request for a context path without its trailing slash is
        redirected to the slashed form.
        """
        contexts = sorted(self._children.values(), key=lambda ctx: len(ctx.path), reverse=True)
        routes: List[BaseRoute] = []
        for ctx in contexts:
            if ctx.path:
                routes.append(Route(ctx.path, endpoint=_redirect_to_context_root))
            routes.append(Mount(ctx.path, app=ctx.build_app()))
        return Router(routes=routes)

    def __repr__(self) -> str:
        return f"Host(name={self.name!r}, app_base={self.app_base!r})"


class Engine:
    """Top-level container: hosts, the default host and the realm."""

    def __init__(self, name: str = "Catalina", realm: Optional[Realm] = None) -> None:
        self.name = name
        self.realm = realm
        self.default_host: Optional[str] = None
        self._children: Dict[str, Host] = {}

    def add_child(self, host: Host) -> None:
        if host.name in self._children:
            raise EngineLifecycleError(f"Host name {host.name!r} is not unique")
        self._children[host.name] = host

    def find_child(self, name: str) -> Optional[Host]:
        return self._children.get(name)

    def find_children(self) -> List[Host]:
        return list(self._children.values())

    def set_default_host(self, name: str) -> None:
        self.default_host = name

    def build_app(self) -> ASGIApp:
        """Route by ``Host`` header, falling back to the default host."""
        default = self.find_child(self.default_host) if self.default_host else None
        if default is None:
            raise EngineLifecycleError(
                f"Engine {self.name!r} has no default host {self.default_host!r}"
            )

        routes: List[BaseRoute] = [
            HostRoute(host.name, app=host.build_router())
            for host in self._children.values()
            if host is not default
        ]
        routes.append(Mount("", app=default.build_router()))

        middleware: List[Middleware] = []
        if self.realm is not None:
            middleware.append(
                Middleware(
                    AuthenticationMiddleware,
                    backend=RealmAuthBackend(self.realm),
                    on_error=on_auth_error,
                )
            )
        return Starlette(routes=routes, middleware=middleware)

    def __repr__(self) -> str:
        return f"Engine(name={self.name!r}, default_host={self.default_host!r})"


async def _redirect_to_context_root(request: Request) -> RedirectResponse:
    url = request.url.replace(path=request.url.path + "/")
    return RedirectResponse(url=str(url), status_code=302)
