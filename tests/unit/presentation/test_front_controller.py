from __future__ import annotations

import httpx
import pytest
from starlette.responses import PlainTextResponse
from starlette.routing import Mount, Router

from webcontainer.presentation.controllers import echo_router
from webcontainer.presentation.front_controller import (
    FrontControllerFilter,
    create_servlet_application,
)


def _mounted_app() -> Router:
    fallback = PlainTextResponse("from webapp")
    application = create_servlet_application([echo_router])
    return Router(
        routes=[Mount("/ctx", app=FrontControllerFilter(fallback, application))]
    )


@pytest.mark.asyncio
async def test_matching_routes_are_dispatched_to_application() -> None:
    transport = httpx.ASGITransport(app=_mounted_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.put("/ctx/echo?name=value", content=b"payload")

    assert response.status_code == 200
    body = response.json()
    assert body["method"] == "PUT"
    assert body["query"] == {"name": "value"}
    assert body["body"] == "payload"
    assert body["root_path"] == "/ctx"
    assert body["user"] is None


@pytest.mark.asyncio
async def test_unmatched_paths_continue_to_webapp() -> None:
    transport = httpx.ASGITransport(app=_mounted_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/ctx/index.html")

    assert response.text == "from webapp"


@pytest.mark.asyncio
async def test_wrong_method_is_answered_by_application() -> None:
    transport = httpx.ASGITransport(app=_mounted_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.delete("/ctx/echo")

    assert response.status_code == 405


def test_servlet_application_hides_docs_routes() -> None:
    application = create_servlet_application([echo_router])

    paths = {route.path for route in application.routes}
    assert "/docs" not in paths
    assert "/openapi.json" not in paths
    assert "/echo" in paths
