from __future__ import annotations

import base64

import pytest
from starlette.authentication import AuthenticationError
from starlette.requests import HTTPConnection

from webcontainer.infrastructure.realms import RealmAuthBackend, on_auth_error


def _connection(authorization: str | None = None) -> HTTPConnection:
    headers = []
    if authorization is not None:
        headers.append((b"authorization", authorization.encode()))
    return HTTPConnection({"type": "http", "headers": headers})


def _basic(username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return f"Basic {token}"


@pytest.mark.asyncio
async def test_valid_credentials_resolve_principal(static_realm) -> None:
    backend = RealmAuthBackend(static_realm)

    credentials, user = await backend.authenticate(_connection(_basic("carol", "pa55")))

    assert user.display_name == "carol"
    assert "authenticated" in credentials.scopes
    assert "user" in credentials.scopes
    assert static_realm.calls == ["carol"]


@pytest.mark.asyncio
async def test_anonymous_and_other_schemes_are_left_alone(static_realm) -> None:
    backend = RealmAuthBackend(static_realm)

    assert await backend.authenticate(_connection()) is None
    assert await backend.authenticate(_connection("Bearer abc")) is None
    assert static_realm.calls == []


@pytest.mark.asyncio
async def test_bad_credentials_raise(static_realm) -> None:
    backend = RealmAuthBackend(static_realm)

    with pytest.raises(AuthenticationError):
        await backend.authenticate(_connection(_basic("carol", "wrong")))
    with pytest.raises(AuthenticationError):
        await backend.authenticate(_connection("Basic !!!"))


def test_auth_error_response_challenges_client() -> None:
    response = on_auth_error(_connection(), AuthenticationError("denied"))

    assert response.status_code == 401
    assert response.headers["www-authenticate"].startswith("Basic")
