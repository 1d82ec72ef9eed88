"""Starlette authentication backend that consults a realm."""

from __future__ import annotations

import base64
import binascii
from typing import Optional, Tuple

from starlette.authentication import (
    AuthCredentials,
    AuthenticationBackend,
    AuthenticationError,
    SimpleUser,
)
from starlette.requests import HTTPConnection
from starlette.responses import PlainTextResponse, Response

from webcontainer.domain.ports.realm import Realm


class RealmAuthBackend(AuthenticationBackend):
    """Resolve HTTP Basic credentials against the engine's realm.

    Requests without an ``Authorization`` header stay anonymous; access
    control on top of the resolved user is left to the handlers.
    """

    def __init__(self, realm: Realm) -> None:
        self.realm = realm

    async def authenticate(
        self, conn: HTTPConnection
    ) -> Optional[Tuple[AuthCredentials, SimpleUser]]:
        header = conn.headers.get("Authorization")
        if not header:
            return None

        scheme, _, encoded = header.partition(" ")
        if scheme.lower() != "basic":
            return None

        try:
            decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise AuthenticationError("Invalid basic auth credentials") from exc

        username, separator, password = decoded.partition(":")
        if not separator:
            raise AuthenticationError("Invalid basic auth credentials")

        principal = self.realm.authenticate(username, password)
        if principal is None:
            raise AuthenticationError("Invalid username or password")

        scopes = ["authenticated", *sorted(principal.roles)]
        return AuthCredentials(scopes), SimpleUser(principal.name)


def on_auth_error(conn: HTTPConnection, exc: Exception) -> Response:
    """Answer rejected credentials with a Basic challenge."""
    return PlainTextResponse(
        str(exc),
        status_code=401,
        headers={"WWW-Authenticate": 'Basic realm="webcontainer"'},
    )
