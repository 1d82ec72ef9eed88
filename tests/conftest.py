from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from webcontainer.domain.entities.webapp import Webapp  # noqa: E402
from webcontainer.domain.ports.realm import Principal, Realm  # noqa: E402
from webcontainer.main.config import ContainerSettings  # noqa: E402


class StaticRealm(Realm):
    """Realm accepting a fixed set of credentials."""

    def __init__(self, users: Optional[Dict[str, str]] = None) -> None:
        self.users = dict(users or {})
        self.calls: List[str] = []

    def authenticate(self, username: str, password: str) -> Optional[Principal]:
        self.calls.append(username)
        if self.users.get(username) != password:
            return None
        return Principal(name=username, roles=frozenset({"user"}))


@pytest.fixture()
def catalina_home(tmp_path: Path) -> Path:
    home = tmp_path / "catalina"
    root = home / "webapps" / "ROOT"
    root.mkdir(parents=True)
    (root / "index.html").write_text("<h1>root</h1>", encoding="utf-8")
    (home / "conf").mkdir()
    return home


@pytest.fixture()
def users_file(catalina_home: Path) -> Path:
    path = catalina_home / "conf" / "users.json"
    path.write_text(
        json.dumps(
            {
                "users": [
                    {"username": "alice", "password": "secret", "roles": ["manager"]},
                    {"username": "bob", "password": "hunter2"},
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture()
def container_settings(catalina_home: Path) -> ContainerSettings:
    return ContainerSettings(catalina_home=catalina_home, address="127.0.0.1", port=0)


@pytest.fixture()
def sample_webapps() -> List[Webapp]:
    return [Webapp("examples", "/sample"), Webapp("manager", "/manager")]


@pytest.fixture()
def deployed_webapp(tmp_path: Path) -> Webapp:
    location = tmp_path / "deployed"
    location.mkdir()
    (location / "index.html").write_text("<h1>deployed</h1>", encoding="utf-8")
    (location / "notes.txt").write_text("plain notes", encoding="utf-8")
    return Webapp("deployed", str(location))


@pytest.fixture()
def static_realm() -> StaticRealm:
    return StaticRealm({"carol": "pa55"})


@pytest.fixture(autouse=True)
def clean_servlet_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.upper().startswith("SERVLET"):
            monkeypatch.delenv(key, raising=False)

