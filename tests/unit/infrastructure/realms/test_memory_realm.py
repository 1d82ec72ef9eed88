from __future__ import annotations

import json
from pathlib import Path

import pytest

from webcontainer.domain.entities.errors import LifecycleError
from webcontainer.infrastructure.realms import MemoryRealm


def test_users_are_loaded_from_file_on_first_use(users_file: Path) -> None:
    realm = MemoryRealm(users_file=users_file)

    alice = realm.authenticate("alice", "secret")

    assert alice is not None
    assert alice.name == "alice"
    assert realm.has_role(alice, "manager")
    assert realm.authenticate("bob", "hunter2").roles == frozenset()


def test_wrong_password_and_unknown_user_are_rejected(users_file: Path) -> None:
    realm = MemoryRealm(users_file=users_file)

    assert realm.authenticate("alice", "nope") is None
    assert realm.authenticate("mallory", "secret") is None
    assert realm.has_role(None, "manager") is False


def test_missing_file_yields_empty_realm(tmp_path: Path) -> None:
    realm = MemoryRealm(users_file=tmp_path / "absent.json")

    assert realm.authenticate("alice", "secret") is None


def test_programmatic_users_take_precedence(users_file: Path) -> None:
    realm = MemoryRealm(users_file=users_file)
    realm.add_user("alice", "changed", roles=["admin"])

    assert realm.authenticate("alice", "secret") is None
    principal = realm.authenticate("alice", "changed")
    assert principal.roles == frozenset({"admin"})


def test_malformed_file_raises_lifecycle_error(tmp_path: Path) -> None:
    path = tmp_path / "users.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(LifecycleError):
        MemoryRealm(users_file=path).load()


def test_invalid_entry_leaves_realm_empty_and_unloaded(tmp_path: Path) -> None:
    path = tmp_path / "users.json"
    path.write_text(
        json.dumps(
            {"users": [{"username": "alice", "password": "secret"}, {"username": "bob"}]}
        ),
        encoding="utf-8",
    )
    realm = MemoryRealm(users_file=path)

    with pytest.raises(LifecycleError):
        realm.authenticate("alice", "secret")
    assert realm.loaded is False
    with pytest.raises(LifecycleError):
        realm.authenticate("alice", "secret")

    path.write_text(
        json.dumps([{"username": "alice", "password": "secret", "roles": ["admin"]}]),
        encoding="utf-8",
    )
    principal = realm.authenticate("alice", "secret")
    assert principal is not None
    assert principal.roles == frozenset({"admin"})
    assert realm.loaded is True
