"""In-memory realm backed by an optional JSON user database."""

from __future__ import annotations

import hmac
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from webcontainer.domain.entities.errors import LifecycleError
from webcontainer.domain.ports.realm import Principal, Realm
from webcontainer.shared import get_logger

logger = get_logger(__name__)


class UserEntry(BaseModel):
    """One user record of the users file."""

    username: str = Field(min_length=1, description="Login name")
    password: str = Field(description="Plain-text password")
    roles: List[str] = Field(default_factory=list, description="Granted roles")


class UsersDocument(BaseModel):
    """Top-level shape of the users file."""

    users: List[UserEntry] = Field(default_factory=list)


_USERS_FILE = TypeAdapter(Union[UsersDocument, List[UserEntry]])


class MemoryRealm(Realm):
    """Realm holding users in memory.

    Users are either added with :meth:`add_user` or read from ``users_file``
    by :meth:`load`, which runs on first use if nobody called it before.
    The file has the shape
    ``{"users": [{"username": ..., "password": ..., "roles": [...]}]}``
    (a bare list of users is accepted too); a missing file yields an
    empty realm.
    """

    def __init__(self, users_file: Optional[Path | str] = None) -> None:
        self._users_file = Path(users_file) if users_file else None
        self._users: Dict[str, Tuple[str, Principal]] = {}
        self._loaded = self._users_file is None
        self._lock = threading.Lock()

    @property
    def users_file(self) -> Optional[Path]:
        return self._users_file

    @property
    def loaded(self) -> bool:
        return self._loaded

    def add_user(self, username: str, password: str, roles: Iterable[str] = ()) -> None:
        principal = Principal(name=username, roles=frozenset(roles))
        with self._lock:
            self._users[username] = (password, principal)

    def authenticate(self, username: str, password: str) -> Optional[Principal]:
        self._ensure_loaded()
        entry = self._users.get(username)
        if entry is None:
            return None
        expected, principal = entry
        if not hmac.compare_digest(expected.encode("utf-8"), password.encode("utf-8")):
            return None
        return principal

    def load(self) -> None:
        """Read the users file, replacing nothing that was added by hand.

        The whole file is validated before any user is registered, so a
        failed load leaves the realm unchanged and unloaded.

        Raises:
            LifecycleError: If the file exists but cannot be parsed.
        """
        with self._lock:
            if self._loaded:
                return
            path = self._users_file
            if path is None or not path.is_file():
                logger.info("memory_realm.users_file.absent", path=str(path))
                self._loaded = True
                return
            try:
                parsed = _USERS_FILE.validate_json(path.read_bytes())
            except (OSError, ValidationError) as exc:
                raise LifecycleError(
                    f"Unable to load realm users from {path}",
                    details={"path": str(path)},
                ) from exc

            entries = parsed.users if isinstance(parsed, UsersDocument) else parsed
            loaded: Dict[str, Tuple[str, Principal]] = {
                entry.username: (
                    entry.password,
                    Principal(name=entry.username, roles=frozenset(entry.roles)),
                )
                for entry in entries
            }
            loaded.update(self._users)
            self._users = loaded
            self._loaded = True
            logger.info("memory_realm.users_file.loaded", path=str(path), users=len(entries))

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def __repr__(self) -> str:
        return f"MemoryRealm(users_file={self._users_file})"
