"""Domain port for the credential store consulted by the container."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import FrozenSet, Optional


@dataclass(frozen=True, slots=True)
class Principal:
    """An authenticated user and the roles granted to it."""

    name: str
    roles: FrozenSet[str] = field(default_factory=frozenset)


class Realm(ABC):
    """Authentication store used by the engine for access control."""

    @abstractmethod
    def authenticate(self, username: str, password: str) -> Optional[Principal]:
        """Return the principal for valid credentials, otherwise None."""

    def has_role(self, principal: Optional[Principal], role: str) -> bool:
        if principal is None:
            return False
        return role in principal.roles

    def load(self) -> None:
        """Prepare the realm before the first request; no-op by default."""
