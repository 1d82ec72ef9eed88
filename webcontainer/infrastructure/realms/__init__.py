"""Realm implementations used by the embedded engine."""

from .auth_backend import RealmAuthBackend, on_auth_error
from .memory_realm import MemoryRealm

__all__ = ["MemoryRealm", "RealmAuthBackend", "on_auth_error"]
