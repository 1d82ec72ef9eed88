"""URL pattern helpers shared by filter mappings and dispatch."""

from __future__ import annotations

from typing import Iterable

from starlette.types import Scope


def route_path(scope: Scope) -> str:
    """Return the request path relative to the mount point in ``scope``."""
    path = scope.get("path", "")
    root_path = scope.get("root_path", "")
    if not root_path or not path.startswith(root_path):
        return path
    remainder = path[len(root_path) :]
    if remainder and not remainder.startswith("/"):
        return path
    return remainder or "/"


def url_pattern_matches(pattern: str, path: str) -> bool:
    """Match ``path`` against a servlet-style URL pattern.

    Supported forms are ``/*`` (everything), ``/prefix/*``, ``*.ext`` and
    exact paths.
    """
    if pattern == "/*":
        return True
    if pattern.endswith("/*"):
        prefix = pattern[:-2]
        return path == prefix or path.startswith(prefix + "/")
    if pattern.startswith("*."):
        last_segment = path.rsplit("/", 1)[-1]
        return last_segment.endswith(pattern[1:])
    return path == pattern


def any_pattern_matches(patterns: Iterable[str], path: str) -> bool:
    return any(url_pattern_matches(pattern, path) for pattern in patterns)


def validate_url_pattern(pattern: str) -> str:
    """Raise ValueError unless ``pattern`` is a supported URL pattern."""
    if pattern.startswith("*."):
        if "/" in pattern:
            raise ValueError(f"Invalid extension pattern: {pattern!r}")
        return pattern
    if not pattern.startswith("/"):
        raise ValueError(f"URL pattern must start with '/' or '*.': {pattern!r}")
    if "*" in pattern[:-1] or (pattern.endswith("*") and not pattern.endswith("/*")):
        raise ValueError(f"Wildcard only allowed as trailing '/*': {pattern!r}")
    return pattern
