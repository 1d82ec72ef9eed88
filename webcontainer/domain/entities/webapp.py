"""Deployable webapp descriptor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple


def normalize_context_path(context: str) -> str:
    """Return the context path with a leading slash and no trailing one.

    The empty string (and ``"/"``) denote the root context.
    """
    stripped = context.strip().strip("/")
    return f"/{stripped}" if stripped else ""


@dataclass(frozen=True, slots=True)
class Webapp:
    """A deployable unit: the context path it answers on and where it lives."""

    context: str
    location: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "context", normalize_context_path(self.context))
        object.__setattr__(self, "location", str(self.location))

    def __str__(self) -> str:
        return f"Webapp(context={self.context or '/'}, location={self.location})"


def unique_webapps(webapps: Iterable[Webapp]) -> Tuple[Webapp, ...]:
    """Drop duplicate descriptors, keeping the first occurrence order."""
    return tuple(dict.fromkeys(webapps))
