"""Raw key/value stores backing declared settings."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, MutableMapping, Optional, Protocol

from .environment import load_environment


class RawStore(Protocol):
    """Minimal contract for a flat string key/value store."""

    def has(self, name: str) -> bool:
        """Return ``True`` when ``name`` holds a value."""

    def get(self, name: str) -> str:
        """Return the raw string stored under ``name``."""

    def set(self, name: str, value: str) -> None:
        """Store ``value`` under ``name``."""


@dataclass
class MappingStore:
    """Store backed by an arbitrary mutable mapping.

    Useful for tests and for embedding settings that do not come from the
    process environment.
    """

    data: MutableMapping[str, str] = field(default_factory=dict)

    def has(self, name: str) -> bool:
        return name in self.data

    def get(self, name: str) -> str:
        return self.data[name]

    def set(self, name: str, value: str) -> None:
        self.data[name] = value


@dataclass
class EnvironStore:
    """Store backed by :data:`os.environ`.

    When ``dotenv`` is enabled a ``.env`` file is merged into the process
    environment before the first access (see
    :func:`envsetting.environment.load_environment`).
    """

    dotenv: bool = True
    dotenv_path: Optional[str] = None

    def _ensure_loaded(self) -> None:
        if self.dotenv:
            load_environment(self.dotenv_path)

    def has(self, name: str) -> bool:
        self._ensure_loaded()
        return name in os.environ

    def get(self, name: str) -> str:
        self._ensure_loaded()
        return os.environ[name]

    def set(self, name: str, value: str) -> None:
        self._ensure_loaded()
        os.environ[name] = value


def to_raw(value: Any) -> str:
    """Return the string form written to a store for a default ``value``.

    ``None`` becomes the empty string and booleans are lower-cased. Mappings
    become ``key:value`` pairs and other iterables are joined with commas, so
    that defaults survive the list and dict coercions unchanged.
    """

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Mapping):
        return ",".join(f"{key}:{item}" for key, item in value.items())
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(str(item) for item in _ordered(value))
    return str(value)


def _ordered(items: Iterable[Any]) -> Iterable[Any]:
    if isinstance(items, (set, frozenset)):
        return sorted(items, key=str)
    return items


__all__ = ["EnvironStore", "MappingStore", "RawStore", "to_raw"]
