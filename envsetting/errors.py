"""Exceptions raised while declaring and reading environment settings."""
from __future__ import annotations

from typing import Any, Optional

from .formatter import formatted_error


class EnvSettingError(Exception):
    """Base class for every error raised by :mod:`envsetting`."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class MissingRequiredError(EnvSettingError, KeyError):
    """A declared variable has no value in the store and no default."""

    def __init__(self, name: str, description: Optional[str] = None) -> None:
        super().__init__(formatted_error(name, description))
        self.name = name
        self.description = description


class NotConfiguredError(EnvSettingError, KeyError):
    """A keyed read was attempted for a name that was never declared."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} is not configured in the environment")
        self.name = name


class UnknownAccessorError(EnvSettingError, AttributeError):
    """A generated accessor was requested for a name that was never declared."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No environment accessor named '{name}'")
        self.name = name


class UnknownTypeError(EnvSettingError, KeyError):
    """No coercion is registered for a type tag."""

    def __init__(self, tag: Any) -> None:
        super().__init__(f"Unknown type: {tag!r}")
        self.tag = tag


__all__ = [
    "EnvSettingError",
    "MissingRequiredError",
    "NotConfiguredError",
    "UnknownAccessorError",
    "UnknownTypeError",
]
