"""Registry mapping type tags to coercion functions."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Pattern, Union

from ..environment import DEFAULT_FALSEY_PATTERN, DEFAULT_TYPE
from ..errors import UnknownTypeError

LOGGER = logging.getLogger(__name__)

Coercion = Callable[[str, Mapping[str, Any]], Any]

TYPE_ALIASES: Mapping[str, str] = {
    "bool": "boolean",
    "integer": "int",
    "string": "str",
    "array": "list",
    "map": "dict",
    "hash": "dict",
    "sym": "symbol",
}

# Tags that fall back to the matching Python constructor when nothing is
# registered under them.
PRIMITIVE_PARSERS: Mapping[str, Callable[[str], Any]] = {
    "int": int,
    "float": float,
    "str": str,
    "complex": complex,
}


def canonical_tag(tag: Any) -> str:
    """Return the registry key for ``tag``.

    Types and other named objects are keyed by their ``__name__``; every key is
    lower-cased and passed through :data:`TYPE_ALIASES`.
    """

    if isinstance(tag, str):
        name = tag
    else:
        name = getattr(tag, "__name__", None) or str(tag)
    key = name.lower()
    return TYPE_ALIASES.get(key, key)


def compile_pattern(pattern: Union[str, Pattern[str]]) -> Pattern[str]:
    """Compile ``pattern`` case-insensitively, keeping the flags of a compiled pattern."""

    if isinstance(pattern, str):
        return re.compile(pattern, re.IGNORECASE)
    if pattern.flags & re.IGNORECASE:
        return pattern
    return re.compile(pattern.pattern, pattern.flags | re.IGNORECASE)


def _primitive(parser: Callable[[str], Any]) -> Coercion:
    def coerce(value: str, options: Mapping[str, Any]) -> Any:
        return parser(value)

    coerce.__name__ = parser.__name__
    return coerce


@dataclass
class CoercionRegistry:
    """Dispatch table of coercions plus the process-wide casting policy."""

    registry: Dict[str, Coercion] = field(default_factory=dict)
    default_type: Any = DEFAULT_TYPE
    falsey_pattern: Pattern[str] = field(
        default_factory=lambda: compile_pattern(DEFAULT_FALSEY_PATTERN)
    )

    def __post_init__(self) -> None:
        self._builtins: Dict[str, Coercion] = dict(self.registry)

    def install_builtins(self, coercions: Mapping[Any, Coercion]) -> None:
        """Seed coercions that survive :meth:`reset`."""

        for tag, func in coercions.items():
            key = canonical_tag(tag)
            self._builtins[key] = func
            self.registry[key] = func

    def register(self, tag: Any, func: Coercion) -> None:
        """Register ``func`` under ``tag``, replacing any existing entry."""

        key = canonical_tag(tag)
        LOGGER.debug("Registering coercion %r for type %r", func, key)
        self.registry[key] = func

    def resolve(self, tag: Any) -> Coercion:
        """Return the coercion for ``tag``.

        Unregistered tags naming a Python primitive (``int``, ``float``,
        ``str``, ``complex``) resolve to that constructor.
        """

        key = canonical_tag(tag)
        if key in self.registry:
            return self.registry[key]
        if key in PRIMITIVE_PARSERS:
            return _primitive(PRIMITIVE_PARSERS[key])
        raise UnknownTypeError(tag)

    def __contains__(self, tag: Any) -> bool:
        key = canonical_tag(tag)
        return key in self.registry or key in PRIMITIVE_PARSERS

    def tags(self) -> List[str]:
        """Return every registered tag in registration order."""

        return list(self.registry)

    def set_default_type(self, tag: Any) -> None:
        LOGGER.debug("Default type set to %r", tag)
        self.default_type = tag

    def set_falsey_pattern(self, pattern: Union[str, Pattern[str]]) -> None:
        compiled = compile_pattern(pattern)
        LOGGER.debug("Default falsey pattern set to %r", compiled.pattern)
        self.falsey_pattern = compiled

    def is_falsey(self, value: str) -> bool:
        """Return ``True`` when the whole of ``value`` matches the falsey pattern."""

        return self.falsey_pattern.fullmatch(value) is not None

    def reset(self) -> None:
        """Drop user coercions and restore the built-ins and default policy."""

        self.registry = dict(self._builtins)
        self.default_type = DEFAULT_TYPE
        self.falsey_pattern = compile_pattern(DEFAULT_FALSEY_PATTERN)


__all__ = [
    "Coercion",
    "CoercionRegistry",
    "PRIMITIVE_PARSERS",
    "TYPE_ALIASES",
    "canonical_tag",
    "compile_pattern",
]
