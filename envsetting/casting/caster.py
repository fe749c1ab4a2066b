"""Coercion of raw environment strings into typed values."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from ..environment import DEFAULT_TYPE
from .registry import CoercionRegistry, canonical_tag

Options = Mapping[str, Any]

# Options consumed by a collection coercion; they never reach its elements.
_COLLECTION_OPTIONS = ("of", "keys")

_COLLECTION_TAGS = ("list", "dict")


class Symbol(str):
    """String subclass marking a value cast with the ``symbol`` type."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Symbol({str.__repr__(self)})"


def _nested_options(options: Options, tag: Any) -> Dict[str, Any]:
    nested = {key: value for key, value in options.items() if key not in _COLLECTION_OPTIONS}
    nested["type"] = tag
    return nested


def _split(value: str) -> List[str]:
    pieces = value.split(",")
    while pieces and pieces[-1] == "":
        pieces.pop()
    return pieces


@dataclass
class ValueCaster:
    """Resolve and apply the coercion requested by a variable's options.

    The caster owns the built-in coercions (``boolean``, ``symbol``, ``list``,
    ``dict`` and the default ``string_unless_falsey``) and installs them into
    its :class:`CoercionRegistry` on construction. Collection coercions call
    back into :meth:`cast` for their elements, so elements may use any
    registered type, including user-defined ones.
    """

    registry: CoercionRegistry = field(default_factory=CoercionRegistry)

    def __post_init__(self) -> None:
        self.registry.install_builtins(
            {
                "boolean": self.to_boolean,
                "symbol": self.to_symbol,
                "list": self.to_list,
                "dict": self.to_dict,
                DEFAULT_TYPE: self.string_unless_falsey,
            }
        )

    def cast(self, value: str, options: Optional[Options] = None) -> Any:
        """Coerce ``value`` with ``options['type']`` or the default type."""

        options = options or {}
        tag = options.get("type")
        if tag is None:
            tag = self.registry.default_type
        return self.registry.resolve(tag)(value, options)

    # -- built-in coercions -----------------------------------------------

    def to_boolean(self, value: str, options: Options) -> bool:
        return not self.registry.is_falsey(value)

    def to_symbol(self, value: str, options: Options) -> Symbol:
        return Symbol(value)

    def string_unless_falsey(self, value: str, options: Options) -> Union[str, bool]:
        """Return ``False`` for falsey values and ``value`` untouched otherwise."""

        if self.registry.is_falsey(value):
            return False
        return value

    def to_list(self, value: str, options: Options) -> List[Any]:
        """Split ``value`` on commas and cast each stripped piece with ``of``."""

        item_options = _nested_options(options, self._tag(options, "of", self._element_default()))
        return [self.cast(piece.strip(), item_options) for piece in _split(value)]

    def to_dict(self, value: str, options: Options) -> Dict[Any, Any]:
        """Parse ``key:value`` pairs, casting keys with ``keys`` and values with ``of``."""

        key_options = _nested_options(options, self._tag(options, "keys", "symbol"))
        value_options = _nested_options(options, self._tag(options, "of", self._element_default()))
        result: Dict[Any, Any] = {}
        for pair in _split(value):
            key, sep, item = pair.partition(":")
            if not sep:
                raise ValueError(f"Expected a 'key:value' pair, got {pair!r}")
            result[self.cast(key.strip(), key_options)] = self.cast(item.strip(), value_options)
        return result

    def _element_default(self) -> Any:
        # Elements never fall back to a collection type.
        default = self.registry.default_type
        if canonical_tag(default) in _COLLECTION_TAGS:
            return DEFAULT_TYPE
        return default

    @staticmethod
    def _tag(options: Options, name: str, fallback: Any) -> Any:
        tag = options.get(name)
        return fallback if tag is None else tag


__all__ = ["Options", "Symbol", "ValueCaster"]
