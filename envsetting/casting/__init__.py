"""Casting subpackage holding the coercion registry and the value caster."""

from .caster import Symbol, ValueCaster
from .registry import CoercionRegistry, canonical_tag

__all__ = [
    "CoercionRegistry",
    "Symbol",
    "ValueCaster",
    "canonical_tag",
]
