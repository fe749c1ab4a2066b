"""Tests for :mod:`envsetting.casting.caster`."""

from __future__ import annotations

import pytest

from envsetting.casting import CoercionRegistry, Symbol, ValueCaster
from envsetting.errors import UnknownTypeError


TRUTHY = ["true", "on", "yes", "yo", "yup", "anything"]
FALSEY = ["false", "no", "off", "disable", "disabled", "0", ""]


@pytest.fixture()
def caster() -> ValueCaster:
    return ValueCaster(CoercionRegistry())


def test_default_cast_returns_raw_string_unless_falsey(caster):
    value = caster.cast("present in environment")

    assert value == "present in environment"
    assert isinstance(value, str)
    for raw in FALSEY:
        assert caster.cast(raw) is False


def test_boolean_cast(caster):
    for raw in TRUTHY:
        assert caster.cast(raw, {"type": "boolean"}) is True
    for raw in FALSEY:
        assert caster.cast(raw, {"type": bool}) is False


def test_str_cast_keeps_falsey_strings(caster):
    assert caster.cast("false", {"type": str}) == "false"


def test_numeric_casts(caster):
    assert caster.cast("-42", {"type": int}) == -42
    value = caster.cast("10", {"type": float})
    assert value == 10.0
    assert isinstance(value, float)


def test_symbol_cast(caster):
    value = caster.cast("symbol", {"type": "symbol"})

    assert value == "symbol"
    assert isinstance(value, Symbol)
    assert repr(value) == "Symbol('symbol')"


def test_list_cast_strips_whitespace(caster):
    assert caster.cast("a, b ,c", {"type": list}) == ["a", "b", "c"]


def test_list_cast_of_integers(caster):
    assert caster.cast("0,1,10,-42,-55", {"type": list, "of": int}) == [0, 1, 10, -42, -55]


def test_list_cast_of_floats(caster):
    assert caster.cast("0.1, 1.3, 10", {"type": list, "of": float}) == [0.1, 1.3, 10.0]


def test_list_cast_returns_fresh_list(caster):
    first = caster.cast("one,two", {"type": list})
    second = caster.cast("one,two", {"type": list})

    assert first == second
    assert first is not second


def test_list_cast_empty_and_trailing_pieces(caster):
    assert caster.cast("", {"type": list}) == []
    assert caster.cast("a,b,", {"type": list}) == ["a", "b"]


def test_list_cast_fails_as_a_whole(caster):
    with pytest.raises(ValueError):
        caster.cast("1,two,3", {"type": list, "of": int})


def test_dict_cast_defaults_to_symbol_keys(caster):
    value = caster.cast("one: two, three: four", {"type": dict})

    assert value == {"one": "two", "three": "four"}
    assert all(isinstance(key, Symbol) for key in value)


def test_dict_cast_of_integers(caster):
    assert caster.cast("one: 111, two: 222", {"type": dict, "of": int}) == {"one": 111, "two": 222}


def test_dict_cast_with_string_keys(caster):
    value = caster.cast("one: two, three: four", {"type": dict, "keys": str})

    assert value == {"one": "two", "three": "four"}
    assert not any(isinstance(key, Symbol) for key in value)


def test_dict_cast_splits_on_first_colon_only(caster):
    value = caster.cast("api: http://localhost:8000", {"type": dict})

    assert value == {"api": "http://localhost:8000"}


def test_dict_cast_last_duplicate_wins(caster):
    assert caster.cast("a:1, a:2", {"type": dict, "of": int}) == {"a": 2}


def test_dict_cast_rejects_pairs_without_colon(caster):
    with pytest.raises(ValueError):
        caster.cast("one: two, three", {"type": dict})


def test_collection_elements_use_default_type(caster):
    assert caster.cast("a, off, b", {"type": list}) == ["a", False, "b"]


def test_elements_follow_default_type_override(caster):
    caster.registry.set_default_type(str)

    assert caster.cast("a, off", {"type": list}) == ["a", "off"]
    assert caster.cast("off") == "off"


def test_unknown_type_raises(caster):
    with pytest.raises(UnknownTypeError):
        caster.cast("value", {"type": "nonexistent"})


def test_custom_coercion_can_reuse_list_cast(caster):
    caster.registry.register(
        set,
        lambda value, options: set(caster.cast(value, {**options, "type": list})),
    )

    assert caster.cast("1,3,5,7,9", {"type": set, "of": int}) == {1, 3, 5, 7, 9}


def test_custom_coercion_receives_extra_options(caster):
    caster.registry.register(
        "separated",
        lambda value, options: value.split(options["sep"]),
    )

    assert caster.cast("a|b", {"type": "separated", "sep": "|"}) == ["a", "b"]


def test_elements_cast_as_strings_when_default_type_is_a_collection(caster):
    caster.registry.set_default_type(list)
    assert caster.cast("a,b") == ["a", "b"]
    assert caster.cast("a, off", {"type": list}) == ["a", False]

    caster.registry.set_default_type("hash")
    assert caster.cast("one: two", {"type": dict}) == {"one": "two"}
