"""Tests for :mod:`envsetting.accessor`."""

from __future__ import annotations

from unittest import mock

import pytest

from envsetting.accessor import AccessorFacade
from envsetting.errors import UnknownAccessorError
from envsetting.store import MappingStore
from envsetting.variables import VariableRegistry


@pytest.fixture()
def store() -> MappingStore:
    return MappingStore({"WORKERS": "4", "FEATURE": "off", "ZERO": "0"})


@pytest.fixture()
def variables(store) -> VariableRegistry:
    return VariableRegistry(store)


@pytest.fixture()
def facade(variables) -> AccessorFacade:
    return AccessorFacade(variables)


def test_bind_generates_value_and_presence_accessors(variables, facade):
    variables.declare("WORKERS", type=int)

    assert facade.bind("WORKERS") == ("workers", "is_workers")
    assert facade.lookup("workers")() == 4
    assert facade.lookup("is_workers")() is True
    assert facade.accessors() == ["workers", "is_workers"]


def test_value_is_cached_until_cleared(variables, facade, store):
    variables.declare("WORKERS", type=int)
    facade.bind("WORKERS")
    assert facade.read("workers") == 4

    store.set("WORKERS", "8")
    assert facade.read("workers") == 4

    facade.clear_cache()
    assert facade.read("workers") == 8


def test_cached_reads_do_not_recast(variables, facade):
    variables.declare("FEATURE")
    facade.bind("FEATURE")

    with mock.patch.object(variables, "get_value", wraps=variables.get_value) as spy:
        assert facade.read("feature") is False
        assert facade.read("feature") is False
        assert facade.present("feature") is False

    assert spy.call_count == 1


def test_presence_uses_coerced_value(variables, facade):
    variables.declare("ZERO", type=int)
    variables.declare("FEATURE", type=str)
    facade.bind("ZERO")
    facade.bind("FEATURE")

    # A zero or a literal "off" string is still a value that is present.
    assert facade.present("zero") is True
    assert facade.present("feature") is True


def test_unknown_accessor_is_distinct_from_cast_failure(variables, facade, store):
    store.set("BROKEN", "not-a-number")
    variables.declare("BROKEN", type=int)
    facade.bind("BROKEN")

    with pytest.raises(UnknownAccessorError) as excinfo:
        facade.lookup("brokn")
    assert isinstance(excinfo.value, AttributeError)
    assert excinfo.value.name == "brokn"

    with pytest.raises(ValueError):
        facade.read("broken")


def test_rebinding_drops_stale_cache(variables, facade):
    variables.declare("WORKERS", type=int)
    facade.bind("WORKERS")
    assert facade.read("workers") == 4

    variables.declare("WORKERS", type=str)
    facade.bind("WORKERS")

    assert facade.read("workers") == "4"


def test_value_accessor_wins_over_presence_name(store, variables, facade):
    store.set("IS_WORKERS", "yes")
    variables.declare("WORKERS", type=int)
    variables.declare("IS_WORKERS")
    facade.bind("WORKERS")
    facade.bind("IS_WORKERS")

    assert facade.lookup("is_workers")() == "yes"
    assert facade.lookup("is_is_workers")() is True


def test_reset_removes_bindings(variables, facade):
    variables.declare("WORKERS")
    facade.bind("WORKERS")
    facade.reset()

    assert "workers" not in facade
    with pytest.raises(UnknownAccessorError):
        facade.read("workers")
