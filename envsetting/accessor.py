"""Lazily evaluated, cached accessors for declared variables."""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

from .errors import UnknownAccessorError
from .variables import VariableRegistry

LOGGER = logging.getLogger(__name__)

PRESENCE_PREFIX = "is_"


def accessor_name(name: str) -> str:
    """Return the value accessor name generated for variable ``name``."""

    return name.lower()


class AccessorFacade:
    """Expose two cached accessors per declared variable.

    For ``DATABASE_URL`` the facade provides ``database_url()`` returning the
    coerced value and ``is_database_url()`` reporting whether that value is
    present, i.e. neither ``None`` nor ``False``. Both results are cached until
    :meth:`clear_cache` is called, so later changes to the raw store are not
    observed.
    """

    def __init__(self, variables: VariableRegistry, lock: Optional[threading.RLock] = None) -> None:
        self._variables = variables
        self._lock = lock or threading.RLock()
        self._bindings: Dict[str, str] = {}
        self._presence: Dict[str, str] = {}
        self._values: Dict[str, Any] = {}
        self._flags: Dict[str, bool] = {}

    def bind(self, name: str) -> Tuple[str, str]:
        """Generate the accessors for ``name`` and return their names."""

        method = accessor_name(name)
        presence = f"{PRESENCE_PREFIX}{method}"
        with self._lock:
            self._bindings[method] = name
            self._presence[presence] = method
            self._values.pop(method, None)
            self._flags.pop(method, None)
        return method, presence

    def read(self, method: str) -> Any:
        """Return the cached value behind accessor ``method``."""

        with self._lock:
            if method not in self._bindings:
                raise UnknownAccessorError(method)
            if method not in self._values:
                self._values[method] = self._variables.get_value(self._bindings[method])
            return self._values[method]

    def present(self, method: str) -> bool:
        """Return whether the value behind accessor ``method`` is set."""

        with self._lock:
            if method not in self._flags:
                value = self.read(method)
                self._flags[method] = value is not None and value is not False
            return self._flags[method]

    def lookup(self, attr: str) -> Callable[[], Any]:
        """Return the generated accessor called ``attr``.

        Value accessors win over presence accessors when the names collide.
        """

        with self._lock:
            if attr in self._bindings:
                target, reader = attr, self.read
            elif attr in self._presence:
                target, reader = self._presence[attr], self.present
            else:
                raise UnknownAccessorError(attr)

        def accessor() -> Any:
            return reader(target)

        accessor.__name__ = attr
        accessor.__qualname__ = f"{type(self).__name__}.{attr}"
        return accessor

    def accessors(self) -> List[str]:
        with self._lock:
            return [*self._bindings, *self._presence]

    def clear_cache(self) -> None:
        """Forget every cached value; declarations are kept."""

        with self._lock:
            LOGGER.debug("Clearing %d cached environment values", len(self._values))
            self._values.clear()
            self._flags.clear()

    def reset(self) -> None:
        with self._lock:
            self._bindings.clear()
            self._presence.clear()
            self._values.clear()
            self._flags.clear()

    def __contains__(self, attr: object) -> bool:
        return attr in self._bindings or attr in self._presence


__all__ = ["AccessorFacade", "PRESENCE_PREFIX", "accessor_name"]
