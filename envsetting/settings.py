"""Configuration context tying the store, registries and accessors together."""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Iterator, List, Optional, Pattern, Tuple, Union

from .accessor import AccessorFacade
from .casting import CoercionRegistry, ValueCaster
from .casting.registry import Coercion
from .store import EnvironStore, RawStore
from .variables import VariableRegistry

LOGGER = logging.getLogger(__name__)


class EnvSetting:
    """Typed, cached view over declared environment variables.

    Declare variables with :meth:`use`, then read them through the generated
    accessors::

        env = EnvSetting()
        env.use("PORT", "Port the HTTP server binds to", type=int, default=8080)
        env.use("ALLOWED_HOSTS", type=list)
        env.port()            # 8080
        env.is_allowed_hosts()

    Declaration, policy changes and cached reads share one re-entrant lock so
    a context may be read from several threads once configured.
    """

    def __init__(self, store: Optional[RawStore] = None) -> None:
        self._lock = threading.RLock()
        self._store: RawStore = store if store is not None else EnvironStore()
        self._coercions = CoercionRegistry()
        self._caster = ValueCaster(self._coercions)
        self._variables = VariableRegistry(self._store, self._caster)
        self._accessors = AccessorFacade(self._variables, lock=self._lock)

    # -- declaration ------------------------------------------------------

    def use(self, name: Any, description: Optional[str] = None, **options: Any) -> str:
        """Declare ``name`` and generate its accessors.

        Recognised options are ``type`` (coercion tag), ``of`` (element or
        value tag for collections), ``keys`` (key tag for dicts) and
        ``default`` (written to the store when ``name`` is missing). Any other
        option is passed through to the coercion.
        """

        with self._lock:
            declared = self._variables.declare(name, description, **options)
            for method in self._accessors.bind(declared):
                if self._is_shadowed(method):
                    LOGGER.warning(
                        "Accessor %r for %s is shadowed by an EnvSetting attribute; "
                        "read it with accessor(%r)() or [%r]",
                        method,
                        declared,
                        method,
                        declared,
                    )
            return declared

    def accessor(self, attr: str) -> Callable[[], Any]:
        """Return the generated accessor ``attr``, even when an attribute shadows it."""

        return self._accessors.lookup(attr)

    def _is_shadowed(self, attr: str) -> bool:
        return attr in self.__dict__ or hasattr(type(self), attr)

    def config(self, block: Callable[["EnvSetting"], Any]) -> "EnvSetting":
        """Run ``block`` against this context; usable as a decorator."""

        with self._lock:
            block(self)
        return self

    def add_class(self, tag: Any, func: Optional[Coercion] = None) -> Any:
        """Register a custom coercion for ``tag``.

        ``func`` receives ``(raw_value, options)``. Without ``func`` a decorator
        is returned.
        """

        def decorator(coercion: Coercion) -> Coercion:
            with self._lock:
                self._coercions.register(tag, coercion)
            return coercion

        if func is None:
            return decorator
        return decorator(func)

    def default_class(self, tag: Any = None) -> Any:
        """Return the default type tag, or set it when ``tag`` is given."""

        if tag is None:
            return self._coercions.default_type
        with self._lock:
            self._coercions.set_default_type(tag)
        return tag

    def default_falsey_regex(self, pattern: Union[str, Pattern[str], None] = None) -> Pattern[str]:
        """Return the default falsey pattern, or set it when ``pattern`` is given."""

        if pattern is not None:
            with self._lock:
                self._coercions.set_falsey_pattern(pattern)
        return self._coercions.falsey_pattern

    # -- reading ----------------------------------------------------------

    def cast(self, value: str, options: Optional[dict] = None, **extra: Any) -> Any:
        """Coerce ``value`` as a declared variable with these options would be."""

        merged = {**(options or {}), **extra}
        with self._lock:
            return self._caster.cast(value, merged)

    def get_value(self, name: Any) -> Any:
        """Cast the current raw value of a declared variable, bypassing the cache."""

        with self._lock:
            return self._variables.get_value(name)

    def __getitem__(self, name: Any) -> Any:
        return self.get_value(name)

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._variables)

    def keys(self) -> List[str]:
        with self._lock:
            return self._variables.keys()

    def values(self) -> List[Any]:
        with self._lock:
            return self._variables.values()

    def items(self) -> List[Tuple[str, Any]]:
        with self._lock:
            return list(zip(self._variables.keys(), self._variables.values()))

    # -- lifecycle --------------------------------------------------------

    def clear_cache(self) -> None:
        self._accessors.clear_cache()

    def reset(self) -> None:
        """Forget every declaration, custom coercion and policy override."""

        with self._lock:
            LOGGER.debug("Resetting environment settings")
            self._variables.reset()
            self._accessors.reset()
            self._coercions.reset()

    def __getattr__(self, attr: str) -> Callable[[], Any]:
        if attr.startswith("__") or "_accessors" not in self.__dict__:
            raise AttributeError(attr)
        return self.accessor(attr)

    def __dir__(self) -> List[str]:
        return sorted({*super().__dir__(), *self._accessors.accessors()})

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(store={self._store!r}, keys={self._variables.keys()!r})"


_INSTANCE: Optional[EnvSetting] = None
_INSTANCE_LOCK = threading.Lock()


def instance() -> EnvSetting:
    """Return the process-wide :class:`EnvSetting`, creating it on first use."""

    global _INSTANCE
    with _INSTANCE_LOCK:
        if _INSTANCE is None:
            _INSTANCE = EnvSetting()
        return _INSTANCE


def set_instance(obj: EnvSetting) -> EnvSetting:
    """Replace the process-wide context with ``obj``."""

    global _INSTANCE
    if not isinstance(obj, EnvSetting):
        raise TypeError("Object must be an EnvSetting instance")
    with _INSTANCE_LOCK:
        _INSTANCE = obj
    return obj


def reset() -> None:
    """Reset the process-wide context, keeping its store."""

    instance().reset()


def use(name: Any, description: Optional[str] = None, **options: Any) -> str:
    return instance().use(name, description, **options)


def config(block: Callable[[EnvSetting], Any]) -> EnvSetting:
    return instance().config(block)


def add_class(tag: Any, func: Optional[Coercion] = None) -> Any:
    return instance().add_class(tag, func)


def default_class(tag: Any = None) -> Any:
    return instance().default_class(tag)


def default_falsey_regex(pattern: Union[str, Pattern[str], None] = None) -> Pattern[str]:
    return instance().default_falsey_regex(pattern)


def get_value(name: Any) -> Any:
    return instance().get_value(name)


def keys() -> List[str]:
    return instance().keys()


def values() -> List[Any]:
    return instance().values()


def clear_cache() -> None:
    instance().clear_cache()


__all__ = [
    "EnvSetting",
    "add_class",
    "clear_cache",
    "config",
    "default_class",
    "default_falsey_regex",
    "get_value",
    "instance",
    "keys",
    "reset",
    "set_instance",
    "use",
    "values",
]
