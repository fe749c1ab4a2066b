"""envsetting package initialization.

Declare environment variables once at startup and read them back as typed,
cached values::

    import envsetting

    envsetting.use("WORKERS", type=int, default=4)
    envsetting.workers()

Module-level functions operate on a process-wide :class:`EnvSetting`;
attributes not defined here resolve to that instance's generated accessors.
"""

from typing import Any

from .casting import CoercionRegistry, Symbol, ValueCaster
from .errors import (
    EnvSettingError,
    MissingRequiredError,
    NotConfiguredError,
    UnknownAccessorError,
    UnknownTypeError,
)
from .settings import (
    EnvSetting,
    add_class,
    clear_cache,
    config,
    default_class,
    default_falsey_regex,
    get_value,
    instance,
    keys,
    reset,
    set_instance,
    use,
    values,
)
from .store import EnvironStore, MappingStore, RawStore


def __getattr__(attr: str) -> Any:
    if attr.startswith("__"):
        raise AttributeError(attr)
    return instance().accessor(attr)


__all__ = [
    "CoercionRegistry",
    "EnvSetting",
    "EnvSettingError",
    "EnvironStore",
    "MappingStore",
    "MissingRequiredError",
    "NotConfiguredError",
    "RawStore",
    "Symbol",
    "UnknownAccessorError",
    "UnknownTypeError",
    "ValueCaster",
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
