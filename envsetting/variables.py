"""Declaration registry for environment variables."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .casting import ValueCaster
from .errors import MissingRequiredError, NotConfiguredError
from .store import RawStore, to_raw

LOGGER = logging.getLogger(__name__)


@dataclass
class VariableRegistry:
    """Record declared variables and cast their raw values on demand.

    Presence is enforced when a variable is declared: a missing variable is
    filled from its ``default`` option or reported immediately with
    :class:`~envsetting.errors.MissingRequiredError`.
    """

    store: RawStore
    caster: ValueCaster = field(default_factory=ValueCaster)
    variables: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def declare(self, name: Any, description: Optional[str] = None, **options: Any) -> str:
        """Declare ``name`` with coercion ``options`` and return its canonical name."""

        name = str(name)
        if not self.store.has(name):
            if "default" not in options:
                raise MissingRequiredError(name, description)
            LOGGER.debug("Applying default value for %s", name)
            self.store.set(name, to_raw(options["default"]))

        if description is not None:
            options["description"] = description
        if name in self.variables:
            LOGGER.debug("Redeclaring %s; previous options are replaced", name)
        else:
            LOGGER.debug("Declared %s with options %r", name, options)
        self.variables[name] = options
        return name

    def options(self, name: Any) -> Mapping[str, Any]:
        """Return the options recorded for ``name``."""

        name = str(name)
        try:
            return self.variables[name]
        except KeyError:
            raise NotConfiguredError(name) from None

    def get_value(self, name: Any) -> Any:
        """Cast the current raw value of ``name``; nothing is cached here."""

        name = str(name)
        options = self.options(name)
        return self.caster.cast(self.store.get(name), options)

    def keys(self) -> List[str]:
        return list(self.variables)

    def values(self) -> List[Any]:
        return [self.get_value(name) for name in self.variables]

    def reset(self) -> None:
        self.variables.clear()

    def __contains__(self, name: object) -> bool:
        return str(name) in self.variables

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self.variables)


__all__ = ["VariableRegistry"]
