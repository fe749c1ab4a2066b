"""Configuration helpers for loading environment variables.

Variables defined in a ``.env`` file are merged into the process environment
before the first read, so that :class:`~envsetting.store.EnvironStore` sees
them. Values already present in the process environment always win over the
file contents.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

LOGGER = logging.getLogger(__name__)

#: Type tag applied when a variable declares no explicit ``type``.
DEFAULT_TYPE = "string_unless_falsey"

#: Raw values matching this pattern (full match, case-insensitive) are falsey.
DEFAULT_FALSEY_PATTERN = r"(|0|disabled?|false|no|off)"


@lru_cache(maxsize=None)
def load_environment(path: Optional[str] = None) -> bool:
    """Load environment variables from a ``.env`` file.

    When ``path`` is omitted the file is discovered from the current working
    directory upwards. Subsequent calls with the same ``path`` are cached so
    the file is only read once per process; call
    ``load_environment.cache_clear()`` to pick up edits.

    Returns ``True`` when a file was found and loaded.
    """

    env_path = Path(path) if path is not None else None
    if env_path is None:
        discovered = find_dotenv(usecwd=True)
        env_path = Path(discovered) if discovered else None

    if env_path is None or not env_path.exists():
        LOGGER.debug("No .env file found (requested: %s)", path)
        return False

    LOGGER.debug("Loading environment from %s", env_path)
    return load_dotenv(env_path, override=False)


__all__ = ["DEFAULT_FALSEY_PATTERN", "DEFAULT_TYPE", "load_environment"]
