"""Environment variable readers for option patches."""

from __future__ import annotations

import logging
import os

_LOGGER = logging.getLogger(__name__)

_TRUE_WORDS = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "n", "off"})


def env_text(name: str, *, default: str | None = None) -> str | None:
    """Return the stripped value of *name*, or *default* when unset or blank.

    Returns
    -------
    str | None
        Stripped value or the default.
    """
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip()
    return value or default


def env_bool(name: str, *, default: bool | None = None) -> bool | None:
    """Parse *name* as a boolean word.

    Unset or blank variables return *default*. Unrecognized words are logged at
    warning level and also return *default*.

    Parameters
    ----------
    name
        Environment variable name.
    default
        Value used when the variable is unset, blank, or unrecognized.

    Returns
    -------
    bool | None
        Parsed boolean or the default.
    """
    value = env_text(name)
    if value is None:
        return default
    lowered = value.lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    _LOGGER.warning("Ignoring unrecognized boolean for %s: %r", name, value)
    return default


__all__ = ["env_bool", "env_text"]
