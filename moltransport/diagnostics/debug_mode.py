"""Debug mode switch for moltransport.

When debug mode is on, the integrator rejects right-hand-side functions that
return an array sharing memory with the state they were given. The switch
starts from the ``MOLTRANSPORT_DEBUG`` environment variable (``1``, ``true``,
``yes`` or ``on`` enable it).
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Optional

_DEBUG_ENV_VAR = "MOLTRANSPORT_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _flag_from_env(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in _TRUTHY


_debug_enabled: bool = _flag_from_env(os.getenv(_DEBUG_ENV_VAR))


def is_debug_enabled() -> bool:
    """Return True while integrator debug checks are active."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """Turn the integrator debug checks on or off for the whole process."""
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Set debug mode for the duration of a ``with`` block.

    The previous setting is restored on exit, also when the block raises.

    Example
    -------
    >>> with debug_context(True):
    ...     record = integrate(rhs, u0, 0.0, 1.0)
    """
    previous = is_debug_enabled()
    set_debug_enabled(enabled)
    try:
        yield
    finally:
        set_debug_enabled(previous)
