# lightgrad/core/grad_mode.py
"""
Gradient-recording mode.

While recording is enabled, every operator result remembers its operands
(`parents`) and local derivative rule so that backward() can walk the graph
later. The flag is kept per thread: a `no_grad()` scope in one thread never
changes what another thread records.
"""

from __future__ import annotations
import functools
import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, TypeVar

from . import config as config_mod

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class _GradState(threading.local):
    def __init__(self):
        # Runs once per thread on first access
        self.enabled = config_mod.get_config().default_grad_enabled


_state = _GradState()


def is_grad_enabled() -> bool:
    """Return whether the current thread records gradient information."""
    return _state.enabled


def set_grad_enabled(flag: bool) -> bool:
    """Set the recording flag for the current thread; returns the previous value."""
    prev = _state.enabled
    _state.enabled = bool(flag)
    if prev != _state.enabled:
        logger.debug("grad recording %s", "enabled" if _state.enabled else "disabled")
    return prev


@contextmanager
def no_grad():
    """
    Context manager that disables gradient recording inside its block:

        with no_grad():
            y = a * b          # y.parents is None

    The previous flag is restored on every exit path. Exceptions raised in
    the block propagate unchanged.
    """
    prev = set_grad_enabled(False)
    try:
        yield
    finally:
        set_grad_enabled(prev)


@contextmanager
def enable_grad():
    """Force gradient recording on inside the block (e.g. within a no_grad scope)."""
    prev = set_grad_enabled(True)
    try:
        yield
    finally:
        set_grad_enabled(prev)


def with_no_grad(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call `fn(*args, **kwargs)` with recording disabled and return its result."""
    with no_grad():
        return fn(*args, **kwargs)


def no_grad_fn(fn: F) -> F:
    """
    Decorator form of `no_grad`: every call of the wrapped function runs with
    recording disabled, whatever arguments it receives.
    """
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        with no_grad():
            return fn(*args, **kwargs)
    return wrapper  # type: ignore[return-value]
