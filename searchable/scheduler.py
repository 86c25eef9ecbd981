"""
Trailing-edge debouncing on a cooperative event loop.

A burst of calls to a debounced callable collapses into one invocation of
the wrapped function, made once the burst has been quiet for the configured
duration, with the arguments of the last call in the burst.
"""

import asyncio
import functools
from typing import Any, Callable, Optional

from .config import DebounceConfig, Settings
from .logger import get_logger

logger = get_logger()


class Debouncer:
    """
    Callable wrapper that defers and coalesces calls to ``fn``.

    The timer source is any object with ``call_later(seconds, callback)``
    returning a handle with ``cancel()``; an asyncio event loop fits. When no
    loop is given the running asyncio loop is looked up on each call.
    """

    def __init__(
        self,
        fn: Callable,
        duration_ms: float,
        loop: Optional[Any] = None,
    ):
        """
        Args:
            fn: Function to invoke once a burst of calls settles
            duration_ms: Quiet period in milliseconds; fixed for the wrapper's lifetime
            loop: Timer source (default: the running asyncio loop)
        """
        if duration_ms < 0:
            raise ValueError(f"duration_ms must not be negative, got {duration_ms!r}")
        functools.update_wrapper(self, fn)
        self.fn = fn
        name = getattr(fn, "__name__", None)
        self._name = name if name is not None else repr(fn)
        self._duration_ms = duration_ms
        self._loop = loop
        self._handle = None
        self._args: tuple = ()
        self._kwargs: dict = {}

    @property
    def duration_ms(self) -> float:
        return self._duration_ms

    @property
    def pending(self) -> bool:
        """True while an invocation is scheduled and has not fired yet."""
        return self._handle is not None

    def __call__(self, *args, **kwargs) -> None:
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
            logger.debug("Superseded pending call", function=self._name)
        self._args = args
        self._kwargs = kwargs
        self._handle = loop.call_later(self._duration_ms / 1000.0, self._fire)

    def _fire(self):
        args, kwargs = self._args, self._kwargs
        self._clear()
        return self.fn(*args, **kwargs)

    def _clear(self):
        self._handle = None
        self._args = ()
        self._kwargs = {}

    def cancel(self) -> bool:
        """
        Discard a pending invocation without running it.

        Returns:
            True if something was pending
        """
        if self._handle is None:
            return False
        self._handle.cancel()
        self._clear()
        return True

    def flush(self):
        """Run a pending invocation now. Returns its result, or None if idle."""
        if self._handle is None:
            return None
        self._handle.cancel()
        return self._fire()

    def __repr__(self):
        return f"<Debouncer {self._name} {self._duration_ms:g}ms pending={self.pending}>"


def debounce(duration_ms: Optional[float] = None, loop: Optional[Any] = None):
    """
    Decorator form of Debouncer.

    Args:
        duration_ms: Quiet period in milliseconds (None = configured default)
        loop: Timer source (default: the running asyncio loop)

    Example:
        @debounce(250)
        def refresh(query):
            ...
    """
    config = DebounceConfig.default() if duration_ms is None else DebounceConfig.enabled(duration_ms)

    def decorator(func: Callable) -> Debouncer:
        return Debouncer(func, config.resolve_duration(), loop=loop)

    return decorator


def build_scheduler(
    fn: Callable,
    config: DebounceConfig,
    loop: Optional[Any] = None,
    settings: Optional[Settings] = None,
) -> Callable:
    """
    Resolve a DebounceConfig into the callable used for recomputation.

    Disabled returns ``fn`` itself so calls run synchronously; otherwise a
    Debouncer with the explicit or default duration.
    """
    duration_ms = config.resolve_duration(settings)
    if duration_ms is None:
        return fn
    return Debouncer(fn, duration_ms, loop=loop)
