"""Timer-based call coalescing."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any


class Debouncer:
    """Collapse rapid calls into one delayed call made with the latest arguments.

    Each call cancels the pending timer and schedules a new one ``wait``
    seconds out. The pending slot is guarded by a lock so callers on
    different threads never run the wrapped function twice for one burst.
    """

    def __init__(self, func: Callable[..., Any], wait: float = 0.3):
        self.func = func
        self.wait = wait
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending: tuple[tuple[Any, ...], dict[str, Any]] | None = None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = (args, kwargs)
            self._timer = threading.Timer(self.wait, self._fire)
            self._timer.daemon = True
            self._timer.start()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def flush(self) -> Any:
        """Run the pending call now, if any, and return its result."""
        call = self._take()
        if call is None:
            return None
        args, kwargs = call
        return self.func(*args, **kwargs)

    def cancel(self) -> None:
        self._take()

    def _take(self) -> tuple[tuple[Any, ...], dict[str, Any]] | None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            call, self._pending = self._pending, None
            return call

    def _fire(self) -> None:
        with self._lock:
            if self._timer is not threading.current_thread():
                return
            self._timer = None
            call, self._pending = self._pending, None
        if call is not None:
            args, kwargs = call
            self.func(*args, **kwargs)
