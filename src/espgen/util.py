"""Small utilities."""

import threading
import time
from typing import Any, Callable, Optional


class Debouncer:
    """Coalesce bursts of calls into at most two invocations.

    A burst is a run of calls separated by less than ``wait`` seconds. With
    ``leading`` the first call of a burst runs immediately. With ``trailing``
    the last call of a burst runs once the burst has been quiet for ``wait``
    seconds; it is skipped when the leading call was the only one.

    The debouncer owns no timer. Callers drive it by calling :meth:`poll`
    periodically, which keeps it usable from plain loops and in tests with an
    injected ``clock``. Calls and polls may come from different threads.

    Example:
        >>> debounced = Debouncer(regenerate, wait=0.5)
        >>> debounced(path)      # records the call
        >>> debounced.poll()     # runs regenerate(path) once 0.5s have passed
    """

    def __init__(
        self,
        func: Callable[..., Any],
        wait: float,
        leading: bool = False,
        trailing: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        if wait < 0:
            raise ValueError("wait must not be negative")
        self.func = func
        self.wait = wait
        self.leading = leading
        self.trailing = trailing
        self._clock = clock
        self._deadline: Optional[float] = None
        self._pending: Optional[tuple[tuple[Any, ...], dict[str, Any]]] = None
        self._lock = threading.RLock()

    @property
    def pending(self) -> bool:
        """True while a trailing call is waiting to run."""
        return self._pending is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            now = self._clock()
            idle = self._deadline is None or now >= self._deadline
            if idle:
                # Finish the previous burst before starting a new one
                self.poll()
            self._deadline = now + self.wait

            if idle and self.leading:
                self._pending = None
                self.func(*args, **kwargs)
            else:
                self._pending = (args, kwargs)

    def poll(self) -> bool:
        """Run the trailing call if its burst is over.

        Returns:
            True if the wrapped function was invoked.
        """
        with self._lock:
            if self._deadline is None or self._clock() < self._deadline:
                return False

            self._deadline = None
            pending, self._pending = self._pending, None
            if pending is None or not self.trailing:
                return False

            args, kwargs = pending
            self.func(*args, **kwargs)
            return True

    def cancel(self) -> None:
        """Drop any pending trailing call."""
        with self._lock:
            self._deadline = None
            self._pending = None

    def flush(self) -> bool:
        """Run the pending trailing call immediately, if any."""
        with self._lock:
            if self._pending is None:
                return False
            self._deadline = self._clock()
            return self.poll()
