"""
Cancellable deferred callbacks.

Scheduling a new callback cancels the pending one, which is the debounce
primitive used by the refresh orchestrator.
"""

import logging
import threading
from typing import Callable, Optional


class DeferredTask:
    """Holds at most one pending delayed callback."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        """
        Run callback after delay seconds, replacing any pending callback.

        Args:
            delay: Delay in seconds
            callback: Zero-argument callable
        """
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self.logger.debug("Pending task cancelled and rescheduled")

            timer = threading.Timer(delay, self._run, args=(callback,))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        """Cancel the pending callback, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def pending(self) -> bool:
        """Whether a callback is armed and has not fired yet."""
        with self._lock:
            return self._timer is not None

    def _run(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if self._timer is not threading.current_thread():
                # Superseded between firing and acquiring the lock
                return
            self._timer = None
        callback()
