"""
Debounce Module

Collapses a burst of triggers into one delayed action.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Runs *action* once the quiet window has elapsed since the last trigger.

    Every trigger bumps a generation counter and arms a fresh timer; a timer
    callback only runs the action if its generation is still the latest.
    After ``close()`` returns the action never runs again.
    """

    def __init__(self, action: Callable[[], None], delay_seconds: float, name: str = "debounce"):
        self._action = action
        self._delay = delay_seconds
        self._name = name
        self._lock = threading.Lock()
        # Held while the action runs so close() can wait for an in-flight call
        self._fire_lock = threading.RLock()
        self._generation = 0
        self._timer: Optional[threading.Timer] = None
        self._closed = False

    @property
    def delay_seconds(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        """True while a timer is armed and has not fired yet."""
        with self._lock:
            return self._timer is not None

    def trigger(self) -> None:
        """Restart the quiet window."""
        with self._lock:
            if self._closed:
                return
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
            timer = threading.Timer(self._delay, self._fire, args=(self._generation,))
            timer.daemon = True
            timer.name = f"{self._name}-timer"
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        """Drop the pending action, if any."""
        with self._lock:
            self._generation += 1
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def close(self) -> None:
        """Cancel and refuse further triggers."""
        with self._lock:
            self._closed = True
        self.cancel()
        with self._fire_lock:
            pass

    def _fire(self, generation: int) -> None:
        with self._fire_lock:
            with self._lock:
                if self._closed or generation != self._generation:
                    return
                self._timer = None

            try:
                self._action()
            except Exception:
                # Nobody is waiting on a fired timer
                logger.exception("Debounced action '%s' failed", self._name)
