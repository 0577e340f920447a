import threading
from typing import Optional


class AddedSignal:
    """
    Transient "just added" indicator for the product most recently put in the cart.

    Holds at most one pending expiry timer. Triggering again cancels the
    pending timer and starts a fresh one, so an older expiry can never
    clear a newer signal. Not part of cart state and never persisted.
    """

    def __init__(self, duration: float = 2.0):
        self.duration = duration
        self._current: Optional[int] = None
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    @property
    def current(self) -> Optional[int]:
        return self._current

    def trigger(self, product_id: int) -> None:
        timer = threading.Timer(self.duration, self._expire)
        timer.daemon = True
        # The timer passes itself back so a replaced timer is recognised as stale
        timer.args = (timer,)
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._current = product_id
            self._timer = timer
        timer.start()

    def clear(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._current = None

    def _expire(self, timer: threading.Timer) -> None:
        with self._lock:
            if self._timer is timer:
                self._timer = None
                self._current = None
