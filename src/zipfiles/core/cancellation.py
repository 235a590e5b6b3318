# src/zipfiles/core/cancellation.py
import threading
from typing import Optional

from zipfiles.errors import CancelledError

class CancellationToken:
    """A flag the caller sets to stop a run; checked cooperatively."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancelledError()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Blocks until cancelled or `timeout` elapses; returns `cancelled`."""
        return self._event.wait(timeout)
