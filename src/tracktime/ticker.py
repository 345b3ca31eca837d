from __future__ import annotations

import threading
import time
from typing import Callable, Optional


class ThreadTicker:
    """
    Cancellable repeating task.
    Calls `callback` every `interval` seconds on a daemon thread until cancelled.
    """

    def __init__(self, interval: float, callback: Callable[[], None], name: str = "tracktime-ticker") -> None:
        self.interval = interval
        self.callback = callback
        self.name = name
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def is_alive(self) -> bool:
        return bool(self._thread and self._thread.is_alive()) and not self._stop_event.is_set()

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()

    def cancel(self) -> None:
        """Suppress future ticks. A tick already running completes normally."""
        self._stop_event.set()

    def _run(self) -> None:
        next_at = time.monotonic() + self.interval
        while not self._stop_event.wait(timeout=max(0.0, next_at - time.monotonic())):
            try:
                self.callback()
            except Exception as e:
                print(f"tracktime: tick error: {e}")
            next_at += self.interval
