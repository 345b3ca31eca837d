"""
Input activity monitor: keyboard and mouse events reset the tracker's idle
counter, so a session only auto-pauses when the user really walks away.

pynput is imported when the monitor starts, not at module import, because on
Linux it needs a display server to load its backend.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Tuple

from .state import TrackingState
from .tracker import SessionTracker

ListenerFactory = Callable[[Callable[..., None]], Tuple[Any, Any]]


def pynput_listeners(on_input: Callable[..., None]) -> Tuple[Any, Any]:
    """Return (keyboard, mouse) pynput listeners wired to `on_input`."""
    from pynput import keyboard, mouse  # type: ignore[import-not-found]

    kb = keyboard.Listener(on_press=on_input, on_release=on_input)  # type: ignore[no-untyped-call]
    ms = mouse.Listener(on_move=on_input, on_click=on_input, on_scroll=on_input)  # type: ignore[no-untyped-call]
    return kb, ms


class ActivityMonitor:
    def __init__(
        self,
        tracker: SessionTracker,
        listener_factory: Optional[ListenerFactory] = None,
        resume_on_input: bool = False,
    ) -> None:
        self.tracker = tracker
        self.resume_on_input = resume_on_input
        self._listener_factory = listener_factory or pynput_listeners
        self._listeners: List[Any] = []

    @property
    def active(self) -> bool:
        return bool(self._listeners)

    def _on_input(self, *args: Any, **kwargs: Any) -> None:
        if self.resume_on_input and self.tracker.state == TrackingState.PAUSED:
            self.tracker.continue_()
        self.tracker.reset_idle_time()

    def start(self) -> bool:
        """Start listening. Returns False when no input backend is available."""
        if self._listeners:
            return True
        try:
            candidates = self._listener_factory(self._on_input)
        except Exception as e:
            print(f"tracktime: input monitoring unavailable: {e}")
            return False
        for listener in candidates:
            try:
                listener.start()
            except Exception as e:
                print(f"tracktime: input listener failed to start: {e}")
                continue
            self._listeners.append(listener)
        return bool(self._listeners)

    def stop(self) -> None:
        for listener in self._listeners:
            try:
                listener.stop()
            except Exception as e:
                print(f"tracktime: input listener failed to stop: {e}")
        self._listeners = []
