from __future__ import annotations

from typing import Callable, Optional

from . import notifier as base_notifier
from .state import TrackingState
from .tracker import SessionTracker, TrackerCallback

TITLE = "Time tracker"

MSG_ALREADY_ACTIVE = "Another time tracking session is already active, stop previous to start the new one"
MSG_NO_FOLDER = "A folder should be opened to store time tracking data"
MSG_NO_SESSION = "No tracking session is active"
MSG_ALREADY_RUNNING = "Time tracking is already running"


class TrackerCommands:
    """User-facing wrappers that turn a False result into a notification."""

    def __init__(
        self,
        tracker: SessionTracker,
        notify: Optional[Callable[[str, str], None]] = None,
    ) -> None:
        self.tracker = tracker
        self._notify = notify or base_notifier.notify

    def start(self, callback: Optional[TrackerCallback] = None) -> bool:
        was_started = self.tracker.state == TrackingState.STARTED
        if self.tracker.start(callback):
            return True
        self._notify(TITLE, MSG_ALREADY_ACTIVE if was_started else MSG_NO_FOLDER)
        return False

    def pause(self) -> bool:
        if self.tracker.pause():
            return True
        self._notify(TITLE, MSG_NO_SESSION)
        return False

    def continue_(self) -> bool:
        if self.tracker.continue_():
            return True
        self._notify(TITLE, MSG_ALREADY_RUNNING)
        return False

    def stop(self) -> bool:
        if self.tracker.stop():
            return True
        self._notify(TITLE, MSG_NO_SESSION)
        return False

    def recompute(self) -> bool:
        return self.tracker.recompute()
