from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .session import TrackedSession
from .ticker import ThreadTicker


class TrackingState(str, Enum):
    STOPPED = "stopped"
    STARTED = "started"
    PAUSED = "paused"


@dataclass(frozen=True)
class Stopped:
    state = TrackingState.STOPPED


@dataclass(frozen=True)
class Started:
    """The only phase that owns an open session and a live ticker."""

    session: TrackedSession
    ticker: ThreadTicker
    state = TrackingState.STARTED


@dataclass(frozen=True)
class Paused:
    state = TrackingState.PAUSED


Phase = Union[Stopped, Started, Paused]
