from typing import Callable, List

import pytest

from tracktime.config import TrackerConfig
from tracktime.session import TrackedSession
from tracktime.tracker import SessionTracker


class FakeTicker:
    """Ticker driven by hand: each fire() is one tick."""

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False

    @property
    def is_alive(self) -> bool:
        return self.started and not self.cancelled

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.callback()


class TickerFactory:
    def __init__(self) -> None:
        self.created: List[FakeTicker] = []

    def __call__(self, interval: float, callback: Callable[[], None]) -> FakeTicker:
        ticker = FakeTicker(interval, callback)
        self.created.append(ticker)
        return ticker

    @property
    def live(self) -> List[FakeTicker]:
        return [t for t in self.created if t.is_alive]

    def tick(self, n: int = 1) -> None:
        for _ in range(n):
            live = self.live
            if not live:
                return
            live[-1].fire()


class MemoryStore:
    def __init__(self, path: str) -> None:
        self.path = path
        self.sessions: List[TrackedSession] = []
        self.recomputed = 0

    def add_session(self, session: TrackedSession) -> None:
        self.sessions.append(session)

    def recompute_total_time(self) -> float:
        self.recomputed += 1
        return sum(s.duration_seconds() for s in self.sessions)


class StoreFactory:
    def __init__(self) -> None:
        self.created: List[MemoryStore] = []

    def __call__(self, path: str) -> MemoryStore:
        store = MemoryStore(path)
        self.created.append(store)
        return store


class Clock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def tickers() -> TickerFactory:
    return TickerFactory()


@pytest.fixture
def stores() -> StoreFactory:
    return StoreFactory()


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def make_tracker(tickers, stores, clock):
    def _make(root="/project", **config) -> SessionTracker:
        return SessionTracker(
            root,
            config=TrackerConfig(**config),
            store_factory=stores,  # type: ignore[arg-type]
            ticker_factory=tickers,  # type: ignore[arg-type]
            clock=clock,
        )

    return _make
