from __future__ import annotations

import threading
import time
from typing import Callable, Optional, Union

from .config import TrackerConfig, normalize_file_name, normalize_subpath, tracking_file_path
from .session import TrackedSession
from .state import Paused, Phase, Started, Stopped, TrackingState
from .ticker import ThreadTicker
from .tracked_data import TrackedData

TrackerCallback = Callable[["SessionTracker"], None]
RootProvider = Callable[[], Optional[str]]
StoreFactory = Callable[[str], TrackedData]
TickerFactory = Callable[[float, Callable[[], None]], ThreadTicker]


class SessionTracker:
    """
    Measures active working time in a project as discrete sessions.

    States: Stopped -> Started -> Paused -> Started -> Stopped. Only the Started
    phase owns an open session and a live ticker. Every tick notifies the
    subscriber, advances the idle counter and pauses once it exceeds
    `max_idle_time`. Closed sessions are handed to the store and forgotten.

    Guard failures (already running, nothing to close, no project root) are
    reported by returning False; surfacing them to the user is up to the caller.
    """

    def __init__(
        self,
        root_provider: Union[RootProvider, str, None] = None,
        config: Optional[TrackerConfig] = None,
        store_factory: StoreFactory = TrackedData,
        ticker_factory: TickerFactory = ThreadTicker,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if root_provider is None or isinstance(root_provider, str):
            fixed_root = root_provider
            root_provider = lambda: fixed_root  # noqa: E731
        cfg = config or TrackerConfig()

        self._root_provider: RootProvider = root_provider
        self._store_factory = store_factory
        self._ticker_factory = ticker_factory
        self._clock = clock

        self._data_file_name = cfg.data_file_name
        self._subpath = cfg.subpath
        self._max_idle_time = cfg.max_idle_time
        self._tick_interval = cfg.tick_interval
        self._reset_idle_on_continue = cfg.reset_idle_on_continue
        self._flush_on_reconfigure = cfg.flush_on_reconfigure

        # Ticks arrive on the ticker thread and may call pause()
        self._lock = threading.RLock()
        self._phase: Phase = Stopped()
        self._idle_time = 0
        self._on_tick: Optional[TrackerCallback] = None
        self._store: Optional[TrackedData] = self._create_store()

    # -------- Properties --------
    @property
    def state(self) -> TrackingState:
        return self._phase.state

    @property
    def current_session(self) -> Optional[TrackedSession]:
        phase = self._phase
        return phase.session if isinstance(phase, Started) else None

    @property
    def idle_time(self) -> int:
        return self._idle_time

    @property
    def tracked_data(self) -> Optional[TrackedData]:
        return self._store

    @property
    def subpath(self) -> Optional[str]:
        return self._subpath

    @property
    def max_idle_time(self) -> int:
        return self._max_idle_time

    @max_idle_time.setter
    def max_idle_time(self, value: int) -> None:
        if value < 0:
            raise ValueError("max_idle_time must be >= 0")
        self._max_idle_time = value

    @property
    def data_file_name(self) -> str:
        return self._data_file_name

    @data_file_name.setter
    def data_file_name(self, value: str) -> None:
        with self._lock:
            self._reset_to_stopped()
            self._data_file_name = normalize_file_name(value)
            self._reload_store()

    def set_subpath(self, subpath: Optional[str]) -> None:
        with self._lock:
            self._reset_to_stopped()
            self._subpath = normalize_subpath(subpath)
            self._reload_store()

    def tracking_file_path(self, root: Optional[str] = None) -> str:
        root = root if root is not None else (self._root_provider() or "")
        return tracking_file_path(root, self._subpath, self._data_file_name)

    # -------- Transitions --------
    def start(self, callback: Optional[TrackerCallback] = None) -> bool:
        with self._lock:
            if isinstance(self._phase, Started):
                return False
            root = self._root_provider()
            if not root:
                return False
            if self._store is None:
                self._store = self._store_factory(self.tracking_file_path(root))
            self._on_tick = callback
            self._idle_time = 0
            self._open_session()
            return True

    def pause(self) -> bool:
        with self._lock:
            return self._close_session(Paused())

    def continue_(self) -> bool:
        with self._lock:
            if isinstance(self._phase, Started):
                return False
            if self._store is None:
                self._store = self._create_store()
            if self._reset_idle_on_continue:
                self._idle_time = 0
            self._open_session()
            return True

    def stop(self) -> bool:
        with self._lock:
            return self._close_session(Stopped())

    def reset_idle_time(self) -> None:
        self._idle_time = 0

    def recompute(self) -> bool:
        with self._lock:
            if self._store is not None:
                self._store.recompute_total_time()
            return True

    # -------- Internals --------
    def _create_store(self) -> Optional[TrackedData]:
        root = self._root_provider()
        if not root:
            return None
        return self._store_factory(self.tracking_file_path(root))

    def _reload_store(self) -> None:
        store = self._create_store()
        if store is not None:
            self._store = store

    def _open_session(self) -> None:
        ticker: ThreadTicker = self._ticker_factory(self._tick_interval, lambda: self._tick(ticker))
        self._phase = Started(session=TrackedSession(start=self._clock()), ticker=ticker)
        ticker.start()

    def _close_session(self, next_phase: Phase) -> bool:
        phase = self._phase
        if not isinstance(phase, Started):
            return False
        session = phase.session
        session.stop(self._clock())
        if self._store is not None:
            try:
                self._store.add_session(session)
            except Exception:
                # Write failed: keep tracking, the session stays open
                session.end = None
                session.running = True
                raise
        phase.ticker.cancel()
        self._phase = next_phase
        self._idle_time = 0
        self._notify()
        return True

    def _reset_to_stopped(self) -> None:
        phase = self._phase
        if isinstance(phase, Started):
            phase.ticker.cancel()
            if self._flush_on_reconfigure and self._store is not None:
                phase.session.stop(self._clock())
                self._store.add_session(phase.session)
            # Otherwise the open session is dropped unsaved
        self._phase = Stopped()
        self._idle_time = 0

    def _tick(self, ticker: ThreadTicker) -> None:
        with self._lock:
            if not self._owns(ticker):
                return
            self._notify()
            if not self._owns(ticker):
                # subscriber changed the state itself
                return
            if self._max_idle_time > 0:
                self._idle_time += 1
            if self._idle_time > self._max_idle_time:
                self.pause()

    def _owns(self, ticker: ThreadTicker) -> bool:
        phase = self._phase
        return isinstance(phase, Started) and phase.ticker is ticker

    def _notify(self) -> None:
        if self._on_tick is None:
            return
        try:
            self._on_tick(self)
        except Exception as e:
            print(f"tracktime: subscriber error: {e}")
