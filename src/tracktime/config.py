from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

DEFAULT_DATA_FILE_NAME = ".timetracker"

_TRUE = {"1", "true", "yes", "on"}


@dataclass
class TrackerConfig:
    data_file_name: str = DEFAULT_DATA_FILE_NAME
    subpath: Optional[str] = None
    max_idle_time: int = 120  # seconds, 0 disables auto-pause
    tick_interval: float = 1.0

    # Policies
    reset_idle_on_continue: bool = True
    flush_on_reconfigure: bool = False  # persist the open session before a path change

    def __post_init__(self) -> None:
        if self.max_idle_time < 0:
            raise ValueError("max_idle_time must be >= 0")
        if self.tick_interval <= 0:
            raise ValueError("tick_interval must be positive")
        self.data_file_name = normalize_file_name(self.data_file_name)
        self.subpath = normalize_subpath(self.subpath)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, base: Optional["TrackerConfig"] = None) -> "TrackerConfig":
        """Apply TRACKTIME_* overrides on top of `base` (or the defaults)."""
        env = os.environ if environ is None else environ
        cfg = base or cls()
        changes: dict[str, object] = {}
        if "TRACKTIME_FILE" in env:
            changes["data_file_name"] = env["TRACKTIME_FILE"]
        if "TRACKTIME_SUBPATH" in env:
            changes["subpath"] = env["TRACKTIME_SUBPATH"]
        idle = _parse_int(env.get("TRACKTIME_MAX_IDLE"))
        if idle is not None and idle >= 0:
            changes["max_idle_time"] = idle
        tick = _parse_float(env.get("TRACKTIME_TICK"))
        if tick is not None and tick > 0:
            changes["tick_interval"] = tick
        if "TRACKTIME_FLUSH_ON_RECONFIGURE" in env:
            changes["flush_on_reconfigure"] = env["TRACKTIME_FLUSH_ON_RECONFIGURE"].strip().lower() in _TRUE
        return replace(cfg, **changes)  # type: ignore[arg-type]


def normalize_subpath(subpath: Optional[str]) -> Optional[str]:
    """Strip whitespace and leading/trailing separators. Empty means no subpath."""
    if not subpath:
        return None
    s = subpath.strip().strip("/\\")
    return s or None


def normalize_file_name(name: Optional[str]) -> str:
    if name and name.strip():
        return name
    return DEFAULT_DATA_FILE_NAME


def tracking_file_path(root: str, subpath: Optional[str], file_name: str) -> str:
    if subpath and subpath.strip():
        return os.path.join(root, subpath, file_name)
    return os.path.join(root, file_name)


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _parse_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value.strip())
    except ValueError:
        return None
