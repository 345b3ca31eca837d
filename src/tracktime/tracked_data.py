"""
Tracked data store for tracktime.

Appends closed sessions to a JSON document next to the project and keeps the
aggregate total in sync.

Data Model (JSON):
{
  "version": 1,
  "total_time": 5400.0,
  "sessions": [
    {"start": 1700000000.0, "end": 1700003600.0, "duration": 3600.0}
  ],
  "updated_at": "ISO-8601 timestamp"
}
"""

from __future__ import annotations

import json
import os
import time
from dataclasses import dataclass, field
from typing import Any, List

from .session import TrackedSession

DATA_VERSION = 1


def _new_sessions() -> List[TrackedSession]:
    return []


@dataclass
class TrackedDocument:
    version: int = DATA_VERSION
    total_time: float = 0.0
    sessions: List[TrackedSession] = field(default_factory=_new_sessions)
    updated_at: str = ""


class TrackedData:
    """Manages load/save of tracked sessions with atomic writes.

    Loading never loses history: bad session entries and bad header fields are
    skipped one by one, and a file that cannot be parsed at all is moved aside
    to `<path>.corrupt` before anything new is written.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self.data = TrackedDocument()
        self.reload()

    @property
    def sessions(self) -> List[TrackedSession]:
        return list(self.data.sessions)

    @property
    def total_time(self) -> float:
        return self.data.total_time

    # ---------------- Store API ----------------
    def add_session(self, session: TrackedSession) -> None:
        if session.running:
            raise ValueError("Cannot store a session that is still running")
        previous_total = self.data.total_time
        self.data.sessions.append(session)
        self.data.total_time += session.duration_seconds()
        try:
            self.save()
        except Exception:
            self.data.sessions.pop()
            self.data.total_time = previous_total
            raise

    def recompute_total_time(self) -> float:
        self.reload()
        self.data.total_time = sum(s.duration_seconds() for s in self.data.sessions)
        self.save()
        return self.data.total_time

    # ---------------- Persistence ----------------
    def reload(self) -> None:
        """Load the file if present; an unparsable file is quarantined."""
        if not os.path.exists(self.path):
            self.data = TrackedDocument()
            return
        try:
            self.load()
        except (OSError, ValueError) as e:
            print(f"tracktime: unreadable data file {self.path}: {e}")
            self._quarantine()
            self.data = TrackedDocument()

    def load(self) -> None:
        with open(self.path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict) or not isinstance(raw.get("sessions", []), list):
            raise ValueError("unexpected document layout")
        sessions: List[TrackedSession] = []
        for s in raw.get("sessions", []):
            try:
                sessions.append(TrackedSession.from_dict(s))
            except (KeyError, TypeError, ValueError):
                # Skip invalid entry
                continue
        computed_total = sum(s.duration_seconds() for s in sessions)
        self.data = TrackedDocument(
            version=_as_number(raw.get("version"), int, DATA_VERSION),
            total_time=_as_number(raw.get("total_time"), float, computed_total),
            sessions=sessions,
            updated_at=str(raw.get("updated_at") or ""),
        )

    def save(self) -> None:
        # Atomic write: write to temp and replace
        self.data.updated_at = time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
        raw: dict[str, Any] = {
            "version": self.data.version,
            "total_time": self.data.total_time,
            "sessions": [s.to_dict() for s in self.data.sessions],
            "updated_at": self.data.updated_at,
        }
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(raw, f, indent=2, ensure_ascii=False)
        os.replace(tmp, self.path)

    def _quarantine(self) -> None:
        target = self.path + ".corrupt"
        n = 1
        while os.path.exists(target):
            target = f"{self.path}.corrupt.{n}"
            n += 1
        try:
            os.replace(self.path, target)
        except OSError as e:
            print(f"tracktime: could not move {self.path} aside: {e}")
            return
        print(f"tracktime: moved unreadable data file to {target}")


def _as_number(value: Any, kind: type, default: Any) -> Any:
    if isinstance(value, bool):
        return default
    try:
        return kind(value)
    except (TypeError, ValueError):
        return default
