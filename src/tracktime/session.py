from dataclasses import dataclass, field
from time import time
from typing import Any, Dict, Optional


@dataclass
class TrackedSession:
    start: float = field(default_factory=time)
    end: Optional[float] = None
    running: bool = True

    def stop(self, now: float | None = None) -> None:
        """Close the session at 'now'. Closing twice keeps the first end."""
        if not self.running:
            return
        now = now if now is not None else time()
        self.end = max(self.start, now)
        self.running = False

    def duration_seconds(self, now: float | None = None) -> float:
        if self.end is not None:
            return self.end - self.start
        now = now if now is not None else time()
        return max(0.0, now - self.start)

    def to_dict(self) -> Dict[str, float]:
        if self.end is None:
            raise ValueError("Only closed sessions can be serialized")
        return {
            "start": self.start,
            "end": self.end,
            "duration": self.duration_seconds(),
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "TrackedSession":
        start = float(raw["start"])
        end = float(raw["end"])
        return cls(start=start, end=max(start, end), running=False)
