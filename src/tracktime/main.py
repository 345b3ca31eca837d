from __future__ import annotations

import argparse
import os
import threading
from dataclasses import replace
from typing import List, Optional

from .activity import ActivityMonitor
from .commands import TrackerCommands
from .config import TrackerConfig
from .tracker import SessionTracker

STATUS_EVERY_TICKS = 60


def format_duration(seconds: float) -> str:
    total = int(seconds)
    h, rem = divmod(total, 3600)
    m, s = divmod(rem, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tracktime", description="Track active working time in a project folder.")
    p.add_argument("--root", default=os.getcwd(), help="project folder (default: current directory)")
    p.add_argument("--subpath", default=None, help="folder inside the project for the data file")
    p.add_argument("--file", dest="data_file_name", default=None, help="data file name (default: .timetracker)")
    p.add_argument("--idle", dest="max_idle_time", type=int, default=None, help="seconds of inactivity before auto-pause, 0 disables")
    p.add_argument("--recompute", action="store_true", help="recompute the stored total and exit")
    p.add_argument("--no-activity", action="store_true", help="do not listen to keyboard/mouse input")
    return p


def config_from_args(args: argparse.Namespace, environ: Optional[dict[str, str]] = None) -> TrackerConfig:
    cfg = TrackerConfig.from_env(environ)
    overrides: dict[str, object] = {}
    if args.subpath is not None:
        overrides["subpath"] = args.subpath
    if args.data_file_name is not None:
        overrides["data_file_name"] = args.data_file_name
    if args.max_idle_time is not None:
        overrides["max_idle_time"] = args.max_idle_time
    return replace(cfg, **overrides)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = config_from_args(args)
    tracker = SessionTracker(os.path.abspath(args.root), config=cfg)
    commands = TrackerCommands(tracker)

    if args.recompute:
        commands.recompute()
        data = tracker.tracked_data
        total = data.total_time if data is not None else 0.0
        print(f"tracktime: total {format_duration(total)} in {tracker.tracking_file_path()}")
        return 0

    ticks = {"n": 0}

    def on_tick(t: SessionTracker) -> None:
        session = t.current_session
        if session is None:
            print(f"tracktime: {t.state.value}")
            return
        ticks["n"] += 1
        if ticks["n"] % STATUS_EVERY_TICKS == 0:
            print(f"tracktime: session {format_duration(session.duration_seconds())}, idle {t.idle_time}s")

    if not commands.start(on_tick):
        return 1
    print(f"▶️ Tracking started ({tracker.tracking_file_path()})")

    monitor = ActivityMonitor(tracker, resume_on_input=True)
    if not args.no_activity:
        monitor.start()

    done = threading.Event()
    try:
        while not done.wait(timeout=1.0):
            pass
    except KeyboardInterrupt:
        print("\n🛑 Interrupted by user")
    finally:
        monitor.stop()
        tracker.stop()
    print("⏸️ Tracking stopped")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
