from __future__ import annotations

import threading
from plyer import notification as plyer_notification  # type: ignore[import-not-found]

APP_NAME = "tracktime"


def _console(title: str, message: str) -> None:
    print(f"{APP_NAME}: {title} - {message}")


def notify(title: str, message: str, timeout: int = 5) -> None:
    """Show `message` as a desktop notification from a worker thread.

    Falls back to a console line when plyer has no backend for this platform.
    """
    def _send() -> None:
        notify_func = getattr(plyer_notification, "notify", None)
        if not callable(notify_func):
            _console(title, message)
            return
        try:
            notify_func(title=title, message=message, timeout=timeout, app_name=APP_NAME)  # type: ignore[no-untyped-call]
        except Exception as e:
            print(f"{APP_NAME}: notification error: {e}")
            _console(title, message)

    threading.Thread(target=_send, name="tracktime-notify", daemon=True).start()
