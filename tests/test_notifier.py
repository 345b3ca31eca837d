import threading
from unittest.mock import Mock

from tracktime import notifier


def _run_inline(monkeypatch):
    """Make notify() run its worker synchronously."""

    class InlineThread:
        def __init__(self, target, **_kwargs):
            self.target = target

        def start(self):
            self.target()

    monkeypatch.setattr(notifier.threading, "Thread", InlineThread)


def test_notify_calls_plyer(monkeypatch):
    _run_inline(monkeypatch)
    backend = Mock()
    monkeypatch.setattr(notifier, "plyer_notification", backend)

    notifier.notify("Title", "Body", timeout=3)

    backend.notify.assert_called_once_with(title="Title", message="Body", timeout=3, app_name="tracktime")


def test_notify_falls_back_to_console(monkeypatch, capsys):
    _run_inline(monkeypatch)
    backend = Mock()
    backend.notify.side_effect = NotImplementedError("no backend")
    monkeypatch.setattr(notifier, "plyer_notification", backend)

    notifier.notify("Title", "Body")

    out = capsys.readouterr().out
    assert "notification error: no backend" in out
    assert "Title - Body" in out


def test_notify_does_not_block_caller(monkeypatch):
    release = threading.Event()
    backend = Mock()
    backend.notify.side_effect = lambda **_kwargs: release.wait(timeout=5.0)
    monkeypatch.setattr(notifier, "plyer_notification", backend)

    notifier.notify("Title", "Body")
    release.set()
