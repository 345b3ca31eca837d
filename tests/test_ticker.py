# pyright: reportPrivateUsage=false
import threading

from tracktime.ticker import ThreadTicker


def _wait_finished(ticker: ThreadTicker) -> None:
    assert ticker._thread is not None
    ticker._thread.join(timeout=2.0)
    assert not ticker._thread.is_alive()


def test_ticker_repeats_until_cancelled():
    fired = threading.Event()
    count = {"n": 0}

    def on_tick():
        count["n"] += 1
        if count["n"] >= 3:
            fired.set()

    ticker = ThreadTicker(0.01, on_tick)
    ticker.start()
    assert fired.wait(timeout=5.0)
    ticker.cancel()
    _wait_finished(ticker)

    assert ticker.is_alive is False
    seen = count["n"]
    assert seen >= 3
    assert threading.Event().wait(timeout=0.05) is False
    assert count["n"] == seen


def test_ticker_can_cancel_itself_from_its_own_tick():
    count = {"n": 0}
    holder = {}

    def on_tick():
        count["n"] += 1
        holder["ticker"].cancel()

    holder["ticker"] = ThreadTicker(0.01, on_tick)
    holder["ticker"].start()
    _wait_finished(holder["ticker"])
    assert holder["ticker"].is_alive is False
    assert count["n"] == 1


def test_tick_errors_are_reported_and_loop_continues(capsys):
    calls = {"n": 0}
    done = threading.Event()

    def on_tick():
        calls["n"] += 1
        if calls["n"] == 1:
            raise RuntimeError("broken")
        done.set()

    ticker = ThreadTicker(0.01, on_tick)
    ticker.start()
    assert done.wait(timeout=5.0)
    ticker.cancel()
    _wait_finished(ticker)
    assert "tick error: broken" in capsys.readouterr().out
