import time

import pytest

from core import Core, FrameLoop, FrameScheduler


def test_callback_runs_once_on_next_frame():
    scheduler = FrameScheduler()
    calls = []
    scheduler.request(calls.append)
    assert scheduler.pending == 1
    assert scheduler.run_frame(16.0) == 1
    assert calls == [16.0]
    assert scheduler.run_frame(32.0) == 0
    assert calls == [16.0]


def test_request_during_frame_waits_for_following_frame():
    scheduler = FrameScheduler()
    calls = []

    def first(ts):
        calls.append("first")
        scheduler.request(lambda ts: calls.append("second"))

    scheduler.request(first)
    scheduler.run_frame()
    assert calls == ["first"]
    assert scheduler.pending == 1
    scheduler.run_frame()
    assert calls == ["first", "second"]


def test_frame_loop_drives_scheduler():
    scheduler = FrameScheduler()
    calls = []
    scheduler.request(calls.append)
    loop = FrameLoop(scheduler, refresh_hz=200)
    loop.start()
    deadline = time.monotonic() + 2.0
    while not calls and time.monotonic() < deadline:
        time.sleep(0.01)
    loop.stop()
    loop.join(timeout=1.0)
    assert len(calls) == 1
    assert not loop.is_alive()


def test_frame_loop_rejects_non_positive_rate():
    with pytest.raises(ValueError):
        FrameLoop(FrameScheduler(), refresh_hz=0)


def test_unhandled_command_reports_not_handled():
    core = Core()
    result = core.dispatch("pointer_move", {"x": 1, "y": 2})
    assert result.handled is False
    assert result.payload is None
