from __future__ import annotations

import threading
import time

import pytest

from modules.kitchen.scheduler import RefreshTimer

pytestmark = pytest.mark.unit


def test_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        RefreshTimer(0, lambda: None)


def test_ticks_repeatedly_until_stopped():
    ticks = []
    third_tick = threading.Event()

    def callback():
        ticks.append(time.monotonic())
        if len(ticks) >= 3:
            third_tick.set()

    timer = RefreshTimer(0.01, callback)
    timer.start()
    try:
        assert third_tick.wait(timeout=5)
    finally:
        timer.stop()

    assert not timer.running
    time.sleep(0.05)
    count = len(ticks)
    time.sleep(0.1)
    assert len(ticks) == count


def test_stop_before_first_tick_prevents_callback():
    calls = []
    timer = RefreshTimer(0.2, lambda: calls.append(1))
    timer.start()
    timer.stop()

    time.sleep(0.3)

    assert calls == []


def test_start_is_idempotent():
    timer = RefreshTimer(60, lambda: None)
    timer.start()
    first = timer._timer
    timer.start()
    try:
        assert timer._timer is first
    finally:
        timer.stop()


def test_failing_callback_does_not_stop_cadence():
    calls = []
    second_call = threading.Event()

    def callback():
        calls.append(1)
        if len(calls) >= 2:
            second_call.set()
        if len(calls) == 1:
            raise RuntimeError("boom")

    timer = RefreshTimer(0.01, callback)
    timer.start()
    try:
        assert second_call.wait(timeout=5)
    finally:
        timer.stop()
