"""Tests for the cooperative frame scheduler."""

import config
from scheduler import FrameScheduler, Ticker


class TestFrameScheduler:

    def test_start_schedules_single_frame(self, host):
        calls = []
        sched = FrameScheduler(host, lambda: calls.append(1))
        sched.start()
        sched.start()
        assert len(host.pending) == 1
        assert sched.pending and sched.running
        assert calls == []

    def test_each_frame_reschedules(self, host):
        calls = []
        sched = FrameScheduler(host, lambda: calls.append(1))
        sched.start()
        for _ in range(5):
            assert host.fire(config.FRAME_MS) == 1
        assert len(calls) == 5
        assert len(host.pending) == 1

    def test_stop_is_idempotent(self, host):
        sched = FrameScheduler(host, lambda: None)
        sched.start()
        sched.stop()
        sched.stop()
        assert not sched.running
        assert not sched.pending
        assert host.pending == {}
        assert len(host.cancelled) == 1

    def test_stale_callback_does_nothing(self, host):
        calls = []
        sched = FrameScheduler(host, lambda: calls.append(1))
        sched.start()
        stale = host.callbacks(config.FRAME_MS)[0]
        sched.stop()
        stale()
        assert calls == []
        assert host.pending == {}

    def test_callback_error_keeps_loop_alive(self, host):
        def boom():
            raise RuntimeError("bad frame")

        sched = FrameScheduler(host, boom)
        sched.start()
        host.fire(config.FRAME_MS)
        assert sched.running
        assert len(host.pending) == 1

    def test_callback_may_stop_loop(self, host):
        sched = None

        def once():
            sched.stop()

        sched = FrameScheduler(host, once)
        sched.start()
        host.fire(config.FRAME_MS)
        assert host.pending == {}


class TestTicker:

    def test_uses_jitter_period(self, host):
        ticks = []
        ticker = Ticker(host, lambda: ticks.append(1))
        ticker.start()
        assert host.callbacks(config.JITTER_MS)
        host.fire(config.JITTER_MS)
        host.fire(config.JITTER_MS)
        assert len(ticks) == 2
