"""Reconnect schedulers."""

import threading

from docker_mcp.connector.scheduler import ManualScheduler, ScheduledCall, TimerScheduler


class TestScheduledCall:

    def test_fires_once(self):
        calls = []
        call = ScheduledCall(1.0, lambda: calls.append('x'))
        call.fire()
        call.fire()
        assert calls == ['x']
        assert not call.pending

    def test_cancelled_never_fires(self):
        calls = []
        call = ScheduledCall(1.0, lambda: calls.append('x'))
        call.cancel()
        call.fire()
        assert calls == []


class TestManualScheduler:

    def test_runs_in_order(self):
        scheduler = ManualScheduler()
        order = []
        scheduler.schedule(2, lambda: order.append('a'))
        scheduler.schedule(1, lambda: order.append('b'))
        assert scheduler.run_pending() == 2
        assert order == ['a', 'b']

    def test_calls_scheduled_during_run_wait_for_next_round(self):
        scheduler = ManualScheduler()
        order = []

        def first():
            order.append('first')
            scheduler.schedule(1, lambda: order.append('second'))

        scheduler.schedule(1, first)
        assert scheduler.run_pending() == 1
        assert order == ['first']
        assert scheduler.run_until_idle() == (1, 1)
        assert order == ['first', 'second']


class TestTimerScheduler:

    def test_fires_callback(self):
        fired = threading.Event()
        TimerScheduler().schedule(0.01, fired.set)
        assert fired.wait(2)

    def test_cancel_stops_timer(self):
        fired = threading.Event()
        call = TimerScheduler().schedule(0.2, fired.set)
        call.cancel()
        assert not fired.wait(0.4)
        assert call.cancelled
