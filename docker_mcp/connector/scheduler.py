"""
Delayed-callback scheduling for reconnect attempts
"""
import threading
from typing import Callable, List, Tuple


class ScheduledCall:
    """Handle for a pending callback"""

    def __init__(self, delay: float, callback: Callable[[], object]):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def fire(self):
        """Run the callback unless cancelled or already run"""
        if not self.pending:
            return
        self.fired = True
        self.callback()


class TimerScheduler:
    """Runs callbacks on daemon ``threading.Timer`` threads"""

    def schedule(self, delay: float, callback: Callable[[], object]) -> ScheduledCall:
        call = _TimerCall(delay, callback)
        call.start()
        return call


class _TimerCall(ScheduledCall):

    def __init__(self, delay, callback):
        super().__init__(delay, callback)
        self._timer = threading.Timer(delay, self.fire)
        self._timer.daemon = True

    def start(self):
        self._timer.start()

    def cancel(self):
        super().cancel()
        self._timer.cancel()


class ManualScheduler:
    """Scheduler that only runs callbacks when told to

    Nothing waits on the clock: ``run_pending`` fires whatever is due, in
    scheduling order. Callbacks scheduled while running are left for the
    next call.
    """

    def __init__(self):
        self.calls: List[ScheduledCall] = []

    def schedule(self, delay: float, callback: Callable[[], object]) -> ScheduledCall:
        call = ScheduledCall(delay, callback)
        self.calls.append(call)
        return call

    @property
    def pending(self) -> List[ScheduledCall]:
        return [call for call in self.calls if call.pending]

    def run_pending(self) -> int:
        """Fire all currently pending calls

        Returns:
            Number of callbacks run
        """
        due = self.pending
        for call in due:
            call.fire()
        return len(due)

    def run_until_idle(self, limit: int = 1000) -> Tuple[int, int]:
        """Keep firing until nothing is pending

        Returns:
            (rounds, callbacks run)
        """
        rounds = total = 0
        while self.pending and rounds < limit:
            total += self.run_pending()
            rounds += 1
        return rounds, total
