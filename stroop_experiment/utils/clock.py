# Delayed callbacks for the trial timeline. The live paradigm runs on the
# pyglet clock, tests and the headless simulation on a virtual clock which
# only moves when advanced explicitly.

import heapq
import itertools
import time
from typing import Callable

import pyglet


class ScheduledCall:
    """Handle for an action scheduled to run once after a delay"""

    def __init__(self, action: Callable[[], None], due_s: float):
        self.action = action
        self.due_s = due_s
        self.cancelled = False
        self.done = False
        self._on_cancel: Callable[[], None] | None = None

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)

    def cancel(self):
        if not self.pending:
            return
        self.cancelled = True
        if self._on_cancel is not None:
            self._on_cancel()

    def fire(self, dt: float = 0.0):
        """Run the action unless cancelled. dt is only for compliance with
        the pyglet callback signature
        """
        if not self.pending:
            return
        self.done = True
        self.action()


class PygletScheduler:
    """Schedule on a pyglet clock, time is taken from `time.perf_counter`"""

    def __init__(self, clock: pyglet.clock.Clock | None = None):
        self.clock = clock or pyglet.clock.get_default()

    def now(self) -> float:
        return time.perf_counter()

    def schedule_after(self, delay_s: float, action: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(action, due_s=self.now() + delay_s)
        self.clock.schedule_once(call.fire, delay_s)
        call._on_cancel = lambda: self.clock.unschedule(call.fire)
        return call


class ManualScheduler:
    """
    A virtual clock. Scheduled calls run only during `advance` /
    `advance_to_next`, in order of their due time (ties in scheduling
    order). Calls scheduled from within a running call are considered in
    the same advance if they fall into the advanced interval.
    """

    def __init__(self, start_s: float = 0.0):
        self._now = start_s
        self._queue: list = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._now

    def schedule_after(self, delay_s: float, action: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(action, due_s=self._now + max(delay_s, 0.0))
        heapq.heappush(self._queue, (call.due_s, next(self._counter), call))
        return call

    @property
    def n_pending(self) -> int:
        return sum(1 for _, _, call in self._queue if call.pending)

    def advance(self, dt_s: float):
        """Move the clock forward by dt_s, running everything due on the way"""
        target = self._now + dt_s
        while self._queue and self._queue[0][0] <= target:
            due_s, _, call = heapq.heappop(self._queue)
            self._now = max(self._now, due_s)
            call.fire()
        self._now = target

    def advance_to_next(self) -> bool:
        """Jump to the next pending call and run it. False if nothing is pending"""
        while self._queue:
            due_s, _, call = heapq.heappop(self._queue)
            if not call.pending:
                continue
            self._now = max(self._now, due_s)
            call.fire()
            return True
        return False
