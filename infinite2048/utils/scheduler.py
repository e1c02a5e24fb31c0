"""
Delayed callbacks for the two-phase moves of the game.

The game runs on a single thread. A ``Scheduler`` only has to run a callback once a delay has elapsed; pending
callbacks are never cancelled, the game ignores the ones that belong to an older session.
"""

import heapq
from abc import ABC, abstractmethod
from itertools import count
from typing import Callable


class Scheduler(ABC):
    """Runs callbacks after a delay, on the thread driving the game."""

    @abstractmethod
    def call_later(self, delay: int, callback: Callable[[], None]) -> None:
        """
        Schedule a callback.

        Parameters
        ----------
        delay : int
            Delay in milliseconds.
        callback : Callable[[], None]
            Function to call once the delay has elapsed.
        """


class ManualScheduler(Scheduler):
    """
    Scheduler driven by an explicit virtual clock.

    Nothing runs until ``advance`` or ``run_all`` is called. Callbacks due at the same time run in the order they
    were scheduled.
    """

    def __init__(self):
        self.now = 0
        self._queue: list[tuple[int, int, Callable[[], None]]] = []
        self._order = count()

    @property
    def pending(self) -> int:
        """Number of callbacks not run yet."""
        return len(self._queue)

    def call_later(self, delay: int, callback: Callable[[], None]) -> None:
        heapq.heappush(self._queue, (self.now + max(delay, 0), next(self._order), callback))

    def advance(self, delay: int) -> int:
        """
        Move the clock forward and run every callback that became due.

        Parameters
        ----------
        delay : int
            Milliseconds to move forward.

        Returns
        -------
        int
            Number of callbacks run.
        """
        deadline = self.now + delay
        ran = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, _, callback = heapq.heappop(self._queue)
            self.now = due
            callback()
            ran += 1
        self.now = deadline
        return ran

    def run_all(self) -> int:
        """Run every pending callback, including the ones they schedule."""
        ran = 0
        while self._queue:
            ran += self.advance(self._queue[0][0] - self.now)
        return ran
