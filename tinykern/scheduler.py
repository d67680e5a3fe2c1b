"""Cooperative round-robin scheduling of generator-based kernel threads.

A thread is started by calling ``entry_point(arg)``. If that returns a
generator, each ``yield`` inside it gives up the processor; returning ends the
thread. A plain function runs to completion in one go. To block, a thread calls
``block_on(queue)`` and then yields.
"""

from __future__ import annotations

import enum
import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Generator, Optional

from .clist import CircularList


class ProcState(enum.Enum):
    """Life-cycle state of a process."""

    READY = 0
    BLOCKED = 1
    ELECTED = 2
    TERMINATED = 3


@dataclass(eq=False)
class Process:
    """A schedulable thread of execution."""

    pid: int
    state: ProcState = ProcState.READY
    entry_point: Optional[Callable[[Any], Any]] = None
    arg: Any = None
    _gen: Optional[Generator[Any, None, Any]] = field(default=None, repr=False)
    _started: bool = field(default=False, repr=False)

    def _step(self) -> bool:
        """Run until the next yield; return False once the thread has finished."""
        if not self._started:
            self._started = True
            if self.entry_point is None:
                return False
            result = self.entry_point(self.arg)
            if not inspect.isgenerator(result):
                return False
            self._gen = result
        if self._gen is None:
            return False
        try:
            next(self._gen)
        except StopIteration:
            self._gen = None
            return False
        return True


class Scheduler:
    """Round-robin scheduler with a main thread of pid 0."""

    def __init__(self) -> None:
        self.ready: CircularList[Process] = CircularList()
        self.keyboard_wait: CircularList[Process] = CircularList()
        self.blk_dev_wait: CircularList[Process] = CircularList()
        self.main = Process(pid=0, _started=True)
        self.current = self.main
        self._next_pid = 1

    def create_kthread(self, entry_point: Callable[[Any], Any], arg: Any = None) -> Process:
        """Add a new ready thread; it runs when first scheduled."""
        proc = Process(pid=self._next_pid, entry_point=entry_point, arg=arg)
        self._next_pid += 1
        self.ready.push_back(proc)
        return proc

    def reschedule(self) -> Process:
        """Pick the next process: the head of the ready queue, else the current one."""
        if not self.ready:
            return self.current
        return self.ready.pop_front()

    def yield_(self) -> None:
        """Switch to the next ready process, requeueing the current one if still ready."""
        nxt = self.reschedule()
        if nxt is not self.current:
            if self.current.state is ProcState.READY:
                self.ready.push_back(self.current)
            self.current = nxt

    def exit_current(self) -> None:
        """Terminate the current thread and switch to the next one."""
        if self.current is self.main:
            raise RuntimeError("the main thread cannot exit")
        nxt = self.reschedule()
        if nxt is self.current:
            raise RuntimeError("no process left to run")
        self.current.state = ProcState.TERMINATED
        self.current = nxt

    def block_on(self, queue: CircularList[Process]) -> None:
        """Mark the current process blocked and append it to ``queue``."""
        if queue is None:
            raise ValueError("no queue to block on")
        self.current.state = ProcState.BLOCKED
        queue.push_back(self.current)

    def unblock_all(self, queue: CircularList[Process]) -> None:
        """Make every process waiting in ``queue`` ready, in order, and empty it."""
        for proc in queue:
            proc.state = ProcState.READY
            self.ready.push_back(proc)
        queue.clear()

    def unblock_head(self, queue: CircularList[Process]) -> None:
        """Make the first process waiting in ``queue`` ready."""
        if not queue:
            return
        proc = queue.pop_front()
        proc.state = ProcState.READY
        self.ready.push_back(proc)

    def run(self) -> None:
        """Run threads until the main thread finds nothing else ready."""
        while True:
            if self.current is self.main:
                if not self.ready:
                    return
                self.yield_()
            elif self.current._step():
                self.yield_()
            else:
                self.exit_current()