# core/run_loop.py

import heapq
import itertools
import logging
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

log = logging.getLogger(__name__)


@dataclass(eq=False)
class LoopTimer:
    """A timer armed on a RunLoop.  Only the loop touches deadline."""
    interval: float
    repeat: bool
    fn: Callable[..., Any]
    args: tuple = ()
    deadline: float = 0.0
    cancelled: bool = field(default=False)


class RunLoop:
    """
    One worker thread draining a FIFO task queue.

    Any thread may post().  Timers live in a heap; once due they are moved
    to the back of the same queue, so a firing waits behind whatever was
    already queued and never runs concurrently with another task.  Tasks
    posted before start() are kept and run once the thread is up.
    """

    def __init__(self, name: str = "script-host", clock: Callable[[], float] = time.monotonic):
        self._name  = name
        self._clock = clock
        self._cond  = threading.Condition()
        self._tasks: deque[tuple[Callable[..., Any], tuple]] = deque()
        self._timers: list[tuple[float, int, LoopTimer]] = []
        self._seq = itertools.count()
        self._thread: Optional[threading.Thread] = None
        self._stopping = False

    # ─── Lifecycle ────────────────────────────────────────────

    def start(self) -> None:
        with self._cond:
            if self._thread is not None:
                return
            self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop after the current task.  Anything still queued is dropped."""
        with self._cond:
            self._stopping = True
            self._cond.notify_all()

    def join(self, timeout: Optional[float] = None) -> None:
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def is_loop_thread(self) -> bool:
        return self._thread is not None and threading.current_thread() is self._thread

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stopping

    # ─── Scheduling ───────────────────────────────────────────

    def post(self, fn: Callable[..., Any], *args) -> bool:
        """Queue fn(*args).  Returns False once the loop is stopping."""
        with self._cond:
            if self._stopping:
                return False
            self._tasks.append((fn, args))
            self._cond.notify()
            return True

    def call_later(self, delay_ms: int, fn: Callable[..., Any], *args, repeat: bool = False) -> LoopTimer:
        interval = max(0, delay_ms) / 1000.0
        timer = LoopTimer(interval=interval, repeat=repeat, fn=fn, args=args)
        with self._cond:
            timer.deadline = self._clock() + interval
            self._push_timer(timer)
            self._cond.notify()
        return timer

    def cancel(self, timer: LoopTimer) -> None:
        # Lazily discarded when it reaches the top of the heap.
        timer.cancelled = True

    # ─── Internals ────────────────────────────────────────────

    def _push_timer(self, timer: LoopTimer) -> None:
        heapq.heappush(self._timers, (timer.deadline, next(self._seq), timer))

    def _move_due_timers(self, now: float) -> None:
        while self._timers and self._timers[0][0] <= now:
            _, _, timer = heapq.heappop(self._timers)
            if not timer.cancelled:
                self._tasks.append((self._fire_timer, (timer,)))

    def _next_task(self) -> Optional[tuple[Callable[..., Any], tuple]]:
        with self._cond:
            while not self._stopping:
                now = self._clock()
                self._move_due_timers(now)
                if self._tasks:
                    return self._tasks.popleft()
                timeout = self._timers[0][0] - now if self._timers else None
                self._cond.wait(timeout)
            return None

    def _fire_timer(self, timer: LoopTimer) -> None:
        if timer.cancelled:
            return
        if not timer.repeat:
            timer.cancelled = True
        try:
            timer.fn(*timer.args)
        finally:
            # a failing firing is logged by _run; the timer keeps its schedule
            if timer.repeat and not timer.cancelled:
                with self._cond:
                    timer.deadline = max(timer.deadline + timer.interval, self._clock())
                    self._push_timer(timer)

    def _run(self) -> None:
        log.debug("[LOOP] %s started", self._name)
        while (task := self._next_task()) is not None:
            fn, args = task
            try:
                fn(*args)
            except Exception:
                log.exception("[LOOP] Task %r failed", fn)
        with self._cond:
            self._tasks.clear()
            self._timers.clear()
        log.debug("[LOOP] %s stopped", self._name)
