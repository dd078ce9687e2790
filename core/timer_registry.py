# core/timer_registry.py

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict

from core.run_loop import LoopTimer, RunLoop

log = logging.getLogger(__name__)


@dataclass
class TimerEntry:
    id: int
    repeat: bool
    receiver: Any
    callback: Callable[..., Any]
    interval_ms: int


class TimerRegistry:
    """
    Script timers keyed by id: setTimeout/setInterval and their clear
    counterparts.  Ids start at 0 and are never reused.

    `invoke(callback, receiver)` runs one firing on behalf of the host, which
    is where error checking happens.
    """

    def __init__(self, loop: RunLoop, invoke: Callable[[Callable[..., Any], Any], None]):
        self._loop = loop
        self._invoke = invoke
        self._entries: Dict[int, TimerEntry] = {}
        self._loop_timers: Dict[int, LoopTimer] = {}
        self._next_id = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, timer_id: int) -> bool:
        return timer_id in self._entries

    # ─── Public API ───────────────────────────────────────────

    def schedule(self, callback: Callable[..., Any], receiver: Any, delay_ms: int, repeat: bool) -> int:
        timer_id = self._next_id
        self._next_id += 1

        delay_ms = max(0, int(delay_ms))
        self._entries[timer_id] = TimerEntry(
            id          = timer_id,
            repeat      = repeat,
            receiver    = receiver,
            callback    = callback,
            interval_ms = delay_ms,
        )
        self._loop_timers[timer_id] = self._loop.call_later(delay_ms, self.fire, timer_id, repeat=repeat)
        log.debug("[TIMER] #%d armed for %d ms (repeat=%s)", timer_id, delay_ms, repeat)
        return timer_id

    def cancel(self, timer_id: int) -> None:
        """Stop a timer.  Unknown or already-fired ids are ignored."""
        self._entries.pop(timer_id, None)
        self._unregister(timer_id)

    def fire(self, timer_id: int) -> None:
        entry = self._entries.get(timer_id)
        if entry is None:
            return
        if not entry.repeat:
            # Gone before the callback runs, so it may schedule afresh.
            del self._entries[timer_id]
            self._unregister(timer_id)
        self._invoke(entry.callback, entry.receiver)

    def clear_all(self) -> None:
        """Stop every outstanding timer."""
        for timer in self._loop_timers.values():
            self._loop.cancel(timer)
        self._loop_timers.clear()
        self._entries.clear()

    # ─── Internals ────────────────────────────────────────────

    def _unregister(self, timer_id: int) -> None:
        timer = self._loop_timers.pop(timer_id, None)
        if timer:
            self._loop.cancel(timer)
