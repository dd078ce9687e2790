# core/event_dispatcher.py

import logging
from typing import Any, Callable, Optional

log = logging.getLogger(__name__)


class EventDispatcher:
    """
    Event name -> ordered list of script handlers.

    raise_event() works on a copy of the list, so handlers may add or remove
    handlers (themselves included) mid-dispatch; the change applies from the
    next raise of that event.  `invoke(handler, args)` returns False when the
    host wants the rest of the cycle abandoned.
    """

    def __init__(
            self,
            invoke: Callable[[Callable[..., Any], tuple], bool],
            handler_map: Optional[dict[str, list]] = None
    ):
        self._invoke = invoke
        self._handlers: dict[str, list] = handler_map if handler_map is not None else {}

    @property
    def handler_map(self) -> dict[str, list]:
        return self._handlers

    def on(self, event: str) -> list:
        """The live handler list for `event` (empty if nothing is registered)."""
        return self._handlers.get(event, [])

    def declare(self, event: str) -> list:
        return self._handlers.setdefault(event, [])

    def register(self, event: str, handler: Callable[..., Any]) -> None:
        self.declare(event).append(handler)

    def unregister(self, event: str, handler: Callable[..., Any]) -> None:
        handlers = self._handlers.get(event)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def clear_all(self) -> None:
        self._handlers.clear()

    def raise_event(self, event: str, *args) -> None:
        handlers = self._handlers.get(event)
        if not handlers:
            return

        snapshot = list(handlers)
        log.debug("[EVENT] %s -> %d handler(s)", event, len(snapshot))
        for handler in snapshot:
            if not self._invoke(handler, args):
                log.debug("[EVENT] %s dispatch aborted", event)
                return
