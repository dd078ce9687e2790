# core/script_host.py

import logging
import sys
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional, TextIO
from urllib.parse import urlparse

from PySide6.QtCore import QElapsedTimer, Qt

from core.config import HANDLERS_FILE, PHYSICS_FPS
from core.errors import ScriptExit
from core.evaluator import ScriptEvaluator
from core.event_dispatcher import EventDispatcher
from core.host_api import HostAPIBridge, read_text
from core.run_loop import LoopTimer, RunLoop
from core.settings import load_handler_map, load_settings
from core.timer_registry import TimerRegistry
from game.engine import GameEngine
from game.types import LoginStatus, Point

log = logging.getLogger(__name__)


class HostStatus(Enum):
    CREATED      = "created"
    INITIALIZING = "initializing"
    RUNNING      = "running"
    EXITING      = "exiting"


@dataclass
class HostState:
    exiting: bool = False
    started: bool = False
    exit_code: Optional[int] = None


class ScriptHost:
    """
    Runs one user script against one game client.

    Everything that touches the evaluator, timers or handlers happens on the
    host's own RunLoop thread.  Public entry points may be called from any
    thread; off-thread calls are queued onto the loop.
    """

    def __init__(
            self,
            game: GameEngine,
            url: str,
            script_path,
            *,
            physics_fps: Optional[int] = None,
            handlers_file: Optional[Path] = None,
            stdout: Optional[TextIO] = None,
            stderr: Optional[TextIO] = None,
    ):
        self.game = game
        self.url = url
        self.script_path = str(script_path)
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr

        self.settings: dict = {}
        self._physics_fps = physics_fps
        self._handlers_file = Path(handlers_file or HANDLERS_FILE)

        self.status = HostStatus.CREATED
        self.state = HostState()
        self._exit_request: Optional[int] = None
        self._finished = threading.Event()

        self.evaluator: Optional[ScriptEvaluator] = None
        self.events: Optional[EventDispatcher] = None
        self.bridge = HostAPIBridge(self)

        self.loop = RunLoop(name=f"script-host:{Path(self.script_path).name}")
        self.timers = TimerRegistry(self.loop, self._invoke_timer)

        self._physics_timer: Optional[LoopTimer] = None
        self._physics_clock = QElapsedTimer()

        # run in our own thread
        self.loop.start()

    # ─── Public API ───────────────────────────────────────────

    @property
    def username(self) -> str:
        return urlparse(self.url).username or ""

    @property
    def exit_code(self) -> Optional[int]:
        return self.state.exit_code

    def go(self) -> None:
        """Initialize and run the main script.  Safe to call from any thread."""
        if not self.loop.is_loop_thread():
            self.loop.post(self.go)
            return
        if self.status is not HostStatus.CREATED:
            return
        try:
            self._initialize()
        except Exception:
            log.exception("[SCRIPT] host failed while starting %s", self.script_path)
            self._shutdown(1)

    def wait(self, timeout: Optional[float] = None) -> Optional[int]:
        """Block until the host has exited; returns the exit code (None on timeout)."""
        if not self._finished.wait(timeout):
            return None
        self.loop.join(timeout)
        return self.state.exit_code

    def post_event(self, event: str, *args) -> None:
        self.loop.post(self._raise_event, event, *args)

    def request_exit(self, code: int) -> None:
        if self._exit_request is None:
            self._exit_request = code

    # ─── Startup ──────────────────────────────────────────────

    def _initialize(self) -> None:
        self.status = HostStatus.INITIALIZING
        self.settings = load_settings(Path(self.script_path))
        self._physics_fps = self._physics_fps or self.settings.get("physics_fps", PHYSICS_FPS)
        self.evaluator = ScriptEvaluator()

        # init event handler framework
        handler_map = load_handler_map(self._handlers_file)
        for name in self.settings.get("events") or []:
            handler_map.setdefault(name, [])
        self.events = EventDispatcher(self._invoke_handler, handler_map)
        self.bridge.install(self.evaluator)

        contents = read_text(self.script_path)
        if contents is None:
            log.warning("[SCRIPT] file not found: %s", self.script_path)
            self._shutdown(1)
            return

        self._evaluate(contents, self.script_path)
        self._check_engine("evaluating main script")
        if self.state.exiting:
            return

        self._connect_game()
        self.state.started = True
        self.status = HostStatus.RUNNING
        self.game.start()

    def _connect_game(self) -> None:
        # Slots run on the emitting thread and only queue work for the loop.
        direct = Qt.ConnectionType.DirectConnection
        self.game.chunkUpdated.connect(self._on_chunk_updated, type=direct)
        self.game.playerPositionUpdated.connect(self._on_position_updated, type=direct)
        self.game.loginStatusUpdated.connect(self._on_login_status_updated, type=direct)
        self.game.chatReceived.connect(self._on_chat_received, type=direct)
        self.game.playerDied.connect(self._on_player_died, type=direct)
        self.game.playerHealthUpdated.connect(self._on_health_updated, type=direct)

    # ─── Game signal slots (any thread) ───────────────────────

    def _on_chunk_updated(self, start, size) -> None:
        self.post_event("onChunkUpdated", Point(*start), Point(*size))

    def _on_position_updated(self) -> None:
        self.post_event("onPositionUpdated")

    def _on_health_updated(self) -> None:
        self.post_event("onHealthChanged")

    def _on_player_died(self) -> None:
        self.post_event("onDeath")

    def _on_chat_received(self, username: str, message: str) -> None:
        self.post_event("onChat", username, message)

    def _on_login_status_updated(self, status: int) -> None:
        self.loop.post(self._handle_login_status, status)

    # ─── Loop-thread handlers ─────────────────────────────────

    def _handle_login_status(self, status: int) -> None:
        # the game already shuts itself down on Disconnected and SocketError
        if self.state.exiting or status != LoginStatus.Success:
            return
        log.info("[GAME] logged in as %s", self.username)
        self._start_physics()
        self._raise_event("onConnected")

    def _start_physics(self) -> None:
        if self._physics_timer is not None:
            return
        self._physics_clock.start()
        self._do_physics()
        if self.state.exiting:
            return
        interval_ms = max(1, 1000 // self._physics_fps)
        self._physics_timer = self.loop.call_later(interval_ms, self._do_physics, repeat=True)

    def _stop_physics(self) -> None:
        if self._physics_timer is not None:
            self.loop.cancel(self._physics_timer)
            self._physics_timer = None

    def _do_physics(self) -> None:
        if self.state.exiting:
            return
        elapsed_time = self._physics_clock.restart() / 1000.0
        try:
            self.game.do_physics(elapsed_time)
        except Exception:
            log.exception("[GAME] physics step failed")
            self._shutdown(1)

    def _raise_event(self, event: str, *args) -> None:
        if self.state.exiting or self.events is None:
            return
        self.events.raise_event(event, *args)

    def _invoke_handler(self, handler: Callable[..., Any], args: tuple) -> bool:
        if self.state.exiting:
            return False
        self.evaluator.call(handler, args)
        self._check_engine("calling event handler")
        return not self.state.exiting

    def _invoke_timer(self, callback: Callable[..., Any], receiver: Any) -> None:
        if self.state.exiting:
            return
        log.debug("[TIMER] calling %r (receiver %r)", callback, receiver)
        self.evaluator.call(callback)
        self._check_engine("calling timer callback")

    def _evaluate(self, source: str, file_name: str) -> None:
        if self.state.exiting:
            return
        self.evaluator.evaluate(source, file_name)

    # ─── Error checkpoint & shutdown ──────────────────────────

    def _check_engine(self, while_doing_what: str = "") -> None:
        if self.state.exiting:
            return

        error, backtrace = self.evaluator.take_error()
        if isinstance(error, ScriptExit):
            self._shutdown(error.code)
        elif isinstance(error, SystemExit):
            self._shutdown(system_exit_code(error))
        elif error is not None:
            if while_doing_what:
                log.warning("[SCRIPT] Error while %s", while_doing_what)
            log.warning("[SCRIPT] %s: %s", type(error).__name__, error)
            log.warning("[SCRIPT] %s", "".join(backtrace).rstrip())
            self._shutdown(1)
        elif self._exit_request is not None:
            # exit() was called but its ScriptExit got caught by the script
            self._shutdown(self._exit_request)

    def _shutdown(self, return_code: int) -> None:
        if self.state.exiting:
            return
        self.state.exiting = True
        self.state.exit_code = return_code
        self.status = HostStatus.EXITING
        log.info("[SCRIPT] exiting with code %d", return_code)

        self._stop_physics()
        self.timers.clear_all()
        if self.events is not None:
            self.events.clear_all()

        try:
            if self.state.started:
                self.game.shutdown(return_code)
        finally:
            self.loop.stop()
            self._finished.set()


def system_exit_code(error: SystemExit) -> int:
    """Exit code the way the interpreter reads it: None -> 0, int -> itself, anything else -> 1."""
    if error.code is None:
        return 0
    if isinstance(error.code, int) and not isinstance(error.code, bool):
        return error.code
    return 1
