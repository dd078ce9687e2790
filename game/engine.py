# game/engine.py

from PySide6.QtCore import QObject, Signal

from game.types import Block, EntityPosition, Point


class GameEngine(QObject):
    """
    The surface a game client has to offer a ScriptHost.

    Signals may be emitted from any thread; the host only ever reacts to them
    by queueing work onto its own thread. The operations are called from the
    host thread and must return promptly.
    """

    chunkUpdated          = Signal(object, object)   # start: Point, size: Point
    playerPositionUpdated = Signal()
    loginStatusUpdated    = Signal(int)              # LoginStatus
    chatReceived          = Signal(str, str)         # sender, message
    playerDied            = Signal()
    playerHealthUpdated   = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)

    # ─── Commands ─────────────────────────────────────────────

    def start(self) -> None:
        raise NotImplementedError

    def shutdown(self, return_code: int) -> None:
        raise NotImplementedError

    def send_chat(self, message: str) -> None:
        raise NotImplementedError

    def set_control_activated(self, control: int, activated: bool) -> None:
        raise NotImplementedError

    def do_physics(self, delta_seconds: float) -> None:
        raise NotImplementedError

    # ─── Queries ──────────────────────────────────────────────

    def block_at(self, point: Point) -> Block:
        raise NotImplementedError

    def player_position(self) -> EntityPosition:
        raise NotImplementedError

    def player_health(self) -> int:
        raise NotImplementedError

    def item_stack_height(self, item_type: int) -> int:
        raise NotImplementedError
