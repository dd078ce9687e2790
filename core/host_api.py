# core/host_api.py

import functools
import logging
import math
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, TYPE_CHECKING

from core.config import SCRIPT_ENCODING
from core.errors import ArgumentError, HostIOError, ScriptExit
from game.items import ENUM_TABLES, enum_mapping
from game.types import Block, PlayerState, Point

if TYPE_CHECKING:
    from core.evaluator import ScriptEvaluator
    from core.script_host import ScriptHost

log = logging.getLogger(__name__)


# ─── Argument contracts ───────────────────────────────────────

def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_integer(value: Any) -> bool:
    if isinstance(value, float):
        return value.is_integer()
    return _is_number(value)


def _coords(value: Any) -> Optional[tuple]:
    """(x, y, z) from a Point, any object with x/y/z, or a mapping; None if not numeric."""
    try:
        if isinstance(value, Mapping):
            xyz = (value["x"], value["y"], value["z"])
        else:
            xyz = (value.x, value.y, value.z)
    except (KeyError, AttributeError, TypeError):
        return None
    return xyz if all(_is_number(v) for v in xyz) else None


@dataclass(frozen=True)
class TypeCheck:
    name: str
    test: Callable[[Any], bool]


STRING   = TypeCheck("string",   lambda v: isinstance(v, str))
NUMBER   = TypeCheck("number",   _is_number)
INTEGER  = TypeCheck("integer",  _is_integer)
BOOLEAN  = TypeCheck("boolean",  lambda v: isinstance(v, bool))
FUNCTION = TypeCheck("function", callable)
POINT    = TypeCheck("point",    lambda v: _coords(v) is not None)


@dataclass(frozen=True)
class ArgumentContract:
    """Arity range plus one optional check per position.  max_args None means unbounded."""
    name: str
    min_args: int
    max_args: Optional[int]
    checks: tuple = ()

    def validate(self, args: tuple) -> None:
        count = len(args)
        if count < self.min_args or (self.max_args is not None and count > self.max_args):
            if self.max_args == self.min_args:
                message = f"Expected {self.min_args} arguments. Received {count}"
            elif self.max_args is None:
                message = f"Expected at least {self.min_args} arguments. Received {count}"
            else:
                message = (f"Expected between {self.min_args} and {self.max_args} arguments. "
                           f"Received {count}")
            raise ArgumentError(message)

        for index, (value, check) in enumerate(zip(args, self.checks)):
            if check is not None and not check.test(value):
                raise ArgumentError(
                    f"Invalid argument {index + 1} to {self.name}: expected {check.name}"
                )


def exposed(name: str, min_args: int, max_args: Optional[int] = -1, *checks: Optional[TypeCheck]):
    """Mark a bridge method as the script global `name`.  max_args -1 means exactly min_args."""
    if max_args == -1:
        max_args = min_args
    contract = ArgumentContract(name, min_args, max_args, tuple(checks))

    def decorator(fn):
        fn.contract = contract
        return fn

    return decorator


# ─── Bridge ───────────────────────────────────────────────────

class HostAPIBridge:
    """
    The functions a script sees as globals.  Every one validates its
    arguments against its contract before touching host or game state.
    """

    def __init__(self, host: "ScriptHost"):
        self._host = host

    @property
    def game(self):
        return self._host.game

    def install(self, evaluator: "ScriptEvaluator") -> None:
        """Every host-API global: functions, enum tables and the live handler map."""
        for attr in dir(type(self)):
            contract = getattr(getattr(type(self), attr), "contract", None)
            if isinstance(contract, ArgumentContract):
                evaluator.register_function(contract.name, self._wrap(contract, getattr(self, attr)))

        for enum_name in ENUM_TABLES:
            evaluator.set_property(enum_name, enum_mapping(enum_name))
        evaluator.set_property("handlers", self._host.events.handler_map)

    @staticmethod
    def _wrap(contract: ArgumentContract, method: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(method)
        def api_fn(*args):
            contract.validate(args)
            return method(*args)

        api_fn.__name__ = api_fn.__qualname__ = contract.name
        return api_fn

    # ─── Game ─────────────────────────────────────────────────

    @exposed("chat", 1, -1, STRING)
    def chat(self, message: str) -> None:
        self.game.send_chat(message)

    @exposed("username", 0)
    def username(self) -> str:
        return self._host.username

    @exposed("health", 0)
    def health(self):
        return self.game.player_health()

    @exposed("itemStackHeight", 1, -1, INTEGER)
    def item_stack_height(self, item_type) -> int:
        return self.game.item_stack_height(int(item_type))

    @exposed("blockAt", 1, -1, POINT)
    def block_at(self, point) -> Block:
        x, y, z = (nearest_int(v) for v in _coords(point))
        block = self.game.block_at(Point(x, y, z))
        return Block(type=block.type)

    @exposed("playerState", 0)
    def player_state(self) -> PlayerState:
        return PlayerState.from_position(self.game.player_position())

    @exposed("setControlState", 2, -1, INTEGER, BOOLEAN)
    def set_control_state(self, control, state: bool) -> None:
        self.game.set_control_activated(int(control), state)

    @exposed("Point", 3, -1, NUMBER, NUMBER, NUMBER)
    def point(self, x, y, z) -> Point:
        return Point(x, y, z)

    # ─── Timers ───────────────────────────────────────────────

    @exposed("setTimeout", 2, -1, FUNCTION, NUMBER)
    def set_timeout(self, fn, ms) -> int:
        return self._host.timers.schedule(fn, getattr(fn, "__self__", None), int(ms), False)

    @exposed("setInterval", 2, -1, FUNCTION, NUMBER)
    def set_interval(self, fn, ms) -> int:
        return self._host.timers.schedule(fn, getattr(fn, "__self__", None), int(ms), True)

    @exposed("clearTimeout", 1, -1, NUMBER)
    def clear_timeout(self, timer_id) -> None:
        self._host.timers.cancel(int(timer_id))

    @exposed("clearInterval", 1, -1, NUMBER)
    def clear_interval(self, timer_id) -> None:
        self._host.timers.cancel(int(timer_id))

    # ─── Events ───────────────────────────────────────────────

    @exposed("on", 2, -1, STRING, FUNCTION)
    def on(self, event: str, fn) -> None:
        self._host.events.register(event, fn)

    @exposed("off", 2, -1, STRING, FUNCTION)
    def off(self, event: str, fn) -> None:
        self._host.events.unregister(event, fn)

    @exposed("raiseEvent", 1, None, STRING)
    def raise_event(self, event: str, *args) -> None:
        self._host.post_event(event, *args)

    # ─── Files & output ───────────────────────────────────────

    @exposed("include", 1, -1, STRING)
    def include(self, file_name: str) -> None:
        script_dir = os.path.dirname(os.path.abspath(self._host.script_path))
        absolute_name = os.path.normpath(os.path.join(script_dir, file_name))
        contents = read_text(absolute_name)
        if contents is None:
            raise HostIOError(f"Cannot open included file: {absolute_name}")
        # Errors in the included code unwind into the caller like any other.
        self._host.evaluator.run(contents, absolute_name)

    @exposed("readFile", 1, -1, STRING)
    def read_file(self, path: str) -> Optional[str]:
        return read_text(path)

    @exposed("writeFile", 2, -1, STRING, STRING)
    def write_file(self, path: str, contents: str) -> None:
        try:
            with open(path, "w", encoding=SCRIPT_ENCODING) as f:
                f.write(contents)
        except OSError as e:
            raise HostIOError(f"Unable to write file: {path}") from e

    @exposed("print", 1, -1, STRING)
    def print(self, text: str) -> None:
        self._host.stdout.write(text)
        self._host.stdout.flush()

    @exposed("debug", 1)
    def debug(self, value: Any) -> None:
        self._host.stderr.write(f"{value}\n")
        self._host.stderr.flush()

    @exposed("exit", 0, 1, INTEGER)
    def exit(self, code=0) -> None:
        code = int(code)
        self._host.request_exit(code)
        raise ScriptExit(code)


def nearest_int(value: float) -> int:
    """Round half up: 1.5 -> 2, -1.5 -> -1."""
    return int(math.floor(value + 0.5))


def read_text(path: str) -> Optional[str]:
    """File contents, or None if it cannot be read."""
    try:
        with open(path, "r", encoding=SCRIPT_ENCODING) as f:
            return f.read()
    except (OSError, UnicodeDecodeError):
        return None
