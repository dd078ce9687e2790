"""Shared fixtures: a recording game client and a hand-cranked loop."""
from __future__ import annotations

import io
import threading
from pathlib import Path

import pytest

from core.run_loop import LoopTimer
from game.engine import GameEngine
from game.types import Block, EntityPosition


class FakeGame(GameEngine):
    """GameEngine that records every command and answers queries from fields."""

    def __init__(self):
        super().__init__()
        self.started = threading.Event()
        self.chats: list[str] = []
        self.controls: list[tuple[int, bool]] = []
        self.block_queries: list = []
        self.physics_steps: list[float] = []
        self.shutdown_codes: list[int] = []
        self.health = 20
        self.position = EntityPosition(1.0, 64.0, -3.5, 0.1, 0.0, -0.2, 90.0, 10.0, True)
        self.block_type = 1

    def start(self) -> None:
        self.started.set()

    def shutdown(self, return_code: int) -> None:
        self.shutdown_codes.append(return_code)

    def send_chat(self, message: str) -> None:
        self.chats.append(message)

    def set_control_activated(self, control: int, activated: bool) -> None:
        self.controls.append((control, activated))

    def do_physics(self, delta_seconds: float) -> None:
        self.physics_steps.append(delta_seconds)

    def block_at(self, point) -> Block:
        self.block_queries.append(point)
        return Block(type=self.block_type)

    def player_position(self) -> EntityPosition:
        return self.position

    def player_health(self) -> int:
        return self.health

    def item_stack_height(self, item_type: int) -> int:
        return 1 if item_type >= 256 else 64


class ManualLoop:
    """Stands in for RunLoop: timers only fire when advance() is called."""

    def __init__(self):
        self.now = 0
        self.timers: list[LoopTimer] = []

    def call_later(self, delay_ms, fn, *args, repeat=False) -> LoopTimer:
        timer = LoopTimer(interval=delay_ms, repeat=repeat, fn=fn, args=args, deadline=self.now + delay_ms)
        self.timers.append(timer)
        return timer

    def cancel(self, timer: LoopTimer) -> None:
        timer.cancelled = True

    def pending(self) -> list[LoopTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, ms: int) -> None:
        end = self.now + ms
        while True:
            due = [t for t in self.pending() if t.deadline <= end]
            if not due:
                break
            timer = min(due, key=lambda t: t.deadline)
            self.now = timer.deadline
            if timer.repeat:
                timer.deadline += max(timer.interval, 1)
            else:
                timer.cancelled = True
            timer.fn(*timer.args)
        self.now = end


@pytest.fixture
def game():
    return FakeGame()


@pytest.fixture
def manual_loop():
    return ManualLoop()


@pytest.fixture
def write_script(tmp_path):
    """Write a script under tmp_path/scripts and return its path."""
    def _write(source: str, name: str = "main.py") -> Path:
        path = tmp_path / "scripts" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def output():
    return io.StringIO(), io.StringIO()
