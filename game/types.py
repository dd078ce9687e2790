# game/types.py

from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple


class Point(NamedTuple):
    x: float
    y: float
    z: float


class LoginStatus(IntEnum):
    Disconnected = 0
    Connecting = 1
    WaitingForHandshakeResponse = 2
    WaitingForLoginResponse = 3
    Success = 4
    SocketError = 5


class Control(IntEnum):
    Forward = 0
    Back = 1
    Left = 2
    Right = 3
    Jump = 4
    Crouch = 5
    DiscardItem = 6
    Action1 = 7
    Action2 = 8


@dataclass(frozen=True)
class Block:
    type: int


@dataclass
class EntityPosition:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    dx: float = 0.0
    dy: float = 0.0
    dz: float = 0.0
    yaw: float = 0.0
    pitch: float = 0.0
    on_ground: bool = False


@dataclass
class PlayerState:
    """What playerState() hands to scripts."""
    position: Point
    velocity: Point
    yaw: float
    pitch: float
    on_ground: bool

    @classmethod
    def from_position(cls, pos: EntityPosition) -> "PlayerState":
        return cls(
            position  = Point(pos.x, pos.y, pos.z),
            velocity  = Point(pos.dx, pos.dy, pos.dz),
            yaw       = pos.yaw,
            pitch     = pos.pitch,
            on_ground = pos.on_ground,
        )
