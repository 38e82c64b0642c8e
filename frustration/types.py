from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class Color(IntEnum):
    RED = 0
    BLUE = 1
    GREEN = 2
    YELLOW = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


class PositionKind(Enum):
    HOME = "home"
    MAIN = "main"
    TAIL = "tail"
    END = "end"


class GameState(Enum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    GAME_OVER = "game_over"


@dataclass(frozen=True, slots=True)
class Position:
    """A slot as seen by one color.

    ``ordinal`` is the raw 1-based main slot for MAIN and HOME, and
    ``main_length + k`` for the k-th slot of the color's own tail.
    """

    kind: PositionKind
    ordinal: int

    @property
    def is_home(self) -> bool:
        return self.kind is PositionKind.HOME

    @property
    def is_main(self) -> bool:
        return self.kind is PositionKind.MAIN

    @property
    def is_tail(self) -> bool:
        return self.kind is PositionKind.TAIL

    @property
    def is_end(self) -> bool:
        return self.kind is PositionKind.END


@dataclass(frozen=True, slots=True)
class Landing:
    raw: int  # uncapped track result
    final: int  # after movement rules

    @property
    def bounced(self) -> bool:
        return self.final != self.raw


@dataclass(slots=True)
class TurnResult:
    color: Color
    roll: int
    old_position: int
    new_position: int
    raw_position: int
    hit_victim: Optional[Color] = None
    won: bool = False

    @property
    def hit(self) -> bool:
        return self.hit_victim is not None

    @property
    def bounced(self) -> bool:
        return self.raw_position != self.new_position
