from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, Optional

from .player import Roster
from .types import Color


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Independent copy of the roster and turn bookkeeping at one instant.

    ``hit_occurred`` and ``hit_victim`` describe the action taken right after
    the snapshot, so popping a pre-hit snapshot reports the hit being undone.
    """

    positions: Mapping[Color, int]
    move_counts: Mapping[Color, int]
    current_index: int
    hit_occurred: bool = False
    hit_victim: Optional[Color] = None
    game_over: bool = False
    winner: Optional[Color] = None
    turn_count: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "positions", MappingProxyType(dict(self.positions)))
        object.__setattr__(
            self, "move_counts", MappingProxyType(dict(self.move_counts))
        )
        object.__setattr__(self, "turn_count", sum(self.move_counts.values()))

    @classmethod
    def capture(
        cls,
        roster: Roster,
        hit_occurred: bool = False,
        hit_victim: Optional[Color] = None,
        game_over: bool = False,
        winner: Optional[Color] = None,
    ) -> "Snapshot":
        return cls(
            positions={pl.color: pl.current_position for pl in roster},
            move_counts={pl.color: pl.total_moves for pl in roster},
            current_index=roster.current_index,
            hit_occurred=hit_occurred,
            hit_victim=hit_victim,
            game_over=game_over,
            winner=winner,
        )

    def restore(self, roster: Roster) -> None:
        for pl in roster:
            pl.set_position(self.positions[pl.color], self.move_counts[pl.color])
        roster.current_index = self.current_index


class GameHistory:
    """LIFO stack of snapshots; each undo consumes one entry."""

    def __init__(self):
        self._stack: List[Snapshot] = []

    def __len__(self) -> int:
        return len(self._stack)

    @property
    def can_undo(self) -> bool:
        return bool(self._stack)

    def save(
        self,
        roster: Roster,
        hit_occurred: bool = False,
        hit_victim: Optional[Color] = None,
        game_over: bool = False,
        winner: Optional[Color] = None,
    ) -> Snapshot:
        snapshot = Snapshot.capture(
            roster,
            hit_occurred=hit_occurred,
            hit_victim=hit_victim,
            game_over=game_over,
            winner=winner,
        )
        self._stack.append(snapshot)
        return snapshot

    def undo(self, roster: Roster) -> Optional[Snapshot]:
        """Pop and restore the latest snapshot; None when there is nothing to undo."""
        if not self._stack:
            return None
        snapshot = self._stack.pop()
        snapshot.restore(roster)
        return snapshot

    def clear(self) -> None:
        self._stack.clear()
