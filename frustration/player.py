from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .track import Track
from .types import Color


@dataclass(slots=True)
class Player:
    """One color with its single token. Holds state only.

    Rule logic (destinations, bounces, hits) lives in the track and rule
    chain, not here.
    """

    color: Color
    home_position: int
    end_position: int
    current_position: int = field(default=0)
    total_moves: int = 0

    def __post_init__(self) -> None:
        if not self.current_position:
            self.current_position = self.home_position

    @classmethod
    def for_track(cls, color: Color, track: Track) -> "Player":
        return cls(
            color=color,
            home_position=track.home_slot(color),
            end_position=track.end_position,
        )

    def move(self, new_position: int) -> None:
        self.current_position = new_position
        self.total_moves += 1

    def set_position(self, position: int, total_moves: Optional[int] = None) -> None:
        """Restore a saved position without counting a move."""
        self.current_position = position
        if total_moves is not None:
            self.total_moves = total_moves

    def reset_to_home(self) -> None:
        self.current_position = self.home_position


@dataclass(slots=True)
class Roster:
    """Players in turn order plus whose turn it is."""

    players: List[Player]
    current_index: int = 0

    def __post_init__(self) -> None:
        if not self.players:
            raise ValueError("Roster needs at least one player")

    @classmethod
    def for_track(cls, track: Track) -> "Roster":
        return cls(players=[Player.for_track(color, track) for color in track.colors])

    def __iter__(self) -> Iterator[Player]:
        return iter(self.players)

    def __len__(self) -> int:
        return len(self.players)

    @property
    def current(self) -> Player:
        return self.players[self.current_index]

    def advance(self) -> Player:
        self.current_index = (self.current_index + 1) % len(self.players)
        return self.current

    def player(self, color: Color) -> Player:
        for pl in self.players:
            if pl.color == color:
                return pl
        raise KeyError(f"No {Color(color).label} player in this game")

    def occupant_of(self, track: Track, slot: int, exclude: Color) -> Optional[Player]:
        """First other player whose token sits on main slot ``slot``.

        A token on its own start slot counts; tail ordinals never match
        because they lie beyond the main track.
        """
        if not 1 <= slot <= track.main_length:
            return None
        for pl in self.players:
            if pl.color != exclude and pl.current_position == slot:
                return pl
        return None

    def total_moves(self) -> int:
        return sum(pl.total_moves for pl in self.players)
