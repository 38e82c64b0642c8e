from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

from .config import BOARD_SIZES, ENTRY_SLOTS, SUPPORTED_PLAYER_COUNTS
from .errors import ConfigurationError
from .types import Color, Position, PositionKind


@dataclass(frozen=True, slots=True)
class TrackLayout:
    """Immutable geometry for one board size and player count."""

    name: str
    main_length: int
    tail_length: int
    entry_slots: Mapping[Color, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze a private copy so callers cannot mutate the table later
        object.__setattr__(
            self, "entry_slots", MappingProxyType(dict(self.entry_slots))
        )

    @property
    def colors(self) -> Tuple[Color, ...]:
        return tuple(sorted(self.entry_slots))

    @property
    def end_position(self) -> int:
        return self.main_length + self.tail_length

    def tail_entry_slot(self, color: Color) -> int:
        """Main slot one step behind the color's entry, with wraparound."""
        return (self.entry_slots[color] - 2) % self.main_length + 1


def build_layout(board_size: str, num_players: int) -> TrackLayout:
    """Look up the board tables for a board size and player count."""
    board_size = board_size.lower()
    if board_size not in BOARD_SIZES:
        raise ConfigurationError(
            f"Unknown board size '{board_size}'. Available: {list(BOARD_SIZES)}"
        )
    if num_players not in SUPPORTED_PLAYER_COUNTS:
        raise ConfigurationError("Number of players must be 2 or 4")
    main_length, tail_length = BOARD_SIZES[board_size]
    slots = ENTRY_SLOTS[board_size][num_players]
    return TrackLayout(
        name=board_size,
        main_length=main_length,
        tail_length=tail_length,
        entry_slots={Color(i): slot for i, slot in enumerate(slots)},
    )


class Track:
    """Pure position arithmetic over a circular main track plus per-color tails.

    Ordinals 1..main_length are main slots. A color's tail slot k is
    ``main_length + k``; the same ordinal in another color's frame means
    nothing, so every query is made for a specific color.
    """

    def __init__(self, layout: TrackLayout):
        self.layout = layout

    @property
    def colors(self) -> Tuple[Color, ...]:
        return self.layout.colors

    @property
    def main_length(self) -> int:
        return self.layout.main_length

    @property
    def tail_length(self) -> int:
        return self.layout.tail_length

    @property
    def end_position(self) -> int:
        return self.layout.end_position

    @property
    def max_contained_roll(self) -> int:
        """Largest roll whose exact-end bounce always stays inside the tail.

        Worst case is a token one short of the goal: overshoot is roll - 1, so
        the bounce lands on offset tail_length - roll + 1, which must be >= 1.
        """
        return self.tail_length

    def home_slot(self, color: Color) -> int:
        return self.layout.entry_slots[color]

    def tail_entry_slot(self, color: Color) -> int:
        return self.layout.tail_entry_slot(color)

    def wrap(self, slot: int) -> int:
        """Normalize any integer onto 1..main_length."""
        return (slot - 1) % self.main_length + 1

    def locate(self, color: Color, ordinal: int) -> Position:
        if ordinal >= self.end_position:
            return Position(PositionKind.END, ordinal)
        if ordinal > self.main_length:
            return Position(PositionKind.TAIL, ordinal)
        if ordinal == self.home_slot(color):
            return Position(PositionKind.HOME, ordinal)
        return Position(PositionKind.MAIN, ordinal)

    def tail_offset(self, ordinal: int) -> int:
        return ordinal - self.main_length

    def distance_to_tail_entry(self, color: Color, slot: int) -> int:
        """Forward steps from a main slot to the color's tail entry (0 when on it)."""
        return (self.tail_entry_slot(color) - slot) % self.main_length

    def crosses_tail_entry(self, color: Color, slot: int, roll: int) -> bool:
        """Whether a move of ``roll`` from a main slot reaches the private lane.

        Covers both topologies: for the color whose home is slot 1 the tail
        entry is the highest slot and no wraparound happens before it; for
        every other color the path may wrap past ``main_length`` first. The
        forward distance modulo the track length treats both the same way.
        A token standing on its tail entry always crosses.
        """
        if roll <= 0:
            return False
        return self.distance_to_tail_entry(color, slot) <= roll

    def advance(self, color: Color, ordinal: int, roll: int) -> int:
        """Raw destination after ``roll`` steps. Tail results are uncapped."""
        if roll == 0:
            return ordinal
        if ordinal > self.main_length:
            return ordinal + roll
        if ordinal == self.home_slot(color):
            # A token at home is a full lap away from its own lane
            return self.wrap(ordinal + roll)
        if self.crosses_tail_entry(color, ordinal, roll):
            distance = self.distance_to_tail_entry(color, ordinal)
            steps_into_tail = max(roll - distance, 1)
            return self.main_length + steps_into_tail
        return self.wrap(ordinal + roll)

    def lane_ordinal(self, color: Color, offset: int) -> int:
        """Ordinal for a tail offset, walking back onto the main track when offset <= 0.

        Offset 0 is the tail entry slot and each further step back is one
        main slot earlier, so reflections past the lane start stay on the
        color's own path.
        """
        if offset >= 1:
            return self.main_length + offset
        return self.wrap(self.tail_entry_slot(color) + offset)
