import os
import re
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigurationError
from .types import Color

load_dotenv()

# --- Board tables ---
# (main track slots, tail slots including the goal)
BOARD_SIZES: dict[str, tuple[int, int]] = {
    "basic": (18, 3),
    "large": (36, 6),
}

# Entry (home) slots per player count, in Color order: Red, Blue, Green, Yellow
ENTRY_SLOTS: dict[str, dict[int, tuple[int, ...]]] = {
    "basic": {2: (1, 10), 4: (1, 5, 10, 14)},
    "large": {2: (1, 19), 4: (1, 10, 19, 27)},
}

SUPPORTED_PLAYER_COUNTS = (2, 4)
SUPPORTED_DICE_COUNTS = (1, 2)
DIE_SIDES = 6

EXACT_END = "exact-end"
HIT_HOME = "hit-home"
RULE_FLAGS = (EXACT_END, HIT_HOME)


def normalize_rule_name(name: str) -> str:
    """Map ``exactEnd``, ``exact_end`` or ``EXACT-END`` to ``exact-end``."""
    cleaned = re.sub(r"(?<=[a-z])(?=[A-Z])", "-", name.strip())
    cleaned = cleaned.replace("_", "-").lower()
    if cleaned not in RULE_FLAGS:
        raise ConfigurationError(
            f"Unknown rule '{name}'. Available: {list(RULE_FLAGS)}"
        )
    return cleaned


@dataclass(slots=True)
class GameConfig:
    board_size: str = "basic"
    num_players: int = 2
    dice_count: int = 1
    rules: tuple[str, ...] = field(default_factory=tuple)
    seed: Optional[int] = None
    max_turns: int = 1000

    def __post_init__(self) -> None:
        self.board_size = self.board_size.strip().lower()
        if self.board_size not in BOARD_SIZES:
            raise ConfigurationError(
                f"Unknown board size '{self.board_size}'. Available: {list(BOARD_SIZES)}"
            )
        if self.num_players not in SUPPORTED_PLAYER_COUNTS:
            raise ConfigurationError("Number of players must be 2 or 4")
        if self.dice_count not in SUPPORTED_DICE_COUNTS:
            raise ConfigurationError("Number of dice must be 1 or 2")
        if self.max_turns < 1:
            raise ConfigurationError("max_turns must be positive")
        # Keep first occurrence order, drop duplicates
        normalized: list[str] = []
        for rule in self.rules:
            name = normalize_rule_name(rule)
            if name not in normalized:
                normalized.append(name)
        self.rules = tuple(normalized)

    @classmethod
    def from_env(cls) -> "GameConfig":
        """Build a config from BOARD_SIZE, NUM_PLAYERS, DICE_COUNT, RULES, SEED and MAX_TURNS."""
        rules = [r for r in os.getenv("RULES", "").split(",") if r.strip()]
        seed = os.getenv("SEED")
        try:
            return cls(
                board_size=os.getenv("BOARD_SIZE", "basic"),
                num_players=int(os.getenv("NUM_PLAYERS", 2)),
                dice_count=int(os.getenv("DICE_COUNT", 1)),
                rules=tuple(rules),
                seed=int(seed) if seed else None,
                max_turns=int(os.getenv("MAX_TURNS", 1000)),
            )
        except ValueError as e:
            if isinstance(e, ConfigurationError):
                raise
            raise ConfigurationError(f"Invalid numeric setting in environment: {e}") from e

    @property
    def main_length(self) -> int:
        return BOARD_SIZES[self.board_size][0]

    @property
    def tail_length(self) -> int:
        return BOARD_SIZES[self.board_size][1]

    def description(self) -> str:
        players = ", ".join(c.label for c in list(Color)[: self.num_players])
        dice = (
            "Single random 6 sided die"
            if self.dice_count == 1
            else "Two random 6 sided dice"
        )
        return (
            f"Board positions={self.main_length} Tail positions={self.tail_length} "
            f"Players={{{players}}}\nDice: {dice}"
        )
