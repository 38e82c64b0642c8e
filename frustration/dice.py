from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .config import DIE_SIDES, SUPPORTED_DICE_COUNTS
from .errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class DiceRoll:
    values: Tuple[int, ...]

    @property
    def total(self) -> int:
        return sum(self.values)


@dataclass(slots=True)
class Dice:
    count: int = 1
    seed: Optional[int] = None
    rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.count not in SUPPORTED_DICE_COUNTS:
            raise ConfigurationError("Number of dice must be 1 or 2")
        self.rng = random.Random(self.seed)

    def roll(self) -> DiceRoll:
        return DiceRoll(
            tuple(self.rng.randint(1, DIE_SIDES) for _ in range(self.count))
        )


def create_dice(count: int, seed: Optional[int] = None) -> Dice:
    return Dice(count=count, seed=seed)
