"""
Movement and collision rules.

A rule chain is the base rule followed by any enabled rules, applied left to
right: each movement policy adjusts the landing produced by the previous one,
and each hit policy gets a chance to act on a collision.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .config import EXACT_END, HIT_HOME, normalize_rule_name
from .player import Player
from .track import Track
from .types import Landing

MovePolicy = Callable[[Track, Player, int], int]
HitPolicy = Callable[[Player, Player], bool]


@dataclass(frozen=True, slots=True)
class Rule:
    name: str
    adjust_landing: Optional[MovePolicy] = None
    resolve_hit: Optional[HitPolicy] = None
    win_text: Optional[str] = None
    hit_text: Optional[str] = None
    exact_end: bool = False


def pass_through(track: Track, player: Player, position: int) -> int:
    return position


def ignore_hit(attacker: Player, victim: Player) -> bool:
    return False


def bounce_off_end(track: Track, player: Player, position: int) -> int:
    """Reflect an overshoot back from the goal by the excess distance.

    A reflection longer than the lane continues backwards past the tail
    entry onto the main track.
    """
    end = player.end_position
    if position <= end:
        return position
    bounced = end - (position - end)
    return track.lane_ordinal(player.color, track.tail_offset(bounced))


def send_home(attacker: Player, victim: Player) -> bool:
    victim.reset_to_home()
    return True


BASE_RULE = Rule(
    name="base",
    adjust_landing=pass_through,
    resolve_hit=ignore_hit,
    win_text="Player can land on or beyond the END position to win",
    hit_text="HITS are ignored, multiple players can occupy the same position",
)

EXACT_END_RULE = Rule(
    name=EXACT_END,
    adjust_landing=bounce_off_end,
    win_text="Player must land exactly on the END position to win",
    exact_end=True,
)

HIT_HOME_RULE = Rule(
    name=HIT_HOME,
    resolve_hit=send_home,
    hit_text="Player will be sent HOME when HIT",
)

# Rule Mapping - rule flag to rule
RULES: Dict[str, Rule] = {
    EXACT_END: EXACT_END_RULE,
    HIT_HOME: HIT_HOME_RULE,
}


class RuleChain:
    """Base rule plus enabled rules; fixed for the lifetime of one game."""

    def __init__(self, track: Track, rules: Sequence[Rule] = ()):
        self.track = track
        self.rules: Tuple[Rule, ...] = (BASE_RULE, *rules)

    @classmethod
    def from_flags(cls, track: Track, flags: Iterable[str]) -> "RuleChain":
        names: List[str] = []
        for flag in flags:
            name = normalize_rule_name(flag)
            if name not in names:
                names.append(name)
        return cls(track, [RULES[name] for name in names])

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(rule.name for rule in self.rules)

    @property
    def exact_end(self) -> bool:
        return any(rule.exact_end for rule in self.rules)

    @property
    def resolves_hits(self) -> bool:
        return any(
            rule.resolve_hit is not None and rule.resolve_hit is not ignore_hit
            for rule in self.rules
        )

    def move(self, player: Player, roll: int) -> Landing:
        raw = self.track.advance(player.color, player.current_position, roll)
        position = raw
        for rule in self.rules:
            if rule.adjust_landing is not None:
                position = rule.adjust_landing(self.track, player, position)
        return Landing(raw=raw, final=position)

    def resolve_hit(self, attacker: Player, victim: Player) -> bool:
        hit = False
        for rule in self.rules:
            if rule.resolve_hit is not None and rule.resolve_hit(attacker, victim):
                hit = True
        return hit

    def is_win(self, player: Player, position: int) -> bool:
        if position == player.end_position:
            return True
        # Overshooting the goal only wins when exact landing is not required
        return position > player.end_position and not self.exact_end

    def describe(self) -> str:
        win_text = hit_text = ""
        for rule in self.rules:
            win_text = rule.win_text or win_text
            hit_text = rule.hit_text or hit_text
        return f"{win_text}\n{hit_text}"
