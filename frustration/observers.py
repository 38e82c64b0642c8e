"""
Game event observers.

The engine itself never prints or logs per-move detail; everything a user or
a log file sees about a game goes through one of these.
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from .player import Player
from .track import Track
from .types import Color

RESET = "\u001b[0m"
ANSI_COLORS = {
    Color.RED: "\u001b[31m",
    Color.BLUE: "\u001b[34m",
    Color.GREEN: "\u001b[32m",
    Color.YELLOW: "\u001b[33m",
}


def colorize(text: str, color: Color) -> str:
    return f"{ANSI_COLORS[color]}{text}{RESET}"


def describe_position(track: Track, player: Player, position: int) -> str:
    where = track.locate(player.color, position)
    if where.is_home:
        return f"HOME (Position {position})"
    if where.is_end:
        return "END"
    if where.is_tail:
        return f"TAIL (Tail Position {track.tail_offset(position)})"
    return f"Position {position}"


class GameObserver:
    """Receives game events synchronously. Return values are ignored."""

    def on_move(self, player: Player, old_position: int, new_position: int, roll: int) -> None:
        pass

    def on_hit(self, attacker: Player, victim: Player, victim_position: int) -> None:
        pass

    def on_overshoot(self, player: Player, raw_position: int, new_position: int) -> None:
        pass

    def on_win(self, winner: Player, total_moves: int) -> None:
        pass

    def on_undo(
        self, player: Player, hit_occurred: bool, hit_victim: Optional[Color]
    ) -> None:
        pass


class ConsoleObserver(GameObserver):
    """Prints a narration of the game to stdout."""

    def __init__(self, track: Track, use_color: bool = True):
        self.track = track
        self.use_color = use_color

    def _name(self, color: Color) -> str:
        return colorize(color.label, color) if self.use_color else color.label

    def on_move(self, player, old_position, new_position, roll):
        name = self._name(player.color)
        print(f"{name} play {player.total_moves} rolls {roll}")
        print(
            f"{name} moves from {describe_position(self.track, player, old_position)}"
            f" to {describe_position(self.track, player, new_position)}"
        )

    def on_hit(self, attacker, victim, victim_position):
        name = self._name(victim.color)
        print(f"{name} Position {victim_position} hit!")
        print(
            f"{name} moves from Position {victim_position} to HOME "
            f"(Position {victim.home_position})"
        )

    def on_overshoot(self, player, raw_position, new_position):
        print(f"{self._name(player.color)} overshoots!")

    def on_win(self, winner, total_moves):
        print(f"{self._name(winner.color)} wins in {winner.total_moves} moves!")
        print(f"Total plays {total_moves}")

    def on_undo(self, player, hit_occurred, hit_victim):
        if hit_occurred and hit_victim is not None:
            print(f"Undo (restored {self._name(hit_victim)} after hit)")
        else:
            print("Undo")


class LoggingObserver(GameObserver):
    """Routes game events to the loguru logger."""

    def __init__(self, track: Track):
        self.track = track

    def on_move(self, player, old_position, new_position, roll):
        old = self.track.locate(player.color, old_position)
        new = self.track.locate(player.color, new_position)
        logger.debug(
            f"{player.color.label} rolled {roll}: {old.kind.value} {old.ordinal} -> "
            f"{new.kind.value} {new.ordinal} (moves={player.total_moves})"
        )

    def on_hit(self, attacker, victim, victim_position):
        logger.info(
            f"{attacker.color.label} hit {victim.color.label} at {victim_position}; "
            f"{victim.color.label} returns to {victim.home_position}"
        )

    def on_overshoot(self, player, raw_position, new_position):
        logger.debug(
            f"{player.color.label} overshot END {player.end_position} "
            f"(raw {raw_position}), bounced to {new_position}"
        )

    def on_win(self, winner, total_moves):
        logger.info(
            f"{winner.color.label} wins in {winner.total_moves} moves "
            f"({total_moves} plays in total)"
        )

    def on_undo(self, player, hit_occurred, hit_victim):
        suffix = f", hit on {hit_victim.label} reverted" if hit_occurred and hit_victim is not None else ""
        logger.info(f"Undo: {player.color.label} to play{suffix}")
