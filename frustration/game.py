from __future__ import annotations

from typing import List, Optional, Protocol

from loguru import logger

from .config import GameConfig
from .dice import DiceRoll, create_dice
from .history import GameHistory
from .observers import GameObserver
from .player import Player, Roster
from .rules import RuleChain
from .track import Track, build_layout
from .types import Color, GameState, TurnResult


class DiceSource(Protocol):
    def roll(self) -> DiceRoll:
        ...


class Game:
    """Turn controller: ties dice, track, rules, history and observers together.

    Each game owns its own track, rule chain, history and roster; nothing is
    shared between Game instances.
    """

    def __init__(self):
        self.observers: List[GameObserver] = []
        self.history = GameHistory()
        self.state = GameState.IDLE
        self.config: Optional[GameConfig] = None
        self.track: Optional[Track] = None
        self.rules: Optional[RuleChain] = None
        self.roster: Optional[Roster] = None
        self.dice: Optional[DiceSource] = None
        self.winner: Optional[Player] = None
        self.hit_occurred = False
        self.hit_victim: Optional[Color] = None

    # --- Setup ---
    def start_game(self, config: GameConfig, dice: Optional[DiceSource] = None) -> None:
        layout = build_layout(config.board_size, config.num_players)
        self.config = config
        self.track = Track(layout)
        self.rules = RuleChain.from_flags(self.track, config.rules)
        self.roster = Roster.for_track(self.track)
        self.dice = dice if dice is not None else create_dice(config.dice_count, config.seed)
        self.history.clear()
        self.winner = None
        self.hit_occurred = False
        self.hit_victim = None
        self.state = GameState.IN_PROGRESS

        max_roll = 6 * config.dice_count
        if self.rules.exact_end and max_roll > self.track.max_contained_roll:
            logger.debug(
                f"Rolls above {self.track.max_contained_roll} can bounce a token "
                f"out of the {layout.tail_length}-slot tail (max roll {max_roll})"
            )
        logger.debug(f"Started {layout.name} game with rules {self.rules.names}")

    # --- Observers ---
    def add_observer(self, observer: GameObserver) -> None:
        self.observers.append(observer)

    def remove_observer(self, observer: GameObserver) -> None:
        self.observers.remove(observer)

    # --- Queries ---
    @property
    def players(self) -> List[Player]:
        return self.roster.players if self.roster is not None else []

    @property
    def current_player(self) -> Player:
        return self.roster.current

    def is_game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def description(self) -> str:
        return f"{self.config.description()}\n{self.rules.describe()}"

    # --- Play ---
    def play_turn(self) -> Optional[TurnResult]:
        if self.state is not GameState.IN_PROGRESS:
            return None

        player = self.roster.current
        self.hit_occurred = False
        self.hit_victim = None
        self.history.save(self.roster)

        roll = self.dice.roll().total
        old_position = player.current_position
        landing = self.rules.move(player, roll)
        player.move(landing.final)

        for observer in self.observers:
            observer.on_move(player, old_position, landing.final, roll)
        if landing.bounced:
            for observer in self.observers:
                observer.on_overshoot(player, landing.raw, landing.final)

        result = TurnResult(
            color=player.color,
            roll=roll,
            old_position=old_position,
            new_position=landing.final,
            raw_position=landing.raw,
        )

        if self.track.locate(player.color, landing.final).is_main:
            victim = self.roster.occupant_of(self.track, landing.final, exclude=player.color)
            if victim is not None:
                self._resolve_hit(player, victim, result)

        if self.rules.is_win(player, landing.final):
            self.state = GameState.GAME_OVER
            self.winner = player
            result.won = True
            total = self.roster.total_moves()
            for observer in self.observers:
                observer.on_win(player, total)
        else:
            self.roster.advance()
        return result

    def _resolve_hit(self, attacker: Player, victim: Player, result: TurnResult) -> None:
        victim_position = victim.current_position
        # The pre-collision snapshot records whether undoing past it reverts a hit
        lands = self.rules.resolves_hits
        self.history.save(
            self.roster,
            hit_occurred=lands,
            hit_victim=victim.color if lands else None,
        )
        if not self.rules.resolve_hit(attacker, victim):
            return
        self.hit_occurred = True
        self.hit_victim = victim.color
        result.hit_victim = victim.color
        for observer in self.observers:
            observer.on_hit(attacker, victim, victim_position)

    def undo(self) -> bool:
        if self.roster is None or not self.history.can_undo:
            return False
        snapshot = self.history.undo(self.roster)
        logger.debug(
            f"Undo restored turn {snapshot.turn_count}, {len(self.history)} snapshots left"
        )

        self.state = GameState.GAME_OVER if snapshot.game_over else GameState.IN_PROGRESS
        self.winner = (
            self.roster.player(snapshot.winner) if snapshot.winner is not None else None
        )
        self.hit_occurred = snapshot.hit_occurred
        self.hit_victim = snapshot.hit_victim
        for observer in self.observers:
            observer.on_undo(self.roster.current, snapshot.hit_occurred, snapshot.hit_victim)
        return True

    def run(self, max_turns: Optional[int] = None) -> int:
        """Play until someone wins or the turn cap is reached; returns turns played."""
        limit = max_turns if max_turns is not None else self.config.max_turns
        turns = 0
        while self.state is GameState.IN_PROGRESS and turns < limit:
            self.play_turn()
            turns += 1
        if self.state is GameState.IN_PROGRESS:
            logger.warning(f"Game stopped after {turns} turns without a winner")
        return turns
