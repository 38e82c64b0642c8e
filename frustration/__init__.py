"""
Simple Frustration
A Ludo-style race game engine with configurable rules and undo.
"""

from .config import GameConfig
from .dice import Dice, DiceRoll, create_dice
from .errors import ConfigurationError, FrustrationError
from .game import Game
from .history import GameHistory, Snapshot
from .observers import ConsoleObserver, GameObserver, LoggingObserver
from .player import Player, Roster
from .rules import RULES, Rule, RuleChain
from .track import Track, TrackLayout, build_layout
from .types import Color, GameState, Landing, Position, PositionKind, TurnResult

__all__ = [
    "Color",
    "ConfigurationError",
    "ConsoleObserver",
    "Dice",
    "DiceRoll",
    "FrustrationError",
    "Game",
    "GameConfig",
    "GameHistory",
    "GameObserver",
    "GameState",
    "Landing",
    "LoggingObserver",
    "Player",
    "Position",
    "PositionKind",
    "RULES",
    "Roster",
    "Rule",
    "RuleChain",
    "Snapshot",
    "Track",
    "TrackLayout",
    "TurnResult",
    "build_layout",
    "create_dice",
]
