import argparse
import sys
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np
from loguru import logger

from .config import RULE_FLAGS, GameConfig
from .errors import ConfigurationError
from .game import Game
from .observers import ConsoleObserver, LoggingObserver


@dataclass(slots=True)
class GameOutcome:
    turns: int
    winner: Optional[str]
    total_moves: int


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = GameConfig.from_env()
    parser = argparse.ArgumentParser(
        description="Simulate Simple Frustration games with automatic dice"
    )
    parser.add_argument(
        "--board",
        type=str,
        choices=["basic", "large"],
        default=defaults.board_size,
        help="Board size: basic (18 + 3) or large (36 + 6)",
    )
    parser.add_argument(
        "--players",
        type=int,
        default=defaults.num_players,
        help="Number of players (2 or 4)",
    )
    parser.add_argument(
        "--dice",
        type=int,
        default=defaults.dice_count,
        help="Number of dice rolled per turn (1 or 2)",
    )
    parser.add_argument(
        "--rule",
        action="append",
        default=None,
        help=f"Enable a rule, repeatable. One of {list(RULE_FLAGS)}",
    )
    parser.add_argument("--seed", type=int, default=defaults.seed)
    parser.add_argument("--max-turns", type=int, default=defaults.max_turns)
    parser.add_argument(
        "--games",
        type=int,
        default=1,
        help="Number of games; more than one prints a summary instead of a narration",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="loguru level for game diagnostics (DEBUG shows every move)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not narrate moves on the console",
    )
    args = parser.parse_args(argv)
    if args.rule is None:
        args.rule = list(defaults.rules)
    return args


def play_game(config: GameConfig, narrate: bool = False) -> GameOutcome:
    game = Game()
    game.start_game(config)
    game.add_observer(LoggingObserver(game.track))
    if narrate:
        print(game.description())
        game.add_observer(ConsoleObserver(game.track))
    turns = game.run(config.max_turns)
    winner = game.winner.color.label if game.winner is not None else None
    return GameOutcome(turns=turns, winner=winner, total_moves=game.roster.total_moves())


def summarize(outcomes: List[GameOutcome]) -> Dict[str, object]:
    turns = np.asarray([o.turns for o in outcomes], dtype=np.int64)
    wins: Dict[str, int] = {}
    for outcome in outcomes:
        key = outcome.winner or "none"
        wins[key] = wins.get(key, 0) + 1
    return {
        "games": int(turns.size),
        "mean_turns": float(turns.mean()) if turns.size else 0.0,
        "median_turns": float(np.median(turns)) if turns.size else 0.0,
        "std_turns": float(turns.std()) if turns.size else 0.0,
        "max_turns": int(turns.max()) if turns.size else 0,
        "wins": wins,
    }


def main(argv: Optional[Sequence[str]] = None) -> None:
    try:
        args = parse_args(argv)
        base = GameConfig(
            board_size=args.board,
            num_players=args.players,
            dice_count=args.dice,
            rules=tuple(args.rule),
            seed=args.seed,
            max_turns=args.max_turns,
        )
    except ConfigurationError as e:
        logger.error(f"Invalid game configuration: {e}")
        raise SystemExit(2) from e

    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())

    print("Starting Simple Frustration Simulation!")
    start_time = time.time()

    if args.games <= 1:
        outcome = play_game(base, narrate=not args.quiet)
        print(f"\nSimulation completed after {outcome.turns} turns!")
        return

    outcomes: List[GameOutcome] = []
    for i in range(args.games):
        seed = None if base.seed is None else base.seed + i
        config = GameConfig(
            board_size=base.board_size,
            num_players=base.num_players,
            dice_count=base.dice_count,
            rules=base.rules,
            seed=seed,
            max_turns=base.max_turns,
        )
        outcomes.append(play_game(config))
        if (i + 1) % 100 == 0:
            logger.info(f"Played {i + 1}/{args.games} games")

    summary = summarize(outcomes)
    print("\n--- SIMULATION SUMMARY ---")
    print(f"Games: {summary['games']}")
    print(
        f"Turns: mean {summary['mean_turns']:.2f}, median {summary['median_turns']:.1f}, "
        f"std {summary['std_turns']:.2f}, max {summary['max_turns']}"
    )
    for name, count in sorted(summary["wins"].items()):
        print(f"  {name}: {count} wins ({count / summary['games']:.1%})")
    print(f"Simulation Time: {time.time() - start_time:.2f} seconds")


if __name__ == "__main__":
    main()
