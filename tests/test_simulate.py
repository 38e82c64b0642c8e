import io
import unittest
from contextlib import redirect_stdout

from frustration.config import GameConfig
from frustration.simulate import GameOutcome, main, parse_args, play_game, summarize


class TestSimulate(unittest.TestCase):
    def test_parse_args(self):
        args = parse_args(
            ["--board", "large", "--players", "4", "--dice", "2", "--rule", "exact-end",
             "--rule", "hitHome", "--seed", "3", "--games", "5"]
        )
        self.assertEqual(args.board, "large")
        self.assertEqual(args.players, 4)
        self.assertEqual(args.dice, 2)
        self.assertEqual(args.rule, ["exact-end", "hitHome"])
        self.assertEqual(args.seed, 3)
        self.assertEqual(args.games, 5)

    def test_play_game_finishes(self):
        outcome = play_game(GameConfig(dice_count=2, seed=21))
        self.assertIn(outcome.winner, ("Red", "Blue"))
        self.assertGreater(outcome.turns, 0)
        self.assertEqual(outcome.total_moves, outcome.turns)

    def test_summarize(self):
        summary = summarize(
            [
                GameOutcome(turns=10, winner="Red", total_moves=10),
                GameOutcome(turns=20, winner="Blue", total_moves=20),
                GameOutcome(turns=30, winner="Red", total_moves=30),
            ]
        )
        self.assertEqual(summary["games"], 3)
        self.assertAlmostEqual(summary["mean_turns"], 20.0)
        self.assertAlmostEqual(summary["median_turns"], 20.0)
        self.assertEqual(summary["max_turns"], 30)
        self.assertEqual(summary["wins"], {"Red": 2, "Blue": 1})

    def test_main_single_game_narrates(self):
        out = io.StringIO()
        with redirect_stdout(out):
            main(["--seed", "4", "--rule", "exact-end"])
        text = out.getvalue()
        self.assertIn("Starting Simple Frustration Simulation!", text)
        self.assertIn("Player must land exactly on the END position to win", text)
        self.assertIn("Simulation completed after", text)

    def test_main_many_games_prints_summary(self):
        out = io.StringIO()
        with redirect_stdout(out):
            main(["--seed", "1", "--games", "4", "--dice", "2"])
        self.assertIn("--- SIMULATION SUMMARY ---", out.getvalue())
        self.assertIn("Games: 4", out.getvalue())

    def test_main_rejects_bad_configuration(self):
        with self.assertRaises(SystemExit) as ctx:
            main(["--players", "3"])
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
