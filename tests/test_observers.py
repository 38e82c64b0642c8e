import io
import unittest
from contextlib import redirect_stdout

from loguru import logger

from frustration.observers import ConsoleObserver, LoggingObserver, describe_position
from frustration.player import Roster
from frustration.track import Track, build_layout
from frustration.types import Color


class TestObservers(unittest.TestCase):
    def setUp(self):
        self.track = Track(build_layout("basic", 2))
        self.roster = Roster.for_track(self.track)
        self.red = self.roster.player(Color.RED)
        self.blue = self.roster.player(Color.BLUE)

    def test_describe_position(self):
        self.assertEqual(describe_position(self.track, self.red, 1), "HOME (Position 1)")
        self.assertEqual(describe_position(self.track, self.red, 7), "Position 7")
        self.assertEqual(
            describe_position(self.track, self.red, 20), "TAIL (Tail Position 2)"
        )
        self.assertEqual(describe_position(self.track, self.red, 21), "END")
        self.assertEqual(describe_position(self.track, self.blue, 1), "Position 1")

    def test_console_narration(self):
        observer = ConsoleObserver(self.track, use_color=False)
        self.red.move(7)
        out = io.StringIO()
        with redirect_stdout(out):
            observer.on_move(self.red, 1, 7, 6)
            observer.on_hit(self.red, self.blue, 12)
            observer.on_win(self.red, 9)
            observer.on_undo(self.blue, True, Color.BLUE)
        lines = out.getvalue().splitlines()
        self.assertEqual(lines[0], "Red play 1 rolls 6")
        self.assertEqual(lines[1], "Red moves from HOME (Position 1) to Position 7")
        self.assertEqual(lines[2], "Blue Position 12 hit!")
        self.assertEqual(lines[3], "Blue moves from Position 12 to HOME (Position 10)")
        self.assertEqual(lines[4], "Red wins in 1 moves!")
        self.assertEqual(lines[5], "Total plays 9")
        self.assertEqual(lines[6], "Undo (restored Blue after hit)")

    def test_console_colors(self):
        observer = ConsoleObserver(self.track)
        out = io.StringIO()
        with redirect_stdout(out):
            observer.on_overshoot(self.red, 23, 19)
        self.assertIn("\u001b[31mRed\u001b[0m overshoots!", out.getvalue())

    def test_logging_observer_uses_loguru(self):
        messages = []
        sink_id = logger.add(messages.append, level="DEBUG", format="{message}")
        try:
            observer = LoggingObserver(self.track)
            observer.on_move(self.red, 16, 21, 5)
            observer.on_hit(self.red, self.blue, 12)
            observer.on_undo(self.red, False, None)
        finally:
            logger.remove(sink_id)
        text = "".join(str(m) for m in messages)
        self.assertIn("Red rolled 5: main 16 -> end 21", text)
        self.assertIn("Red hit Blue at 12; Blue returns to 10", text)
        self.assertIn("Undo: Red to play", text)


if __name__ == "__main__":
    unittest.main()
