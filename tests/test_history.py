from __future__ import annotations

import unittest

from frustration.history import GameHistory, Snapshot
from frustration.player import Roster
from frustration.track import Track, build_layout
from frustration.types import Color


class HistoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.track = Track(build_layout("basic", 4))
        self.roster = Roster.for_track(self.track)
        self.history = GameHistory()

    def positions(self) -> dict:
        return {pl.color: (pl.current_position, pl.total_moves) for pl in self.roster}

    def test_undo_on_empty_history_reports_unavailable(self) -> None:
        before = self.positions()
        self.assertIsNone(self.history.undo(self.roster))
        self.assertFalse(self.history.can_undo)
        self.assertEqual(self.positions(), before)
        self.assertEqual(self.roster.current_index, 0)

    def test_n_saves_then_n_undos_restore_original(self) -> None:
        original = self.positions()
        states = []
        for roll in [3, 5, 2, 6, 4, 1, 6]:
            states.append((self.positions(), self.roster.current_index))
            self.history.save(self.roster)
            mover = self.roster.current
            mover.move(self.track.advance(mover.color, mover.current_position, roll))
            self.roster.advance()

        self.assertEqual(len(self.history), 7)
        for expected_positions, expected_index in reversed(states):
            snapshot = self.history.undo(self.roster)
            self.assertIsNotNone(snapshot)
            self.assertEqual(self.positions(), expected_positions)
            self.assertEqual(self.roster.current_index, expected_index)

        self.assertEqual(self.positions(), original)
        self.assertIsNone(self.history.undo(self.roster))

    def test_restore_does_not_count_moves(self) -> None:
        red = self.roster.player(Color.RED)
        red.move(7)
        self.history.save(self.roster)
        red.move(12)
        red.move(15)
        self.assertEqual(red.total_moves, 3)
        self.history.undo(self.roster)
        self.assertEqual(red.current_position, 7)
        self.assertEqual(red.total_moves, 1)

    def test_snapshot_is_independent_copy(self) -> None:
        red = self.roster.player(Color.RED)
        snapshot = self.history.save(self.roster, hit_occurred=True, hit_victim=Color.BLUE)
        red.move(9)
        self.assertEqual(snapshot.positions[Color.RED], 1)
        self.assertEqual(snapshot.move_counts[Color.RED], 0)
        self.assertTrue(snapshot.hit_occurred)
        self.assertEqual(snapshot.hit_victim, Color.BLUE)
        with self.assertRaises(TypeError):
            snapshot.positions[Color.RED] = 4  # type: ignore[index]

    def test_turn_count_sums_moves(self) -> None:
        self.roster.player(Color.RED).move(3)
        self.roster.player(Color.GREEN).move(12)
        self.roster.player(Color.GREEN).move(14)
        snapshot = Snapshot.capture(self.roster)
        self.assertEqual(snapshot.turn_count, 3)

    def test_source_dicts_can_change_after_capture(self) -> None:
        positions = {Color.RED: 3}
        counts = {Color.RED: 1}
        snapshot = Snapshot(positions=positions, move_counts=counts, current_index=0)
        positions[Color.RED] = 99
        counts[Color.RED] = 5
        self.assertEqual(snapshot.positions[Color.RED], 3)
        self.assertEqual(snapshot.turn_count, 1)

    def test_clear(self) -> None:
        self.history.save(self.roster)
        self.history.save(self.roster)
        self.history.clear()
        self.assertEqual(len(self.history), 0)
        self.assertIsNone(self.history.undo(self.roster))

    def test_each_undo_consumes_one_snapshot(self) -> None:
        red = self.roster.player(Color.RED)
        self.history.save(self.roster)
        red.move(4)
        self.history.save(self.roster)
        red.move(8)
        self.history.undo(self.roster)
        self.assertEqual(red.current_position, 4)
        self.history.undo(self.roster)
        self.assertEqual(red.current_position, 1)
        self.assertFalse(self.history.can_undo)


if __name__ == "__main__":
    unittest.main()
