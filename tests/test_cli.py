import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock

from game import (
    LIGHT,
    MatchEngine,
    SqliteTallyStore,
    WinTally,
    initial_state,
)
from ur_core.cli import main, play_match, piece_label, render_board


class StubRng:
    def __init__(self, values):
        self.values = list(values)

    def randint(self, a, b):
        return self.values.pop(0)


def near_win_state():
    positions = {i: 14 for i in range(6)}
    positions[6] = 13
    return initial_state().with_positions(positions)


class TestCliRendering(unittest.TestCase):
    def test_given_fresh_state_when_rendering_then_reserves_listed_and_board_empty(self):
        txt = render_board(initial_state())
        lines = txt.splitlines()
        self.assertEqual(len(lines), 5)
        self.assertIn('reserve X0 X1 X2 X3 X4 X5 X6', lines[3])
        self.assertIn('reserve O0 O1 O2 O3 O4 O5 O6', lines[4])
        self.assertIn('home 0/7', lines[3])
        self.assertNotIn('[X', txt)

    def test_given_pieces_on_board_when_rendering_then_labels_in_cells(self):
        s = initial_state().with_positions({0: 7, 9: 2, 1: 14})
        txt = render_board(s)
        lines = txt.splitlines()
        # C3 is the fourth cell of the middle row
        self.assertEqual(lines[1][12:16], '[X0]')
        self.assertIn('[O2]', lines[2])
        self.assertIn('home 1/7', lines[3])
        self.assertEqual(piece_label(s, 9), 'O2')


class TestCliPlay(unittest.TestCase):
    def test_given_last_piece_when_playing_then_light_wins(self):
        engine = MatchEngine(rng=StubRng([1, 0, 0, 0]), state=near_win_state())
        out = io.StringIO()
        with mock.patch('builtins.input', side_effect=['', '9', 'x', '6']), redirect_stdout(out):
            winner = play_match(engine)
        self.assertEqual(winner, LIGHT)
        self.assertIn('light wins!', out.getvalue())
        self.assertIn('Illegal move. Try again.', out.getvalue())
        self.assertIn('Could not parse. Try again.', out.getvalue())
        self.assertEqual(engine.wins, WinTally(light_wins=1, dark_wins=0))

    def test_given_zero_roll_when_playing_then_turn_passes_automatically(self):
        engine = MatchEngine(rng=StubRng([0, 0, 0, 0, 1, 0, 0, 0]), state=near_win_state())
        out = io.StringIO()
        # light rolls 0 and passes; dark rolls 1 and enters O0, then input runs out
        with mock.patch('builtins.input', side_effect=['', '', '0', EOFError()]), redirect_stdout(out):
            with self.assertRaises(EOFError):
                play_match(engine)
        self.assertIn('Rolled 0, turn passes.', out.getvalue())
        self.assertEqual(engine.state.pieces[7].position, 0)

    def test_given_db_flag_when_main_runs_then_win_persisted(self):
        with tempfile.TemporaryDirectory() as td:
            db_path = os.path.join(td, 'wins.db')
            out = io.StringIO()
            with mock.patch('ur_core.cli.MatchEngine') as engine_cls, \
                    mock.patch('builtins.input', side_effect=['', '6', 'n']), redirect_stdout(out):
                engine_cls.side_effect = lambda store, seed: MatchEngine(
                    rng=StubRng([1, 0, 0, 0]), store=store, seed=seed, state=near_win_state())
                main(['--db', db_path, '--seed', '3'])
            self.assertEqual(SqliteTallyStore(db_path).load(), WinTally(light_wins=1, dark_wins=0))
            self.assertIn('Wins - light: 1, dark: 0', out.getvalue())


if __name__ == '__main__':
    unittest.main(verbosity=2)
