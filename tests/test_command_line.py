import io
import logging
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from nestor import CommandLine
from nestor.CommandLine import CommandLineInterface, ConsolePlayer, main, parse_args
from nestor.Core import Board, Card, Core, GameConfig, encodeDeck, newDeck
from nestor.Interface import Player


class CommandLineTestCase(unittest.TestCase):
    def setUp(self):
        root = logging.getLogger()
        self._saved = root.handlers[:], root.level

    def tearDown(self):
        root = logging.getLogger()
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in self._saved[0]:
            root.addHandler(handler)
        root.setLevel(self._saved[1])

    def test_console_player_reprompts_until_integer(self):
        out = io.StringIO()
        with patch("builtins.input", side_effect=["abc", "", " 7 "]), redirect_stdout(out):
            value = ConsolePlayer().readInteger("? ")
        self.assertEqual(7, value)
        self.assertEqual(2, out.getvalue().count("Invalid input, please enter a number!"))

    def test_console_player_accepts_out_of_range_numbers(self):
        with patch("builtins.input", return_value="42"):
            self.assertEqual(42, ConsolePlayer().readInteger("? "))

    def test_print_all_lists_grid_and_extras(self):
        core = Core()
        ui = CommandLineInterface(style="Letters")
        core.registerInterface(ui)
        core.registerPlayer(Player())
        core.startGame(GameConfig(gameCode=encodeDeck(newDeck())))
        core.board.removeAtGrid(5, 7)
        out = io.StringIO()
        with redirect_stdout(out):
            ui.notifyRedraw()
        lines = out.getvalue().splitlines()
        self.assertEqual("Cards:", lines[0])
        self.assertTrue(lines[1].startswith("2C  3C  4C"))
        self.assertTrue(lines[6].endswith("--"))
        self.assertIn("-> Columns", lines[7])
        self.assertIn("Extra cards:", lines)
        self.assertIn("1: JE", lines)
        self.assertIn("4: AE", lines)

    def test_parse_args(self):
        args = parse_args(["--seed", "12", "--log-level", "debug", "--card-style", "Letters"])
        self.assertEqual(12, args.seed)
        self.assertEqual("DEBUG", args.log_level)
        self.assertEqual("Letters", args.card_style)
        self.assertIsNone(args.snapshot)

    def test_main_stops_on_end_of_input(self):
        with tempfile.TemporaryDirectory() as td:
            log_path = os.path.join(td, "nestor.log")
            settings_path = os.path.join(td, "settings.ini")
            out = io.StringIO()
            with patch("builtins.input", side_effect=["1", "1", EOFError()]), redirect_stdout(out):
                code = main(["--seed", "3", "--log-file", log_path, "--settings", settings_path])
            for handler in logging.getLogger().handlers:
                handler.flush()
            with open(log_path, encoding="utf-8") as f:
                text = f.read()
        self.assertEqual(1, code)
        self.assertIn("NESTOR SOLITAIRE", out.getvalue())
        self.assertIn("Invalid position. Try again.", out.getvalue())
        self.assertIn("Game aborted.", out.getvalue())
        self.assertIn("User selected column 1 for the first card.", text)
        self.assertIn("[WARNING]", text)
        self.assertIn("| 6", text)

    def test_main_rejects_bad_deal(self):
        with tempfile.TemporaryDirectory() as td:
            err = io.StringIO()
            with redirect_stdout(io.StringIO()), redirect_stderr(err):
                code = main(["--deal", "1,2,3", "--log-file", os.path.join(td, "n.log"),
                             "--settings", os.path.join(td, "settings.ini")])
        self.assertEqual(2, code)
        self.assertIn("Cannot deal", err.getvalue())

    def test_main_reports_unwritable_log(self):
        with tempfile.TemporaryDirectory() as td:
            err = io.StringIO()
            with redirect_stderr(err):
                code = main(["--log-file", os.path.join(td, "missing", "n.log"),
                             "--settings", os.path.join(td, "settings.ini")])
        self.assertEqual(2, code)
        self.assertIn("Cannot create log file", err.getvalue())

    def test_main_reports_unwritable_snapshot(self):
        with tempfile.TemporaryDirectory() as td:
            snap_dir = os.path.join(td, "snap")
            os.mkdir(snap_dir)
            err = io.StringIO()
            with patch("builtins.input", side_effect=AssertionError("no turn expected")), \
                    redirect_stdout(io.StringIO()), redirect_stderr(err):
                code = main(["--seed", "1", "--snapshot", snap_dir, "--log-file", os.path.join(td, "n.log"),
                             "--settings", os.path.join(td, "settings.ini")])
        self.assertEqual(2, code)
        self.assertIn("Cannot write snapshot", err.getvalue())

    def test_main_logs_with_configured_card_style(self):
        with tempfile.TemporaryDirectory() as td:
            log_path = os.path.join(td, "nestor.log")
            with patch("builtins.input", side_effect=EOFError()), redirect_stdout(io.StringIO()):
                main(["--deal", encodeDeck(newDeck()), "--card-style", "Letters", "--log-file", log_path,
                      "--settings", os.path.join(td, "settings.ini")])
            for handler in logging.getLogger().handlers:
                handler.flush()
            with open(log_path, encoding="utf-8") as f:
                text = f.read()
        self.assertIn("2C  3C", text)
        self.assertNotIn("♥", text)

    def test_main_wins_and_writes_snapshot(self):
        # one pair left: Two of Hearts in column 1 and the Two of Clubs as extra card
        board = Board()
        board.grid[0][0] = Card(0, 0)
        board.extra[0] = Card(0, 2)
        with tempfile.TemporaryDirectory() as td:
            snap = os.path.join(td, "board.png")
            out = io.StringIO()
            with patch.object(GameConfig, "initBoard", return_value=board), \
                    patch("builtins.input", side_effect=["9", "1"]), redirect_stdout(out):
                code = main(["--snapshot", snap, "--log-file", os.path.join(td, "n.log"),
                             "--settings", os.path.join(td, "settings.ini")])
            self.assertTrue(os.path.exists(snap))
        self.assertEqual(0, code)
        self.assertTrue(board.isEmpty())
        self.assertIn("Congratulations! You won the game.", out.getvalue())

    def test_save_settings_flag_persists_options(self):
        with tempfile.TemporaryDirectory() as td:
            settings_path = os.path.join(td, "settings.ini")
            with patch.object(CommandLine, "setup_logging", side_effect=OSError("no log")), \
                    redirect_stderr(io.StringIO()):
                main(["--card-style", "Letters", "--settings", settings_path, "--save-settings"])
            with open(settings_path, encoding="utf-8") as f:
                text = f.read()
        self.assertIn("card_style = Letters", text)


if __name__ == "__main__":
    unittest.main()
