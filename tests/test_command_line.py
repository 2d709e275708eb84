import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import patch

from halfdeck import CommandLine
from halfdeck.Cards import Board
from halfdeck.CommandLine import (
    CommandLineInterface,
    Outcome,
    handleCommand,
    main,
    normalizeInput,
    runGame,
    splitCommand,
)
from halfdeck.Core import Core
from table_ui.deck_store import write_deck

IN_ORDER = list(range(26))


def scripted(*lines):
    it = iter(lines)

    def readLine(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return readLine


class CommandInterpreterTestCase(unittest.TestCase):
    def setUp(self):
        self.out = io.StringIO()
        self.core = Core()
        self.core.registerInterface(CommandLineInterface())
        with redirect_stdout(self.out):
            self.core.startGame(IN_ORDER)

    def run_command(self, line):
        with redirect_stdout(self.out):
            return handleCommand(self.core, normalizeInput(line))

    def test_normalize_and_split(self):
        self.assertEqual("MOVE BLACK K TO 3", normalizeInput("  move \t black  k to 3 "))
        self.assertEqual(["NEXT"], splitCommand("NEXT"))
        self.assertIsNone(splitCommand("MOVE RED 8 TO 5 NOW"))
        self.assertEqual([], splitCommand(""))

    def test_legal_move(self):
        self.assertEqual(Outcome.MOVED, self.run_command("move red 8 to 5"))
        self.assertEqual(15, self.core.board[4].tail().card.id)

    def test_malformed_move_syntax(self):
        for line in ("move red 8 5", "move red 8 onto 5", "move red 8 to 8", "move red 8 to 0", "move red 8 to x",
                     "move red 8 to 5 please", "move red 8 to ²", "move red 8 to ①"):
            self.assertEqual(Outcome.INVALID_COMMAND, self.run_command(line), line)

    def test_unknown_card(self):
        self.assertEqual(Outcome.INVALID_CARD, self.run_command("move green 8 to 5"))
        self.assertEqual(Outcome.INVALID_CARD, self.run_command("move red 1 to 5"))

    def test_illegal_move_leaves_board_alone(self):
        before = self.core.board.snapshot()
        self.assertEqual(Outcome.INVALID_MOVE_COMMAND, self.run_command("move black a to 5"))
        self.assertEqual(Outcome.INVALID_MOVE_COMMAND, self.run_command("move red 9 to 2"))
        self.assertEqual(before, self.core.board.snapshot())

    def test_same_pile_move_succeeds_unchanged(self):
        before = self.core.board.snapshot()
        self.assertEqual(Outcome.MOVED, self.run_command("move red q to 4"))
        self.assertEqual(before, self.core.board.snapshot())

    def test_next_rotates(self):
        self.assertEqual(Outcome.MOVED, self.run_command("next"))
        self.assertEqual(14, self.core.board.drawPile.tail().card.id)
        self.assertEqual(Outcome.INVALID_COMMAND, self.run_command("next 2"))

    def test_help_and_exit(self):
        self.out = io.StringIO()
        self.assertEqual(Outcome.EVERYTHING_OK, self.run_command("help"))
        self.assertIn("possible command:", self.out.getvalue())
        self.assertIn(" - move <color> <value> to <stacknumber>", self.out.getvalue())
        self.assertEqual(Outcome.INVALID_COMMAND, self.run_command("help me"))
        self.assertEqual(Outcome.EXIT_GAME, self.run_command("exit"))

    def test_unknown_or_empty_command(self):
        self.assertEqual(Outcome.INVALID_COMMAND, self.run_command(""))
        self.assertEqual(Outcome.INVALID_COMMAND, self.run_command("dance"))


class GameLoopTestCase(unittest.TestCase):
    def make_core(self, board=None):
        core = Core()
        core.registerInterface(CommandLineInterface())
        if board is None:
            core.startGame(IN_ORDER)
        else:
            core.loadBoard(board)
        return core

    def test_loop_reports_rejections_and_exits(self):
        out = io.StringIO()
        with redirect_stdout(out):
            core = self.make_core()
            status = runGame(core, scripted("move red 8 to 5", "bogus", "move green 2 to 3", "move black a to 2", "exit", "next"))
        text = out.getvalue()
        self.assertEqual(0, status)
        self.assertIn("[INFO] Invalid command!", text)
        self.assertIn("[INFO] Invalid card!", text)
        self.assertIn("[INFO] Invalid move command!", text)
        self.assertEqual(15, core.board[4].tail().card.id)
        # "next" after exit is never read
        self.assertEqual(14, core.board.drawPile.tail().card.id)

    def test_loop_stops_at_end_of_input(self):
        with redirect_stdout(io.StringIO()):
            core = self.make_core()
            self.assertEqual(0, runGame(core, scripted()))
        self.assertFalse(core.gameEnded)

    def test_loop_stops_on_win(self):
        layout = [[], [(24, True)], [], [], [],
                  [(i, True) for i in range(0, 24, 2)],
                  [(i, True) for i in range(1, 26, 2)]]
        out = io.StringIO()
        with redirect_stdout(out):
            core = self.make_core(Board.fromLayout(layout))
            status = runGame(core, scripted("move black k to 6", "exit"))
        self.assertEqual(0, status)
        self.assertTrue(core.gameEnded)
        self.assertIn("You win! Moves: 1", out.getvalue())

    def test_loop_survives_non_ascii_pile_number(self):
        out = io.StringIO()
        with redirect_stdout(out):
            core = self.make_core()
            status = runGame(core, scripted("move red 8 to ①", "move red 8 to 5", "exit"))
        self.assertEqual(0, status)
        self.assertIn("[INFO] Invalid command!", out.getvalue())
        self.assertEqual(15, core.board[4].tail().card.id)

    def test_prompt_is_passed_to_reader(self):
        prompts = []

        def readLine(prompt):
            prompts.append(prompt)
            return "exit"

        with redirect_stdout(io.StringIO()):
            runGame(self.make_core(), readLine, "esp> ")
        self.assertEqual(["esp> "], prompts)


class MainTestCase(unittest.TestCase):
    def test_usage_error_exits_with_one(self):
        with redirect_stdout(io.StringIO()) as out:
            with self.assertRaises(SystemExit) as cm:
                main([])
        self.assertEqual(1, cm.exception.code)
        self.assertIn("[ERR] Usage:", out.getvalue())

    def test_invalid_deck_file_exits_with_three(self):
        with tempfile.TemporaryDirectory() as td:
            deck = Path(td) / "deck.txt"
            deck.write_text("BLACK A\nBLACK A\n", encoding="utf-8")
            out = io.StringIO()
            with redirect_stdout(out):
                self.assertEqual(3, main([str(deck), "--settings", str(Path(td) / "none.ini")]))
                self.assertEqual(3, main([str(Path(td) / "missing.txt"), "--settings", str(Path(td) / "none.ini")]))
        self.assertIn("[ERR] Invalid file!", out.getvalue())

    def test_plays_and_writes_snapshot(self):
        with tempfile.TemporaryDirectory() as td:
            deck = Path(td) / "deck.txt"
            write_deck(deck, IN_ORDER)
            snapshot = Path(td) / "board.png"
            out = io.StringIO()
            with redirect_stdout(out), patch("builtins.input", side_effect=["move red 8 to 5", "exit"]):
                status = main([str(deck), "--settings", str(Path(td) / "none.ini"), "--snapshot", str(snapshot)])
            self.assertEqual(0, status)
            self.assertTrue(snapshot.exists())
        self.assertIn("DRW | TAB | TAB | TAB | TAB | DEP | DEP", out.getvalue())

    def test_shuffle_writes_a_deck_first(self):
        with tempfile.TemporaryDirectory() as td:
            deck = Path(td) / "deck.txt"
            with redirect_stdout(io.StringIO()), patch("builtins.input", side_effect=EOFError):
                status = main([str(deck), "--shuffle", "11", "--settings", str(Path(td) / "none.ini")])
            self.assertEqual(0, status)
            self.assertEqual(26, len(deck.read_text(encoding="utf-8").splitlines()))

    def test_out_of_memory_exits_with_two(self):
        with tempfile.TemporaryDirectory() as td:
            deck = Path(td) / "deck.txt"
            write_deck(deck, IN_ORDER)
            with redirect_stdout(io.StringIO()) as out, patch.object(CommandLine, "runGame", side_effect=MemoryError):
                self.assertEqual(2, main([str(deck), "--settings", str(Path(td) / "none.ini")]))
        self.assertIn("[ERR] Out of memory!", out.getvalue())


if __name__ == "__main__":
    unittest.main()
