import argparse
import sys
from enum import IntEnum

from halfdeck.Cards import Card, PILE_COUNT
from halfdeck.Core import Core, DeckError
from halfdeck.Interface import Interface
from table_ui import settings_store
from table_ui.adapter import BoardAdapter
from table_ui.board_image import save_board_image
from table_ui.deck_store import load_deck, shuffled_deck, write_deck
from table_ui.text_board import render_board
from table_ui.ui_config import COLORS, RANKS

MAX_COMMAND_ARGS = 5


class Outcome(IntEnum):
    MOVED = 2
    EXIT_GAME = 1
    EVERYTHING_OK = 0
    INVALID_MOVE_COMMAND = -1
    INVALID_COMMAND = -2
    INVALID_CARD = -3
    INVALID_ARG_COUNT = -4
    INVALID_FILE = -5
    OUT_OF_MEMORY = -6


MESSAGES = {
    Outcome.INVALID_CARD: "[INFO] Invalid card!",
    Outcome.INVALID_COMMAND: "[INFO] Invalid command!",
    Outcome.INVALID_MOVE_COMMAND: "[INFO] Invalid move command!",
    Outcome.INVALID_ARG_COUNT: "[ERR] Usage: halfdeck <deck-file>",
    Outcome.INVALID_FILE: "[ERR] Invalid file!",
    Outcome.OUT_OF_MEMORY: "[ERR] Out of memory!",
}

EXIT_STATUS = {
    Outcome.INVALID_ARG_COUNT: 1,
    Outcome.OUT_OF_MEMORY: 2,
    Outcome.INVALID_FILE: 3,
}

HELP_LINES = (
    "possible command:",
    " - move <color> <value> to <stacknumber>",
    " - help",
    " - exit",
    "stacknumber: 1 draw, 2-5 tableau, 6-7 deposit",
)


def printMessage(outcome: Outcome):
    message = MESSAGES.get(outcome)
    if message is not None:
        print(message)
    return EXIT_STATUS.get(outcome, 0)


def printHelp():
    for line in HELP_LINES:
        print(line)


def normalizeInput(raw: str) -> str:
    """Uppercases the line and collapses every run of whitespace to one space."""
    return " ".join(raw.upper().split())


def splitCommand(line: str):
    """
    :return: the space separated fields, or None when there are more than MAX_COMMAND_ARGS
    """
    fields = [f for f in line.split(" ") if f]
    if len(fields) > MAX_COMMAND_ARGS:
        return None
    return fields


def parseCard(color: str, rank: str):
    if color not in COLORS or rank not in RANKS:
        return None
    return Card.fromColorAndRank(COLORS.index(color), RANKS.index(rank))


def moveCommand(core: Core, command) -> Outcome:
    if len(command) != MAX_COMMAND_ARGS or command[3] != "TO":
        return Outcome.INVALID_COMMAND
    try:
        target = int(command[4])
    except ValueError:
        return Outcome.INVALID_COMMAND
    if not 1 <= target <= PILE_COUNT:
        return Outcome.INVALID_COMMAND
    card = parseCard(command[1], command[2])
    if card is None:
        return Outcome.INVALID_CARD
    if not core.askMove(card, target):
        return Outcome.INVALID_MOVE_COMMAND
    return Outcome.MOVED


def handleCommand(core: Core, line: str) -> Outcome:
    command = splitCommand(line)
    if not command:
        return Outcome.INVALID_COMMAND
    name = command[0]
    if name == "MOVE":
        return moveCommand(core, command)
    if name == "NEXT":
        if len(command) != 1:
            return Outcome.INVALID_COMMAND
        core.askNext()
        return Outcome.MOVED
    if name == "HELP":
        if len(command) != 1:
            return Outcome.INVALID_COMMAND
        printHelp()
        return Outcome.EVERYTHING_OK
    if name == "EXIT":
        return Outcome.EXIT_GAME
    return Outcome.INVALID_COMMAND


class CommandLineInterface(Interface):

    def __init__(self, settings=None):
        super().__init__()
        self.settings = settings if settings is not None else dict(settings_store.DEFAULT_SETTINGS)

    def printAll(self):
        vm = BoardAdapter.snapshot(self.core)
        print(render_board(vm, self.settings["hidden_marker"]))

    def notifyRedraw(self):
        self.printAll()

    def onWin(self):
        print(f"You win! Moves: {self.core.moveCount}")


def runGame(core: Core, readLine=input, prompt=settings_store.DEFAULT_SETTINGS["prompt"]) -> int:
    """
    Reads and applies commands until the game is won, the player exits or input runs out.
    """
    while not core.gameEnded:
        try:
            raw = readLine(prompt)
        except EOFError:
            break
        outcome = handleCommand(core, normalizeInput(raw))
        printMessage(outcome)
        if outcome == Outcome.EXIT_GAME:
            break
    return 0


class UsageArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        self.exit(printMessage(Outcome.INVALID_ARG_COUNT))


def parse_args(argv=None) -> argparse.Namespace:
    parser = UsageArgumentParser(prog="halfdeck", description="Half deck patience on the command line.")
    parser.add_argument("deck", help="file with the 26 cards of the draw pile, bottom card first")
    parser.add_argument("--settings", default=None, help="settings.ini to read instead of the bundled one")
    parser.add_argument("--snapshot", default=None, help="write the final board as a PNG image")
    parser.add_argument("--shuffle", type=int, default=None, metavar="SEED",
                        help="write a freshly shuffled deck to the deck file before playing")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = settings_store.load_settings(args.settings)

    try:
        if args.shuffle is not None:
            write_deck(args.deck, shuffled_deck(args.shuffle))
        cardIds = load_deck(args.deck)
    except (DeckError, OSError):
        return printMessage(Outcome.INVALID_FILE)

    interface = CommandLineInterface(settings)
    core = Core()
    core.registerInterface(interface)
    try:
        core.startGame(cardIds)
        if settings_store.show_help_on_start(settings):
            printHelp()
        status = runGame(core, input, settings["prompt"])
    except MemoryError:
        return printMessage(Outcome.OUT_OF_MEMORY)

    snapshot = args.snapshot or settings["snapshot_path"]
    if snapshot:
        save_board_image(BoardAdapter.snapshot(core), snapshot)
    return status


if __name__ == '__main__':
    sys.exit(main())
