import argparse
import sys

from nestor.Core import Core, GameConfig, WIN_MESSAGE
from nestor.Interface import Interface, Player
from nestor.board_image import save_board_image
from nestor.logging_utils import column_footer, get_logger, setup_logging, slot_str
from nestor.settings_store import load_settings, save_settings
from nestor.ui_config import CARD_STYLE_ORDER, LOG_LEVEL_ORDER, TITLE

log = get_logger(__name__)


class CommandLineInterface(Interface):

    def __init__(self, style="Symbols", snapshotPath=None):
        super().__init__()
        self.style = style
        self.snapshotPath = snapshotPath

    def printAll(self):
        board = self.core.board
        print("Cards:")
        for row in board.grid:
            print(" ".join(f"{slot_str(card, self.style):<3}" for card in row).rstrip())
        print(column_footer(len(board.grid[0])))
        print()
        print("Extra cards:")
        for i, card in enumerate(board.extra):
            print(f"{i + 1}: {slot_str(card, self.style)}")
        print()

    def onStart(self):
        print(TITLE)

    def notifyRedraw(self):
        self.printAll()
        if self.snapshotPath:
            save_board_image(self.core.board, self.snapshotPath, self.style)

    def onReject(self, result):
        print(result.message)

    def onWin(self):
        print(WIN_MESSAGE)


class ConsolePlayer(Player):

    def readInteger(self, prompt):
        while True:
            raw = input(prompt)
            try:
                return int(raw.strip())
            except ValueError:
                print("Invalid input, please enter a number!")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Nestor solitaire: match cards of equal rank until the board is empty.")
    parser.add_argument("--seed", type=int, default=None, help="Deal seed, random when omitted.")
    parser.add_argument("--deal", type=str, default=None, help="Fixed deal: 52 comma separated card ids.")
    parser.add_argument("--settings", type=str, default=None, help="Path of settings.ini.")
    parser.add_argument("--card-style", choices=CARD_STYLE_ORDER, default=None, help="Suit glyphs.")
    parser.add_argument("--log-file", type=str, default=None, help="Game log path.")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVEL_ORDER, default=None, help="Game log level.")
    parser.add_argument("--snapshot", type=str, default=None, help="PNG refreshed with the board after every turn.")
    parser.add_argument("--save-settings", action="store_true", help="Store the given options in the settings file.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = load_settings(args.settings)
    overrides = {
        "card_style": args.card_style,
        "log_path": args.log_file,
        "log_level": args.log_level,
        "snapshot_path": args.snapshot,
    }
    settings.update({k: v for k, v in overrides.items() if v is not None})
    if args.save_settings:
        settings = save_settings(settings, args.settings)

    try:
        setup_logging(settings["log_path"], settings["log_level"])
    except OSError as e:
        print(f"Cannot create log file {settings['log_path']}: {e}", file=sys.stderr)
        return 2

    interface = CommandLineInterface(settings["card_style"], settings["snapshot_path"] or None)
    core = Core()
    core.registerInterface(interface)
    core.registerPlayer(ConsolePlayer())
    try:
        core.startGame(GameConfig(seed=args.seed, gameCode=args.deal, style=settings["card_style"]))
    except ValueError as e:
        print(f"Cannot deal: {e}", file=sys.stderr)
        log.error("Cannot deal: %s", e)
        return 2

    try:
        core.play()
    except (EOFError, KeyboardInterrupt):
        print()
        print("Game aborted.")
        log.warning("Game aborted after %d turns", core.turns)
        return 1
    except OSError as e:
        if not interface.snapshotPath:
            raise
        print(f"Cannot write snapshot {interface.snapshotPath}: {e}", file=sys.stderr)
        log.error("Cannot write snapshot %s: %s", interface.snapshotPath, e)
        return 2
    return 0


if __name__ == '__main__':
    sys.exit(main())
