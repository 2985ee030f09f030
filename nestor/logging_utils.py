# nestor/logging_utils.py

import logging
import os

# Environment switches:
#   NESTOR_LOG_LEVEL=DEBUG / INFO / WARNING / ERROR
#   NESTOR_LOG_PATH=path of the game log
LOG_LEVEL = os.getenv("NESTOR_LOG_LEVEL", "INFO").upper()
LOG_PATH = os.getenv("NESTOR_LOG_PATH", "nestor.log")

EMPTY_MARK = "--"


def setup_logging(path: str = LOG_PATH, level: str = LOG_LEVEL) -> None:
    """Call once at program start. Each game truncates the previous log."""
    logging.basicConfig(
        filename=path,
        filemode="w",
        encoding="utf-8",
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def slot_str(card, style: str = "Symbols") -> str:
    if card is None:
        return EMPTY_MARK
    return card.gameStr(style)


def column_footer(columns: int) -> str:
    return " ".join(f"{c + 1:<3}" for c in range(columns)) + " -> Columns"


def log_board(logger: logging.Logger, board, style: str = "Symbols", level: int = logging.INFO) -> None:
    """
    Board snapshot, one record per grid row ('cells | row'), then the column footer
    and one record per extra slot.
    """
    if not logger.isEnabledFor(level):
        return
    logger.log(level, "Cards:")
    for i, row in enumerate(board.grid):
        cells = " ".join(f"{slot_str(card, style):<3}" for card in row)
        logger.log(level, "%s | %d", cells, i + 1)
    logger.log(level, column_footer(len(board.grid[0])))
    logger.log(level, "Extra cards:")
    for i, card in enumerate(board.extra):
        logger.log(level, "%d: %s", i + 1, slot_str(card, style))
