import random
from dataclasses import dataclass
from enum import Enum

from nestor.logging_utils import get_logger, log_board

log = get_logger(__name__)

ROWS = 6
COLUMNS = 8
EXTRA_SLOTS = 4
GRID_SIZE = ROWS * COLUMNS
DECK_SIZE = GRID_SIZE + EXTRA_SLOTS

# Selection index that searches the extra slots instead of naming a column.
WILDCARD = COLUMNS
SELECTION_COUNT = COLUMNS + 1

FIRST_PROMPT = f"Enter the column number of card 1 ({WILDCARD + 1} to use the extra cards): "
SECOND_PROMPT = f"Enter the column number of card 2 ({WILDCARD + 1} to use the extra cards): "
WIN_MESSAGE = "Congratulations! You won the game."


@dataclass(frozen=True)
class Card:
    rank: int  # 0 is Two, 12 is Ace
    suit: int  # Hearts, Diamonds, Clubs, Spades

    NUM_PER_SUIT = 13
    SUIT_COUNT = 4
    RANK_NAMES = ("Two", "Three", "Four", "Five", "Six", "Seven", "Eight",
                  "Nine", "Ten", "Jack", "Queen", "King", "Ace")
    SUIT_NAMES = ("Hearts", "Diamonds", "Clubs", "Spades")
    NUMS = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A")
    SUIT_GLYPHS = {
        "Symbols": "♥♦♣♠",
        "Letters": "CDTE",
    }

    def __post_init__(self):
        if not 0 <= self.rank < Card.NUM_PER_SUIT:
            raise ValueError(f"rank out of range: {self.rank}")
        if not 0 <= self.suit < Card.SUIT_COUNT:
            raise ValueError(f"suit out of range: {self.suit}")

    @property
    def id(self):
        return self.suit * Card.NUM_PER_SUIT + self.rank

    @staticmethod
    def fromId(id):
        if not 0 <= id < DECK_SIZE:
            raise ValueError(f"card id out of range: {id}")
        return Card(id % Card.NUM_PER_SUIT, id // Card.NUM_PER_SUIT)

    def sameRank(self, other) -> bool:
        """Two cards match when their ranks are equal; the suit never matters."""
        return self.rank == other.rank

    def rankName(self):
        return Card.RANK_NAMES[self.rank]

    def suitName(self):
        return Card.SUIT_NAMES[self.suit]

    def gameStr(self, style="Symbols"):
        glyphs = Card.SUIT_GLYPHS.get(style, Card.SUIT_GLYPHS["Symbols"])
        return Card.NUMS[self.rank] + glyphs[self.suit]

    def __str__(self):
        return self.gameStr()


def newDeck():
    return [Card(rank, suit) for suit in range(Card.SUIT_COUNT) for rank in range(Card.NUM_PER_SUIT)]


def shuffledDeck(seed=None):
    deck = newDeck()
    random.Random(seed).shuffle(deck)
    return deck


def encodeDeck(cards) -> str:
    return ",".join(str(card.id) for card in cards)


def decodeDeck(code: str):
    try:
        cards = [Card.fromId(int(part)) for part in code.split(",")]
    except ValueError as e:
        raise ValueError(f"invalid deck code: {e}") from e
    checkDeck(cards)
    return cards


def checkDeck(cards):
    if len(cards) != DECK_SIZE:
        raise ValueError(f"a deal needs {DECK_SIZE} cards, got {len(cards)}")
    if len(set(cards)) != DECK_SIZE:
        raise ValueError("a deal must not repeat cards")


class Board:
    """
    The 6x8 grid plus the 4 extra slots. A slot holds a Card or None.
    Row 5 is the bottom of every column; only the lowest card of a column can be matched.
    """

    def __init__(self, grid=None, extra=None):
        if grid is None:
            grid = [[None] * COLUMNS for _ in range(ROWS)]
        if extra is None:
            extra = [None] * EXTRA_SLOTS
        if len(grid) != ROWS or any(len(row) != COLUMNS for row in grid):
            raise ValueError(f"grid must be {ROWS}x{COLUMNS}")
        if len(extra) != EXTRA_SLOTS:
            raise ValueError(f"there must be {EXTRA_SLOTS} extra slots")
        self.grid = [list(row) for row in grid]
        self.extra = list(extra)

    @staticmethod
    def deal(deck):
        """
        First 48 cards fill the grid row by row, the last 4 go to the extra slots.
        """
        checkDeck(deck)
        board = Board()
        for i, card in enumerate(deck):
            if i < GRID_SIZE:
                board.grid[i // COLUMNS][i % COLUMNS] = card
            else:
                board.extra[i - GRID_SIZE] = card
        return board

    def topOfColumn(self, col):
        """
        :return: (card, row) of the accessible card of the column, or None if the column is empty
        """
        for row in range(ROWS - 1, -1, -1):
            card = self.grid[row][col]
            if card is not None:
                return card, row
        return None

    def extraAt(self, idx):
        return self.extra[idx]

    def removeAtGrid(self, row, col):
        if self.grid[row][col] is None:
            raise ValueError(f"grid slot ({row}, {col}) is already empty")
        self.grid[row][col] = None

    def removeExtra(self, idx):
        if self.extra[idx] is None:
            raise ValueError(f"extra slot {idx} is already empty")
        self.extra[idx] = None

    def isEmpty(self):
        for row in self.grid:
            for card in row:
                if card is not None:
                    return False
        for card in self.extra:
            if card is not None:
                return False
        return True

    def column(self, col):
        return [self.grid[row][col] for row in range(ROWS)]

    def cards(self):
        lst = [card for row in self.grid for card in row if card is not None]
        lst.extend(card for card in self.extra if card is not None)
        return lst

    def cardCount(self):
        return len(self.cards())


class TurnOutcome(Enum):
    MATCH = "match"
    NO_MATCH = "no_match"
    INVALID_POSITION = "invalid_position"
    EMPTY_POSITION = "empty_position"


class GameEvent:
    pass


class GridMatch(GameEvent):
    def __init__(self, first: tuple, second: tuple, cards: tuple):
        self.first = first  # (row, col)
        self.second = second
        self.cards = cards


class ExtraMatch(GameEvent):
    def __init__(self, gridPos: tuple, extraIdx: int, cards: tuple):
        self.gridPos = gridPos  # (row, col)
        self.extraIdx = extraIdx
        self.cards = cards  # (grid card, extra card)


@dataclass(frozen=True)
class TurnResult:
    outcome: TurnOutcome
    side: int = None  # 1 or 2, set for EMPTY_POSITION
    event: GameEvent = None  # set for MATCH
    wildcard: bool = False

    def isMatch(self):
        return self.outcome is TurnOutcome.MATCH

    @property
    def message(self):
        if self.outcome is TurnOutcome.MATCH:
            return "Match!"
        if self.outcome is TurnOutcome.INVALID_POSITION:
            return "Invalid position. Try again."
        if self.outcome is TurnOutcome.EMPTY_POSITION:
            return "One or both positions have no card, try again."
        if self.wildcard:
            return "The card does not match any extra card. Try again."
        return "The cards do not match. Try again."


def resolveTurn(board: Board, sel1: int, sel2: int) -> TurnResult:
    """
    Resolves one turn. Selections are zero based: 0..7 name a grid column,
    8 searches the extra slots for a card of the other side's rank.
    The board only changes on a MATCH.
    """
    if not (0 <= sel1 < SELECTION_COUNT and 0 <= sel2 < SELECTION_COUNT):
        return TurnResult(TurnOutcome.INVALID_POSITION)
    if sel1 == sel2:
        return TurnResult(TurnOutcome.INVALID_POSITION)

    top1 = board.topOfColumn(sel1) if sel1 != WILDCARD else None
    top2 = board.topOfColumn(sel2) if sel2 != WILDCARD else None
    if sel1 != WILDCARD and top1 is None:
        return TurnResult(TurnOutcome.EMPTY_POSITION, side=1)
    if sel2 != WILDCARD and top2 is None:
        return TurnResult(TurnOutcome.EMPTY_POSITION, side=2)

    if sel1 == WILDCARD:
        return matchWithExtra(board, sel2, top2)
    if sel2 == WILDCARD:
        return matchWithExtra(board, sel1, top1)

    (card1, row1), (card2, row2) = top1, top2
    if not card1.sameRank(card2):
        return TurnResult(TurnOutcome.NO_MATCH)
    board.removeAtGrid(row1, sel1)
    board.removeAtGrid(row2, sel2)
    return TurnResult(TurnOutcome.MATCH, event=GridMatch((row1, sel1), (row2, sel2), (card1, card2)))


def matchWithExtra(board: Board, col: int, top: tuple) -> TurnResult:
    card, row = top
    for idx in range(EXTRA_SLOTS):
        extra = board.extraAt(idx)
        if extra is not None and extra.sameRank(card):
            board.removeExtra(idx)
            board.removeAtGrid(row, col)
            return TurnResult(TurnOutcome.MATCH, event=ExtraMatch((row, col), idx, (card, extra)), wildcard=True)
    return TurnResult(TurnOutcome.NO_MATCH, wildcard=True)


class GameConfig:
    def __init__(self, seed=None, gameCode=None, style="Symbols"):
        self.seed = seed
        self.gameCode = gameCode  # fixed deal, see encodeDeck
        self.style = style  # card glyphs used in the game log

    def initDeck(self):
        if self.gameCode:
            return decodeDeck(self.gameCode)
        return shuffledDeck(self.seed)

    def initBoard(self):
        return Board.deal(self.initDeck())


class GameState(Enum):
    PLAYING = "playing"
    WON = "won"


class Core:
    """
    ask*** : should be called by the game loop or a front end
    play : the game loop, reads selections from the registered player
    """
    DEFAULT_CONFIG = GameConfig()

    def __init__(self):
        self.interface = None
        self.player = None

        self.board: Board = None
        self.state: GameState = None
        self.turns = 0
        self.matches = 0
        self.style = "Symbols"

    def registerInterface(self, interface):
        self.interface = interface
        interface.core = self

    def registerPlayer(self, player):
        self.player = player

    @property
    def gameEnded(self):
        return self.state is GameState.WON

    def startGame(self, gameConfig: GameConfig = DEFAULT_CONFIG):
        if self.interface is None or self.player is None:
            raise Exception("interface or player is null")
        self.board = gameConfig.initBoard()
        self.state = GameState.PLAYING
        self.style = gameConfig.style
        self.turns = 0
        self.matches = 0
        if gameConfig.gameCode:
            log.info("Game started from a fixed deal")
        else:
            log.info("Game started (seed=%s)", gameConfig.seed)
        self.interface.onStart()

    def checkWin(self):
        if not self.board.isEmpty():
            return False
        self.state = GameState.WON
        log.info(WIN_MESSAGE)
        self.interface.onWin()
        return True

    def askTurn(self, sel1: int, sel2: int) -> TurnResult:
        if self.state is not GameState.PLAYING:
            raise Exception("game is not in progress")
        result = resolveTurn(self.board, sel1, sel2)
        self.turns += 1
        if result.isMatch():
            self.matches += 1
            log.info("Turn %d: %s", self.turns, describeEvent(result.event, self.style))
            self.interface.onEvent(result.event)
            self.checkWin()
        else:
            log.warning("Turn %d: %s", self.turns, result.message)
            self.interface.onReject(result)
        return result

    def play(self):
        """
        Runs turns until the board is empty. Selections are read 1-based and resolved 0-based.
        """
        if self.state is not GameState.PLAYING:
            raise Exception("game is not in progress")
        while not self.gameEnded:
            log_board(log, self.board, self.style)
            self.interface.notifyRedraw()
            col1 = self.player.readInteger(FIRST_PROMPT) - 1
            log.info("User selected column %d for the first card.", col1 + 1)
            col2 = self.player.readInteger(SECOND_PROMPT) - 1
            log.info("User selected column %d for the second card.", col2 + 1)
            self.askTurn(col1, col2)
        return self.state


def describeEvent(event: GameEvent, style="Symbols"):
    if isinstance(event, GridMatch):
        a, b = event.cards
        return f"matched {a.gameStr(style)} (column {event.first[1] + 1}) with {b.gameStr(style)} (column {event.second[1] + 1})"
    if isinstance(event, ExtraMatch):
        card, extra = event.cards
        return f"matched {card.gameStr(style)} (column {event.gridPos[1] + 1}) with extra card {extra.gameStr(style)} (slot {event.extraIdx + 1})"
    return type(event).__name__
