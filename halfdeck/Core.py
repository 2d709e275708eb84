from dataclasses import dataclass
from enum import Enum
from typing import Optional

from halfdeck.Cards import (
    DECK_SIZE,
    PILE_COUNT,
    TABLEAU_PILES,
    Board,
    Card,
    CardStack,
    PileKind,
)

WINNING_SUM = 49  # the two kings: 24 + 25


class DeckError(ValueError):
    pass


class DuplicateCardError(DeckError):
    def __init__(self, card: Card):
        super().__init__(f"card appears twice in the deck: {card}")
        self.card = card


class MalformedDeckError(DeckError):
    pass


def seedDrawPile(drawPile: CardStack, cardIds):
    """
    Loads the draw pile in input order so that only the last card is face-up.
    The whole sequence is validated before the pile is touched.
    """
    cardIds = list(cardIds)
    if len(cardIds) != DECK_SIZE:
        raise MalformedDeckError(f"expected {DECK_SIZE} cards, got {len(cardIds)}")
    seen = set()
    cards = []
    for cid in cardIds:
        try:
            card = Card(cid)
        except ValueError as e:
            raise MalformedDeckError(str(e)) from e
        if card in seen:
            raise DuplicateCardError(card)
        seen.add(card)
        cards.append(card)
    for card in cards:
        drawPile.appendDraw(card)


def dealTableau(board: Board):
    """
    Triangular deal: round r puts one card on every tableau pile from r to 4,
    leaving piles of 1, 2, 3 and 4 face-up cards.
    """
    drawPile = board.drawPile
    dealt = 0
    for row in range(1, len(TABLEAU_PILES) + 1):
        for col in range(row, len(TABLEAU_PILES) + 1):
            card = drawPile.popTail()
            if card is None:
                return dealt
            board[col].append(card, faceUp=True)
            dealt += 1
    return dealt


def orderedPair(bottom: Card, top: Card, destKind: PileKind) -> bool:
    if destKind is PileKind.TABLEAU:
        return bottom.color != top.color and bottom.rank > top.rank
    if destKind is PileKind.FOUNDATION:
        return bottom.color == top.color and top.rank == bottom.rank + 1
    return False


def isStartCard(card: Card, destKind: PileKind) -> bool:
    if destKind is PileKind.TABLEAU:
        return card.isKing()
    if destKind is PileKind.FOUNDATION:
        return card.isAce()
    return False


class MoveReason(Enum):
    OK = "ok"
    SAME_PILE = "same pile"
    NOT_FOUND = "card not found or not face-up"
    FOUNDATION_SOURCE = "cards never leave a foundation"
    BAD_DESTINATION = "no such pile"
    RUN_OUT_OF_ORDER = "the cards above do not fit the destination"
    BAD_START_CARD = "an empty pile needs a king (tableau) or an ace (foundation)"
    BAD_PLACEMENT = "the card does not fit on the destination"


@dataclass(frozen=True)
class MoveCheck:
    legal: bool
    reason: MoveReason
    sourceIndex: Optional[int] = None
    sourceOffset: Optional[int] = None

    def __bool__(self):
        return self.legal

    def isNoOp(self):
        return self.reason is MoveReason.SAME_PILE


def locateCard(board: Board, card: Card):
    """
    :return: (pile index, offset from head) of the first face-up entry holding the card, or None
    """
    for s in range(PILE_COUNT):
        for idx, entry in enumerate(board[s]):
            if entry.faceUp and entry.card == card:
                return s, idx
    return None


def isRunOrdered(stack: CardStack, offset, destKind: PileKind) -> bool:
    base = stack.entryAt(offset).card
    for i in range(offset + 1, len(stack)):
        upper = stack.entryAt(i).card
        if not orderedPair(base, upper, destKind):
            return False
        base = upper
    return True


def checkMove(board: Board, cardId, destIndex) -> MoveCheck:
    """
    Decides whether the face-up card may be moved, together with everything above it,
    onto the pile at destIndex. Rejections come back as reasons, never as exceptions.
    """
    card = cardId if isinstance(cardId, Card) else Card(cardId)
    if destIndex < 0 or destIndex >= PILE_COUNT:
        return MoveCheck(False, MoveReason.BAD_DESTINATION)
    found = locateCard(board, card)
    if found is None:
        return MoveCheck(False, MoveReason.NOT_FOUND)
    (s, idx) = found
    if board.kindOf(s) is PileKind.FOUNDATION:
        return MoveCheck(False, MoveReason.FOUNDATION_SOURCE, s, idx)
    if s == destIndex:
        return MoveCheck(True, MoveReason.SAME_PILE, s, idx)

    destKind = board.kindOf(destIndex)
    if not isRunOrdered(board[s], idx, destKind):
        return MoveCheck(False, MoveReason.RUN_OUT_OF_ORDER, s, idx)

    dest = board[destIndex]
    if dest.isEmpty():
        if not isStartCard(card, destKind):
            return MoveCheck(False, MoveReason.BAD_START_CARD, s, idx)
    elif not orderedPair(dest.tail().card, card, destKind):
        return MoveCheck(False, MoveReason.BAD_PLACEMENT, s, idx)
    return MoveCheck(True, MoveReason.OK, s, idx)


def isMoveLegal(board: Board, cardId, destIndex) -> bool:
    return checkMove(board, cardId, destIndex).legal


def executeMove(board: Board, sourceIndex, sourceOffset, destIndex):
    """
    Relocates the run starting at sourceOffset onto the destination pile.
    Must only be called with the location reported by a legal checkMove.
    """
    if sourceIndex == destIndex:
        return 0
    run = board[sourceIndex].detachSuffixFrom(sourceOffset)
    board[destIndex].attachRunAtTail(run)
    return len(run)


def rotateDrawPile(board: Board):
    return board.drawPile.rotateTopToBottom()


def isWon(board: Board) -> bool:
    tails = [s.tail() for s in board.foundations()]
    if any(t is None for t in tails):
        return False
    return sum(t.card.id for t in tails) == WINNING_SUM


class GameEvent:
    pass


class DealTableau(GameEvent):
    def __init__(self, dealt: int):
        self.dealt = dealt


class CardMove(GameEvent):
    def __init__(self, card: Card, src: (int, int), dest: int, count: int):
        self.card = card
        self.src = src
        self.dest = dest
        self.count = count


class RotateDraw(GameEvent):
    def __init__(self, card: Optional[Card]):
        self.card = card


class Core:
    """
    ask*** : requested by the player, validated first
    the module level functions do the actual work without notifying anyone
    """

    def __init__(self):
        self.interface = None
        self.board: Board = None
        self.gameEnded = False
        self.moveCount = 0

    def registerInterface(self, interface):
        self.interface = interface
        interface.core = self

    def startGame(self, cardIds):
        if self.interface is None:
            raise RuntimeError("interface is not registered")
        board = Board()
        seedDrawPile(board.drawPile, cardIds)
        self.board = board
        self.gameEnded = False
        self.moveCount = 0
        self.interface.onStart()
        dealt = dealTableau(board)
        self.interface.onEvent(DealTableau(dealt))

    def loadBoard(self, board: Board):
        """Continues from an already laid out board, e.g. a prepared position."""
        if self.interface is None:
            raise RuntimeError("interface is not registered")
        self.board = board
        self.gameEnded = False
        self.moveCount = 0
        self.interface.onStart()

    @staticmethod
    def pileIndexOf(number):
        """Maps the player's pile number 1..7 to the board index 0..6."""
        return number - 1

    def canMove(self, cardId, destNumber) -> MoveCheck:
        return checkMove(self.board, cardId, Core.pileIndexOf(destNumber))

    def askMove(self, cardId, destNumber) -> MoveCheck:
        check = self.canMove(cardId, destNumber)
        if not check.legal:
            return check
        dest = Core.pileIndexOf(destNumber)
        count = executeMove(self.board, check.sourceIndex, check.sourceOffset, dest)
        self.moveCount += 1
        card = cardId if isinstance(cardId, Card) else Card(cardId)
        self.interface.onEvent(CardMove(card, (check.sourceIndex, check.sourceOffset), dest, count))
        self.checkWin()
        return check

    def askNext(self):
        card = rotateDrawPile(self.board)
        self.interface.onEvent(RotateDraw(card))
        self.checkWin()
        return card

    def checkWin(self):
        if not isWon(self.board):
            return False
        self.gameEnded = True
        self.interface.onWin()
        return True
