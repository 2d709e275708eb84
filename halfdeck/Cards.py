from collections import deque
from enum import Enum

DECK_SIZE = 26
PILE_COUNT = 7
DRAW_PILE = 0
TABLEAU_PILES = (1, 2, 3, 4)
FOUNDATION_PILES = (5, 6)


class Card:
    """
    An immutable card of the half deck.
    The id packs both attributes: rank = id // 2 (0 is Ace, 12 is King), color = id % 2.
    """
    COLOR_NAMES = ("BLACK", "RED")
    RANK_NAMES = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")
    ACE = 0
    KING = 12

    __slots__ = ("_id",)

    def __init__(self, id):
        if not isinstance(id, int) or not 0 <= id < DECK_SIZE:
            raise ValueError(f"card id out of range: {id!r}")
        object.__setattr__(self, "_id", id)

    def __setattr__(self, key, value):
        raise AttributeError("Card is immutable")

    @property
    def id(self):
        return self._id

    @property
    def rank(self):
        return self._id // 2

    @property
    def color(self):
        return self._id % 2

    def isKing(self):
        return self.rank == Card.KING

    def isAce(self):
        return self.rank == Card.ACE

    def __eq__(self, other):
        return isinstance(other, Card) and other._id == self._id

    def __hash__(self):
        return hash(self._id)

    def __str__(self):
        return f"{Card.COLOR_NAMES[self.color]} {Card.RANK_NAMES[self.rank]}"

    def __repr__(self):
        return f"Card({self._id})"

    def gameStr(self):
        return Card.COLOR_NAMES[self.color][0] + Card.RANK_NAMES[self.rank]

    @staticmethod
    def fromColorAndRank(color, rank):
        return Card(rank * 2 + color)


class StackEntry:
    __slots__ = ("card", "faceUp")

    def __init__(self, card: Card, faceUp=False):
        self.card = card
        self.faceUp = faceUp

    def __repr__(self):
        return f"StackEntry({self.card!r}, faceUp={self.faceUp})"


class CardStack:
    """
    An ordered pile of entries. The head is the bottom card, the tail is the top card;
    piles grow at the tail.
    """

    def __init__(self):
        self._entries = deque()

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def isEmpty(self):
        return len(self._entries) == 0

    def head(self):
        return self._entries[0] if self._entries else None

    def tail(self):
        return self._entries[-1] if self._entries else None

    def entryAt(self, index):
        return self._entries[index]

    def cards(self):
        return [e.card for e in self._entries]

    def snapshot(self):
        return tuple((e.card.id, e.faceUp) for e in self._entries)

    def __revealTail(self):
        if self._entries:
            self._entries[-1].faceUp = True

    def append(self, card: Card, faceUp=True):
        if not self._entries:
            faceUp = True
        self._entries.append(StackEntry(card, faceUp))

    def appendDraw(self, card: Card):
        if self._entries:
            self._entries[-1].faceUp = False
        self._entries.append(StackEntry(card, True))

    def popTail(self):
        if not self._entries:
            return None
        entry = self._entries.pop()
        self.__revealTail()
        return entry.card

    def pushHead(self, card: Card, faceUp=False):
        if self._entries:
            faceUp = False
        self._entries.appendleft(StackEntry(card, faceUp))

    def detachSuffixFrom(self, index):
        """
        Removes the run from index (counted from the head) through the tail.
        :return: the removed entries, bottom first, flags untouched
        """
        if index < 0 or index >= len(self._entries):
            raise IndexError(f"no entry at offset {index} in a pile of {len(self._entries)}")
        run = []
        for _ in range(len(self._entries) - index):
            run.append(self._entries.pop())
        run.reverse()
        self.__revealTail()
        return run

    def attachRunAtTail(self, run):
        self._entries.extend(run)

    def rotateTopToBottom(self):
        card = self.popTail()
        if card is None:
            return None
        # a lone card has nothing above it to expose, so it stays visible
        self.pushHead(card, faceUp=self.isEmpty())
        return card


class PileKind(Enum):
    DRAW = "draw"
    TABLEAU = "tableau"
    FOUNDATION = "foundation"


def pileKindOf(index):
    if index == DRAW_PILE:
        return PileKind.DRAW
    if index in TABLEAU_PILES:
        return PileKind.TABLEAU
    if index in FOUNDATION_PILES:
        return PileKind.FOUNDATION
    raise IndexError(f"no pile at index {index}")


class Pile:
    def __init__(self, index):
        self.index = index
        self.kind = pileKindOf(index)
        self.stack = CardStack()

    @property
    def number(self):
        """The 1-based number players use in commands."""
        return self.index + 1

    def __repr__(self):
        return f"Pile({self.number}, {self.kind.value}, {len(self.stack)} cards)"


class Board:
    """
    The seven piles of a game: 0 is the draw pile, 1..4 are tableau piles, 5..6 are foundations.
    """

    def __init__(self):
        self.piles = tuple(Pile(i) for i in range(PILE_COUNT))

    def __getitem__(self, index) -> CardStack:
        return self.piles[index].stack

    def __len__(self):
        return len(self.piles)

    def kindOf(self, index) -> PileKind:
        return self.piles[index].kind

    @property
    def drawPile(self) -> CardStack:
        return self.piles[DRAW_PILE].stack

    def tableau(self):
        return [self.piles[i].stack for i in TABLEAU_PILES]

    def foundations(self):
        return [self.piles[i].stack for i in FOUNDATION_PILES]

    def cardCount(self):
        return sum(len(p.stack) for p in self.piles)

    def snapshot(self):
        return tuple(p.stack.snapshot() for p in self.piles)

    @staticmethod
    def fromLayout(layout):
        """
        Builds a board from explicit piles, for setting up positions.
        :param layout: seven sequences of (cardId, faceUp) pairs, head first
        """
        if len(layout) != PILE_COUNT:
            raise ValueError(f"expected {PILE_COUNT} piles, got {len(layout)}")
        board = Board()
        for pile, entries in zip(board.piles, layout):
            pile.stack.attachRunAtTail([StackEntry(Card(cid), faceUp) for (cid, faceUp) in entries])
        return board
