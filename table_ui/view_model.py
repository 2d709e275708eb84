from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CardView:
    id: int
    rank: int
    color: int
    face_up: bool


@dataclass(frozen=True)
class PileView:
    number: int
    kind: str
    cards: tuple[CardView, ...]

    @property
    def top(self) -> Optional[CardView]:
        return self.cards[-1] if self.cards else None


@dataclass(frozen=True)
class BoardViewModel:
    piles: tuple[PileView, ...]
    card_count: int
    game_ended: bool

    @property
    def depth(self) -> int:
        return max((len(p.cards) for p in self.piles), default=0)
