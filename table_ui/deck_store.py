import random
from pathlib import Path

from halfdeck.Cards import DECK_SIZE, Card
from halfdeck.Core import DuplicateCardError, MalformedDeckError
from table_ui.ui_config import COLORS, RANKS


def parse_card(color: str, rank: str) -> int:
    if color not in COLORS or rank not in RANKS:
        raise MalformedDeckError(f"not a card: {color} {rank}")
    return Card.fromColorAndRank(COLORS.index(color), RANKS.index(rank)).id


def parse_deck(text: str) -> list[int]:
    """
    Reads whitespace separated "COLOR RANK" pairs; lines starting with '#' are ignored.
    :return: card ids in file order
    """
    tokens = []
    for line in text.splitlines():
        if line.lstrip().startswith("#"):
            continue
        tokens.extend(line.split())
    if len(tokens) != DECK_SIZE * 2:
        raise MalformedDeckError(f"expected {DECK_SIZE} cards, found {len(tokens) / 2:g}")
    ids = []
    seen = set()
    for i in range(0, len(tokens), 2):
        cid = parse_card(tokens[i], tokens[i + 1])
        if cid in seen:
            raise DuplicateCardError(Card(cid))
        seen.add(cid)
        ids.append(cid)
    return ids


def load_deck(path) -> list[int]:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedDeckError(f"cannot read deck file {path}: {e}") from e
    return parse_deck(text)


def format_deck(ids) -> str:
    lines = []
    for cid in ids:
        card = Card(cid)
        lines.append(f"{COLORS[card.color]} {RANKS[card.rank]}")
    return "\n".join(lines) + "\n"


def write_deck(path, ids):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_deck(ids), encoding="utf-8")


def shuffled_deck(seed=None) -> list[int]:
    ids = list(range(DECK_SIZE))
    random.Random(seed).shuffle(ids)
    return ids
