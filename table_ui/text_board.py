from table_ui.ui_config import CELL_WIDTH, COLOR_LETTERS, HIDDEN_MARKER, PILE_LABELS, RANKS
from table_ui.view_model import BoardViewModel, CardView


def card_cell(card: CardView, hidden_marker=HIDDEN_MARKER) -> str:
    if not card.face_up:
        return hidden_marker.ljust(CELL_WIDTH)
    return (COLOR_LETTERS[card.color] + RANKS[card.rank]).ljust(CELL_WIDTH)


def _join(cells):
    return " | ".join(cells).rstrip()


def render_lines(vm: BoardViewModel, hidden_marker=HIDDEN_MARKER) -> list[str]:
    """
    One column per pile, headed by the number used in move commands and the pile kind.
    Rows run from the bottom card of every pile downwards.
    """
    lines = [
        _join(str(p.number).ljust(CELL_WIDTH) for p in vm.piles),
        _join(PILE_LABELS[p.kind].ljust(CELL_WIDTH) for p in vm.piles),
    ]
    lines.append("-" * len(" | ".join([" " * CELL_WIDTH] * len(vm.piles))))
    for row in range(vm.depth):
        cells = []
        for pile in vm.piles:
            if row < len(pile.cards):
                cells.append(card_cell(pile.cards[row], hidden_marker))
            else:
                cells.append(" " * CELL_WIDTH)
        lines.append(_join(cells))
    return lines


def render_board(vm: BoardViewModel, hidden_marker=HIDDEN_MARKER) -> str:
    return "\n".join(render_lines(vm, hidden_marker))
