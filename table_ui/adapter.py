from halfdeck.Cards import Board
from halfdeck.Core import Core
from table_ui.view_model import BoardViewModel, CardView, PileView


class BoardAdapter:
    """Turns the live board into an immutable model the renderers can walk."""

    @staticmethod
    def snapshot_board(board: Board, game_ended=False) -> BoardViewModel:
        piles = []
        for pile in board.piles:
            cards = tuple(
                CardView(id=e.card.id, rank=e.card.rank, color=e.card.color, face_up=e.faceUp)
                for e in pile.stack
            )
            piles.append(PileView(number=pile.number, kind=pile.kind.value, cards=cards))
        return BoardViewModel(
            piles=tuple(piles),
            card_count=board.cardCount(),
            game_ended=game_ended,
        )

    @staticmethod
    def snapshot(core: Core) -> BoardViewModel:
        return BoardAdapter.snapshot_board(core.board, core.gameEnded)
