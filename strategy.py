from grid import Board
from frontier import Frontier
from models import Strategy


def select_strategy(board: Board, frontier: Frontier) -> Strategy:
    """
    Expand once the wall is sealed, otherwise Conquer.

    The wall is sealed when nothing is left to remove and every wall cell is
    grass or already fortified. Re-evaluated from scratch every turn.
    """
    sealed = all(
        board.get_cell(c).is_grass or board.get_cell(c).has_fortification
        for c in frontier.wall
    )
    if not frontier.to_remove and sealed:
        return Strategy.EXPAND
    return Strategy.CONQUER
