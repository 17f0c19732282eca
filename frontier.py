"""
Frontier planning: which half of the board is ours and where the wall runs.

The zone is decided once from where our units start. The wall column follows
from the zone and the board width; its cells are re-examined every turn to
find the ones that still need contesting (to remove) or defending (weak).
"""

from dataclasses import dataclass, field
from typing import List

from grid import Board
from models import Cell, Coordinate, Zone


@dataclass
class Frontier:
    """Wall state for one turn."""
    column: int
    zone_range: range
    wall: List[Coordinate] = field(default_factory=list)
    to_remove: List[Coordinate] = field(default_factory=list)  # Passable, unfortified, out of fortification range
    weak_points: List[Coordinate] = field(default_factory=list)  # Passable and unfortified


def assign_zone(board: Board) -> Zone:
    """
    Pick our half of the board from the mean column of our unit-bearing cells.

    The mean and the half width are both floored before comparing.
    With no units on the board the left half is assumed.
    """
    columns = [cell.coordinate.x for cell in board.cells() if cell.is_mine and cell.units > 0]
    if not columns:
        return Zone.LEFT
    return Zone.RIGHT if sum(columns) // len(columns) >= board.width // 2 else Zone.LEFT


def wall_column(width: int, zone: Zone) -> int:
    """Column separating the zones for a given board width and zone."""
    if width % 2 == 0 and zone == Zone.LEFT:
        return width // 2
    return width // 2 + 1


def zone_range(width: int, zone: Zone, column: int) -> range:
    """Columns belonging to the zone, excluding the wall itself."""
    if zone == Zone.LEFT:
        return range(0, column)
    return range(column + 1, width)


def compute_frontier(board: Board, zone: Zone) -> Frontier:
    """
    Derive the wall, the cells to remove and the weak points from the board.

    Args:
        board: Board loaded with the current snapshot
        zone: Our frozen zone

    Returns:
        Frontier for this turn; the wall is empty when its column is off the board
    """
    column = wall_column(board.width, zone)
    wall = board.column(column)

    to_remove = []
    weak_points = []
    for coordinate in wall:
        cell = board.get_cell(coordinate)
        if cell.is_grass or cell.has_fortification:
            continue
        weak_points.append(coordinate)
        if not cell.in_fortification_range:
            to_remove.append(coordinate)

    return Frontier(
        column=column,
        zone_range=zone_range(board.width, zone, column),
        wall=wall,
        to_remove=to_remove,
        weak_points=weak_points,
    )


def select_removal_targets(board: Board, to_remove: List[Coordinate]) -> List[Cell]:
    """
    Choose which cells to remove so that every cluster of adjacent cells is covered.

    A cell covers itself and its neighbors that also need removing. Cells
    with more such neighbors are picked first; ties keep coordinate order.

    Args:
        board: Current board
        to_remove: Wall cells that need removing

    Returns:
        Cells to target, in pick order
    """
    pending = set(to_remove)

    def covered(coordinate: Coordinate) -> List[Coordinate]:
        return [n for n in board.neighbors(coordinate) if n in pending] + [coordinate]

    scores = {c: len([n for n in board.neighbors(c) if n in pending]) + 1 for c in to_remove}
    candidates = sorted(to_remove, key=lambda c: (-scores[c], c))

    targets = []
    for coordinate in candidates:
        if coordinate not in pending:
            continue
        pending.difference_update(covered(coordinate))
        targets.append(board.get_cell(coordinate))

    return targets
