"""
Board geometry and shortest-path distances for the grid territory contest.

The board is created once from the dimensions sent at game start and its
cells are overwritten in place every turn. Cells are stored in x-major
coordinate order, which is the order every planner tie-break relies on.
"""

from collections import deque
from typing import Dict, Iterator, List, Tuple

from models import Cell, Coordinate, Snapshot

UNREACHABLE = float('inf')

# 4 directions: down, up, right, left
DIRECTIONS = [(0, 1), (0, -1), (1, 0), (-1, 0)]


class BoardLookupError(Exception):
    """Raised when a coordinate outside the board is looked up."""
    pass


def manhattan_distance(a: Coordinate, b: Coordinate) -> int:
    """Cheap lower bound on the path length between two cells."""
    return abs(a.x - b.x) + abs(a.y - b.y)


class Board:
    def __init__(self, width: int, height: int):
        """Create every cell of a width x height board."""
        self.width = width
        self.height = height
        self._cells: Dict[Coordinate, Cell] = {}
        for x in range(width):
            for y in range(height):
                coordinate = Coordinate(x, y)
                self._cells[coordinate] = Cell(coordinate)
        self._distances: Dict[Tuple[Coordinate, Coordinate], float] = {}

    def contains(self, coordinate: Coordinate) -> bool:
        return 0 <= coordinate.x < self.width and 0 <= coordinate.y < self.height

    def get_cell(self, coordinate: Coordinate) -> Cell:
        """
        Get the cell at a coordinate.

        Raises:
            BoardLookupError: if the coordinate is off the board
        """
        cell = self._cells.get(coordinate)
        if cell is None:
            raise BoardLookupError(f"Not found cell at ({coordinate})")
        return cell

    def cells(self) -> Iterator[Cell]:
        """Iterate all cells in x-major coordinate order."""
        return iter(self._cells.values())

    def column(self, x: int) -> List[Coordinate]:
        """All on-board coordinates of column x, top to bottom."""
        return [c for c in (Coordinate(x, y) for y in range(self.height)) if self.contains(c)]

    def neighbors(self, coordinate: Coordinate) -> List[Coordinate]:
        """Orthogonal neighbors clipped to the board."""
        candidates = (coordinate.shifted(dx, dy) for dx, dy in DIRECTIONS)
        return [c for c in candidates if self.contains(c)]

    def load(self, snapshot: Snapshot) -> None:
        """Overwrite every cell from a row-major snapshot and drop cached distances."""
        for y, row in enumerate(snapshot.rows):
            for x, state in enumerate(row):
                self.get_cell(Coordinate(x, y)).update(state)
        self._distances.clear()

    def distance(self, source: Coordinate, target: Coordinate) -> float:
        """
        Shortest number of steps from source to target through passable cells.

        Breadth-first search that stops as soon as the target is dequeued.
        Results are cached until the next snapshot is loaded.

        Args:
            source: Starting cell
            target: Destination cell

        Returns:
            Step count, or UNREACHABLE if no passable path exists
        """
        if source == target:
            return 0

        key = (source, target)
        if key not in self._distances:
            self._distances[key] = self._search(source, target)
        return self._distances[key]

    def _search(self, source: Coordinate, target: Coordinate) -> float:
        if self.get_cell(source).is_grass or self.get_cell(target).is_grass:
            return UNREACHABLE

        visited = {source}
        queue = deque([(source, 0)])

        while queue:
            head, steps = queue.popleft()

            if head == target:
                return steps

            for neighbor in self.neighbors(head):
                if neighbor in visited or self._cells[neighbor].is_grass:
                    continue
                visited.add(neighbor)
                queue.append((neighbor, steps + 1))

        return UNREACHABLE
