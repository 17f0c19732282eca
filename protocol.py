"""
Turn input adapter: turns the judge's whitespace-separated integers into snapshots.

Input layout:
    once:      width height
    per turn:  my_matter opponent_matter
               height rows of width cells, each seven integers:
               scrap owner units recycler can_build can_spawn in_range_of_recycler
"""

from typing import Iterator, List, Sequence, TextIO, Tuple

from models import CellState, Owner, Snapshot

CELL_FIELDS = 7


class ProtocolError(ValueError):
    """Raised when turn input does not match the expected layout."""
    pass


class TokenReader:
    """Reads integers one at a time from a text stream, across line breaks."""

    def __init__(self, stream: TextIO):
        self._tokens = self._tokenize(stream)

    @staticmethod
    def _tokenize(stream: TextIO) -> Iterator[str]:
        for line in stream:
            yield from line.split()

    def next_int(self) -> int:
        try:
            token = next(self._tokens)
        except StopIteration:
            raise EOFError("Turn input ended")
        try:
            return int(token)
        except ValueError:
            raise ProtocolError(f"Expected an integer, got {token!r}")

    def next_ints(self, count: int) -> List[int]:
        return [self.next_int() for _ in range(count)]


def read_dimensions(reader: TokenReader) -> Tuple[int, int]:
    """Read the board width and height sent once at game start."""
    width, height = reader.next_ints(2)
    if width <= 0 or height <= 0:
        raise ProtocolError(f"Invalid board size {width}x{height}")
    return width, height


def _is_integer(value) -> bool:
    # bool is an int subclass but never a valid count
    return isinstance(value, int) and not isinstance(value, bool)


def make_cell_state(values: Sequence[int]) -> CellState:
    """Validate one cell's seven integers."""
    if not isinstance(values, (list, tuple)) or len(values) != CELL_FIELDS:
        raise ProtocolError(f"Cell needs {CELL_FIELDS} integers, got {values!r}")
    if not all(_is_integer(v) for v in values):
        raise ProtocolError(f"Cell values must be integers: {list(values)!r}")
    if values[1] not in {owner.value for owner in Owner}:
        raise ProtocolError(f"Unknown owner {values[1]}")
    if values[0] < 0 or values[2] < 0:
        raise ProtocolError(f"Scrap and units can't be negative: {values!r}")
    return CellState(*values)


def read_turn(reader: TokenReader, width: int, height: int) -> Snapshot:
    """
    Read one turn of input.

    Raises:
        EOFError: if the input ends before the turn starts
        ProtocolError: if the input ends part way through the turn
    """
    my_matter = reader.next_int()
    try:
        opponent_matter = reader.next_int()
        rows = [[make_cell_state(reader.next_ints(CELL_FIELDS)) for _ in range(width)]
                for _ in range(height)]
    except EOFError:
        raise ProtocolError("Turn input truncated")
    return Snapshot(my_matter=my_matter, opponent_matter=opponent_matter, rows=rows)


def parse_turn(width: int, height: int, my_matter: int, opponent_matter: int,
               cells: Sequence[Sequence[Sequence[int]]]) -> Snapshot:
    """
    Build a snapshot from already decoded rows (e.g. a JSON body).

    Args:
        width: Board width
        height: Board height
        my_matter: Our matter this turn
        opponent_matter: Opponent matter this turn
        cells: height rows of width seven-integer lists

    Returns:
        Snapshot for the turn

    Raises:
        ProtocolError: if the rows don't match the board
    """
    if not isinstance(cells, (list, tuple)) or len(cells) != height:
        raise ProtocolError(f"Expected {height} rows of cells")
    rows = []
    for y, row in enumerate(cells):
        if not isinstance(row, (list, tuple)) or len(row) != width:
            raise ProtocolError(f"Row {y} must have {width} cells")
        rows.append([make_cell_state(values) for values in row])
    if not (_is_integer(my_matter) and _is_integer(opponent_matter)):
        raise ProtocolError("Matter values must be integers")
    return Snapshot(my_matter=my_matter, opponent_matter=opponent_matter, rows=rows)
