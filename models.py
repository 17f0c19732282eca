# Models for board elements of the grid territory contest

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List


class Owner(IntEnum):
    """Cell ownership exactly as encoded by the judge."""
    NEUTRAL = -1
    OPPONENT = 0
    ME = 1


class Zone(Enum):
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class Strategy(Enum):
    CONQUER = "Conquer"
    EXPAND = "Expand"


@dataclass(frozen=True, order=True)
class Coordinate:
    """A board position. Orders by (x, y), which is the board's iteration order."""
    x: int
    y: int

    def __str__(self) -> str:
        return f"{self.x} {self.y}"

    def shifted(self, dx: int = 0, dy: int = 0) -> 'Coordinate':
        return Coordinate(self.x + dx, self.y + dy)


@dataclass
class CellState:
    """The seven integers the judge sends for one cell."""
    scrap_amount: int
    owner: int
    units: int
    recycler: int
    can_build: int
    can_spawn: int
    in_range_of_recycler: int


@dataclass
class Snapshot:
    """One turn of input: matter totals plus cell rows in row-major order."""
    my_matter: int
    opponent_matter: int
    rows: List[List[CellState]] = field(default_factory=list)


@dataclass
class Cell:
    """
    Represents one board cell for the current turn.
    The coordinate never changes; everything else is overwritten each turn.
    """
    coordinate: Coordinate
    owner: Owner = Owner.NEUTRAL
    scrap_amount: int = 0  # Terrain durability, 0 means grass
    units: int = 0
    has_fortification: bool = False
    can_build: bool = False
    can_spawn: bool = False
    in_fortification_range: bool = False

    @property
    def is_mine(self) -> bool:
        return self.owner == Owner.ME

    @property
    def is_grass(self) -> bool:
        return self.scrap_amount == 0

    def update(self, state: CellState) -> None:
        """Overwrite this cell from a snapshot entry, keeping grass cells empty."""
        self.scrap_amount = state.scrap_amount
        self.owner = Owner(state.owner)
        self.units = state.units
        self.has_fortification = state.recycler > 0
        self.can_build = state.can_build > 0
        self.can_spawn = state.can_spawn > 0
        self.in_fortification_range = state.in_range_of_recycler > 0

        if self.is_grass:
            # Grass can't be owned, occupied or built on
            self.owner = Owner.NEUTRAL
            self.units = 0
            self.has_fortification = False
