from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from rockswap.components.tile import EMPTY, Tile

Position = Tuple[int, int]


@dataclass(slots=True)
class Board:
    """Row-major grid of tiles. Row 0 is the top of the board."""
    rows: int
    cols: int
    colors: int
    cells: List[List[Tile]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[EMPTY for _ in range(self.cols)] for _ in range(self.rows)]

    def in_bounds(self, pos) -> bool:
        try:
            row, col = pos
        except (TypeError, ValueError):
            return False
        if not isinstance(row, int) or not isinstance(col, int):
            return False
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get(self, pos: Position) -> Tile:
        if not self.in_bounds(pos):
            return EMPTY
        row, col = pos
        return self.cells[row][col]

    def set(self, pos: Position, tile: Tile) -> None:
        row, col = pos
        self.cells[row][col] = tile

    def row(self, row: int) -> List[Tile]:
        return list(self.cells[row])

    def column(self, col: int) -> List[Tile]:
        return [self.cells[row][col] for row in range(self.rows)]

    def positions(self) -> Iterator[Position]:
        for row in range(self.rows):
            for col in range(self.cols):
                yield (row, col)

    def copy(self) -> "Board":
        return Board(rows=self.rows, cols=self.cols, colors=self.colors, cells=[list(r) for r in self.cells])

    def snapshot(self) -> Tuple[Tuple[Tile, ...], ...]:
        """Read-only view for presentation code."""
        return tuple(tuple(r) for r in self.cells)
