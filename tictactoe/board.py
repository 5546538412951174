from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from tictactoe.errors import IllegalMove
from tictactoe.types import SIDES, Cell, Coord, Grid, Outcome, Symbols

MIN_SIZE: int = 3


class Board:
    """Square N x N grid with free-cell bookkeeping and win detection.

    A line is every row, every column, the main diagonal and the anti-diagonal.
    A side wins by filling a whole line. Occupancy of each line is tracked per
    side on every apply/undo so win checks never rescan the grid.
    """

    def __init__(self, size: int = MIN_SIZE) -> None:
        if size < MIN_SIZE:
            raise ValueError(f"Board size must be at least {MIN_SIZE}, got {size}")
        self.size: int = size
        self._grid: Grid = [[Cell.EMPTY] * size for _ in range(size)]
        self._free_cells: int = size * size
        # Line indices: rows 0..n-1, columns n..2n-1, main diagonal 2n, anti-diagonal 2n+1
        self._n_lines: int = 2 * size + 2
        self._line_counts: Dict[Cell, List[int]] = {side: [0] * self._n_lines for side in SIDES}
        self._complete_lines: int = 0
        self._cell_lines: List[List[Tuple[int, ...]]] = [
            [self._lines_through(row, col) for col in range(size)] for row in range(size)
        ]

    # -----------------------------
    # Construction helpers
    # -----------------------------
    @classmethod
    def from_rows(cls, rows: Iterable[str], symbols: Symbols = Symbols()) -> "Board":
        """Build a board from one string per row, e.g. ``["xxx", "ooo", "   "]``."""
        rows = list(rows)
        size = len(rows)
        if any(len(r) != size for r in rows):
            raise ValueError("Rows must form a square grid")
        board = cls(size)
        for row, text in enumerate(rows):
            for col, char in enumerate(text):
                cell = symbols.to_cell(char)
                if cell is not Cell.EMPTY:
                    board.apply(row, col, cell)
        return board

    def _lines_through(self, row: int, col: int) -> Tuple[int, ...]:
        n = self.size
        lines = [row, n + col]
        if row == col:
            lines.append(2 * n)
        if row + col == n - 1:
            lines.append(2 * n + 1)
        return tuple(lines)

    def copy(self) -> "Board":
        """Independent copy of the board, counters included."""
        other = Board.__new__(Board)
        other.size = self.size
        other._grid = [row[:] for row in self._grid]
        other._free_cells = self._free_cells
        other._n_lines = self._n_lines
        other._line_counts = {side: counts[:] for side, counts in self._line_counts.items()}
        other._complete_lines = self._complete_lines
        other._cell_lines = self._cell_lines
        return other

    def reset(self) -> None:
        """Clear every cell. Only the game driver restarts a board."""
        for row in self._grid:
            for col in range(self.size):
                row[col] = Cell.EMPTY
        self._free_cells = self.size * self.size
        for counts in self._line_counts.values():
            for i in range(self._n_lines):
                counts[i] = 0
        self._complete_lines = 0

    # -----------------------------
    # Access
    # -----------------------------
    @property
    def free_cells(self) -> int:
        return self._free_cells

    def in_range(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def cell(self, row: int, col: int) -> Cell:
        if not self.in_range(row, col):
            raise IndexError(f"Cell ({row}, {col}) outside a {self.size}x{self.size} board")
        return self._grid[row][col]

    def __getitem__(self, idx: Coord) -> Cell:
        row, col = idx
        return self.cell(row, col)

    def empty_cells(self) -> List[Coord]:
        """Empty coordinates in row-major order."""
        return [
            (row, col)
            for row, cells in enumerate(self._grid)
            for col, cell in enumerate(cells)
            if cell is Cell.EMPTY
        ]

    # -----------------------------
    # Mutation
    # -----------------------------
    def apply(self, row: int, col: int, side: Cell) -> None:
        """Place ``side`` on an empty in-range cell."""
        if side not in SIDES:
            raise IllegalMove(row, col, "side must be PLAYER or AUTOMATED")
        side = Cell(side)
        if not self.in_range(row, col):
            raise IllegalMove(row, col, "outside the board")
        if self._grid[row][col] is not Cell.EMPTY:
            raise IllegalMove(row, col, "cell is occupied")
        self._grid[row][col] = side
        self._free_cells -= 1
        counts = self._line_counts[side]
        for line in self._cell_lines[row][col]:
            counts[line] += 1
            if counts[line] == self.size:
                self._complete_lines += 1

    def undo(self, row: int, col: int) -> None:
        """Empty an occupied cell again. Search backtracking only."""
        if not self.in_range(row, col):
            raise IllegalMove(row, col, "outside the board")
        side = self._grid[row][col]
        if side is Cell.EMPTY:
            raise IllegalMove(row, col, "cell is already empty")
        self._grid[row][col] = Cell.EMPTY
        self._free_cells += 1
        counts = self._line_counts[side]
        for line in self._cell_lines[row][col]:
            if counts[line] == self.size:
                self._complete_lines -= 1
            counts[line] -= 1

    # -----------------------------
    # End conditions
    # -----------------------------
    def is_full(self) -> bool:
        return self._free_cells == 0

    def has_line(self) -> bool:
        """True when either side has completed a line."""
        return self._complete_lines > 0

    def winner(self) -> Optional[Cell]:
        """First side found owning a complete line: rows, columns, main then anti-diagonal."""
        if not self._complete_lines:
            return None
        n = self.size
        player = self._line_counts[Cell.PLAYER]
        automated = self._line_counts[Cell.AUTOMATED]
        for line in range(self._n_lines):
            if player[line] == n:
                return Cell.PLAYER
            if automated[line] == n:
                return Cell.AUTOMATED
        return None

    def check_win(self) -> Optional[Outcome]:
        side = self.winner()
        return Outcome.for_side(side) if side is not None else None

    def outcome(self) -> Outcome:
        won = self.check_win()
        if won is not None:
            return won
        if self.is_full():
            return Outcome.TIE
        return Outcome.IN_PROGRESS

    def check_consistency(self) -> None:
        """Recount the grid and compare it with the incremental bookkeeping."""
        empty = sum(1 for cells in self._grid for cell in cells if cell is Cell.EMPTY)
        if empty != self._free_cells:
            raise ValueError(f"free-cell counter {self._free_cells} != {empty} empty cells")
        complete = 0
        for side in SIDES:
            expected = [0] * self._n_lines
            for row, cells in enumerate(self._grid):
                for col, cell in enumerate(cells):
                    if cell is side:
                        for line in self._cell_lines[row][col]:
                            expected[line] += 1
            if expected != self._line_counts[side]:
                raise ValueError(f"line counters out of sync for {side.name}")
            complete += sum(1 for c in expected if c == self.size)
        if complete != self._complete_lines:
            raise ValueError("complete-line counter out of sync")

    # -----------------------------
    # Snapshots
    # -----------------------------
    def snapshot(self) -> Tuple[Tuple[Cell, ...], ...]:
        return tuple(tuple(cells) for cells in self._grid)

    def to_array(self) -> np.ndarray:
        """Grid as an ``int8`` array holding ``Cell`` values."""
        return np.array(self._grid, dtype=np.int8)

    def rows(self, symbols: Symbols = Symbols()) -> List[str]:
        return ["".join(symbols.for_cell(cell) for cell in cells) for cells in self._grid]

    def __str__(self) -> str:
        return "\n".join(self.rows())

    def __repr__(self) -> str:
        return f"Board.from_rows({self.rows()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    __hash__ = None  # type: ignore[assignment]
