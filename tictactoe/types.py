"""
Type definitions for the tic-tac-toe engine.

This module provides:
- Enumerations for cell contents, game outcomes and move strategies
- Dataclasses for search configuration, search state and results
- Type aliases shared by the board and the search code
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional, Tuple

# Basic type aliases
Coord = Tuple[int, int]  # (row, col), both in [0, size)
Grid = List[List["Cell"]]
Score = int


class Cell(IntEnum):
    """Content of a single grid position."""

    EMPTY = 0
    PLAYER = 1
    AUTOMATED = 2

    def other(self) -> "Cell":
        """Return the opposing side."""
        if self is Cell.PLAYER:
            return Cell.AUTOMATED
        if self is Cell.AUTOMATED:
            return Cell.PLAYER
        raise ValueError("EMPTY is not a side")


SIDES = (Cell.PLAYER, Cell.AUTOMATED)


class Outcome(Enum):
    """State of a game; every value except IN_PROGRESS is terminal."""

    IN_PROGRESS = "in_progress"
    PLAYER_WON = "player_won"
    AUTOMATED_WON = "automated_won"
    TIE = "tie"

    @property
    def is_terminal(self) -> bool:
        return self is not Outcome.IN_PROGRESS

    @classmethod
    def for_side(cls, side: Cell) -> "Outcome":
        """Map a winning side to its outcome."""
        if side is Cell.PLAYER:
            return cls.PLAYER_WON
        if side is Cell.AUTOMATED:
            return cls.AUTOMATED_WON
        raise ValueError("EMPTY cannot win")


class Strategy(str, Enum):
    """Move-choice strategies for the automated side."""

    RANDOM = "random"
    MINIMAX = "minimax"


@dataclass(frozen=True)
class Symbols:
    """Characters used to parse and print a board."""

    player: str = "x"
    automated: str = "o"
    empty: str = " "

    def __post_init__(self) -> None:
        chars = (self.player, self.automated, self.empty)
        if any(not isinstance(c, str) or len(c) != 1 for c in chars):
            raise ValueError("Symbols must be single characters")
        if len(set(chars)) != 3:
            raise ValueError("Symbols must be distinct")

    def for_cell(self, cell: Cell) -> str:
        if cell is Cell.PLAYER:
            return self.player
        if cell is Cell.AUTOMATED:
            return self.automated
        return self.empty

    def to_cell(self, char: str) -> Cell:
        if char == self.player:
            return Cell.PLAYER
        if char == self.automated:
            return Cell.AUTOMATED
        if char == self.empty:
            return Cell.EMPTY
        raise ValueError(f"Unknown board symbol: {char!r}")


@dataclass(frozen=True)
class SearchConfig:
    """
    Configuration handed to the move selector on every call.

    Nothing here is stored on the board. ``automated`` names the side the
    search plays for; set it to ``Cell.PLAYER`` to compute a hint for the human.
    """

    strategy: Strategy = Strategy.MINIMAX
    pruning: bool = True
    max_depth: Optional[int] = None
    automated: Cell = Cell.AUTOMATED
    parallel: bool = False
    workers: int = 1

    def __post_init__(self) -> None:
        """Validate the configuration after initialization."""
        if not isinstance(self.strategy, Strategy):
            object.__setattr__(self, "strategy", Strategy(self.strategy))
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError("max_depth must be None or at least 1")
        if self.automated not in SIDES:
            raise ValueError("automated must be Cell.PLAYER or Cell.AUTOMATED")
        if self.workers < 1:
            raise ValueError("workers must be at least 1")

    @property
    def opponent(self) -> Cell:
        return self.automated.other()


@dataclass
class SearchContext:
    """Per-ply search state threaded through the recursion."""

    automated: Cell
    opponent: Cell
    max_depth: Optional[int] = None
    pruning: bool = True
    depth: int = 0
    alpha: float = -math.inf
    beta: float = math.inf
    maximizing: bool = True

    @classmethod
    def root(cls, config: SearchConfig) -> "SearchContext":
        """Context for the position the automated side is about to move in."""
        return cls(
            automated=config.automated,
            opponent=config.opponent,
            max_depth=config.max_depth,
            pruning=config.pruning,
        )

    @property
    def side_to_move(self) -> Cell:
        return self.automated if self.maximizing else self.opponent

    @property
    def depth_exhausted(self) -> bool:
        return self.max_depth is not None and self.depth >= self.max_depth

    def next_ply(self, alpha: float, beta: float) -> "SearchContext":
        """Context one ply deeper, with the other side to move."""
        return SearchContext(
            automated=self.automated,
            opponent=self.opponent,
            max_depth=self.max_depth,
            pruning=self.pruning,
            depth=self.depth + 1,
            alpha=alpha,
            beta=beta,
            maximizing=not self.maximizing,
        )


@dataclass(frozen=True)
class SearchResult:
    """A chosen cell with its top-level score (None for random play)."""

    row: int
    col: int
    score: Optional[Score] = None
    nodes: int = 0

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)


@dataclass(frozen=True)
class TurnResult:
    """Moves made during one human turn and the outcome afterwards."""

    player_move: Coord
    automated_move: Optional[Coord]
    outcome: Outcome
