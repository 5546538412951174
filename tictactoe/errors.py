"""
Exceptions raised by the board and the move selector.
"""
from __future__ import annotations


class TicTacToeError(Exception):
    """Base class for engine errors."""


class IllegalMove(TicTacToeError, ValueError):
    """Target cell is occupied or outside the grid."""

    def __init__(self, row: int, col: int, reason: str) -> None:
        super().__init__(f"Illegal move at ({row}, {col}): {reason}")
        self.row = row
        self.col = col
        self.reason = reason


class NoMovesAvailable(TicTacToeError):
    """Move selection was requested on a full board."""


class GameAlreadyOver(TicTacToeError):
    """A move was requested after the game reached a terminal outcome."""
