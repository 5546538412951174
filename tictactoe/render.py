"""
Text rendering of boards and results for terminal drivers.
"""
from __future__ import annotations

from typing import List, Optional

from tictactoe.board import Board
from tictactoe.types import Coord, Outcome, Symbols


def render_board(board: Board, symbols: Symbols = Symbols(), show_indices: bool = True,
                 highlight: Optional[Coord] = None) -> str:
    """Draw the grid with separators; ``highlight`` brackets one cell."""
    n = board.size
    width = len(str(n - 1))
    lines: List[str] = []
    if show_indices:
        header = " ".join(f" {col:>{width}} " for col in range(n))
        lines.append(" " * (width + 1) + header)
    separator = "+".join("-" * (width + 2) for _ in range(n))
    for row in range(n):
        cells = []
        for col in range(n):
            char = symbols.for_cell(board.cell(row, col))
            if highlight == (row, col):
                cells.append(f"[{char:^{width}}]")
            else:
                cells.append(f" {char:^{width}} ")
        prefix = f"{row:>{width}} " if show_indices else ""
        lines.append(prefix + "|".join(cells))
        if row < n - 1:
            lines.append((" " * (width + 1) if show_indices else "") + separator)
    return "\n".join(lines)


def outcome_message(outcome: Outcome, symbols: Symbols = Symbols()) -> str:
    if outcome is Outcome.PLAYER_WON:
        return f"{symbols.player.upper()} Won!"
    if outcome is Outcome.AUTOMATED_WON:
        return f"{symbols.automated.upper()} Won!"
    if outcome is Outcome.TIE:
        return "It's a Tie."
    return "Game in progress."
