"""
Game session management: one human against the automated side.
"""
from __future__ import annotations

import dataclasses
import logging
import random
from collections import Counter
from typing import Dict, Optional

from tictactoe.board import Board
from tictactoe.engine import MoveSelector, apply_player_move
from tictactoe.types import Cell, Coord, Outcome, SearchConfig, Strategy, TurnResult

logger = logging.getLogger(__name__)


class GameSession:
    """Manages the board, turn order, restarts and the running tally."""

    def __init__(self, size: int = 3, config: Optional[SearchConfig] = None,
                 rng: Optional[random.Random] = None, human_first: bool = True) -> None:
        self.config: SearchConfig = config or SearchConfig()
        if self.config.automated is not Cell.AUTOMATED:
            raise ValueError("A session's search config must play for Cell.AUTOMATED")
        self.board = Board(size)
        self.selector = MoveSelector(self.config, rng=rng)
        self.hint_selector = MoveSelector(
            dataclasses.replace(self.config, strategy=Strategy.MINIMAX, automated=Cell.PLAYER)
        )
        self.human_first = human_first
        self.last_move: Optional[Coord] = None
        self.tally: Dict[Outcome, int] = Counter()
        self.reset(human_first)

    def reset(self, human_first: Optional[bool] = None) -> Optional[Coord]:
        """Start a new game; returns the automated opening move, if it opens."""
        if human_first is not None:
            self.human_first = human_first
        self.board.reset()
        self.last_move = None
        if self.human_first:
            return None
        self.last_move = self.selector.select_and_apply(self.board).coord
        return self.last_move

    def play(self, row: int, col: int) -> TurnResult:
        """Apply the human move and, if the game goes on, the automated reply."""
        result = apply_player_move(self.board, row, col)
        self.last_move = (row, col)
        automated_move: Optional[Coord] = None
        if not result.is_terminal:
            automated_move = self.selector.select_and_apply(self.board).coord
            self.last_move = automated_move
            result = self.board.outcome()
        if result.is_terminal:
            self.tally[result] += 1
            logger.info("Game over after %d moves: %s", self.move_count, result.value)
        return TurnResult((row, col), automated_move, result)

    def hint(self) -> Coord:
        """Best cell for the human; the board is not changed."""
        return self.hint_selector.select(self.board).coord

    @property
    def move_count(self) -> int:
        return self.board.size * self.board.size - self.board.free_cells

    def outcome(self) -> Outcome:
        return self.board.outcome()

    def is_over(self) -> bool:
        return self.board.outcome().is_terminal
