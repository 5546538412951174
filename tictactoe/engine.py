"""
Entry points used by the game driver (UI / input layer).

The driver applies the human move, asks for the outcome, and when the game is
still running asks the move selector to pick and apply the automated reply.
"""
from __future__ import annotations

import logging
import random
import time
from typing import Optional

from tictactoe.board import Board
from tictactoe.errors import GameAlreadyOver
from tictactoe.eval import Evaluator
from tictactoe.search import SearchStrategy, get_search_strategy
from tictactoe.types import Cell, Coord, Outcome, SearchConfig, SearchContext, SearchResult

logger = logging.getLogger(__name__)


class MoveSelector:
    """Chooses and commits moves for the configured side."""

    def __init__(self, config: Optional[SearchConfig] = None,
                 rng: Optional[random.Random] = None,
                 evaluator: Optional[Evaluator] = None) -> None:
        self.config: SearchConfig = config or SearchConfig()
        self.strategy: SearchStrategy = get_search_strategy(self.config, rng=rng, evaluator=evaluator)

    def select(self, board: Board) -> SearchResult:
        """Best cell for ``config.automated``; the board is left untouched."""
        return self.strategy.search(board, SearchContext.root(self.config))

    def select_and_apply(self, board: Board) -> SearchResult:
        """Select a cell and commit the configured side there."""
        start_time = time.time()
        result = self.select(board)
        board.apply(result.row, result.col, self.config.automated)
        logger.debug(
            "%s plays (%d, %d) via %s: score=%s nodes=%d time=%.3fs",
            self.config.automated.name, result.row, result.col,
            self.config.strategy.value, result.score, result.nodes,
            time.time() - start_time,
        )
        return result


def get_move_selector(config: Optional[SearchConfig] = None,
                      rng: Optional[random.Random] = None) -> MoveSelector:
    """Get a new move selector instance."""
    return MoveSelector(config, rng=rng)


def apply_player_move(board: Board, row: int, col: int) -> Outcome:
    """Apply the human move and report the resulting outcome.

    Raises IllegalMove for an occupied or out-of-range cell and
    GameAlreadyOver once the game has ended.
    """
    current = board.outcome()
    if current.is_terminal:
        raise GameAlreadyOver(f"Game already decided: {current.value}")
    board.apply(row, col, Cell.PLAYER)
    return board.outcome()


def select_and_apply_automated_move(board: Board,
                                    config: Optional[SearchConfig] = None,
                                    rng: Optional[random.Random] = None) -> Coord:
    """Pick and commit the automated move; raises NoMovesAvailable on a full board."""
    return MoveSelector(config, rng=rng).select_and_apply(board).coord


def outcome(board: Board) -> Outcome:
    return board.outcome()


__all__ = [
    "MoveSelector",
    "get_move_selector",
    "apply_player_move",
    "select_and_apply_automated_move",
    "outcome",
]
