"""
Search interfaces and move-choice strategies for the automated side.

Strategies only ever touch the board through apply/undo pairs and return the
board exactly as they received it. Committing the chosen move is the caller's job.
"""
from __future__ import annotations

import logging
import math
import random
from abc import ABC, abstractmethod
from typing import Optional

from tictactoe.board import Board
from tictactoe.errors import GameAlreadyOver, NoMovesAvailable
from tictactoe.eval import Evaluator, get_evaluator, terminal_score
from tictactoe.types import Cell, Score, SearchConfig, SearchContext, SearchResult, Strategy

logger = logging.getLogger(__name__)

# Largest board on which an unpruned, unlimited search finishes quickly.
EXHAUSTIVE_SIZE_LIMIT: int = 3


def ensure_searchable(board: Board) -> None:
    """Reject boards the move selector must never be given."""
    if board.is_full():
        raise NoMovesAvailable("No empty cells left on the board")
    if board.has_line():
        raise GameAlreadyOver(f"Game already decided: {board.outcome().value}")


class SearchStrategy(ABC):
    """Abstract interface for move-choice strategies."""

    @abstractmethod
    def search(self, board: Board, ctx: SearchContext) -> SearchResult:  # pragma: no cover
        raise NotImplementedError


class RandomStrategy(SearchStrategy):
    """Samples uniform coordinates until one lands on an empty cell."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng: random.Random = rng if rng is not None else random.Random()

    def search(self, board: Board, ctx: SearchContext) -> SearchResult:
        ensure_searchable(board)
        tries = 0
        while True:
            row = self.rng.randrange(board.size)
            col = self.rng.randrange(board.size)
            tries += 1
            if board.cell(row, col) is Cell.EMPTY:
                return SearchResult(row, col, None, tries)


class MinimaxStrategy(SearchStrategy):
    """Exhaustive minimax, alpha-beta pruned when the context asks for it.

    Pruning skips the remaining siblings once ``beta <= alpha``; the
    top-level score and the selected cell are the same with and without it.
    """

    def __init__(self, evaluator: Optional[Evaluator] = None) -> None:
        self.evaluator: Evaluator = evaluator or get_evaluator()
        self.nodes: int = 0

    def search(self, board: Board, ctx: SearchContext) -> SearchResult:
        ensure_searchable(board)
        if not ctx.pruning and ctx.max_depth is None and board.size > EXHAUSTIVE_SIZE_LIMIT:
            logger.warning(
                "Unpruned search without a depth limit on a %dx%d board; cost grows "
                "factorially with the %d empty cells",
                board.size, board.size, board.free_cells,
            )
        self.nodes = 0
        best_score: float = -math.inf
        best_move = None
        alpha = ctx.alpha
        for row, col in board.empty_cells():
            board.apply(row, col, ctx.automated)
            try:
                score = self.minimax(board, ctx.next_ply(alpha, ctx.beta))
            finally:
                board.undo(row, col)
            if score > best_score:
                best_score = score
                best_move = (row, col)
            if ctx.pruning and best_score > alpha:
                alpha = best_score
        row, col = best_move  # type: ignore[misc]
        return SearchResult(row, col, int(best_score), self.nodes)

    def minimax(self, board: Board, ctx: SearchContext) -> Score:
        """Value of ``board`` with ``ctx.side_to_move`` to play."""
        self.nodes += 1
        score = terminal_score(board, ctx)
        if score is not None:
            return score
        if ctx.depth_exhausted:
            return self.evaluator.evaluate(board, ctx)

        side = ctx.side_to_move
        alpha, beta = ctx.alpha, ctx.beta
        best: float = -math.inf if ctx.maximizing else math.inf
        for row, col in board.empty_cells():
            board.apply(row, col, side)
            try:
                value = self.minimax(board, ctx.next_ply(alpha, beta))
            finally:
                board.undo(row, col)
            if ctx.maximizing:
                if value > best:
                    best = value
                if ctx.pruning and best > alpha:
                    alpha = best
            else:
                if value < best:
                    best = value
                if ctx.pruning and best < beta:
                    beta = best
            if ctx.pruning and beta <= alpha:
                break
        return int(best)


def get_search_strategy(config: SearchConfig,
                        rng: Optional[random.Random] = None,
                        evaluator: Optional[Evaluator] = None) -> SearchStrategy:
    """Factory for the strategy described by ``config``."""
    if config.strategy is Strategy.RANDOM:
        return RandomStrategy(rng)
    if config.parallel:
        # Local import to avoid a circular import with tictactoe.parallel
        from tictactoe.parallel import ParallelMinimaxStrategy

        return ParallelMinimaxStrategy(evaluator, workers=config.workers)
    return MinimaxStrategy(evaluator)


__all__ = [
    "SearchStrategy",
    "RandomStrategy",
    "MinimaxStrategy",
    "ensure_searchable",
    "get_search_strategy",
]
