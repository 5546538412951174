"""
Scoring conventions and the static evaluator used at the depth cutoff.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from tictactoe.board import Board
from tictactoe.types import Score, SearchContext

WIN_SCORE: Score = 10
TIE_SCORE: Score = 0
DEPTH_BIAS: Score = 1


def terminal_score(board: Board, ctx: SearchContext) -> Optional[Score]:
    """Score of a finished position, or None while play can continue.

    A completed line belongs to the side that just moved, so it is a loss
    for whoever is now to move.
    """
    if board.has_line():
        return -WIN_SCORE if ctx.maximizing else WIN_SCORE
    if board.is_full():
        return TIE_SCORE
    return None


class Evaluator(ABC):
    """Static evaluation of a non-terminal position at the depth limit."""

    @abstractmethod
    def evaluate(self, board: Board, ctx: SearchContext) -> Score:  # pragma: no cover
        raise NotImplementedError


class DepthBiasEvaluator(Evaluator):
    """Constant -1 when maximizing, +1 when minimizing.

    Rewards whichever side is not about to move. It only breaks ties in a
    truncated search and says nothing about how good the position is.
    """

    def evaluate(self, board: Board, ctx: SearchContext) -> Score:
        return -DEPTH_BIAS if ctx.maximizing else DEPTH_BIAS


def get_evaluator() -> Evaluator:
    return DepthBiasEvaluator()


__all__ = [
    "WIN_SCORE",
    "TIE_SCORE",
    "DEPTH_BIAS",
    "terminal_score",
    "Evaluator",
    "DepthBiasEvaluator",
    "get_evaluator",
]
