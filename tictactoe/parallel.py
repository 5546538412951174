"""
Parallel root split for minimax: one worker task per first-move candidate.

Each task receives its own pickled copy of the board, so backtracking in one
branch can never be observed by another. Branches are searched with a full
alpha-beta window, which makes every root score exact and the chosen cell
identical to the sequential search.
"""
from __future__ import annotations

import logging
import math
from multiprocessing import Pool
from typing import List, Optional, Tuple

from tictactoe.board import Board
from tictactoe.eval import Evaluator
from tictactoe.search import MinimaxStrategy, ensure_searchable
from tictactoe.types import Coord, Score, SearchContext, SearchResult

logger = logging.getLogger(__name__)

BranchTask = Tuple[Board, Coord, SearchContext, Optional[Evaluator]]


def _search_branch(task: BranchTask) -> Tuple[Score, int]:
    """Worker entry point: score one root move on a private board."""
    board, (row, col), ctx, evaluator = task
    strategy = MinimaxStrategy(evaluator)
    board.apply(row, col, ctx.automated)
    score = strategy.minimax(board, ctx.next_ply(-math.inf, math.inf))
    return score, strategy.nodes


class ParallelMinimaxStrategy(MinimaxStrategy):
    """Minimax with root moves distributed over a process pool."""

    def __init__(self, evaluator: Optional[Evaluator] = None, workers: int = 2) -> None:
        super().__init__(evaluator)
        self.workers: int = max(1, int(workers))

    def search(self, board: Board, ctx: SearchContext) -> SearchResult:
        ensure_searchable(board)
        moves: List[Coord] = board.empty_cells()
        if self.workers == 1 or len(moves) == 1:
            return super().search(board, ctx)

        tasks: List[BranchTask] = [(board.copy(), move, ctx, self.evaluator) for move in moves]
        processes = min(self.workers, len(tasks))
        logger.debug("Searching %d root moves on %d processes", len(tasks), processes)
        with Pool(processes) as pool:
            results = pool.map(_search_branch, tasks)

        self.nodes = sum(nodes for _, nodes in results)
        best_index = 0
        for i, (score, _) in enumerate(results):
            if score > results[best_index][0]:
                best_index = i
        row, col = moves[best_index]
        return SearchResult(row, col, results[best_index][0], self.nodes)
