import random

from tictactoe import (
    Board,
    Cell,
    MinimaxStrategy,
    SearchConfig,
    SearchContext,
    get_search_strategy,
    select_and_apply_automated_move,
)
from tictactoe.parallel import ParallelMinimaxStrategy


def random_position(rng, plies):
    while True:
        board = Board(3)
        side = Cell.PLAYER
        for _ in range(plies):
            row, col = rng.choice(board.empty_cells())
            board.apply(row, col, side)
            side = side.other()
        if not board.outcome().is_terminal:
            return board


def test_factory_returns_parallel_strategy():
    strategy = get_search_strategy(SearchConfig(parallel=True, workers=2))
    assert isinstance(strategy, ParallelMinimaxStrategy)
    assert strategy.workers == 2


def test_parallel_matches_sequential():
    rng = random.Random(12)
    parallel = ParallelMinimaxStrategy(workers=2)
    sequential = MinimaxStrategy()
    for _ in range(4):
        board = random_position(rng, rng.choice([2, 3, 4]))
        before = board.snapshot()
        for pruning in (False, True):
            ctx = SearchContext.root(SearchConfig(pruning=pruning))
            expected = sequential.search(board, ctx)
            result = parallel.search(board, ctx)
            assert result.score == expected.score
            assert result.coord == expected.coord
        assert board.snapshot() == before


def test_parallel_respects_depth_limit():
    board = Board.from_rows(["   ", " o ", "xx "])
    ctx = SearchContext.root(SearchConfig(max_depth=2))
    result = ParallelMinimaxStrategy(workers=2).search(board, ctx)
    assert result.coord == (2, 2)
    assert result.score == -1


def test_single_worker_runs_in_process():
    board = Board.from_rows(["xx ", " o ", "   "])
    result = ParallelMinimaxStrategy(workers=1).search(board, SearchContext.root(SearchConfig()))
    assert result.coord == (0, 2)


def test_parallel_selection_commits_one_move():
    board = Board.from_rows(["x  ", "   ", "   "])
    row, col = select_and_apply_automated_move(board, SearchConfig(parallel=True, workers=2))
    assert board[row, col] is Cell.AUTOMATED
    assert board.free_cells == 7
    board.check_consistency()
