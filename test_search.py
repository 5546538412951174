import logging
import random

import pytest

from tictactoe import (
    Board,
    Cell,
    Evaluator,
    GameAlreadyOver,
    MinimaxStrategy,
    NoMovesAvailable,
    RandomStrategy,
    SearchConfig,
    SearchContext,
    Strategy,
    get_search_strategy,
)
from tictactoe.eval import WIN_SCORE, terminal_score

CORNERS_AND_CENTER = {(0, 0), (0, 2), (2, 0), (2, 2), (1, 1)}


# Helpers

def minimax(board, evaluator=None, **config):
    strategy = MinimaxStrategy(evaluator)
    return strategy.search(board, SearchContext.root(SearchConfig(**config)))


def random_position(rng, size=3, plies=2):
    """Random alternating play that stops before the game is decided."""
    while True:
        board = Board(size)
        side = Cell.PLAYER
        for _ in range(plies):
            row, col = rng.choice(board.empty_cells())
            board.apply(row, col, side)
            side = side.other()
        if not board.outcome().is_terminal:
            return board


class ExplodingEvaluator(Evaluator):
    def evaluate(self, board, ctx):
        raise RuntimeError("evaluation failed")


def test_empty_board_unpruned_scores_a_draw_with_corner_or_center():
    board = Board(3)
    result = minimax(board, pruning=False)
    assert result.score == 0
    assert result.coord in CORNERS_AND_CENTER
    assert board == Board(3)


def test_empty_board_pruned_matches_unpruned():
    result = minimax(Board(3), pruning=True)
    assert result.score == 0
    assert result.coord == (0, 0)


@pytest.mark.parametrize("pruning", [False, True])
def test_blocks_opponent_row(pruning):
    board = Board.from_rows(["xx ", " o ", "   "])
    result = minimax(board, pruning=pruning)
    assert result.coord == (0, 2)


@pytest.mark.parametrize("pruning", [False, True])
def test_blocks_threat_that_is_not_the_first_empty_cell(pruning):
    board = Board.from_rows(["   ", " o ", "xx "])
    result = minimax(board, pruning=pruning)
    assert result.coord == (2, 2)
    assert result.score == 0


def test_takes_the_only_winning_move():
    board = Board.from_rows(["oo ", "xx ", "x  "])
    result = minimax(board, pruning=False)
    assert result.coord == (0, 2)
    assert result.score == WIN_SCORE


def test_depth_one_falls_back_to_static_bias():
    board = Board.from_rows(["   ", " o ", "xx "])
    result = minimax(board, max_depth=1)
    # Every reply is cut off with the minimizer to move, scored +1
    assert result.score == 1
    assert result.coord == (0, 0)


def test_depth_two_sees_the_threat():
    board = Board.from_rows(["   ", " o ", "xx "])
    result = minimax(board, max_depth=2, pruning=False)
    assert result.coord == (2, 2)
    assert result.score == -1


def test_pruned_and_unpruned_agree_on_random_positions():
    rng = random.Random(99)
    for _ in range(25):
        board = random_position(rng, plies=rng.choice([2, 3, 4, 5]))
        plain = minimax(board, pruning=False)
        pruned = minimax(board, pruning=True)
        assert plain.score == pruned.score
        assert plain.coord == pruned.coord
        assert pruned.nodes <= plain.nodes


def test_pruned_and_unpruned_agree_with_depth_limits_on_four_by_four():
    rng = random.Random(5)
    for _ in range(5):
        board = random_position(rng, size=4, plies=6)
        for depth in (1, 2, 3):
            plain = minimax(board, pruning=False, max_depth=depth)
            pruned = minimax(board, pruning=True, max_depth=depth)
            assert plain.score == pruned.score
            assert plain.coord == pruned.coord


def test_pruning_visits_fewer_nodes():
    board = Board.from_rows(["x  ", "   ", "   "])
    plain = minimax(board, pruning=False)
    pruned = minimax(board, pruning=True)
    assert pruned.nodes < plain.nodes


def test_search_leaves_board_unchanged():
    rng = random.Random(3)
    for _ in range(10):
        board = random_position(rng, plies=3)
        before = board.snapshot()
        free = board.free_cells
        minimax(board, pruning=rng.random() < 0.5)
        assert board.snapshot() == before
        assert board.free_cells == free
        board.check_consistency()


def test_exception_during_search_restores_board():
    board = Board(3)
    with pytest.raises(RuntimeError):
        minimax(board, evaluator=ExplodingEvaluator(), max_depth=1)
    assert board == Board(3)
    board.check_consistency()


def test_search_for_player_side():
    board = Board.from_rows(["xx ", " o ", "o  "])
    result = minimax(board, automated=Cell.PLAYER)
    assert result.coord == (0, 2)
    assert result.score == WIN_SCORE


@pytest.mark.parametrize("strategy", [Strategy.MINIMAX, Strategy.RANDOM])
def test_full_board_raises_no_moves(strategy):
    board = Board.from_rows(["xox", "xoo", "oxx"])
    search = get_search_strategy(SearchConfig(strategy=strategy), rng=random.Random(0))
    with pytest.raises(NoMovesAvailable):
        search.search(board, SearchContext.root(SearchConfig()))


@pytest.mark.parametrize("strategy", [Strategy.MINIMAX, Strategy.RANDOM])
def test_decided_board_raises_game_over(strategy):
    board = Board.from_rows(["xxx", "oo ", "   "])
    search = get_search_strategy(SearchConfig(strategy=strategy), rng=random.Random(0))
    with pytest.raises(GameAlreadyOver):
        search.search(board, SearchContext.root(SearchConfig()))


def test_random_strategy_finds_the_single_empty_cell():
    board = Board.from_rows(["xox", "oxo", "ox "])
    strategy = RandomStrategy(random.Random(1234))
    ctx = SearchContext.root(SearchConfig(strategy=Strategy.RANDOM))
    for _ in range(10000):
        result = strategy.search(board, ctx)
        assert result.coord == (2, 2)
        assert result.score is None
    assert board.free_cells == 1


def test_random_strategy_is_reproducible_with_a_seed():
    board = Board(5)
    ctx = SearchContext.root(SearchConfig(strategy=Strategy.RANDOM))
    a = RandomStrategy(random.Random(42))
    b = RandomStrategy(random.Random(42))
    picks_a = [a.search(board, ctx).coord for _ in range(20)]
    picks_b = [b.search(board, ctx).coord for _ in range(20)]
    assert picks_a == picks_b
    assert len(set(picks_a)) > 1


def test_terminal_score_convention():
    won = Board.from_rows(["xxx", "oo ", "   "])
    ctx = SearchContext.root(SearchConfig())
    assert terminal_score(won, ctx) == -WIN_SCORE
    assert terminal_score(won, ctx.next_ply(ctx.alpha, ctx.beta)) == WIN_SCORE
    assert terminal_score(Board.from_rows(["xox", "xoo", "oxx"]), ctx) == 0
    assert terminal_score(Board(3), ctx) is None


def test_unpruned_unlimited_search_on_large_board_logs_warning(caplog):
    board = Board.from_rows(["xoxo", "xoxo", "oxox", "o   "])
    with caplog.at_level(logging.WARNING, logger="tictactoe.search"):
        result = minimax(board, pruning=False)
    assert "Unpruned search" in caplog.text
    assert result.coord in {(3, 1), (3, 2), (3, 3)}


def test_factory_builds_matching_strategy():
    assert isinstance(get_search_strategy(SearchConfig()), MinimaxStrategy)
    assert isinstance(get_search_strategy(SearchConfig(strategy="random")), RandomStrategy)
