"""N x N tic-tac-toe against a minimax opponent.

Usage examples:
    from tictactoe import Board, apply_player_move, select_and_apply_automated_move
    from tictactoe import SearchConfig, Strategy, MoveSelector
    from tictactoe import GameSession
"""
from __future__ import annotations

# Core types
from .types import (
    Cell,
    Outcome,
    Strategy,
    Symbols,
    SearchConfig,
    SearchContext,
    SearchResult,
    TurnResult,
)
from .errors import TicTacToeError, IllegalMove, NoMovesAvailable, GameAlreadyOver
from .board import Board

# Search
from .eval import Evaluator, DepthBiasEvaluator, get_evaluator
from .search import SearchStrategy, RandomStrategy, MinimaxStrategy, get_search_strategy

# Driver API
from .engine import (
    MoveSelector,
    get_move_selector,
    apply_player_move,
    select_and_apply_automated_move,
    outcome,
)
from .game import GameSession
from .render import render_board, outcome_message

__version__ = "1.0.0"
