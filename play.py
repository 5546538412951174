from __future__ import annotations

import argparse
import random
from typing import Optional, Tuple

from config import TicTacToeConfig, get_config, load_config_from_file, setup_logging
from tictactoe import (
    GameAlreadyOver,
    GameSession,
    IllegalMove,
    Outcome,
    render_board,
    outcome_message,
)


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Play N x N tic-tac-toe against the computer")
    ap.add_argument("--config", default=None, help="JSON configuration file")
    ap.add_argument("--size", type=int, default=None, help="Board side length (>= 3)")
    ap.add_argument("--strategy", choices=["random", "minimax"], default=None, help="Computer strategy")
    ap.add_argument("--no-pruning", action="store_true", help="Disable alpha-beta pruning")
    ap.add_argument("--depth", type=int, default=None, help="Maximum search depth (default: unlimited)")
    ap.add_argument("--parallel", action="store_true", help="Search root moves in worker processes")
    ap.add_argument("--workers", type=int, default=None, help="Number of worker processes")
    ap.add_argument("--seed", type=int, default=None, help="Seed for the random strategy")
    ap.add_argument("--computer-first", action="store_true", help="Computer opens every game")
    ap.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    return ap.parse_args(argv)


def build_config(args: argparse.Namespace) -> TicTacToeConfig:
    """Merge command line overrides into the file or environment configuration."""
    config = load_config_from_file(args.config) if args.config else get_config()
    engine = {}
    if args.strategy is not None:
        engine["strategy"] = args.strategy
    if args.no_pruning:
        engine["pruning"] = False
    if args.depth is not None:
        engine["max_depth"] = args.depth
    if args.parallel:
        engine["parallel"] = True
    if args.workers is not None:
        engine["workers"] = args.workers
    if args.seed is not None:
        engine["seed"] = args.seed
    board = {}
    if args.size is not None:
        board["size"] = args.size
    if args.computer_first:
        board["human_first"] = False
    logging_updates = {"log_level": args.log_level} if args.log_level else {}
    config.update_from_dict({"engine": engine, "board": board, "logging": logging_updates})
    return config


def parse_move(text: str) -> Optional[Tuple[int, int]]:
    """Parse ``"row col"`` or ``"row,col"``; None when malformed."""
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def ask_restart() -> bool:
    answer = input("Restart? [y/N] ").strip().lower()
    return answer in ("y", "yes")


def run(config: TicTacToeConfig) -> None:
    symbols = config.board.symbols()
    rng = random.Random(config.engine.seed)
    session = GameSession(
        size=config.board.size,
        config=config.engine.to_search_config(),
        rng=rng,
        human_first=config.board.human_first,
    )
    show_indices = config.ui.show_indices

    print(f"You are {symbols.player.upper()}. Enter moves as 'row col', 'h' for a hint, 'q' to quit.")
    while True:
        print()
        print(render_board(session.board, symbols, show_indices, highlight=session.last_move))
        text = input("Your move: ").strip().lower()
        if text in ("q", "quit", "exit"):
            break
        if text in ("h", "hint"):
            row, col = session.hint()
            print(f"Hint: {row} {col}")
            continue
        move = parse_move(text)
        if move is None:
            print("Enter a row and a column, e.g. '1 2'.")
            continue
        try:
            turn = session.play(*move)
        except IllegalMove as e:
            print(e)
            continue
        except GameAlreadyOver:
            session.reset()
            continue
        if turn.automated_move is not None:
            print(f"Computer plays {turn.automated_move[0]} {turn.automated_move[1]}")
        if turn.outcome.is_terminal:
            print()
            print(render_board(session.board, symbols, show_indices))
            print(outcome_message(turn.outcome, symbols))
            if not ask_restart():
                break
            session.reset()

    print(
        f"Results - you: {session.tally[Outcome.PLAYER_WON]}, "
        f"computer: {session.tally[Outcome.AUTOMATED_WON]}, "
        f"ties: {session.tally[Outcome.TIE]}"
    )


def main(argv=None) -> None:
    args = parse_args(argv)
    config = build_config(args)
    setup_logging(config.logging.log_level)
    try:
        run(config)
    except (KeyboardInterrupt, EOFError):
        print()


if __name__ == "__main__":
    main()
