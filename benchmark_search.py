#!/usr/bin/env python3
"""
Compare plain and alpha-beta minimax on seeded random positions.
Reports node counts and timings, and checks that both agree on the score.
"""

import random
import time

import numpy as np

from tictactoe import Board, Cell, MinimaxStrategy, SearchConfig, SearchContext


def random_position(size, plies, rng):
    """Play ``plies`` random alternating moves, avoiding finished positions."""
    while True:
        board = Board(size)
        side = Cell.PLAYER
        for _ in range(plies):
            row, col = rng.choice(board.empty_cells())
            board.apply(row, col, side)
            side = side.other()
        if not board.outcome().is_terminal:
            return board


def run_search(board, config):
    strategy = MinimaxStrategy()
    start_time = time.time()
    result = strategy.search(board, SearchContext.root(config))
    return result, time.time() - start_time


def benchmark_pruning(size=3, plies=2, positions=20, seed=7):
    """Benchmark pruned vs unpruned search on the same positions"""
    print(f"Pruned vs unpruned minimax, {size}x{size}, {plies} plies played")
    print("-" * 50)

    rng = random.Random(seed)
    boards = [random_position(size, plies, rng) for _ in range(positions)]
    nodes = {True: [], False: []}
    times = {True: [], False: []}
    mismatches = 0

    for board in boards:
        scores = {}
        for pruning in (False, True):
            result, elapsed = run_search(board, SearchConfig(pruning=pruning))
            nodes[pruning].append(result.nodes)
            times[pruning].append(elapsed)
            scores[pruning] = result.score
        if scores[True] != scores[False]:
            mismatches += 1

    for pruning in (False, True):
        n = np.array(nodes[pruning])
        t = np.array(times[pruning])
        label = "alpha-beta" if pruning else "plain     "
        print(f"{label}: nodes mean {n.mean():10.0f}  median {np.median(n):10.0f}  "
              f"time mean {t.mean():.4f}s")
    ratio = np.array(nodes[False]) / np.maximum(1, np.array(nodes[True]))
    print(f"Node reduction: {ratio.mean():.1f}x on average")
    print(f"Score mismatches: {mismatches}")


def benchmark_depth_limits(size=4, plies=6, seed=11):
    """Show how depth limits bound the cost on larger boards"""
    print(f"\nDepth-limited alpha-beta, {size}x{size}, {plies} plies played")
    print("-" * 50)

    board = random_position(size, plies, random.Random(seed))
    for depth in (1, 2, 3, 4):
        result, elapsed = run_search(board, SearchConfig(max_depth=depth))
        print(f"depth {depth}: move ({result.row}, {result.col}) score {result.score:3d} "
              f"nodes {result.nodes:8d} time {elapsed:.3f}s")


if __name__ == "__main__":
    print("Tic-tac-toe search benchmark")
    print("=" * 50)
    benchmark_pruning()
    benchmark_depth_limits()
