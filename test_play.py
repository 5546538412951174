import pytest

import config as cfg
import play
from tictactoe import Board, Outcome, Strategy, Symbols, outcome_message, render_board


@pytest.fixture(autouse=True)
def fresh_config():
    cfg.reset_config()
    yield
    cfg.reset_config()


def test_parse_move():
    assert play.parse_move("1 2") == (1, 2)
    assert play.parse_move(" 0,2 ") == (0, 2)
    assert play.parse_move("1") is None
    assert play.parse_move("a b") is None


def test_command_line_overrides_config():
    args = play.parse_args(["--size", "4", "--strategy", "random", "--no-pruning",
                            "--depth", "3", "--seed", "9", "--computer-first"])
    config = play.build_config(args)
    assert config.board.size == 4
    assert config.board.human_first is False
    assert config.engine.strategy is Strategy.RANDOM
    assert config.engine.pruning is False
    assert config.engine.max_depth == 3
    assert config.engine.seed == 9


def test_scripted_game_against_random_opponent(monkeypatch, capsys):
    answers = iter(["h", "nonsense", "0 0", "0 0", "q"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    play.main(["--strategy", "random", "--seed", "1"])
    out = capsys.readouterr().out
    assert "Hint:" in out
    assert "Enter a row and a column" in out
    assert "Illegal move at (0, 0)" in out
    assert "Results - you: 0, computer: 0, ties: 0" in out


def test_render_board_with_indices_and_highlight():
    board = Board.from_rows(["x  ", " o ", "   "])
    text = render_board(board, highlight=(1, 1))
    lines = text.splitlines()
    assert lines[0].split() == ["0", "1", "2"]
    assert lines[1].startswith("0  x ")
    assert "[o]" in text
    assert len(lines) == 6


def test_render_board_without_indices_uses_symbols():
    board = Board.from_rows(["X..", "...", "..O"], Symbols("X", "O", "."))
    text = render_board(board, Symbols("X", "O", "."), show_indices=False)
    assert text.splitlines()[0] == " X | . | . "
    assert text.splitlines()[-1] == " . | . | O "


def test_outcome_messages():
    assert outcome_message(Outcome.PLAYER_WON) == "X Won!"
    assert outcome_message(Outcome.AUTOMATED_WON) == "O Won!"
    assert outcome_message(Outcome.TIE) == "It's a Tie."
