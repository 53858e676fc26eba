"""Settings, difficulty profiles, CLI parsing, and game wiring."""

import pytest

from Gomoku_AI import main as main_mod
from Gomoku_AI.AiPlayer import AiPlayer
from Gomoku_AI.Board import BLACK, WHITE
from Gomoku_AI.Player import HumanPlayer
from Gomoku_AI.ai import difficulty
from Gomoku_AI.utils.cli import parse_args
from Gomoku_AI.utils.config import DEFAULT_SETTINGS, load_settings


def test_missing_settings_file_gives_defaults(tmp_path):
    assert load_settings(tmp_path / "absent.yaml") == DEFAULT_SETTINGS


def test_shipped_settings_load():
    settings = load_settings()
    assert settings["board_size"] == 16
    assert settings["forbidden_rule"] == "human"
    assert settings["difficulties"]["mcts"]["iterations"] == 200


def test_settings_override_defaults(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("board_size: 9\ndifficulty: hard\n", encoding="utf-8")
    settings = load_settings(path)
    assert settings["board_size"] == 9
    assert settings["difficulty"] == "hard"
    assert settings["resign_threshold"] == DEFAULT_SETTINGS["resign_threshold"]


def test_settings_must_be_a_mapping(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(path)


def test_profiles():
    assert difficulty.get_profile("easy").depth == 1
    assert difficulty.get_profile("TINI").label == "TINI"
    assert difficulty.get_profile("mcts").strategy == difficulty.MCTS
    assert difficulty.get_profile("mcts", {"mcts": {"iterations": 50}}).iterations == 50

    custom = difficulty.get_profile("blitz", {"blitz": {"strategy": "mcts", "iterations": 10}})
    assert custom.label == "Blitz"
    assert custom.iterations == 10

    with pytest.raises(ValueError):
        difficulty.get_profile("impossible")
    with pytest.raises(ValueError):
        difficulty.Difficulty("bad", "Bad", "alphazero")
    with pytest.raises(ValueError):
        difficulty.Difficulty("bad", "Bad", difficulty.MCTS, iterations=0)


def test_parse_args_defaults():
    args = parse_args([])
    assert args.mode == "human-vs-ai"
    assert args.board_size is None
    assert args.forbidden_rule is None


def test_build_game_ai_vs_ai(tmp_path):
    args = parse_args([
        "--mode", "ai-vs-ai",
        "--board-size", "9",
        "--difficulty", "mcts",
        "--iterations", "15",
        "--seed", "1",
        "--weights", str(tmp_path / "missing.yaml"),
    ])
    game = main_mod.build_game(args, dict(DEFAULT_SETTINGS))

    assert game.board.size == 9
    assert game.renderer is None
    black, white = game.players[BLACK], game.players[WHITE]
    assert isinstance(black, AiPlayer) and isinstance(white, AiPlayer)
    assert black.orchestrator.difficulty.iterations == 15
    assert black.orchestrator.mcts.iterations == 15
    assert not game.ruleset.restricted  # "human" policy with no human restricts nobody


def test_build_game_human_side_is_restricted():
    args = parse_args(["--mode", "ai-vs-human", "--difficulty", "easy"])
    game = main_mod.build_game(args, dict(DEFAULT_SETTINGS))

    assert isinstance(game.players[WHITE], HumanPlayer)
    assert game.ruleset.restricted == frozenset({WHITE})
    assert game.players[BLACK].orchestrator.ruleset.restricted == frozenset({WHITE})
    assert game.renderer is main_mod.print_board


def test_main_runs_ai_vs_ai(capsys):
    result = main_mod.main([
        "--mode", "ai-vs-ai",
        "--board-size", "7",
        "--difficulty", "easy",
        "--log-level", "WARNING",
    ])
    assert result in (BLACK, WHITE, 0)
    assert capsys.readouterr().out.strip().splitlines()[-1] in ("Black wins", "White wins", "Draw")
