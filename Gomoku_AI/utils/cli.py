"""CLI options for selecting sides, difficulty, board size, and config paths."""


def parse_args(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description="Gomoku AI (five in a row)")
    parser.add_argument("--board-size", type=int, help="Board size (default from settings, 16)")
    parser.add_argument(
        "--difficulty",
        help="Difficulty profile: easy, normal, hard, tini, mcts, neural (default from settings)",
    )
    parser.add_argument(
        "--mode",
        choices=["human-vs-ai", "ai-vs-human", "ai-vs-ai"],
        default="human-vs-ai",
        help="Play mode (who plays black/white)",
    )
    parser.add_argument(
        "--forbidden-rule",
        choices=["human", "black", "both", "none"],
        default=None,
        help="Which stones forbidden-move rules apply to (default from settings)",
    )
    parser.add_argument("--iterations", type=int, default=None, help="MCTS iterations per move")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for MCTS")
    parser.add_argument("--settings", default="config/settings.yaml", help="Path to settings YAML")
    parser.add_argument("--weights", default="config/weights.yaml", help="Path to evaluator weights YAML")
    parser.add_argument("--pv-checkpoint", help="Path to policy checkpoint for the neural tier (optional)")
    parser.add_argument("--pv-device", default=None, help="Device for the policy model (cpu or cuda)")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, ...)")
    return parser.parse_args(argv)
