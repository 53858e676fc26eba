"""Entry point for console Gomoku matches. Load config, wire players, start Omokgame."""

import dataclasses

try:
    from utils.cli import parse_args
    from utils.config import load_settings, resolve_project_path
    from utils.logger import setup_logging, log_event
    from Board import BLACK, WHITE
    from Omokgame import Omokgame
    from Player import HumanPlayer
    from AiPlayer import AiPlayer
    from ai import difficulty, heuristic
    from ai.orchestrator import load_policy_advisor
    from engine import renju_rules
except ImportError:
    from Gomoku_AI.utils.cli import parse_args
    from Gomoku_AI.utils.config import load_settings, resolve_project_path
    from Gomoku_AI.utils.logger import setup_logging, log_event
    from Gomoku_AI.Board import BLACK, WHITE
    from Gomoku_AI.Omokgame import Omokgame
    from Gomoku_AI.Player import HumanPlayer
    from Gomoku_AI.AiPlayer import AiPlayer
    from Gomoku_AI.ai import difficulty, heuristic
    from Gomoku_AI.ai.orchestrator import load_policy_advisor
    from Gomoku_AI.engine import renju_rules


def print_board(board, last_move, stone, game_result):
    print(board)


def build_game(args, settings):
    board_size = args.board_size or settings["board_size"]
    profile = difficulty.get_profile(args.difficulty or settings["difficulty"], settings.get("difficulties"))
    rule_policy = args.forbidden_rule or settings["forbidden_rule"]
    weights = heuristic.load_weights(resolve_project_path(args.weights))

    mcts_options = dict(settings.get("mcts") or {})
    if args.iterations and profile.strategy == difficulty.MCTS:
        profile = dataclasses.replace(profile, iterations=args.iterations)

    advisor = None
    if profile.strategy == difficulty.POLICY:
        checkpoint = args.pv_checkpoint or settings.get("pv_checkpoint")
        if checkpoint:
            checkpoint = resolve_project_path(checkpoint)
        advisor = load_policy_advisor(checkpoint, device=args.pv_device or settings.get("pv_device"))

    def ai(stone, human_stone):
        return AiPlayer(
            stone,
            difficulty=profile,
            ruleset=renju_rules.Ruleset.for_game(rule_policy, human_stone),
            resign_threshold=settings.get("resign_threshold"),
            policy_advisor=advisor,
            weights=weights,
            mcts_options=mcts_options,
            seed=args.seed,
        )

    if args.mode == "human-vs-ai":
        black, white = HumanPlayer(BLACK), ai(WHITE, BLACK)
        human_stone = BLACK
    elif args.mode == "ai-vs-human":
        black, white = ai(BLACK, WHITE), HumanPlayer(WHITE)
        human_stone = WHITE
    elif args.mode == "ai-vs-ai":
        black, white = ai(BLACK, None), ai(WHITE, None)
        human_stone = None
    else:
        raise ValueError(f"Unsupported mode: {args.mode}")

    log_event(f"Difficulty: {profile.label} ({profile.strategy}), forbidden rule: {rule_policy}")
    return Omokgame(
        black_player=black,
        white_player=white,
        board_size=board_size,
        ruleset=renju_rules.Ruleset.for_game(rule_policy, human_stone),
        logger=log_event,
        renderer=print_board if human_stone is not None else None,
    )


def main(argv=None):
    args = parse_args(argv)
    settings = load_settings(args.settings)
    setup_logging(args.log_level or settings.get("log_level", "INFO"))

    game = build_game(args, settings)
    result = game.play()
    outcome = {BLACK: "Black wins", WHITE: "White wins", 0: "Draw"}
    print(outcome.get(result, "Unknown result"))
    return result


if __name__ == "__main__":
    main()
