"""AI player backed by the move orchestrator."""

try:
    from Player import Player
    from ai.orchestrator import MoveOrchestrator
except ImportError:
    from Gomoku_AI.Player import Player
    from Gomoku_AI.ai.orchestrator import MoveOrchestrator


class AiPlayer(Player):
    def __init__(self, stone, difficulty="normal", ruleset=None, resign_threshold=None, policy_advisor=None, weights=None, mcts_options=None, seed=None):
        super().__init__(stone)
        kwargs = {}
        if resign_threshold is not None:
            kwargs["resign_threshold"] = resign_threshold
        self.orchestrator = MoveOrchestrator(
            difficulty,
            ruleset=ruleset,
            policy_advisor=policy_advisor,
            weights=weights,
            mcts_options=mcts_options,
            seed=seed,
            **kwargs,
        )
        self.stats = []

    def new_game(self):
        self.orchestrator.new_game()
        self.stats = []

    def next_move(self, board, opponent_first_move=None):
        move = self.orchestrator.choose_move(
            board,
            ai_stone=self.stone,
            player_stone=-self.stone,
            first_player_move=opponent_first_move,
        )
        self.stats.append({
            "strategy": self.orchestrator.last_strategy,
            "score": self.orchestrator.last_score,
            "move": move,
        })
        return move
