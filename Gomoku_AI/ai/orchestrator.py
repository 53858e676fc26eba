"""Move orchestration: opening shortcuts, strategy dispatch, fallback, resignation."""

import logging

from . import difficulty as difficulty_mod
from . import move_selector
from . import search_minimax
from .search_mcts import MCTSEngine

try:
    from engine import renju_rules
    from errors import NoLegalMoveError, PolicyUnavailableError
except ImportError:
    from Gomoku_AI.engine import renju_rules
    from Gomoku_AI.errors import NoLegalMoveError, PolicyUnavailableError


LOGGER = logging.getLogger(__name__)

RESIGN_THRESHOLD = -50000

# Order tried for the reply next to the opponent's first stone: right, down, left, up.
ORTHOGONAL = ((0, 1), (1, 0), (0, -1), (-1, 0))


def load_policy_advisor(checkpoint, device=None):
    """Load the optional policy model; return None (and log) when it is unavailable."""
    if not checkpoint:
        return None
    try:
        from . import policy_value

        advisor = policy_value.PolicyAdvisor(str(checkpoint), device=device)
    except (ImportError, PolicyUnavailableError) as exc:
        LOGGER.warning("Policy model unavailable (%s); falling back to search", exc)
        return None
    LOGGER.info("Loaded policy checkpoint: %s", checkpoint)
    return advisor


class MoveOrchestrator:
    """Owns the search state for one game and turns a board into the AI's move."""

    def __init__(self, difficulty, ruleset=None, resign_threshold=RESIGN_THRESHOLD, policy_advisor=None, weights=None, mcts_options=None, seed=None):
        if isinstance(difficulty, str):
            difficulty = difficulty_mod.get_profile(difficulty)
        self.difficulty = difficulty
        self.ruleset = ruleset or renju_rules.UNRESTRICTED
        self.resign_threshold = resign_threshold
        self.policy_advisor = policy_advisor
        self.weights = weights
        options = dict(mcts_options or {})
        if difficulty.iterations:
            options["iterations"] = difficulty.iterations
        self.mcts = MCTSEngine(ruleset=self.ruleset, seed=seed, **options)
        self.last_strategy = None
        self.last_score = None

    def new_game(self):
        """Discard per-game search state (the MCTS tree)."""
        self.mcts.reset()
        self.last_strategy = None
        self.last_score = None

    def forbidden_annotations(self, board):
        """Fouls for every restricted stone, as {stone: [(move, reason), ...]}."""
        return {stone: renju_rules.find_forbidden_moves(board, stone) for stone in sorted(self.ruleset.restricted)}

    def choose_move(self, board, ai_stone, player_stone, first_player_move=None):
        """
        Return the AI's move, or None to resign. Raises NoLegalMoveError when the
        board has no legal empty cell left (draw). The caller's board is not modified.
        """
        board = board.clone()

        opening = self._opening_move(board, first_player_move)
        if opening is not None:
            self.last_strategy = "opening"
            return opening

        move = self._dispatch(board, ai_stone, player_stone)
        if move is None or not board.is_empty(*move):
            move = self._fallback_move(board, ai_stone)

        if self._should_resign(board, move, ai_stone, player_stone):
            LOGGER.info("Resigning: score %s below threshold %s", self.last_score, self.resign_threshold)
            return None
        return move

    def _opening_move(self, board, first_player_move):
        stones = board.stone_count()
        if stones == 0:
            center = board.size // 2
            return (center, center)
        if first_player_move is not None and stones == 1:
            r, c = first_player_move
            for dr, dc in ORTHOGONAL:
                if board.is_empty(r + dr, c + dc):
                    return (r + dr, c + dc)
            empties = board.empty_cells()
            return empties[0] if empties else None
        return None

    def _dispatch(self, board, ai_stone, player_stone):
        strategy = self.difficulty.strategy
        if strategy == difficulty_mod.POLICY:
            if self.policy_advisor is not None:
                self.last_strategy = difficulty_mod.POLICY
                legal = move_selector.legal_moves(board, ai_stone, self.ruleset)
                return self.policy_advisor.get_best_move(board, ai_stone, legal)
            LOGGER.info("No policy model loaded; using minimax depth %d", self.difficulty.depth)
            strategy = difficulty_mod.MINIMAX

        self.last_strategy = strategy
        if strategy == difficulty_mod.MCTS:
            return self.mcts.choose_move(board, ai_stone)
        return search_minimax.choose_move(
            board, ai_stone, player_stone, self.difficulty.depth, ruleset=self.ruleset, weights=self.weights
        )

    def _fallback_move(self, board, ai_stone):
        """First legal empty cell in row-major order."""
        for r, c in board.empty_cells():
            if not renju_rules.is_forbidden(board, r, c, ai_stone, self.ruleset):
                LOGGER.debug("Strategy produced no move; falling back to %s", (r, c))
                return (r, c)
        raise NoLegalMoveError("No legal moves left; the game is a draw")

    def _should_resign(self, board, move, ai_stone, player_stone):
        searcher = search_minimax.MinimaxSearcher(ai_stone, player_stone, ruleset=self.ruleset, weights=self.weights)
        with renju_rules.simulate(board, move[0], move[1], ai_stone):
            if renju_rules.is_win_after_move(board, *move):
                self.last_score = search_minimax.WIN_SCORE
                return False
            score, _ = searcher.search(board, self.difficulty.depth, maximizing=False)
        self.last_score = score
        return score < self.resign_threshold


def choose_move(board, ai_stone, player_stone, difficulty="normal", first_player_move=None, ruleset=None):
    """Stateless convenience wrapper (no MCTS tree reuse across calls)."""
    orchestrator = MoveOrchestrator(difficulty, ruleset=ruleset)
    return orchestrator.choose_move(board, ai_stone, player_stone, first_player_move=first_player_move)
