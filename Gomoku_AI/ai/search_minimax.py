"""Depth-limited minimax with alpha-beta pruning over radius-restricted candidates."""

import logging
import time

from . import heuristic
from . import move_selector

try:
    from engine import renju_rules
except ImportError:
    from Gomoku_AI.engine import renju_rules


LOGGER = logging.getLogger(__name__)

WIN_SCORE = 1_000_000
INF = float("inf")


class MinimaxSearcher:
    """Encapsulates the configuration and statistics for a minimax search."""

    def __init__(self, subject, opponent, ruleset=None, weights=None, radius=move_selector.DEFAULT_RADIUS, order_moves=True):
        self.subject = subject
        self.opponent = opponent
        self.ruleset = ruleset or renju_rules.UNRESTRICTED
        self.weights = weights or heuristic.DEFAULT_WEIGHTS
        self.radius = radius
        self.order_moves = order_moves

        self.node_counter = 0
        self.start_time = None
        self.stats = {}

    def search(self, board, depth, alpha=-INF, beta=INF, maximizing=True, last_move=None):
        """
        Return (score, move) from the subject's viewpoint. The board is mutated only
        inside scoped placements and is identical on return.
        `last_move` lets nested calls check the win locally instead of rescanning.
        """
        self.node_counter += 1

        if last_move is None:
            winner = renju_rules.check_winner(board)
        else:
            lr, lc = last_move
            winner = board.cells[lr][lc] if renju_rules.is_win_after_move(board, lr, lc) else None
        if winner == self.subject:
            return WIN_SCORE, None
        if winner == self.opponent:
            return -WIN_SCORE, None
        if depth <= 0:
            return heuristic.evaluate(board, self.subject, self.opponent, self.weights), None

        mover = self.subject if maximizing else self.opponent
        candidates = self._candidates(board, mover)
        if not candidates:
            # No legal continuation: draw.
            return 0, None

        best_move = None
        if maximizing:
            best_score = -INF
            for r, c in candidates:
                with renju_rules.simulate(board, r, c, mover):
                    score, _ = self.search(board, depth - 1, alpha, beta, False, last_move=(r, c))
                if score > best_score:
                    best_score = score
                    best_move = (r, c)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break
        else:
            best_score = INF
            for r, c in candidates:
                with renju_rules.simulate(board, r, c, mover):
                    score, _ = self.search(board, depth - 1, alpha, beta, True, last_move=(r, c))
                if score < best_score:
                    best_score = score
                    best_move = (r, c)
                beta = min(beta, score)
                if beta <= alpha:
                    break
        return best_score, best_move

    def _candidates(self, board, mover):
        # Nearby cells first; the whole board only when none of them is legal.
        candidates = move_selector.legal_moves(board, mover, self.ruleset, radius=self.radius)
        if self.order_moves and len(candidates) > 1:
            opp = -mover
            # Stable sort keeps row-major order among equal scores.
            candidates.sort(key=lambda mv: heuristic.move_score(board, mv[0], mv[1], mover, opp), reverse=True)
        return candidates

    def choose_move(self, board, depth):
        """Search a private copy of `board` and return (score, move)."""
        self.node_counter = 0
        self.start_time = time.time()
        score, move = self.search(board.clone(), depth)
        self._record_stats(depth, score)
        return score, move

    def _record_stats(self, depth, score):
        total_time = max(time.time() - self.start_time, 1e-9)
        self.stats = {
            "subject": self.subject,
            "depth": depth,
            "score": score,
            "nodes": self.node_counter,
            "time": total_time,
            "nps": self.node_counter / total_time,
        }
        LOGGER.debug("minimax depth=%d score=%s nodes=%d time=%.3fs", depth, score, self.node_counter, total_time)


def search(board, depth, alpha, beta, maximizing, subject, opponent, ruleset=None, weights=None):
    """Functional entry point mirroring MinimaxSearcher.search on the given board."""
    searcher = MinimaxSearcher(subject, opponent, ruleset=ruleset, weights=weights)
    return searcher.search(board, depth, alpha, beta, maximizing)


def choose_move(board, subject, opponent, depth, ruleset=None, weights=None, stats=None):
    """
    Public function to start a search. Instantiates and uses MinimaxSearcher.
    Returns the best move, or None when there is no legal continuation.
    """
    searcher = MinimaxSearcher(subject, opponent, ruleset=ruleset, weights=weights)
    _, move = searcher.choose_move(board, depth)
    if stats is not None:
        stats.append(searcher.stats)
    return move
