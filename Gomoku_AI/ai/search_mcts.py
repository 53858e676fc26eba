"""UCB1 MCTS with heuristic rollouts and cross-turn tree reuse.

Key design:
- Every node owns a board snapshot; simulation works on throwaway copies.
- Wins are counted from one fixed perspective (the AI stone). Selection reads
  them as wins/visits for AI-move nodes and 1 - wins/visits for opponent-move
  nodes, so each side picks the child that is best for the side that moved.
- Parents are held through weakref; the only owning edges are parent.children.
- After a search the root advances to the chosen child, so the opponent's
  reply is one of the root's direct children on the next call.
- An immediate win, or a block of the opponent's immediate win, is played
  without searching.
"""

from __future__ import annotations

import logging
import math
import random
import weakref
from typing import List, Optional, Tuple

from . import heuristic
from . import move_selector

try:
    from engine import renju_rules
    from Board import EMPTY
except ImportError:
    from Gomoku_AI.engine import renju_rules
    from Gomoku_AI.Board import EMPTY


LOGGER = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 300
DEFAULT_EXPLORATION = math.sqrt(2)
DEFAULT_ROLLOUT_LIMIT = 50
DEFAULT_GREEDY_RATE = 0.7

Move = Tuple[int, int]


class _Node:
    __slots__ = (
        "board",
        "move",
        "stone",
        "to_move",
        "_parent",
        "children",
        "untried",
        "visits",
        "wins",
        "winner",
        "__weakref__",
    )

    def __init__(self, board, to_move: int, move: Optional[Move] = None, stone: Optional[int] = None, parent: Optional["_Node"] = None):
        self.board = board
        self.move = move
        self.stone = stone  # stone that played `move`
        self.to_move = to_move
        self._parent = weakref.ref(parent) if parent is not None else None
        self.children: List[_Node] = []
        self.untried: List[Move] = []
        self.visits = 0
        self.wins = 0
        self.winner = None

    @property
    def parent(self) -> Optional["_Node"]:
        return self._parent() if self._parent is not None else None

    def detach(self):
        self._parent = None

    def ucb1(self, parent_visits: int, exploration: float, ai_stone: int) -> float:
        if self.visits == 0:
            return float("inf")
        win_rate = self.wins / self.visits
        if self.stone != ai_stone:
            win_rate = 1.0 - win_rate
        return win_rate + exploration * math.sqrt(math.log(max(parent_visits, 1)) / self.visits)


class MCTSEngine:
    """Reusable search tree owned by a single caller (one game at a time)."""

    def __init__(
        self,
        iterations: int = DEFAULT_ITERATIONS,
        exploration: float = DEFAULT_EXPLORATION,
        rollout_limit: int = DEFAULT_ROLLOUT_LIMIT,
        greedy_rate: float = DEFAULT_GREEDY_RATE,
        radius: int = move_selector.DEFAULT_RADIUS,
        ruleset=None,
        seed=None,
    ):
        if iterations < 1:
            raise ValueError("iterations must be positive")
        self.iterations = iterations
        self.exploration = exploration
        self.rollout_limit = rollout_limit
        self.greedy_rate = greedy_rate
        self.radius = radius
        self.ruleset = ruleset or renju_rules.UNRESTRICTED
        self.rng = random.Random(seed)
        self.root: Optional[_Node] = None
        self.ai_stone: Optional[int] = None

    def reset(self):
        """Discard the whole tree (new game)."""
        self.root = None
        self.ai_stone = None

    def _new_node(self, board, to_move, move=None, stone=None, parent=None) -> _Node:
        node = _Node(board, to_move, move=move, stone=stone, parent=parent)
        if move is not None:
            if renju_rules.is_win_after_move(board, *move):
                node.winner = stone
        else:
            node.winner = renju_rules.check_winner(board)
        if node.winner is None:
            node.untried = move_selector.legal_moves(board, to_move, self.ruleset, radius=self.radius)
        return node

    def reroot(self, board, to_move: int) -> _Node:
        """
        Reuse the subtree matching `board`: the root itself, or one of its direct
        children. Otherwise start a fresh single-node root.
        """
        root = self.root
        if root is not None:
            if root.to_move == to_move and root.board.same_position(board):
                return root
            for child in root.children:
                if child.to_move == to_move and child.board.same_position(board):
                    child.detach()
                    self.root = child
                    LOGGER.debug("MCTS reroot: reused subtree with %d visits", child.visits)
                    return child
        self.root = self._new_node(board.clone(), to_move)
        return self.root

    def run(self, iterations: Optional[int] = None):
        """Run selection / expansion / rollout / backpropagation from the current root."""
        if self.root is None:
            raise ValueError("MCTS root is not set; call reroot() first")
        if self.ai_stone is None:
            self.ai_stone = self.root.to_move
        for _ in range(iterations or self.iterations):
            node = self._select(self.root)
            if node.untried:
                node = self._expand(node)
            winner = self._rollout(node)
            self._backpropagate(node, winner)

    def _select(self, node: _Node) -> _Node:
        while not node.untried and node.children:
            parent_visits = node.visits
            node = max(node.children, key=lambda n: n.ucb1(parent_visits, self.exploration, self.ai_stone))
        return node

    def _expand(self, node: _Node) -> _Node:
        move = node.untried.pop(self.rng.randrange(len(node.untried)))
        board = node.board.clone()
        board.place(move[0], move[1], node.to_move)
        child = self._new_node(board, -node.to_move, move=move, stone=node.to_move, parent=node)
        node.children.append(child)
        return child

    def _rollout(self, node: _Node) -> Optional[int]:
        """Play out from the node's position; return the winning stone or None for a draw."""
        if node.winner is not None:
            return node.winner
        board = node.board.clone()
        to_move = node.to_move
        frontier = set(move_selector.candidate_moves(board, radius=1))

        for _ in range(self.rollout_limit):
            move = self._rollout_move(board, to_move, frontier)
            if move is None:
                return None
            r, c = move
            board.place(r, c, to_move)
            if renju_rules.is_win_after_move(board, r, c):
                return to_move
            frontier.discard(move)
            frontier.update(move_selector.neighbors(board, r, c, radius=1))
            to_move = -to_move
        return None

    def _rollout_move(self, board, stone, frontier) -> Optional[Move]:
        # A frontier that runs dry (all fouls) is refilled once from the whole board.
        for refill in (False, True):
            if refill or not frontier:
                frontier.update(board.empty_cells())
            # Fouls for this stone stay in the frontier for the other side.
            fouls = set()
            while frontier:
                moves = sorted(frontier)
                if self.rng.random() < self.greedy_rate:
                    opp = -stone
                    move = max(moves, key=lambda mv: heuristic.move_score(board, mv[0], mv[1], stone, opp))
                else:
                    move = self.rng.choice(moves)
                frontier.discard(move)
                if board.cells[move[0]][move[1]] != EMPTY:
                    continue
                if renju_rules.is_forbidden(board, move[0], move[1], stone, self.ruleset):
                    fouls.add(move)
                    continue
                frontier.update(fouls)
                return move
            frontier.update(fouls)
        return None

    def _backpropagate(self, node: Optional[_Node], winner: Optional[int]):
        while node is not None:
            node.visits += 1
            if winner is not None and winner == self.ai_stone:
                node.wins += 1
            node = node.parent

    def best_move(self) -> Optional[Move]:
        """Most-visited root child (robust child), or None if nothing was expanded."""
        if self.root is None or not self.root.children:
            return None
        best = max(self.root.children, key=lambda n: n.visits)
        return best.move

    def advance(self, move: Move) -> bool:
        """Make the child reached by `move` the new root; False if it is not in the tree."""
        if self.root is None:
            return False
        for child in self.root.children:
            if child.move == move:
                child.detach()
                self.root = child
                return True
        self.root = None
        return False

    def tactical_move(self, board, stone: int) -> Optional[Move]:
        """Immediate win for `stone`, else a cell that blocks the opponent's immediate win."""
        empties = board.empty_cells()
        for target in (stone, -stone):
            for r, c in empties:
                with renju_rules.simulate(board, r, c, target):
                    wins = renju_rules.is_win_after_move(board, r, c)
                if wins and not renju_rules.is_forbidden(board, r, c, stone, self.ruleset):
                    return (r, c)
        return None

    def choose_move(self, board, ai_stone: int) -> Optional[Move]:
        """Search from `board` with `ai_stone` to move and return the chosen cell."""
        if self.ai_stone is not None and self.ai_stone != ai_stone:
            self.reset()
        self.ai_stone = ai_stone
        root = self.reroot(board, ai_stone)
        if root.winner is not None:
            return None

        move = self.tactical_move(root.board, ai_stone)
        if move is not None:
            LOGGER.debug("MCTS tactical move %s (win or forced block)", move)
            self.advance(move)
            return move

        self.run()
        move = self.best_move()
        if move is None and root.untried:
            move = root.untried[0]
        LOGGER.debug(
            "MCTS chose %s after %d root visits (%d children)",
            move, root.visits, len(root.children),
        )
        if move is not None:
            self.advance(move)
        return move


def choose_move(board, ai_stone, iterations=DEFAULT_ITERATIONS, ruleset=None, seed=None, **kwargs):
    """One-shot search without tree reuse."""
    engine = MCTSEngine(iterations=iterations, ruleset=ruleset, seed=seed, **kwargs)
    return engine.choose_move(board, ai_stone)
