"""Static evaluation from run-length windows and a cheap per-move score for rollouts."""

from pathlib import Path
import logging

import yaml

try:
    from Board import EMPTY, DIRECTIONS
except ImportError:
    from Gomoku_AI.Board import EMPTY, DIRECTIONS


LOGGER = logging.getLogger(__name__)

FIVE_SCORE = 100000
WINDOW_LENGTHS = (5, 4, 3, 2)

# (window length, open ends) -> score; missing keys score 0.
DEFAULT_WEIGHTS = {
    (5, 0): FIVE_SCORE,
    (5, 1): FIVE_SCORE,
    (5, 2): FIVE_SCORE,
    (4, 2): 20000,  # open four
    (4, 1): 8000,   # closed four
    (3, 2): 2000,   # open three
    (3, 1): 500,
    (2, 2): 200,    # open two
}

# Rollout move scoring: run length through the cell times (1 + open ends).
ROLLOUT_WIN_SCORE = 10000
ROLLOUT_BLOCK_WEIGHT = 0.9


def load_weights(path="config/weights.yaml"):
    """Load window weights from YAML over the defaults; a missing file yields the defaults."""
    path = Path(path)
    if not path.is_absolute() and not path.exists():
        # Allow running from repo root (e.g., `python -m Gomoku_AI.main`).
        candidate = Path(__file__).resolve().parents[1] / path
        if candidate.exists():
            path = candidate

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        return dict(DEFAULT_WEIGHTS)

    weights = dict(DEFAULT_WEIGHTS)
    for item in data.get("windows", []):
        length = item.get("length")
        if length not in WINDOW_LENGTHS:
            LOGGER.warning("Ignoring weight entry with bad length: %r", item)
            continue
        scores = item.get("scores", {})
        if length == 5 and "any" in scores:
            for open_ends in (0, 1, 2):
                weights[(5, open_ends)] = int(scores["any"])
            continue
        for open_ends in (0, 1, 2):
            key = {0: "closed", 1: "half_open", 2: "open"}[open_ends]
            if key in scores:
                weights[(length, open_ends)] = int(scores[key])
    return weights


def evaluate(board, subject, opponent, weights=None):
    """
    Score the board for `subject`: its run windows add, the opponent's identical
    windows subtract. Pure; the board is only read.
    """
    weights = weights or DEFAULT_WEIGHTS
    return _stone_score(board, subject, weights) - _stone_score(board, opponent, weights)


def _stone_score(board, stone, weights):
    size = board.size
    cells = board.cells
    total = 0
    for r in range(size):
        for c in range(size):
            if cells[r][c] != stone:
                continue
            for dr, dc in DIRECTIONS:
                for length in WINDOW_LENGTHS:
                    end_r, end_c = r + dr * (length - 1), c + dc * (length - 1)
                    if not board.in_bounds(end_r, end_c):
                        continue
                    if any(cells[r + dr * i][c + dc * i] != stone for i in range(1, length)):
                        continue
                    open_ends = 0
                    if board.is_empty(r - dr, c - dc):
                        open_ends += 1
                    if board.is_empty(end_r + dr, end_c + dc):
                        open_ends += 1
                    total += weights.get((length, open_ends), 0)
    return total


def _line_value(board, r, c, stone):
    """Run length x openness summed over the 4 lines through an empty (r, c)."""
    value = 0
    for dr, dc in DIRECTIONS:
        run = 1
        open_ends = 0
        for sr, sc in ((dr, dc), (-dr, -dc)):
            cr, cc = r + sr, c + sc
            while board.in_bounds(cr, cc) and board.cells[cr][cc] == stone:
                run += 1
                cr += sr
                cc += sc
            if board.is_empty(cr, cc):
                open_ends += 1
        if run >= 5:
            return ROLLOUT_WIN_SCORE
        value += run * (1 + open_ends)
    return value


def move_score(board, r, c, stone, opp):
    """
    Cheap single-ply score for playing `stone` at the empty cell (r, c): how much it
    extends own runs, plus how much it blocks the opponent's.
    """
    if board.cells[r][c] != EMPTY:
        return float("-inf")
    attack = _line_value(board, r, c, stone)
    if attack >= ROLLOUT_WIN_SCORE:
        return float(ROLLOUT_WIN_SCORE * 2)
    block = _line_value(board, r, c, opp)
    return attack + ROLLOUT_BLOCK_WEIGHT * block
