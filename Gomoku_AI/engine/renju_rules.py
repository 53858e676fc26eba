"""Rule enforcement: win detection and forbidden moves for restricted stones."""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import NamedTuple

try:
    from Board import BLACK, WHITE, EMPTY, DIRECTIONS
except ImportError:
    from Gomoku_AI.Board import BLACK, WHITE, EMPTY, DIRECTIONS


DOUBLE_THREE = "double-three"
DOUBLE_FOUR = "double-four"
OVERLINE = "overline"

SCAN_LIMIT = 4  # cells inspected on each side when classifying threes/fours

RULE_POLICIES = ("human", "black", "both", "none")


class Pattern(NamedTuple):
    run_length: int
    open_ends: int
    is_exact_five: bool


@dataclass(frozen=True)
class Ruleset:
    """Which stones the forbidden-move rules apply to."""

    restricted: frozenset = frozenset()

    @classmethod
    def for_game(cls, policy: str, human_stone: int | None) -> "Ruleset":
        """
        Build a ruleset from a policy name:
        - human: only the human-assigned stone is restricted (reference behaviour)
        - black: classic renju, black is restricted whoever plays it
        - both / none
        """
        if policy == "human":
            return cls(frozenset() if human_stone is None else frozenset({human_stone}))
        if policy == "black":
            return cls(frozenset({BLACK}))
        if policy == "both":
            return cls(frozenset({BLACK, WHITE}))
        if policy == "none":
            return cls()
        raise ValueError(f"Unknown forbidden-move policy: {policy!r} (expected one of {RULE_POLICIES})")

    def restricts(self, stone: int) -> bool:
        return stone in self.restricted


UNRESTRICTED = Ruleset()


@contextmanager
def simulate(board, r: int, c: int, stone: int):
    """Place a stone for the duration of the block; always removed on exit."""
    board._push_stone(r, c, stone)
    try:
        yield board
    finally:
        board._pop_stone(r, c)


def check_winner(board):
    """
    Return the stone owning a run of five or more in any direction, else None.
    Only run starts are counted forward so each run is measured once, which is
    the same as counting both ways from any cell of the run.
    """
    size = board.size
    cells = board.cells
    for r in range(size):
        for c in range(size):
            stone = cells[r][c]
            if stone == EMPTY:
                continue
            for dr, dc in DIRECTIONS:
                pr, pc = r - dr, c - dc
                if board.in_bounds(pr, pc) and cells[pr][pc] == stone:
                    continue
                if 1 + board._count_dir(r, c, dr, dc, stone) >= 5:
                    return stone
    return None


def is_win_after_move(board, r: int, c: int) -> bool:
    """Assumes stone is already placed at (r, c)."""
    return board.has_five_or_more(r, c)


def scan_pattern(board, r: int, c: int, dr: int, dc: int, limit: int | None = SCAN_LIMIT) -> Pattern:
    """
    Scan both ways from the occupied cell (r, c) along (dr, dc). Each side stops at
    the first non-matching cell (or after `limit` cells); the side is open when it
    stopped on an in-bounds empty cell.
    """
    stone = board.cells[r][c]
    run = 1
    open_ends = 0
    for sr, sc in ((dr, dc), (-dr, -dc)):
        cr, cc = r + sr, c + sc
        steps = 0
        while (limit is None or steps < limit) and board.in_bounds(cr, cc) and board.cells[cr][cc] == stone:
            run += 1
            steps += 1
            cr += sr
            cc += sc
        if (limit is None or steps < limit) and board.is_empty(cr, cc):
            open_ends += 1
    return Pattern(run, open_ends, run == 5)


def _count_open_runs(board, r: int, c: int, stone: int, besides: int) -> int:
    """Directions where the placed stone joins exactly `besides` others with both ends open."""
    if not board.is_empty(r, c):
        return 0
    qualifying = 0
    with simulate(board, r, c, stone):
        for dr, dc in DIRECTIONS:
            pattern = scan_pattern(board, r, c, dr, dc)
            if pattern.run_length - 1 == besides and pattern.open_ends == 2:
                qualifying += 1
    return qualifying


def check_double_open_three(board, r: int, c: int, stone: int) -> bool:
    return _count_open_runs(board, r, c, stone, besides=2) >= 2


def check_double_open_four(board, r: int, c: int, stone: int) -> bool:
    return _count_open_runs(board, r, c, stone, besides=3) >= 2


def check_overline(board, r: int, c: int, stone: int) -> bool:
    if not board.is_empty(r, c):
        return False
    with simulate(board, r, c, stone):
        return board.max_line_length(r, c) >= 6


def forbidden_reason(board, r: int, c: int, stone: int) -> str | None:
    """First matching foul in priority order three -> four -> overline."""
    if check_double_open_three(board, r, c, stone):
        return DOUBLE_THREE
    if check_double_open_four(board, r, c, stone):
        return DOUBLE_FOUR
    if check_overline(board, r, c, stone):
        return OVERLINE
    return None


def is_forbidden(board, r: int, c: int, stone: int, ruleset: Ruleset = UNRESTRICTED) -> bool:
    """Return True if placing here is a foul for a restricted stone."""
    if not ruleset.restricts(stone):
        return False
    return forbidden_reason(board, r, c, stone) is not None


def find_forbidden_moves(board, stone: int) -> list[tuple[tuple[int, int], str]]:
    """Annotate every empty cell that would be a foul for `stone`."""
    fouls = []
    for r in range(board.size):
        for c in range(board.size):
            if board.cells[r][c] != EMPTY:
                continue
            reason = forbidden_reason(board, r, c, stone)
            if reason is not None:
                fouls.append(((r, c), reason))
    return fouls
