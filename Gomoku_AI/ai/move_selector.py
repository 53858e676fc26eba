"""Candidate move generation (cells near existing stones, legality filtering)."""

try:
    from engine import renju_rules
    from Board import EMPTY
except ImportError:
    from Gomoku_AI.engine import renju_rules
    from Gomoku_AI.Board import EMPTY


DEFAULT_RADIUS = 2


def candidate_moves(board, radius=DEFAULT_RADIUS):
    """
    Empty cells within a Chebyshev radius of any stone, de-duplicated, row-major.
    An empty board yields no candidates; opening moves are the caller's concern.
    """
    size = board.size
    cells = board.cells
    near = set()
    for r in range(size):
        for c in range(size):
            if cells[r][c] == EMPTY:
                continue
            for dr in range(-radius, radius + 1):
                for dc in range(-radius, radius + 1):
                    nr, nc = r + dr, c + dc
                    if 0 <= nr < size and 0 <= nc < size and cells[nr][nc] == EMPTY:
                        near.add((nr, nc))
    return sorted(near)


def neighbors(board, r, c, radius=1):
    """Empty cells within `radius` of (r, c); used to grow candidate sets incrementally."""
    out = []
    for dr in range(-radius, radius + 1):
        for dc in range(-radius, radius + 1):
            if dr == 0 and dc == 0:
                continue
            if board.is_empty(r + dr, c + dc):
                out.append((r + dr, c + dc))
    return out


def legal_moves(board, stone, ruleset=renju_rules.UNRESTRICTED, radius=DEFAULT_RADIUS):
    """
    Candidate moves for `stone` with fouls removed. If the local set is empty (or
    entirely forbidden), fall back to every legal empty cell.
    """
    candidates = candidate_moves(board, radius=radius)
    if ruleset.restricts(stone):
        candidates = [mv for mv in candidates if not renju_rules.is_forbidden(board, mv[0], mv[1], stone, ruleset)]
    if candidates:
        return candidates
    return all_legal_moves(board, stone, ruleset)


def all_legal_moves(board, stone, ruleset=renju_rules.UNRESTRICTED):
    moves = board.empty_cells()
    if ruleset.restricts(stone):
        moves = [mv for mv in moves if not renju_rules.is_forbidden(board, mv[0], mv[1], stone, ruleset)]
    return moves
