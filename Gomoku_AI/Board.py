"""Board state container and line-scanning primitives (five-or-more rule)."""

try:
    from errors import InvalidMoveError
except ImportError:
    from Gomoku_AI.errors import InvalidMoveError


EMPTY = 0
BLACK = -1
WHITE = 1

DEFAULT_SIZE = 16
DIRECTIONS = ((0, 1), (1, 0), (1, 1), (1, -1))

_SYMBOLS = {EMPTY: ".", BLACK: "X", WHITE: "O"}


def opponent(stone):
    return -stone


def stone_name(stone):
    return {BLACK: "Black", WHITE: "White"}.get(stone, "Empty")


class Board:
    def __init__(self, size=DEFAULT_SIZE):
        # Store cells as -1 (black), 0 (empty), 1 (white), indexed cells[row][col]
        if size < 5:
            raise ValueError("board size must be at least 5")
        self.size = size
        self.cells = [[EMPTY] * size for _ in range(size)]
        self.move_count = 0
        self.history = []

    @classmethod
    def from_rows(cls, rows):
        """Build a board from a square list of rows holding -1/0/1."""
        board = cls(len(rows))
        for r, row in enumerate(rows):
            if len(row) != board.size:
                raise ValueError("rows must form a square grid")
            for c, v in enumerate(row):
                if v not in (EMPTY, BLACK, WHITE):
                    raise InvalidMoveError(f"unknown cell value {v!r} at ({r}, {c})")
                board.cells[r][c] = v
                if v != EMPTY:
                    board.move_count += 1
        return board

    def in_bounds(self, r, c):
        return 0 <= r < self.size and 0 <= c < self.size

    def is_empty(self, r, c):
        return self.in_bounds(r, c) and self.cells[r][c] == EMPTY

    def place(self, r, c, stone):
        """Place a stone; raise InvalidMoveError if out of bounds or occupied."""
        if stone not in (BLACK, WHITE):
            raise InvalidMoveError("stone must be -1 (black) or 1 (white)")
        if not self.in_bounds(r, c):
            raise InvalidMoveError(f"move ({r}, {c}) out of bounds")
        if self.cells[r][c] != EMPTY:
            raise InvalidMoveError(f"cell ({r}, {c}) already occupied")
        self.cells[r][c] = stone
        self.move_count += 1
        self.history.append((r, c))

    def _push_stone(self, r, c, stone):
        # Speculative placement for search; paired with _pop_stone.
        self.cells[r][c] = stone
        self.move_count += 1

    def _pop_stone(self, r, c):
        self.cells[r][c] = EMPTY
        self.move_count -= 1

    def clone(self):
        new_board = Board.__new__(Board)
        new_board.size = self.size
        new_board.cells = [row[:] for row in self.cells]
        new_board.move_count = self.move_count
        new_board.history = self.history[:]
        return new_board

    def same_position(self, other):
        return self.size == other.size and self.cells == other.cells

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.same_position(other)

    __hash__ = None

    def stone_count(self):
        return sum(1 for row in self.cells for v in row if v != EMPTY)

    def is_full(self):
        return all(v != EMPTY for row in self.cells for v in row)

    def empty_cells(self):
        return [(r, c) for r in range(self.size) for c in range(self.size) if self.cells[r][c] == EMPTY]

    def occupied_cells(self):
        return [(r, c) for r in range(self.size) for c in range(self.size) if self.cells[r][c] != EMPTY]

    def run_length(self, r, c, dr, dc, stone=None):
        """Contiguous run through (r, c) along (dr, dc), counted both ways."""
        stone = self.cells[r][c] if stone is None else stone
        if stone == EMPTY:
            return 0
        return 1 + self._count_dir(r, c, dr, dc, stone) + self._count_dir(r, c, -dr, -dc, stone)

    def has_five_or_more(self, r, c):
        """Check for 5+ in any direction through (r, c)."""
        if self.cells[r][c] == EMPTY:
            return False
        return any(self.run_length(r, c, dr, dc) >= 5 for dr, dc in DIRECTIONS)

    def max_line_length(self, r, c):
        """Return the maximum contiguous line length through (r, c)."""
        if self.cells[r][c] == EMPTY:
            return 0
        return max(self.run_length(r, c, dr, dc) for dr, dc in DIRECTIONS)

    def _count_dir(self, r, c, dr, dc, stone):
        """Count contiguous stones from (r, c) (exclusive) in (dr, dc)."""
        count = 0
        cr, cc = r + dr, c + dc
        while self.in_bounds(cr, cc) and self.cells[cr][cc] == stone:
            count += 1
            cr += dr
            cc += dc
        return count

    def __str__(self):
        header = "   " + " ".join(f"{c % 10}" for c in range(self.size))
        rows = [header]
        for r in range(self.size):
            rows.append(f"{r:2d} " + " ".join(_SYMBOLS[v] for v in self.cells[r]))
        return "\n".join(rows)
