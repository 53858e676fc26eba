"""Sanity tests for Board placement, copies, and line primitives."""

import pytest

from Gomoku_AI.Board import Board, BLACK, WHITE, EMPTY
from Gomoku_AI.errors import InvalidMoveError


def test_place_rejects_bad_input_without_mutation():
    b = Board(size=9)
    b.place(4, 4, BLACK)
    before = [row[:] for row in b.cells]

    with pytest.raises(InvalidMoveError):
        b.place(4, 4, WHITE)
    with pytest.raises(InvalidMoveError):
        b.place(9, 0, WHITE)
    with pytest.raises(InvalidMoveError):
        b.place(-1, 3, WHITE)
    with pytest.raises(ValueError):
        b.place(0, 0, 2)

    assert b.cells == before
    assert b.move_count == 1
    assert b.history == [(4, 4)]


def test_clone_is_independent():
    b = Board(size=9)
    b.place(1, 2, BLACK)
    copy = b.clone()
    copy.place(3, 3, WHITE)

    assert b.cells[3][3] == EMPTY
    assert copy.cells[1][2] == BLACK
    assert b != copy
    assert b.move_count == 1 and copy.move_count == 2


def test_from_rows_counts_stones_and_compares_by_cells():
    rows = [[0] * 5 for _ in range(5)]
    rows[0][0] = BLACK
    rows[2][3] = WHITE
    b = Board.from_rows(rows)

    other = Board(size=5)
    other.place(2, 3, WHITE)
    other.place(0, 0, BLACK)

    assert b.move_count == 2
    assert b.stone_count() == 2
    assert b == other  # history differs, position does not
    assert b.occupied_cells() == [(0, 0), (2, 3)]


def test_run_length_counts_both_ways():
    b = Board(size=9)
    for c in (2, 3, 5):
        b.place(4, c, BLACK)
    b.place(4, 4, BLACK)
    assert b.run_length(4, 4, 0, 1) == 4
    assert b.max_line_length(4, 2) == 4
    assert not b.has_five_or_more(4, 4)
    b.place(4, 6, BLACK)
    assert b.has_five_or_more(4, 2)


def test_full_board_and_text_dump():
    b = Board(size=5)
    assert not b.is_full()
    for r in range(5):
        for c in range(5):
            b.place(r, c, BLACK if (r + c) % 2 else WHITE)
    assert b.is_full()
    assert b.empty_cells() == []
    text = str(b)
    assert len(text.splitlines()) == 6
    assert "X" in text and "O" in text
