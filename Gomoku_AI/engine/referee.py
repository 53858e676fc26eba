"""Move validation: bounds, occupancy, and forbidden-move rules."""

try:
    from . import renju_rules
    from errors import InvalidMoveError, ForbiddenMoveError
except ImportError:
    from Gomoku_AI.engine import renju_rules
    from Gomoku_AI.errors import InvalidMoveError, ForbiddenMoveError


def check_move(move, board, stone, ruleset=renju_rules.UNRESTRICTED):
    """
    Validate a move against bounds, occupancy, and forbidden-move rules.
    Raises InvalidMoveError / ForbiddenMoveError; the board is never mutated.
    """
    try:
        r, c = move
    except (TypeError, ValueError) as exc:
        raise InvalidMoveError(f"Malformed move {move!r}; expected (row, col)") from exc

    if not board.in_bounds(r, c):
        raise InvalidMoveError(f"Move {move} out of bounds")
    if not board.is_empty(r, c):
        raise InvalidMoveError(f"Cell {move} already occupied")

    if ruleset.restricts(stone):
        reason = renju_rules.forbidden_reason(board, r, c, stone)
        if reason is not None:
            raise ForbiddenMoveError((r, c), reason)

    return True
