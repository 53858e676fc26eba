"""Player interface for human or AI controllers."""

try:
    from errors import InvalidMoveError
except ImportError:
    from Gomoku_AI.errors import InvalidMoveError


class Player:
    # Invalid moves from players that allow retries are re-requested instead of losing the game.
    allow_retry = False

    def __init__(self, stone):
        self.stone = stone

    def new_game(self):
        """Reset per-game state; called by Omokgame before the first move."""

    def next_move(self, board, opponent_first_move=None):
        """Return (row, col) for the next move, or None to resign."""
        raise NotImplementedError


class HumanPlayer(Player):
    allow_retry = True

    def __init__(self, stone, input_fn=input):
        super().__init__(stone)
        self.input_fn = input_fn

    def next_move(self, board, opponent_first_move=None):
        """Text-input player: 'row col' (0-indexed), or 'resign'."""
        raw = self.input_fn("Enter move as 'row col' (0-indexed) or 'resign': ").strip()
        if raw.lower() == "resign":
            return None
        try:
            r_str, c_str = raw.split()
            return int(r_str), int(c_str)
        except ValueError as exc:
            raise InvalidMoveError("Invalid input format; expected two integers") from exc
