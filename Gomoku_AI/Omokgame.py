"""Game loop and turn management for five-in-a-row."""

try:
    from Board import Board, BLACK, DEFAULT_SIZE, stone_name
    from engine import referee, renju_rules
    from errors import InvalidMoveError, NoLegalMoveError
except ImportError:
    from Gomoku_AI.Board import Board, BLACK, DEFAULT_SIZE, stone_name
    from Gomoku_AI.engine import referee, renju_rules
    from Gomoku_AI.errors import InvalidMoveError, NoLegalMoveError


DRAW = 0


class Omokgame:
    def __init__(self, black_player, white_player, board_size=DEFAULT_SIZE, ruleset=None, logger=print, renderer=None, max_retries=10):
        self.board = Board(size=board_size)
        self.players = {BLACK: black_player, -BLACK: white_player}
        self.ruleset = ruleset or renju_rules.UNRESTRICTED
        self.logger = logger
        self.renderer = renderer
        self.max_retries = max_retries
        self.move_index = 0
        self.first_moves = {}
        self.resigned = None

    def play(self):
        """Run a single game. Returns -1 (black win), 1 (white win), or 0 (draw)."""
        for player in self.players.values():
            player.new_game()

        stone = BLACK  # black starts
        game_result = None
        last_move = None
        while game_result is None:
            if self.renderer:
                self.renderer(self.board, last_move, stone, game_result)

            if self.board.is_full():
                self.logger("Result: Draw (board full)")
                game_result = DRAW
                break

            try:
                move = self._request_move(stone)
            except NoLegalMoveError as exc:
                self.logger(f"Result: Draw ({exc})")
                game_result = DRAW
                break
            except InvalidMoveError as exc:
                self.logger(f"Disqualification: {stone_name(stone)} - {exc}")
                game_result = -stone  # opponent wins
                break

            if move is None:
                self.logger(f"{stone_name(stone)} resigns")
                self.resigned = stone
                game_result = -stone
                break

            self.board.place(*move, stone)
            self.first_moves.setdefault(stone, move)
            last_move = move
            self.logger(f"Move {self.move_index + 1}: {stone_name(stone)[0]} {move}")

            if renju_rules.is_win_after_move(self.board, *move):
                self.logger(f"Winner: {stone_name(stone)}")
                game_result = stone

            stone = -stone  # swap turns
            self.move_index += 1

        if self.renderer:
            self.renderer(self.board, last_move, stone, game_result)
        return game_result

    def _request_move(self, stone):
        player = self.players[stone]
        attempts = 0
        while True:
            try:
                move = player.next_move(self.board.clone(), opponent_first_move=self.first_moves.get(-stone))
                if move is None:
                    return None
                referee.check_move(move, self.board, stone, self.ruleset)
                return tuple(move)
            except InvalidMoveError as exc:
                attempts += 1
                if not player.allow_retry or attempts >= self.max_retries:
                    raise
                self.logger(f"Invalid move: {exc}; try again")
