"""Tests for Omokgame turn handling and end-of-game state."""

import pytest

from Gomoku_AI.AiPlayer import AiPlayer
from Gomoku_AI.Board import BLACK, WHITE
from Gomoku_AI.Omokgame import Omokgame, DRAW
from Gomoku_AI.Player import Player, HumanPlayer
from Gomoku_AI.engine import renju_rules
from Gomoku_AI.errors import InvalidMoveError


class SeqPlayer(Player):
    """Deterministic player that plays a fixed move sequence."""

    def __init__(self, stone, moves):
        super().__init__(stone)
        self._moves = list(moves)
        self._idx = 0
        self.seen_first_moves = []

    def next_move(self, board, opponent_first_move=None):
        self.seen_first_moves.append(opponent_first_move)
        if self._idx >= len(self._moves):
            raise InvalidMoveError("No more scripted moves")
        mv = self._moves[self._idx]
        self._idx += 1
        return mv


def _game(black, white, size=5, **kwargs):
    log = []
    game = Omokgame(black_player=black, white_player=white, board_size=size, logger=log.append, **kwargs)
    return game, log


def test_final_render_stone_is_winner():
    black = SeqPlayer(BLACK, [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)])
    white = SeqPlayer(WHITE, [(0, 1), (1, 1), (2, 1), (3, 1)])

    final_stones = []

    def renderer(board, last_move, current_stone, game_result):
        if game_result is not None:
            final_stones.append((current_stone, last_move))

    game, log = _game(black, white, renderer=renderer)
    result = game.play()

    assert result == BLACK
    assert final_stones == [(WHITE, (4, 0))]  # turn already passed when the game ended
    assert log[-1] == "Winner: Black"
    assert game.first_moves == {BLACK: (0, 0), WHITE: (0, 1)}
    assert white.seen_first_moves[0] == (0, 0)


def test_full_board_is_draw():
    cells = [(r, c) for r in range(5) for c in range(5)]
    pattern = {mv: BLACK if (mv[1] + 2 * mv[0]) % 4 in (0, 1) else WHITE for mv in cells}
    black = SeqPlayer(BLACK, [mv for mv in cells if pattern[mv] == BLACK])
    white = SeqPlayer(WHITE, [mv for mv in cells if pattern[mv] == WHITE])

    game, log = _game(black, white)
    assert game.play() == DRAW
    assert game.board.is_full()
    assert "Draw" in log[-1]


def test_resignation_gives_opponent_the_win():
    black = SeqPlayer(BLACK, [(0, 0), None])
    white = SeqPlayer(WHITE, [(1, 1)])
    game, log = _game(black, white)

    assert game.play() == WHITE
    assert game.resigned == BLACK
    assert log[-1] == "Black resigns"


def test_occupied_cell_disqualifies():
    black = SeqPlayer(BLACK, [(0, 0)])
    white = SeqPlayer(WHITE, [(0, 0)])
    game, log = _game(black, white)

    assert game.play() == BLACK
    assert log[-1].startswith("Disqualification: White")
    assert game.board.cells[0][0] == BLACK


def test_forbidden_move_disqualifies_restricted_stone():
    black = SeqPlayer(BLACK, [(4, 3), (4, 5), (3, 4), (5, 4), (4, 4)])
    white = SeqPlayer(WHITE, [(0, 0), (0, 8), (8, 0), (8, 8)])
    game, log = _game(black, white, size=9, ruleset=renju_rules.Ruleset.for_game("black", None))

    assert game.play() == WHITE
    assert renju_rules.DOUBLE_THREE in log[-1]
    assert game.board.is_empty(4, 4)


def test_unrestricted_stone_may_play_the_same_shape():
    black = SeqPlayer(BLACK, [(4, 3), (4, 5), (3, 4), (5, 4), (4, 4), (4, 2), (4, 6)])
    white = SeqPlayer(WHITE, [(0, 0), (0, 8), (8, 0), (8, 8), (0, 4), (8, 4)])
    game, _ = _game(black, white, size=9)

    assert game.play() == BLACK


def test_human_player_retries_bad_input():
    answers = iter(["nonsense", "0 0", "0 1", "1 0", "2 0", "3 0", "4 0"])
    human = HumanPlayer(BLACK, input_fn=lambda prompt: next(answers))
    white = SeqPlayer(WHITE, [(0, 1), (1, 1), (2, 1), (3, 1)])
    game, log = _game(human, white)

    assert game.play() == BLACK
    retries = [line for line in log if line.startswith("Invalid move")]
    assert len(retries) == 2  # bad format, then the occupied (0, 1) on black's second turn


def test_human_retry_limit_disqualifies():
    human = HumanPlayer(BLACK, input_fn=lambda prompt: "x")
    white = SeqPlayer(WHITE, [])
    game, _ = _game(human, white, max_retries=3)
    assert game.play() == WHITE


def test_human_can_resign():
    human = HumanPlayer(BLACK, input_fn=lambda prompt: "resign")
    game, _ = _game(human, SeqPlayer(WHITE, []))
    assert game.play() == WHITE
    assert game.resigned == BLACK


def test_ai_player_answers_first_move_orthogonally():
    black = SeqPlayer(BLACK, [(5, 5)])
    ai = AiPlayer(WHITE, difficulty="easy")
    game, _ = _game(black, ai, size=16)

    # Black runs out of scripted moves on its second turn.
    assert game.play() == WHITE
    assert game.board.cells[5][6] == WHITE
    assert ai.stats == [{"strategy": "opening", "score": None, "move": (5, 6)}]


def test_ai_vs_ai_game_terminates():
    black = AiPlayer(BLACK, difficulty="easy")
    white = AiPlayer(WHITE, difficulty="easy")
    game, _ = _game(black, white, size=7)
    result = game.play()
    assert result in (BLACK, WHITE, DRAW)
    assert game.board.cells[3][3] == BLACK  # centre opening


@pytest.mark.parametrize("raw", ["1", "a b", "1 2 3"])
def test_human_input_format_errors(raw):
    human = HumanPlayer(BLACK, input_fn=lambda prompt: raw)
    with pytest.raises(InvalidMoveError):
        human.next_move(None)
