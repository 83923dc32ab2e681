from tttbook.game_basics import O, X, apply_move, deserialize_board, empty_board
from tttbook.solver import best_move, evaluate, minimax


def test_evaluate_scores():
    assert evaluate(deserialize_board("222110100")) == 10
    assert evaluate(deserialize_board("111220200")) == -10
    assert evaluate(deserialize_board("100020000")) == 0


def test_terminal_positions():
    # won boards stop the search even with free cells left
    assert minimax(deserialize_board("222110100"), False) == 10
    assert minimax(deserialize_board("112221121"), True) == 0


def test_initial_state_is_draw_under_perfect_play():
    assert minimax(empty_board(), False) == 0


def test_reply_to_center_is_first_corner():
    b = apply_move(empty_board(), (1, 1), X)
    assert best_move(b) == (0, 0)


def test_reply_to_corner_is_center():
    b = apply_move(empty_board(), (0, 0), X)
    assert best_move(b) == (1, 1)


def test_blocks_immediate_threat():
    # X holds (0,0) and (1,0); only (2,0) avoids a loss
    b = deserialize_board("100120000")
    assert best_move(b) == (2, 0)


def test_tie_break_keeps_first_equal_move():
    # every opening scores 0, so the first cell in row-major order is kept
    assert best_move(empty_board()) == (0, 0)


def test_best_move_score_matches_search():
    b = apply_move(empty_board(), (1, 1), X)
    mv = best_move(b)
    assert minimax(apply_move(b, mv, O), False) == minimax(b, True)
