import pytest

from tttbook.builder import (
    DRAW,
    IN_PROGRESS,
    LOST,
    build_page_graph,
    expand_next,
    new_builder_state,
)
from tttbook.game_basics import EMPTY, O, X, apply_move, board_key, empty_cells, get_winner
from tttbook.solver import minimax


@pytest.fixture(scope="module")
def graph():
    return build_page_graph()


@pytest.fixture(scope="module")
def by_id(graph):
    return {p.id: p for p in graph.values()}


def follow(by_id, choose):
    page = by_id[1]
    path = [page]
    while page.outcome == IN_PROGRESS:
        cell = choose(page)
        page = by_id[dict(page.transitions)[cell]]
        path.append(page)
    return path


def test_initial_state():
    state = new_builder_state()
    assert state.next_id == 2
    assert len(state.graph) == 1
    assert list(state.queue) == ["_________"]


def test_first_expansion_allocates_nine_pages():
    state = expand_next(new_builder_state())
    page1 = state.graph["_________"]
    assert page1.outcome == IN_PROGRESS
    assert [t for _, t in page1.transitions] == list(range(2, 11))
    assert state.next_id == 11
    assert len(state.queue) == 9


def test_page_one_has_nine_moves(by_id):
    p1 = by_id[1]
    assert all(v == EMPTY for v in p1.board)
    assert [c for c, _ in p1.transitions] == empty_cells(p1.board)
    assert len(p1.transitions) == 9


def test_center_opening_leads_to_corner_reply(by_id):
    target = dict(by_id[1].transitions)[(1, 1)]
    page = by_id[target]
    assert page.board[4] == X
    assert page.board[0] == O
    assert sum(1 for v in page.board if v == O) == 1
    assert len(page.transitions) == 7


def test_ids_contiguous_and_keys_unique(graph):
    ids = sorted(p.id for p in graph.values())
    assert ids == list(range(1, len(graph) + 1))
    assert all(key == board_key(p.board) for key, p in graph.items())
    assert len({board_key(p.board) for p in graph.values()}) == len(graph)


def test_human_never_wins(graph):
    for p in graph.values():
        assert get_winner(p.board) != X
        assert p.outcome in {IN_PROGRESS, LOST, DRAW}


def test_transitions_match_empty_cells(graph):
    for p in graph.values():
        if p.outcome == IN_PROGRESS:
            assert [c for c, _ in p.transitions] == empty_cells(p.board)
        else:
            assert p.transitions == []


def test_targets_exist(graph, by_id):
    for p in graph.values():
        for _, t in p.transitions:
            assert t in by_id


def test_discovery_order_is_breadth_first(by_id):
    assert by_id[1].parent is None
    parents = [by_id[i].parent for i in range(2, len(by_id) + 1)]
    assert all(parent < child for child, parent in enumerate(parents, start=2))
    assert parents == sorted(parents)


def test_both_outcomes_present(graph):
    outcomes = {p.outcome for p in graph.values()}
    assert {LOST, DRAW} <= outcomes


def test_careless_line_loses(by_id):
    # always take the first free cell: X corner, O center, X edge, O blocks, X edge, O wins
    path = follow(by_id, lambda page: page.transitions[0][0])
    assert len(path) == 4
    assert path[-1].outcome == LOST
    assert get_winner(path[-1].board) == O


def test_corner_opening_with_best_play_draws(by_id):
    def choose(page):
        if page.id == 1:
            return (0, 0)
        cells = [c for c, _ in page.transitions]
        return min(cells, key=lambda c: minimax(apply_move(page.board, c, X), True))

    path = follow(by_id, choose)
    assert path[-1].outcome == DRAW
    assert all(p.outcome != LOST for p in path)


def test_generation_is_deterministic(graph):
    again = build_page_graph()
    assert list(again.keys()) == list(graph.keys())
    for key, p in graph.items():
        q = again[key]
        assert (q.id, q.board, q.parent, q.outcome, q.transitions) == (
            p.id, p.board, p.parent, p.outcome, p.transitions,
        )
