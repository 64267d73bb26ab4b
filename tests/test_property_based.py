from typing import List, Tuple

import pytest
try:
    from hypothesis import given, settings, strategies as st  # type: ignore
    HAS_HYP = True
except ModuleNotFoundError:  # pragma: no cover - test infra
    HAS_HYP = False
    import pytest as _pytest  # type: ignore
    _pytest.skip("Hypothesis not installed", allow_module_level=True)

from tictactoe3.config import Params
from tictactoe3.engine import PlayEngine
from tictactoe3.errors import IllegalStateError, InvalidCellError
from tictactoe3.models import EMPTY, Cell, RuntimeStatus


def _empty_count(engine: PlayEngine) -> int:
    return sum(1 for row in engine.field.rows() for m in row if m == EMPTY)


@given(st.integers(min_value=1, max_value=50))
def test_win_score_is_min_of_size_and_five(n: int):
    assert PlayEngine(Params(play_field_size=n)).win_score == min(n, 5)


moves = st.lists(st.tuples(st.integers(-2, 7), st.integers(-2, 7)), max_size=80)


@settings(max_examples=150, deadline=None)
@given(st.integers(min_value=1, max_value=6), moves)
def test_random_games_keep_invariants(n: int, cells: List[Tuple[int, int]]):
    eng = PlayEngine(Params(play_field_size=n))
    for r, c in cells:
        cell = Cell(r, c)
        free = eng.field.get_free_room_count()
        turn = eng.turn
        rows = eng.field.rows()
        if eng.status is RuntimeStatus.OVER:
            with pytest.raises(IllegalStateError):
                eng.perform_action(cell)
            assert eng.field.rows() == rows
            continue
        legal = 0 <= r < n and 0 <= c < n and rows[r][c] == EMPTY
        if not legal:
            with pytest.raises(InvalidCellError):
                eng.perform_action(cell)
            assert eng.field.get_free_room_count() == free
            assert eng.turn == turn
            assert eng.field.rows() == rows
            continue
        mover = eng.next_player
        eng.perform_action(cell)
        assert eng.field.get_free_room_count() == free - 1
        assert eng.turn == (turn + 1) % 3
        assert eng.field.mark_at(cell) == mover.mark
        best = max(eng.field.line_scores(cell).values())
        if best >= eng.win_score:
            assert eng.status is RuntimeStatus.OVER
            assert eng.winner == mover
        elif eng.field.get_free_room_count() == 0:
            assert eng.status is RuntimeStatus.OVER
            assert eng.winner is None
        else:
            assert eng.status is RuntimeStatus.RUNNING
        assert _empty_count(eng) == eng.field.get_free_room_count()


@given(st.integers(min_value=1, max_value=6), st.randoms(use_true_random=False))
def test_games_always_terminate_when_every_cell_is_tried(n: int, rnd):
    eng = PlayEngine(Params(play_field_size=n))
    cells = [Cell(r, c) for r in range(n) for c in range(n)]
    rnd.shuffle(cells)
    for cell in cells:
        if eng.status is RuntimeStatus.OVER:
            break
        eng.perform_action(cell)
    assert eng.status is RuntimeStatus.OVER
    if eng.winner is None:
        assert eng.field.get_free_room_count() == 0
