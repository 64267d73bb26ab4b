import pytest

from tictactoe3.errors import ConfigurationError, IllegalStateError
from tictactoe3.field import PlayField
from tictactoe3.models import Cell, Player
from tictactoe3.strategy import (
    RandomStrategy,
    TacticalStrategy,
    get_strategy,
    immediate_winning_cells,
)

X = Player("Player1", "X")
O = Player("Player2", "O")
A = Player("AI", "A", is_ai=True)


def field_from(rows):
    f = PlayField(len(rows))
    for r, row in enumerate(rows):
        for c, ch in enumerate(row):
            if ch != ".":
                f.put(ch, Cell(r, c))
    return f


def test_immediate_winning_cells():
    f = field_from(["AA.", "...", "..."])
    assert immediate_winning_cells(f, "A", 3) == [Cell(0, 2)]
    assert immediate_winning_cells(f, "X", 3) == []


def test_tactical_takes_the_win():
    f = field_from(["AA.", "XX.", "O.O"])
    assert TacticalStrategy(seed=0).choose_cell(f, A, 3, [X, O]) == Cell(0, 2)


def test_tactical_blocks_next_rival_first():
    f = field_from(["X.X", "...", "O.O"])
    assert TacticalStrategy(seed=0).choose_cell(f, A, 3, [X, O]) == Cell(0, 1)
    assert TacticalStrategy(seed=0).choose_cell(f, A, 3, [O, X]) == Cell(2, 1)


def test_tactical_prefers_center_on_empty_field():
    f = PlayField(3)
    assert TacticalStrategy(seed=1).choose_cell(f, A, 3, [X, O]) == Cell(1, 1)


def test_tactical_extends_own_line():
    f = PlayField(7)
    f.put("A", Cell(3, 3))
    f.put("A", Cell(3, 4))
    cell = TacticalStrategy(seed=3).choose_cell(f, A, 5, [X, O])
    assert cell in (Cell(3, 2), Cell(3, 5))


def test_strategies_do_not_touch_the_field():
    f = field_from(["X..", ".O.", "..."])
    before = f.rows()
    TacticalStrategy(seed=0).choose_cell(f, A, 3, [X, O])
    RandomStrategy(seed=0).choose_cell(f, A, 3, [X, O])
    assert f.rows() == before
    assert f.get_free_room_count() == 7


@pytest.mark.parametrize("seed", range(10))
def test_random_picks_free_cells(seed):
    f = field_from(["XOA", "X.A", "OXA"])
    assert RandomStrategy(seed=seed).choose_cell(f, A, 3) == Cell(1, 1)


def test_random_is_reproducible_with_seed():
    f = PlayField(5)
    a = [RandomStrategy(seed=42).choose_cell(f, A, 5) for _ in range(3)]
    b = [RandomStrategy(seed=42).choose_cell(f, A, 5) for _ in range(3)]
    assert a == b


@pytest.mark.parametrize("name", ["random", "tactical"])
def test_full_field_raises(name):
    f = field_from(["XOA", "XOA", "OXA"])
    with pytest.raises(IllegalStateError):
        get_strategy(name, seed=0).choose_cell(f, A, 3, [X, O])


def test_unknown_strategy():
    with pytest.raises(ConfigurationError):
        get_strategy("minimax")
