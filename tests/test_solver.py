from __future__ import annotations

import numpy as np
import pytest
from hypothesis import given

from lightsoff.algebra import TooManyFreeVariablesError
from lightsoff.bitmat import BitMatrix
from lightsoff.board import BoardState
from lightsoff.solver import LightsSolver, build_system, neighbors
from tests import strategies
from tests.utils import chase_min_weight, satisfies


def test_neighbors_open() -> None:
    assert neighbors(3, 3, 1, 1) == [(1, 1), (0, 1), (2, 1), (1, 0), (1, 2)]
    assert neighbors(3, 3, 0, 0) == [(0, 0), (1, 0), (0, 1)]
    assert neighbors(1, 1, 0, 0) == [(0, 0)]


def test_build_system_1x2() -> None:
    sys = build_system(BitMatrix.from_string("10\n"))
    assert str(sys) == "111\n110\n"


def test_build_system_is_symmetric() -> None:
    sys = build_system(BitMatrix.with_size(3, 4))
    A = sys.to_numpy()[:, :-1]
    np.testing.assert_array_equal(A, A.T)
    assert A.sum(axis=1).tolist() == [3, 4, 4, 3, 4, 5, 5, 4, 3, 4, 4, 3]


def test_single_light() -> None:
    solver = LightsSolver(BitMatrix.from_string("1\n"))
    sol = solver.solve()
    assert sol is not None
    assert str(sol) == "1\n"
    assert solver.min_weight == 1
    assert solver.n_solutions == 1
    assert solver.rank == 1


def test_counters_before_solve() -> None:
    solver = LightsSolver(BitMatrix.from_string("1\n"))
    assert solver.rank == 0
    assert solver.n_solutions == 0
    assert solver.min_weight == 0


def test_2x2_all_on() -> None:
    board = BoardState.all_on(2, 2)
    solver = LightsSolver.from_board(board)
    sol = solver.solve_board()
    assert sol is not None
    assert solver.rank == 4
    assert solver.n_solutions == 2 ** (4 - solver.rank)
    assert str(sol) == "11\n11"
    assert solver.min_weight == 4
    assert board.apply(sol).is_clear()


def test_3x3_all_on() -> None:
    solver = LightsSolver.from_board(BoardState.all_on(3, 3))
    sol = solver.solve()
    assert sol is not None
    assert str(sol) == "101\n010\n101\n"
    assert solver.min_weight == 5
    assert solver.n_solutions == 1


@pytest.mark.parametrize(("n", "rank"), [(4, 12), (5, 23)])
def test_singular_all_on(n: int, rank: int) -> None:
    board = BoardState.all_on(n, n)
    solver = LightsSolver.from_board(board)
    sol = solver.solve_board()
    assert sol is not None
    assert solver.rank == rank
    assert solver.n_solutions == 2 ** (n * n - rank)
    assert board.apply(sol).is_clear()
    assert solver.min_weight == sol.count_on() == chase_min_weight(board)


def test_5x5_corner_has_no_solution() -> None:
    state = np.zeros((5, 5), dtype=bool)
    state[0, 0] = True
    board = BoardState(5, 5, state)
    solver = LightsSolver.from_board(board)
    assert solver.solve() is None
    assert solver.n_solutions == 0
    assert chase_min_weight(board) is None


def test_all_off() -> None:
    solver = LightsSolver(BitMatrix.with_size(4, 4))
    sol = solver.solve()
    assert sol is not None
    assert sol.count_ones() == 0
    assert solver.min_weight == 0
    assert solver.n_solutions == 16


def test_rectangular() -> None:
    board = BoardState.all_on(2, 3)
    solver = LightsSolver.from_board(board)
    sol = solver.solve_board()
    assert sol is not None
    assert sol.shape == (2, 3)
    assert board.apply(sol).is_clear()


def test_word_width_does_not_change_result() -> None:
    board = BoardState.all_on(5, 5)
    wide = LightsSolver.from_board(board, word_bits=64).solve()
    narrow = LightsSolver.from_board(board, word_bits=32).solve()
    assert wide is not None and narrow is not None
    assert str(wide) == str(narrow)


def test_free_variable_limit() -> None:
    solver = LightsSolver.from_board(BoardState.all_on(4, 4), max_free_vars=2)
    with pytest.raises(TooManyFreeVariablesError):
        solver.solve()


@given(strategies.boards())
def test_solution_clears_board(state: np.ndarray) -> None:
    board = BoardState(*state.shape, state)
    field = board.to_bitmatrix()
    solver = LightsSolver(field)
    sol = solver.solve_board()
    expected = chase_min_weight(board)
    if expected is None:
        assert sol is None
        return
    assert sol is not None
    assert board.apply(sol).is_clear()
    assert solver.min_weight == expected


@given(strategies.boards())
def test_solution_satisfies_equations(state: np.ndarray) -> None:
    field = BitMatrix.from_numpy(state)
    solver = LightsSolver(field)
    sol = solver.solve()
    if sol is None:
        return
    flat = BitMatrix.from_numpy(sol.to_numpy().reshape(1, -1)).row(0)
    assert satisfies(build_system(field), flat)
