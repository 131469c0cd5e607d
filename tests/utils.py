from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

import numpy as np

from lightsoff.algebra import BitGauss
from lightsoff.board import BoardState

if TYPE_CHECKING:
    from lightsoff.bitmat import BitMatrix
    from lightsoff.bitvec import BitVector


def satisfies(system: BitMatrix, solution: BitVector) -> bool:
    """Check every equation row of an augmented system against an assignment."""
    n_vars = system.n_cols - 1
    for row in system:
        acc = False
        for j in range(n_vars):
            if row.get(j) and solution.get(j):
                acc = not acc
        if acc != row.get(n_vars):
            return False
    return True


def brute_force_min_weight(system: BitMatrix) -> int | None:
    """Smallest weight over all 2^n assignments, or None if none satisfies."""
    A = system.to_numpy().astype(np.uint8)
    coeffs, rhs = A[:, :-1], A[:, -1]
    n_vars = coeffs.shape[1]
    best = None
    for bits in itertools.product((0, 1), repeat=n_vars):
        x = np.array(bits, dtype=np.uint8)
        if np.array_equal(coeffs.dot(x) % 2, rhs):
            w = int(x.sum())
            if best is None or w < best:
                best = w
    return best


def chase_min_weight(board: BoardState) -> int | None:
    """Try all first-row presses and chase lights down; None if unsolvable."""
    best = None
    for mask in range(1 << board.cols):
        grid = board.copy()
        presses = 0
        for c in range(board.cols):
            if (mask >> c) & 1:
                grid.press(0, c)
                presses += 1
        for r in range(1, board.rows):
            for c in range(board.cols):
                if grid.state[r - 1, c]:
                    grid.press(r, c)
                    presses += 1
        if grid.is_clear() and (best is None or presses < best):
            best = presses
    return best


def plain_scan_solution(alg: BitGauss) -> str | None:
    """Minimum-weight assignment by scanning free-variable masks 0..2^k in order.

    Keeps the first candidate on ties. Runs its own elimination on ``alg``.
    """
    alg.gauss()
    if not alg.is_consistent():
        return None
    system = alg.system
    n_vars = alg.n_vars
    pivots = alg.pivots
    free = alg.free_columns()
    best_weight = None
    best = None
    for idx in range(1 << len(free)):
        x = [False] * n_vars
        for k, col in enumerate(free):
            x[col] = bool((idx >> k) & 1)
        for r, col in enumerate(pivots):
            acc = system.get(r, n_vars)
            for k, fcol in enumerate(free):
                if (idx >> k) & 1 and system.get(r, fcol):
                    acc = not acc
            x[col] = acc
        weight = sum(x)
        if best_weight is None or weight < best_weight:
            best_weight = weight
            best = "".join("1" if bit else "0" for bit in x)
    return best
