from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .algebra import BitGauss, ProgressCallback
from .bitmat import BitMatrix
from .bitvec import WORD_BITS
from .board import BoardState

logger = logging.getLogger(__name__)


def neighbors(rows: int, cols: int, r: int, c: int) -> List[Tuple[int, int]]:
    """The cell itself followed by its in-bounds orthogonal neighbours."""
    neigh = [(r, c)]
    if r > 0:
        neigh.append((r - 1, c))
    if r < rows - 1:
        neigh.append((r + 1, c))
    if c > 0:
        neigh.append((r, c - 1))
    if c < cols - 1:
        neigh.append((r, c + 1))
    return neigh


def build_system(field: BitMatrix, word_bits: int = WORD_BITS) -> BitMatrix:
    """Return the N x (N+1) augmented system over GF(2) for a Lights Off field.

    Row ``r * cols + c`` is the equation of cell (r, c): the presses that
    toggle it, with the cell's initial state as right-hand side.
    """
    rows, cols = field.n_rows, field.n_cols
    N = rows * cols
    system = BitMatrix.with_size(N, N + 1, word_bits)

    def idx(r, c):
        return r * cols + c

    for r in range(rows):
        for c in range(cols):
            i = idx(r, c)
            for rr, cc in neighbors(rows, cols, r, c):
                system.set(i, idx(rr, cc), True)
            system.set(i, N, field.get(r, c))
    return system


class LightsSolver:
    """Minimum-press solver for the Lights Off puzzle on a rectangular field."""

    def __init__(
        self,
        field: BitMatrix,
        max_free_vars: int = WORD_BITS,
        word_bits: int = WORD_BITS,
    ):
        self.n_rows = field.n_rows
        self.n_cols = field.n_cols
        self.word_bits = word_bits
        self.alg = BitGauss(build_system(field, word_bits), max_free_vars)
        self.n_solutions = 0
        self.min_weight = 0

    @classmethod
    def from_board(cls, board: BoardState, **kwargs) -> "LightsSolver":
        word_bits = kwargs.get("word_bits", WORD_BITS)
        return cls(board.to_bitmatrix(word_bits), **kwargs)

    @property
    def rank(self) -> int:
        return self.alg.rank

    def solve(
        self, progress: Optional[ProgressCallback] = None
    ) -> Optional[BitMatrix]:
        """Return the press pattern with the fewest presses, or None."""
        syssol = self.alg.solve(progress)
        if syssol is None:
            logger.debug(
                "No solution for %dx%d field", self.n_rows, self.n_cols
            )
            return None

        self.n_solutions = 1 << (self.n_rows * self.n_cols - self.alg.rank)
        self.min_weight = syssol.count_ones()

        sol = BitMatrix.with_size(self.n_rows, self.n_cols, self.word_bits)
        for row in range(self.n_rows):
            for col in range(self.n_cols):
                if syssol.get(self.n_cols * row + col):
                    sol.set(row, col, True)

        logger.debug(
            "Solved %dx%d field: rank=%d, solutions=%d, weight=%d",
            self.n_rows,
            self.n_cols,
            self.rank,
            self.n_solutions,
            self.min_weight,
        )
        return sol

    def solve_board(
        self, progress: Optional[ProgressCallback] = None
    ) -> Optional[BoardState]:
        sol = self.solve(progress)
        if sol is None:
            return None
        return BoardState.from_bitmatrix(sol)
