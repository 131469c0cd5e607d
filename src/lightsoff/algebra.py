from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .bitmat import BitMatrix
from .bitvec import WORD_BITS, BitVector

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class TooManyFreeVariablesError(ValueError):
    """Raised when a minimum-weight search would enumerate too many candidates."""

    def __init__(self, n_free: int, limit: int):
        super().__init__(
            f"System has {n_free} free variables, more than the limit of {limit}"
        )
        self.n_free = n_free
        self.limit = limit


class BitGauss:
    """Gauss-Jordan elimination over GF(2) for an augmented system.

    The system holds ``n_rows`` equations over ``n_cols - 1`` variables; the
    last column is the right-hand side.
    """

    def __init__(self, system: BitMatrix, max_free_vars: int = WORD_BITS):
        self._system = system
        self.max_free_vars = max_free_vars
        self._rank = 0
        self._pivots: list[int] = []

    @classmethod
    def with_size(
        cls, n_rows: int, n_cols: int, word_bits: int = WORD_BITS
    ) -> "BitGauss":
        return cls(BitMatrix.with_size(n_rows, n_cols, word_bits))

    @property
    def system(self) -> BitMatrix:
        return self._system

    @property
    def rank(self) -> int:
        return self._rank

    @property
    def pivots(self) -> List[int]:
        """Pivot column of each pivot row, in row order."""
        return list(self._pivots)

    @property
    def n_vars(self) -> int:
        return max(self._system.n_cols - 1, 0)

    def free_columns(self) -> List[int]:
        pivots = set(self._pivots)
        return [col for col in range(self.n_vars) if col not in pivots]

    @property
    def n_solutions(self) -> int:
        return 1 << (self.n_vars - self._rank)

    def gauss(self, progress: Optional[ProgressCallback] = None) -> None:
        """Reduce the system to reduced row-echelon form in place."""
        system = self._system
        n_rows = system.n_rows
        n_vars = self.n_vars

        row = 0
        pivots: list[int] = []
        for col in range(n_vars):
            if row == n_rows:
                break
            # find a pivot in/under current row
            pivot = None
            for r in range(row, n_rows):
                if system.get(r, col):
                    pivot = r
                    break
            if progress is not None and col + 1 < n_vars:
                progress(col + 1, n_vars)
            if pivot is None:
                continue
            if pivot != row:
                system.swap_rows(row, pivot)
            # eliminate ALL other rows (Gauss-Jordan)
            for r in range(n_rows):
                if r != row and system.get(r, col):
                    system.xor_rows(r, row)
            pivots.append(col)
            row += 1

        if progress is not None and n_vars > 0:
            progress(n_vars, n_vars)

        self._pivots = pivots
        self._rank = row
        logger.debug(
            "Eliminated %dx%d system: rank=%d", n_rows, system.n_cols, self._rank
        )

    def is_consistent(self) -> bool:
        """True unless a row past the rank has a set right-hand side."""
        system, n_vars = self._system, self.n_vars
        return not any(
            system.get(r, n_vars) for r in range(self._rank, system.n_rows)
        )

    def solve(
        self, progress: Optional[ProgressCallback] = None
    ) -> Optional[BitVector]:
        """Return the minimum-Hamming-weight solution, or None if inconsistent.

        Every assignment of the free variables is tried. Candidates are
        visited in Gray-code order so that each step flips one free variable,
        and ties are broken towards the lowest free-variable bitmask.
        """
        self.gauss(progress)
        if not self.is_consistent():
            logger.debug("System is inconsistent, no solution")
            return None

        system = self._system
        n_vars = self.n_vars
        rank = self._rank
        pivots = self._pivots
        free = self.free_columns()
        n_free = len(free)
        word_bits = system.rows[0].word_bits if system.rows else WORD_BITS

        solution = BitVector(n_vars, word_bits)

        # The system has one solution
        if n_free == 0:
            for r, col in enumerate(pivots):
                solution.set(col, system.get(r, n_vars))
            return solution

        # Pivot values as integers: bit r belongs to pivot row r.
        rhs = 0
        for r in range(rank):
            if system.get(r, n_vars):
                rhs |= 1 << r
        # Homogeneous: the all-false assignment has weight 0.
        if rhs == 0:
            return solution

        if n_free > self.max_free_vars:
            raise TooManyFreeVariablesError(n_free, self.max_free_vars)

        columns = []
        for col in free:
            mask = 0
            for r in range(rank):
                if system.get(r, col):
                    mask |= 1 << r
            columns.append(mask)

        best_key: Optional[tuple] = None
        best_free = 0
        best_pivot = 0
        accumulator = rhs
        gray = 0
        n_candidates = 1 << n_free
        for i in range(n_candidates):
            if i:
                k = (i & -i).bit_length() - 1
                gray ^= 1 << k
                accumulator ^= columns[k]
            candidate_key = (gray.bit_count() + accumulator.bit_count(), gray)
            if best_key is None or candidate_key < best_key:
                best_key = candidate_key
                best_free = gray
                best_pivot = accumulator

        for r, col in enumerate(pivots):
            solution.set(col, bool((best_pivot >> r) & 1))
        for k, col in enumerate(free):
            solution.set(col, bool((best_free >> k) & 1))

        logger.debug(
            "Searched %d candidates over %d free variables: min weight %d",
            n_candidates,
            n_free,
            best_key[0],
        )
        return solution
