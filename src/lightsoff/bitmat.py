from __future__ import annotations

from typing import Iterator, Optional

import numpy as np
from numpy.typing import NDArray

from .bitvec import WORD_BITS, BitVector


class BitMatrix:
    """Rows of equal-length BitVectors.

    Rows are held as a list of vector handles, so ``swap_rows`` reorders the
    handles and never copies bit content.
    """

    def __init__(self, rows: Optional[list[BitVector]] = None):
        self.rows: list[BitVector] = list(rows) if rows is not None else []
        if len({len(row) for row in self.rows}) > 1:
            raise ValueError("All rows of a BitMatrix must have the same length")

    @classmethod
    def with_size(
        cls, n_rows: int, n_cols: int, word_bits: int = WORD_BITS
    ) -> "BitMatrix":
        return cls([BitVector(n_cols, word_bits) for _ in range(n_rows)])

    @classmethod
    def from_string(cls, text: str, word_bits: int = WORD_BITS) -> "BitMatrix":
        """Parse one row per line; reading stops at the first empty line."""
        rows = []
        for line in text.splitlines():
            if not line:
                break
            rows.append(BitVector.from_string(line, word_bits))
        return cls(rows)

    @classmethod
    def from_numpy(
        cls, array: NDArray, word_bits: int = WORD_BITS
    ) -> "BitMatrix":
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError(f"Expected a 2D array, got shape {array.shape}")
        return cls([BitVector.from_bools(row, word_bits) for row in array])

    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def n_cols(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def row(self, index: int) -> BitVector:
        return self.rows[index]

    def __getitem__(self, index: int) -> BitVector:
        return self.rows[index]

    def __iter__(self) -> Iterator[BitVector]:
        return iter(self.rows)

    def get(self, row: int, col: int) -> bool:
        return self.rows[row].get(col)

    def set(self, row: int, col: int, value: bool) -> None:
        self.rows[row].set(col, value)

    def swap_rows(self, i: int, j: int) -> None:
        self.rows[i], self.rows[j] = self.rows[j], self.rows[i]

    def xor_rows(self, i: int, j: int) -> None:
        """row i <- row i XOR row j."""
        self.rows[i].xor_with(self.rows[j])

    def count_ones(self) -> int:
        return sum(row.count_ones() for row in self.rows)

    def copy(self) -> "BitMatrix":
        return BitMatrix([row.copy() for row in self.rows])

    def to_numpy(self) -> NDArray[np.bool_]:
        if not self.rows:
            return np.zeros((0, 0), dtype=bool)
        return np.stack([row.to_numpy() for row in self.rows])

    def __eq__(self, other) -> bool:
        if not isinstance(other, BitMatrix):
            return NotImplemented
        return self.n_rows == other.n_rows and all(
            a == b for a, b in zip(self.rows, other.rows)
        )

    def __str__(self) -> str:
        return "".join(f"{row}\n" for row in self.rows)

    def __repr__(self):
        return f"BitMatrix(n_rows={self.n_rows}, n_cols={self.n_cols})"
