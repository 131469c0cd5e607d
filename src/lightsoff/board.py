from __future__ import annotations

import numpy as np

from .bitmat import BitMatrix
from .bitvec import WORD_BITS


def _press_in_place(grid: np.ndarray, r: int, c: int) -> None:
    """Toggle cell and its neighbors."""
    n_rows, n_cols = grid.shape
    grid[r, c] ^= True
    if r > 0:
        grid[r - 1, c] ^= True
    if r < n_rows - 1:
        grid[r + 1, c] ^= True
    if c > 0:
        grid[r, c - 1] ^= True
    if c < n_cols - 1:
        grid[r, c + 1] ^= True


class BoardState:
    def __init__(self, rows: int, cols: int, state: np.ndarray | None = None):
        self.rows = rows
        self.cols = cols
        if state is None:
            self.state = np.zeros((rows, cols), dtype=bool)
        else:
            state = np.asarray(state)
            if state.shape != (rows, cols):
                raise ValueError(
                    f"Expected state of shape {(rows, cols)}, got {state.shape}"
                )
            self.state = state.astype(bool, copy=True)

    @staticmethod
    def all_on(rows: int, cols: int) -> "BoardState":
        return BoardState(rows, cols, np.ones((rows, cols), dtype=bool))

    @staticmethod
    def from_string(text: str) -> "BoardState":
        return BoardState.from_bitmatrix(BitMatrix.from_string(text))

    @staticmethod
    def from_bitmatrix(matrix: BitMatrix) -> "BoardState":
        return BoardState(matrix.n_rows, matrix.n_cols, matrix.to_numpy())

    def to_bitmatrix(self, word_bits: int = WORD_BITS) -> BitMatrix:
        return BitMatrix.from_numpy(self.state, word_bits)

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    def copy(self) -> "BoardState":
        return BoardState(self.rows, self.cols, self.state.copy())

    def to_flat(self) -> np.ndarray:
        return self.state.reshape(-1)

    @staticmethod
    def from_flat(rows: int, cols: int, flat: np.ndarray) -> "BoardState":
        return BoardState(rows, cols, np.asarray(flat).reshape(rows, cols))

    def count_on(self) -> int:
        return int(self.state.sum())

    def is_clear(self) -> bool:
        return not self.state.any()

    def press(self, r: int, c: int) -> None:
        _press_in_place(self.state, r, c)

    def apply(self, presses: "BoardState") -> "BoardState":
        """Return the board after pressing every cell set in ``presses``."""
        if presses.shape != self.shape:
            raise ValueError(
                f"Press pattern of shape {presses.shape} does not fit board {self.shape}"
            )
        result = self.copy()
        for r, c in zip(*np.nonzero(presses.state)):
            result.press(int(r), int(c))
        return result

    def __eq__(self, other) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return self.shape == other.shape and bool(
            np.array_equal(self.state, other.state)
        )

    def __repr__(self):
        return f"BoardState(rows={self.rows}, cols={self.cols}, on={self.count_on()})"

    def __str__(self) -> str:
        return "\n".join(
            "".join("1" if cell else "0" for cell in row) for row in self.state
        )
