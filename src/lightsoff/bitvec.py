from __future__ import annotations

from typing import Iterable, Iterator, Optional

import numpy as np
from numpy.typing import NDArray

WORD_BITS = 64

_WORD_DTYPES = {32: np.uint32, 64: np.uint64}


def _n_words(n_bits: int, word_bits: int) -> int:
    return (n_bits + word_bits - 1) // word_bits


def _check_word_bits(word_bits: int) -> None:
    if word_bits not in _WORD_DTYPES:
        raise ValueError(
            f"word_bits must be one of {sorted(_WORD_DTYPES)}, got {word_bits}"
        )


class BitVector:
    """Packed sequence of bits stored in fixed-width unsigned words.

    Bit ``i`` lives in word ``i // word_bits`` at position ``i % word_bits``
    (least significant bit first). Bits at positions >= ``len`` are padding:
    they may hold garbage after ``setall`` or ``xor_with`` and are masked off
    by every whole-vector aggregate.
    """

    def __init__(self, length: int = 0, word_bits: int = WORD_BITS):
        _check_word_bits(word_bits)
        self.word_bits = word_bits
        self.words: NDArray = np.zeros(
            _n_words(length, word_bits), dtype=_WORD_DTYPES[word_bits]
        )
        self.length = length

    @classmethod
    def with_capacity(
        cls, n_bits: int, word_bits: int = WORD_BITS
    ) -> "BitVector":
        """Empty vector with storage preallocated for ``n_bits`` bits."""
        vec = cls(0, word_bits)
        vec.words = np.zeros(
            _n_words(n_bits, word_bits), dtype=_WORD_DTYPES[word_bits]
        )
        return vec

    @classmethod
    def from_string(cls, text: str, word_bits: int = WORD_BITS) -> "BitVector":
        """Parse a token string: ``'1'`` is true, any other character false."""
        return cls.from_bools((ch == "1" for ch in text), word_bits)

    @classmethod
    def from_bools(
        cls, values: Iterable, word_bits: int = WORD_BITS
    ) -> "BitVector":
        bits = [bool(v) for v in values]
        vec = cls(len(bits), word_bits)
        for i, bit in enumerate(bits):
            if bit:
                vec.set(i, True)
        return vec

    @property
    def capacity(self) -> int:
        return len(self.words) * self.word_bits

    def __len__(self) -> int:
        return self.length

    def get(self, index: int) -> bool:
        word, bit = divmod(index, self.word_bits)
        return bool((int(self.words[word]) >> bit) & 1)

    def set(self, index: int, value: bool) -> None:
        word, bit = divmod(index, self.word_bits)
        current = int(self.words[word])
        if value:
            self.words[word] = current | (1 << bit)
        else:
            self.words[word] = current & ~(1 << bit)

    def xor(self, index: int, value: bool) -> None:
        """Flip bit ``index`` when ``value`` is true."""
        if value:
            word, bit = divmod(index, self.word_bits)
            self.words[word] = int(self.words[word]) ^ (1 << bit)

    def setall(self, value: bool) -> None:
        # Covers the whole storage, padding included.
        if value:
            self.words.fill(np.iinfo(self.words.dtype).max)
        else:
            self.words.fill(0)

    def _grow(self, n_words: int) -> None:
        if n_words <= len(self.words):
            return
        grown = np.zeros(n_words, dtype=self.words.dtype)
        grown[: len(self.words)] = self.words
        self.words = grown

    def _clear_from(self, start: int, stop: int) -> None:
        """Zero bits in ``[start, stop)``; ``stop`` must fit the storage."""
        if start >= stop:
            return
        word, bit = divmod(start, self.word_bits)
        if bit:
            self.words[word] = int(self.words[word]) & ((1 << bit) - 1)
            word += 1
        self.words[word : _n_words(stop, self.word_bits)] = 0

    def push(self, value: bool) -> None:
        if self.length == self.capacity:
            self._grow(max(1, 2 * len(self.words)))
        self.length += 1
        self.set(self.length - 1, value)

    def pop(self) -> Optional[bool]:
        """Remove and return the last bit, or ``None`` when empty."""
        if self.length == 0:
            return None
        value = self.get(self.length - 1)
        self.length -= 1
        return value

    def resize(self, new_len: int) -> None:
        """Grow with false bits or truncate to ``new_len``."""
        if new_len > self.length:
            self.extend(new_len - self.length)
        else:
            self.truncate(new_len)

    def extend(self, n: int) -> None:
        """Append ``n`` false bits."""
        new_len = self.length + n
        self._grow(_n_words(new_len, self.word_bits))
        self._clear_from(self.length, new_len)
        self.length = new_len

    def truncate(self, new_len: int) -> None:
        """Shorten to ``new_len`` bits and drop unused trailing words."""
        if new_len >= self.length:
            return
        self.length = new_len
        self.words = self.words[: _n_words(new_len, self.word_bits)].copy()

    def _masked_words(self) -> NDArray:
        words = self.words[: _n_words(self.length, self.word_bits)].copy()
        rest = self.length % self.word_bits
        if rest:
            words[-1] = int(words[-1]) & ((1 << rest) - 1)
        return words

    def count_ones(self) -> int:
        words = self._masked_words()
        return int(np.unpackbits(words.view(np.uint8)).sum())

    def xor_with(self, other: "BitVector") -> None:
        """In-place word-wise XOR with a vector of the same length."""
        n = _n_words(min(self.length, other.length), self.word_bits)
        self.words[:n] ^= other.words[:n]

    def support(self) -> list[int]:
        return [i for i in range(self.length) if self.get(i)]

    def to_numpy(self) -> NDArray[np.bool_]:
        little = self.words.astype(f"<u{self.word_bits // 8}")
        bits = np.unpackbits(little.view(np.uint8), bitorder="little")
        return bits[: self.length].astype(bool)

    def copy(self) -> "BitVector":
        vec = BitVector(0, self.word_bits)
        vec.words = self.words.copy()
        vec.length = self.length
        return vec

    def __iter__(self) -> Iterator[bool]:
        return (self.get(i) for i in range(self.length))

    def __eq__(self, other) -> bool:
        if not isinstance(other, BitVector):
            return NotImplemented
        if self.length != other.length:
            return False
        if self.word_bits != other.word_bits:
            return list(self) == list(other)
        return bool(np.array_equal(self._masked_words(), other._masked_words()))

    def stringify(self) -> str:
        return "".join("1" if bit else "0" for bit in self)

    def __str__(self) -> str:
        return self.stringify()

    def __repr__(self):
        return f"BitVector(len={self.length}, ones={self.count_ones()})"
