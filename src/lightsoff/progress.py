from __future__ import annotations

import sys
from typing import TextIO

MESSAGE_WIDTH = 24
BAR_LENGTH = 40


class ProgressBar:
    """Console progress bar, redrawn in place on each whole-percent change.

    Instances are callables with the ``progress(done, total)`` signature
    accepted by ``BitGauss.gauss`` and ``BitGauss.solve``.
    """

    def __init__(
        self,
        message: str = "Gauss elimination",
        stream: TextIO | None = None,
        bar_length: int = BAR_LENGTH,
    ):
        self.message = message
        self.stream = stream or sys.stdout
        self.bar_length = bar_length
        self.prev_percent = -1

    def show(self, percent: int) -> None:
        if percent == self.prev_percent:
            return
        self.prev_percent = percent
        filled = percent * self.bar_length // 100
        bar = "#" * filled + " " * (self.bar_length - filled)
        print(
            f"\r{self.message:<{MESSAGE_WIDTH}}[{bar}] {percent:>3}%",
            end="",
            file=self.stream,
            flush=True,
        )
        if percent == 100:
            print(file=self.stream)  # Final newline

    def __call__(self, done: int, total: int) -> None:
        percent = 100 if total <= 0 else done * 100 // total
        self.show(percent)
