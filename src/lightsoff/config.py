from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from .bitvec import WORD_BITS


@dataclass
class SolverConfig:
    word_bits: int = WORD_BITS
    max_free_variables: int = WORD_BITS
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.word_bits not in (32, 64):
            raise ValueError(f"word_bits must be 32 or 64, got {self.word_bits}")
        if self.max_free_variables < 0:
            raise ValueError("max_free_variables must be non-negative")
        self.log_level = str(self.log_level).upper()


def parse_config(cfg: dict | None) -> SolverConfig:
    """Build a SolverConfig from the ``solver`` mapping of a YAML file."""
    if cfg is not None and not isinstance(cfg, dict):
        raise ValueError("The solver section must be a mapping")
    cfg = dict(cfg or {})
    known = {f.name for f in fields(SolverConfig)}
    unknown = sorted(set(cfg) - known)
    if unknown:
        raise ValueError(f"Unknown solver config keys: {unknown}")
    return SolverConfig(**cfg)


def load_config(path: str | Path) -> SolverConfig:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {path}")
    return parse_config(data.get("solver"))
