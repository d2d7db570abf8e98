"""Canonical table build configuration."""

import os
from dataclasses import dataclass, field
from typing import Any

BACKENDS = ("numpy", "python")


@dataclass
class TableConfig:
    """Canonical table build settings.

    Attributes:
        backend: 'numpy' classifies chunks of combinations as arrays;
            'python' runs the scalar classifier on every combination.
        n_workers: Worker processes for the python backend (1 = in-process).
        chunk_size: Combinations classified per numpy chunk.
    """

    backend: str = "numpy"
    n_workers: int = 1
    chunk_size: int = 200_000

    def __post_init__(self) -> None:
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown backend: {self.backend!r} (expected one of {BACKENDS})")
        if self.n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {self.n_workers}")
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}")

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "backend": self.backend,
            "n_workers": self.n_workers,
            "chunk_size": self.chunk_size,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "TableConfig":
        """Create config from dictionary."""
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})


@dataclass
class FastConfig(TableConfig):
    """Vectorized build, a few seconds on a laptop."""

    backend: str = "numpy"


@dataclass
class ReferenceConfig(TableConfig):
    """Scalar classifier on every combination, spread over all CPUs.

    Slow; used to cross-check the numpy backend.
    """

    backend: str = "python"
    n_workers: int = field(default_factory=lambda: os.cpu_count() or 1)
