"""Immutable sparsity patterns for constraint Jacobians and Hessians."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np
from scipy import sparse


@dataclass(frozen=True)
class SparsityPattern:
    """Ordered ``(row, col)`` nonzero positions of an ``shape`` matrix."""

    rows: tuple[int, ...]
    cols: tuple[int, ...]
    shape: tuple[int, int]

    def __post_init__(self):
        if len(self.rows) != len(self.cols):
            raise ValueError(
                f"Row and column index lists differ in length ({len(self.rows)} != {len(self.cols)})"
            )

    @classmethod
    def from_pairs(cls, pairs, shape: tuple[int, int]) -> SparsityPattern:
        pairs = list(pairs)
        rows = tuple(int(r) for r, _ in pairs)
        cols = tuple(int(c) for _, c in pairs)
        return cls(rows, cols, shape)

    @classmethod
    def diagonal(cls, size: int) -> SparsityPattern:
        indices = tuple(range(size))
        return cls(indices, indices, (size, size))

    @property
    def nnz(self) -> int:
        return len(self.rows)

    def pairs(self) -> list[tuple[int, int]]:
        return list(zip(self.rows, self.cols))

    def __len__(self) -> int:
        return self.nnz

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return iter(zip(self.rows, self.cols))

    def to_scipy(self, values) -> sparse.csr_matrix:
        """Assemble ``values`` (in pattern order) into a CSR matrix."""
        values = np.asarray(values, dtype=float)
        if values.shape != (self.nnz,):
            raise ValueError(f"Expected {self.nnz} values, got shape {values.shape}")
        return sparse.coo_matrix((values, (self.rows, self.cols)), shape=self.shape).tocsr()
