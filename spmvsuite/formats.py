"""Sparse and dense matrix storage formats used by the SpMV kernels."""

from __future__ import annotations

from dataclasses import dataclass


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


@dataclass
class DenseMatrix:
    """Square dense matrix stored column-major: element (i, j) is val[i + j * n]."""

    n: int
    val: list[float]

    def __post_init__(self) -> None:
        _require(self.n >= 0, "matrix dimension must be non-negative")
        _require(len(self.val) == self.n * self.n, "dense storage must hold n*n values")


@dataclass
class CooMatrix:
    """Coordinate format: parallel row indices, column indices and values."""

    n: int
    ir: list[int]
    jc: list[int]
    val: list[float]

    def __post_init__(self) -> None:
        _require(self.n >= 0, "matrix dimension must be non-negative")
        _require(
            len(self.ir) == len(self.jc) == len(self.val),
            "row, column and value arrays must have equal length",
        )
        _require(
            all(0 <= r < self.n for r in self.ir) and all(0 <= c < self.n for c in self.jc),
            "entry index out of range",
        )

    def to_dense(self) -> DenseMatrix:
        """Expand to a column-major dense matrix; duplicate entries are summed."""
        val = [0.0] * (self.n * self.n)
        for row, col, value in zip(self.ir, self.jc, self.val):
            val[row + col * self.n] += value
        return DenseMatrix(self.n, val)


@dataclass
class CsrMatrix:
    """Compressed sparse rows: row pointers ia, column indices ja, values a."""

    n: int
    ia: list[int]
    ja: list[int]
    a: list[float]

    def __post_init__(self) -> None:
        _require(len(self.ia) == self.n + 1, "row pointer array must have n+1 entries")
        _require(self.ia[0] == 0, "row pointers must start at 0")
        _require(
            all(lo <= hi for lo, hi in zip(self.ia, self.ia[1:])),
            "row pointers must be non-decreasing",
        )
        _require(
            len(self.ja) == len(self.a) == self.ia[-1],
            "column and value arrays must match the last row pointer",
        )


@dataclass
class DiaMatrix:
    """Diagonal format: diagonal j with offset ioff[j] holds row i at diags[i + j * stride]."""

    n: int
    stride: int
    ioff: list[int]
    diags: list[float]

    def __post_init__(self) -> None:
        _require(self.stride >= self.n, "stride must be at least n")
        _require(
            len(self.diags) >= self.stride * len(self.ioff),
            "diagonal storage too small for the given offsets",
        )

    @property
    def ndiags(self) -> int:
        return len(self.ioff)


@dataclass
class HdiaMatrix:
    """Hacked diagonal format: each hack of rows keeps its own set of diagonals."""

    n: int
    stride: int
    ndiags: list[int]
    hoff: list[int]
    memoff: list[int]
    ioff: list[int]
    diags: list[float]

    def __post_init__(self) -> None:
        _require(
            len(self.ndiags) == len(self.hoff) == len(self.memoff),
            "per-hack arrays must have equal length",
        )
        _require(
            all(h + d <= len(self.ioff) for h, d in zip(self.hoff, self.ndiags)),
            "hack offsets exceed the offset array",
        )


@dataclass
class EllgMatrix:
    """ELLPACK-G: row i's j-th entry sits at i + j * stride; nell[n] is the widest row."""

    n: int
    stride: int
    nell: list[int]
    jcoeff: list[int]
    a: list[float]

    def __post_init__(self) -> None:
        _require(self.stride >= self.n, "stride must be at least n")
        _require(len(self.nell) == self.n + 1, "row length array must have n+1 entries")
        _require(len(self.jcoeff) == len(self.a), "column and value arrays must match")
        _require(
            len(self.a) >= self.stride * self.nell[self.n],
            "value storage too small for the widest row",
        )


@dataclass
class HllMatrix:
    """Hacked ELLPACK: each hack has its own width nell and storage offset hoff."""

    n: int
    nell: list[int]
    hoff: list[int]
    jcoeff: list[int]
    a: list[float]

    def __post_init__(self) -> None:
        _require(len(self.nell) == len(self.hoff), "per-hack arrays must have equal length")
        _require(len(self.jcoeff) == len(self.a), "column and value arrays must match")


@dataclass
class JadMatrix:
    """Jagged diagonals: rows permuted by length, perm maps position to row.

    njad[row] is the entry count of each row and njad[n] the number of
    jagged diagonals; ia[j] is where jagged diagonal j starts.
    """

    n: int
    njad: list[int]
    ia: list[int]
    ja: list[int]
    a: list[float]
    perm: list[int]

    def __post_init__(self) -> None:
        _require(len(self.njad) == self.n + 1, "njad must have n+1 entries")
        _require(sorted(self.perm) == list(range(self.n)), "perm must be a permutation of rows")
        _require(len(self.ia) >= self.njad[self.n], "ia must hold every jagged diagonal start")
        _require(len(self.ja) == len(self.a), "column and value arrays must match")