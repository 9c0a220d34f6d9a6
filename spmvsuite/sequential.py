"""Reference sequential SpMV for each storage format, with wall-clock timing."""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass

from .formats import (
    CooMatrix,
    CsrMatrix,
    DenseMatrix,
    DiaMatrix,
    EllgMatrix,
    HdiaMatrix,
    HllMatrix,
    JadMatrix,
)


@dataclass(frozen=True)
class SpmvResult:
    """Output vector of one multiplication and the time it took in nanoseconds."""

    y: list[float]
    elapsed_ns: int


def _check_x(x: Sequence[float], n: int) -> None:
    if len(x) != n:
        raise ValueError(f"input vector has length {len(x)}, expected {n}")


def _start_y(y: Sequence[float] | None, n: int) -> list[float]:
    if y is None:
        return [0.0] * n
    if len(y) != n:
        raise ValueError(f"output vector has length {len(y)}, expected {n}")
    return [float(v) for v in y]


def coo_sequential(coo: CooMatrix, x: Sequence[float], y: Sequence[float] | None = None) -> SpmvResult:
    """Accumulate A*x into a copy of y (zeros when y is None)."""
    _check_x(x, coo.n)
    out = _start_y(y, coo.n)
    start = time.perf_counter_ns()
    for row, col, value in zip(coo.ir, coo.jc, coo.val):
        out[row] += value * x[col]
    return SpmvResult(out, time.perf_counter_ns() - start)


def csr_sequential(csr: CsrMatrix, x: Sequence[float], y: Sequence[float] | None = None) -> SpmvResult:
    """Accumulate A*x into a copy of y, walking rows of the CSR structure."""
    _check_x(x, csr.n)
    out = _start_y(y, csr.n)
    start = time.perf_counter_ns()
    for row, (lo, hi) in enumerate(zip(csr.ia, csr.ia[1:])):
        for k in range(lo, hi):
            out[row] += csr.a[k] * x[csr.ja[k]]
    return SpmvResult(out, time.perf_counter_ns() - start)


def dia_sequential(dia: DiaMatrix, x: Sequence[float]) -> SpmvResult:
    """Compute A*x from diagonal storage, skipping positions outside the matrix."""
    _check_x(x, dia.n)
    start = time.perf_counter_ns()
    out = []
    for i in range(dia.n):
        total = 0.0
        for j, offset in enumerate(dia.ioff):
            q = i + offset
            if 0 <= q < dia.n:
                total += dia.diags[i + j * dia.stride] * x[q]
        out.append(total)
    return SpmvResult(out, time.perf_counter_ns() - start)


def ell_sequential(ell: EllgMatrix, x: Sequence[float]) -> SpmvResult:
    """Compute A*x treating every row as nell[n] wide (plain ELLPACK)."""
    _check_x(x, ell.n)
    width = ell.nell[ell.n]
    start = time.perf_counter_ns()
    out = []
    for i in range(ell.n):
        total = 0.0
        for j in range(width):
            q = i + j * ell.stride
            total += ell.a[q] * x[ell.jcoeff[q]]
        out.append(total)
    return SpmvResult(out, time.perf_counter_ns() - start)


def ellg_sequential(ellg: EllgMatrix, x: Sequence[float]) -> SpmvResult:
    """Compute A*x visiting only the nell[i] stored entries of each row."""
    _check_x(x, ellg.n)
    start = time.perf_counter_ns()
    out = []
    for i in range(ellg.n):
        total = 0.0
        for j in range(ellg.nell[i]):
            q = i + j * ellg.stride
            total += ellg.a[q] * x[ellg.jcoeff[q]]
        out.append(total)
    return SpmvResult(out, time.perf_counter_ns() - start)


def gmvm_sequential(mat: DenseMatrix, x: Sequence[float], y: Sequence[float] | None = None) -> SpmvResult:
    """Accumulate dense A*x into a copy of y."""
    _check_x(x, mat.n)
    out = _start_y(y, mat.n)
    n = mat.n
    start = time.perf_counter_ns()
    for i in range(n):
        for j, xj in enumerate(x):
            out[i] += mat.val[i + j * n] * xj
    return SpmvResult(out, time.perf_counter_ns() - start)


def hdia_sequential(hdia: HdiaMatrix, x: Sequence[float], hack_size: int = 32) -> SpmvResult:
    """Compute A*x from hacked diagonal storage with hacks of hack_size rows."""
    if hack_size <= 0:
        raise ValueError("hack size must be positive")
    _check_x(x, hdia.n)
    start = time.perf_counter_ns()
    out = []
    for i in range(hdia.n):
        hack = i // hack_size
        memoff = hdia.memoff[hack]
        hoff = hdia.hoff[hack]
        total = 0.0
        for j in range(hdia.ndiags[hack]):
            q = hdia.ioff[hoff + j] + i
            if 0 <= q < hdia.n:
                total += hdia.diags[memoff + i + j * hdia.stride] * x[q]
        out.append(total)
    return SpmvResult(out, time.perf_counter_ns() - start)


def hll_sequential(hll: HllMatrix, x: Sequence[float], hack_size: int = 32) -> SpmvResult:
    """Compute A*x from hacked ELLPACK storage with hacks of hack_size rows."""
    if hack_size <= 0:
        raise ValueError("hack size must be positive")
    _check_x(x, hll.n)
    start = time.perf_counter_ns()
    out = []
    for i in range(hll.n):
        hack = i // hack_size
        base = i % hack_size + hll.hoff[hack]
        total = 0.0
        for j in range(hll.nell[hack]):
            q = j * hack_size + base
            total += hll.a[q] * x[hll.jcoeff[q]]
        out.append(total)
    return SpmvResult(out, time.perf_counter_ns() - start)


def jad_sequential(jad: JadMatrix, x: Sequence[float], y: Sequence[float] | None = None) -> SpmvResult:
    """Accumulate A*x into a copy of y, one jagged diagonal at a time."""
    _check_x(x, jad.n)
    out = _start_y(y, jad.n)
    start = time.perf_counter_ns()
    for j in range(jad.njad[jad.n]):
        p = jad.ia[j]
        for i, row in enumerate(jad.perm):
            if jad.njad[row] <= j:
                break
            out[row] += jad.a[i + p] * x[jad.ja[i + p]]
    return SpmvResult(out, time.perf_counter_ns() - start)