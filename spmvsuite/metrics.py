"""Performance figures and report lines for SpMV benchmark runs."""

from __future__ import annotations

import math
import os
from datetime import datetime
from pathlib import Path

from .config import SuiteConfig

_DEFAULT_CONFIG = SuiteConfig()


def _num(value: float | int) -> str:
    """Render a number the way a default-configured output stream does."""
    if isinstance(value, float):
        return format(value, ".6g")
    return str(value)


def _div(numerator: float, denominator: float) -> float:
    """Divide with IEEE semantics: a zero denominator gives inf or nan."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _coop_term(coop: int) -> float:
    """max(1, log2(coop / 2)) with integer halving, as the CSR kernels count it."""
    half = int(coop / 2)
    if half > 0:
        lg = math.log2(half)
    elif half == 0:
        lg = -math.inf
    else:
        lg = math.nan
    return 1.0 if 1 > lg else lg


def _bandwidth(units_real: int, units_index: int, nanoseconds: float, config: SuiteConfig) -> float:
    moved = units_real * config.real_size() + units_index * config.index_size
    return _div(moved, nanoseconds / 1e9) / 1e9


def _throughput(flops: float, nanoseconds: float) -> float:
    return _div(flops, nanoseconds / 1e9) / 1e9


def get_cpwi(instr_count: float, nanoseconds: int, config: SuiteConfig = _DEFAULT_CONFIG) -> float:
    """Cycles per warp instruction per core; 0 when either input is zero."""
    if instr_count == 0 or nanoseconds == 0:
        return 0.0
    cycles = (nanoseconds / 1e9) * config.core_clock_speed
    return cycles / instr_count * config.core_count * config.warp_size


def global_constants(config: SuiteConfig = _DEFAULT_CONFIG) -> str:
    """Preprocessor options handed to every kernel build."""
    return f"-DPRECISION={config.precision} -DUSE_CONSTANT_MEM={int(config.use_constant_mem)}"


def time_of_run(now: datetime | None = None) -> str:
    """Timestamp suffix for output file names, e.g. '_<year><month><day>_<h><mm><ss>'."""
    if now is None:
        now = datetime.now()
    return (
        f"_{now.year}{now.month}{now.day}"
        f"_{now.hour}{now.minute:02d}{now.second:02d}"
    )


def matrix_density(matrix_n: int, matrix_nnz: int) -> float:
    """Fraction of the n*n positions that hold a non-zero."""
    return _div(float(matrix_nnz), float(matrix_n * matrix_n))


def header_info_seq(matrix_n: int, matrix_nnz: int) -> str:
    """Header block printed before sequential runs."""
    return (
        f"Matrix dimensions: {matrix_n}\n"
        f"Matrix non-zero element count: {matrix_nnz}\n"
        f"Matrix density: {_num(matrix_density(matrix_n, matrix_nnz))}\n\n"
    )


def run_info_seq(
    repeat: int,
    nanoseconds: int,
    nnz: int,
    units_real: int,
    units_index: int,
    config: SuiteConfig = _DEFAULT_CONFIG,
) -> str:
    """One line describing a single sequential run."""
    return (
        f"Run: {repeat} | Time elapsed: {nanoseconds} ns"
        f" | Effective throughput: {_num(_throughput(2 * nnz, nanoseconds))} GFLOPS"
        f" | Effective bandwidth: {_num(_bandwidth(units_real, units_index, nanoseconds, config))} GB/s\n"
    )


def average_run_info_seq(
    average_nanoseconds: int,
    nnz: int,
    units_real: int,
    units_index: int,
    config: SuiteConfig = _DEFAULT_CONFIG,
) -> str:
    """Summary line averaged over all sequential runs."""
    return (
        f"\nAverage time: {average_nanoseconds} ns"
        f" | Average effective throughput: {_num(_throughput(2 * nnz, average_nanoseconds))} GFLOPS"
        f" | Average effective bandwidth: "
        f"{_num(_bandwidth(units_real, units_index, average_nanoseconds, config))} GB/s\n"
    )


def header_info_gpu(
    matrix_n: int,
    matrix_nnz: int,
    device_name: str,
    kernel_macros: str,
    instr_count: float,
) -> str:
    """Header block printed before device kernel runs."""
    return (
        f"Matrix dimensions: {matrix_n}\n"
        f"Matrix non-zero element count: {matrix_nnz}\n"
        f"Matrix density: {_num(matrix_density(matrix_n, matrix_nnz))}\n"
        f"OpenCL device: {device_name}\n"
        f"Kernel macros: {kernel_macros}\n"
        f"Total kernel instructions: {_num(float(instr_count))}\n\n"
    )


def header_info_gpu_hyb(
    matrix_n: int,
    matrix_nnz: int,
    device_name: str,
    kernel_macros: str,
    instr_count_csr: float,
    instr_count_ell: float,
) -> str:
    """Header block for hybrid kernels, with CSR and ELL instruction counts."""
    total = float(instr_count_csr) + float(instr_count_ell)
    return (
        f"Matrix dimensions: {matrix_n}\n"
        f"Matrix non-zero element count: {matrix_nnz}\n"
        f"Matrix density: {_num(matrix_density(matrix_n, matrix_nnz))}\n"
        f"OpenCL device: {device_name}\n"
        f"Kernel macros: {kernel_macros}\n"
        f"Total kernel instructions: {_num(total)}\n"
        f"Total kernel (CSR) instructions: {_num(float(instr_count_csr))}\n"
        f"Total kernel (ELL) instructions: {_num(float(instr_count_ell))}\n\n"
    )


def run_info_gpu(
    repeat: int,
    nanoseconds: int,
    nnz: int,
    units_real: int,
    units_index: int,
    instr_count: float,
    config: SuiteConfig = _DEFAULT_CONFIG,
) -> str:
    """One line describing a single device kernel run."""
    return (
        f"Run: {repeat} | Time elapsed: {nanoseconds} ns"
        f" | Effective throughput: {_num(_throughput(2 * nnz, nanoseconds))} GFLOPS"
        f" | Effective bandwidth: {_num(_bandwidth(units_real, units_index, nanoseconds, config))} GB/s"
        f" | Effective CPWI per Core: {_num(get_cpwi(instr_count, nanoseconds, config))}\n"
    )


def run_info_gpu_csr(
    repeat: int,
    nanoseconds: int,
    nnz: int,
    coop: int,
    units_real: int,
    units_index: int,
    instr_count: float,
    config: SuiteConfig = _DEFAULT_CONFIG,
) -> str:
    """One line for a CSR kernel run, counting the cooperative reduction steps."""
    flops = 2 * nnz + _coop_term(coop)
    return (
        f"Run: {repeat} | Time elapsed: {nanoseconds} ns"
        f" | Effective throughput: {_num(_throughput(flops, nanoseconds))} GFLOPS"
        f" | Effective bandwidth: {_num(_bandwidth(units_real, units_index, nanoseconds, config))} GB/s"
        f" | Effective CPWI per Core: {_num(get_cpwi(instr_count, nanoseconds, config))}\n"
    )


def _hyb_throughput(ns_csr: int, ns_ell: int, nnz_csr: int, nnz_ell: int, coop: int) -> float:
    csr_part = _throughput(2 * nnz_csr + _coop_term(coop), ns_csr) if nnz_csr > 0 else 0.0
    ell_part = _throughput(2 * nnz_ell, ns_ell) if nnz_ell > 0 else 0.0
    return csr_part + ell_part


def run_info_gpu_hyb(
    repeat: int,
    nanoseconds_csr: int,
    nanoseconds_ell: int,
    nnz_csr: int,
    nnz_ell: int,
    coop: int,
    units_real: int,
    units_index: int,
    instr_count_csr: float,
    instr_count_ell: float,
    config: SuiteConfig = _DEFAULT_CONFIG,
) -> str:
    """One line for a hybrid kernel run made of a CSR and an ELL part."""
    total_ns = nanoseconds_csr + nanoseconds_ell
    throughput = _hyb_throughput(nanoseconds_csr, nanoseconds_ell, nnz_csr, nnz_ell, coop)
    cpwi = get_cpwi(instr_count_csr, nanoseconds_csr, config) + get_cpwi(
        instr_count_ell, nanoseconds_ell, config
    )
    return (
        f"Run: {repeat} | Time elapsed: {total_ns} ns"
        f" | Effective throughput: {_num(throughput)} GFLOPS"
        f" | Effective bandwidth: {_num(_bandwidth(units_real, units_index, total_ns, config))} GB/s"
        f" | Effective CPWI per Core: {_num(cpwi)}\n"
    )


def average_run_info_gpu(
    average_nanoseconds: int,
    nnz: int,
    units_real: int,
    units_index: int,
    instr_count: float,
    config: SuiteConfig = _DEFAULT_CONFIG,
) -> str:
    """Summary line averaged over all device kernel runs."""
    return (
        f"\nAverage time: {average_nanoseconds} ns"
        f" | Average effective throughput: {_num(_throughput(2 * nnz, average_nanoseconds))} GFLOPS"
        f" | Average effective bandwidth: "
        f"{_num(_bandwidth(units_real, units_index, average_nanoseconds, config))} GB/s"
        f" | Average CPWI per Core: {_num(get_cpwi(instr_count, average_nanoseconds, config))}\n"
    )


def average_run_info_gpu_csr(
    average_nanoseconds: int,
    nnz: int,
    coop: int,
    units_real: int,
    units_index: int,
    instr_count: float,
    config: SuiteConfig = _DEFAULT_CONFIG,
) -> str:
    """Summary line for CSR kernel runs."""
    flops = 2 * nnz + _coop_term(coop)
    return (
        f"\nAverage time: {average_nanoseconds} ns"
        f" | Average effective throughput: {_num(_throughput(flops, average_nanoseconds))} GFLOPS"
        f" | Average effective bandwidth: "
        f"{_num(_bandwidth(units_real, units_index, average_nanoseconds, config))} GB/s"
        f" | Average CPWI per Core: {_num(get_cpwi(instr_count, average_nanoseconds, config))}\n"
    )


def average_run_info_gpu_hyb(
    average_nanoseconds_csr: int,
    average_nanoseconds_ell: int,
    nnz_csr: int,
    nnz_ell: int,
    coop: int,
    units_real: int,
    units_index: int,
    instr_count_csr: float,
    instr_count_ell: float,
    config: SuiteConfig = _DEFAULT_CONFIG,
) -> str:
    """Summary line for hybrid kernel runs."""
    total_ns = average_nanoseconds_csr + average_nanoseconds_ell
    throughput = _hyb_throughput(
        average_nanoseconds_csr, average_nanoseconds_ell, nnz_csr, nnz_ell, coop
    )
    cpwi = get_cpwi(instr_count_csr, average_nanoseconds_csr, config) + get_cpwi(
        instr_count_ell, average_nanoseconds_ell, config
    )
    return (
        f"\nAverage time: {total_ns} ns"
        f" | Average effective throughput: {_num(throughput)} GFLOPS"
        f" | Average effective bandwidth: "
        f"{_num(_bandwidth(units_real, units_index, total_ns, config))} GB/s"
        f" | Average CPWI per Core: {_num(cpwi)}\n"
    )


def create_output_directory(output_dir_root: str | os.PathLike, output_dir: str) -> Path:
    """Create root and root/output_dir if missing; return the inner directory."""
    root = Path(output_dir_root)
    try:
        os.mkdir(root)
    except FileExistsError:
        pass
    except OSError as exc:
        raise OSError(f"Problem creating root output directory: {output_dir_root}") from exc
    target = root / output_dir
    try:
        os.mkdir(target)
    except FileExistsError:
        pass
    except OSError as exc:
        raise OSError(f"Problem creating output directory: {output_dir}") from exc
    return target