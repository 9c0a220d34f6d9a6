"""Driver pieces of the benchmark suite: checks, file lists and report sections."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from .config import SEQ_KERNELS, SuiteConfig
from .metrics import time_of_run


class ConfigurationError(ValueError):
    """Raised when the suite settings cannot be run together."""


def _any_structs(config: SuiteConfig) -> bool:
    """True when any kernel is enabled, so an input matrix must be loaded."""
    return bool(config.gpu_kernels) or bool(set(config.seq_kernels) & SEQ_KERNELS)


def validate_config(config: SuiteConfig) -> list[str]:
    """Check settings the suite refuses to run with; return warnings for the rest."""
    if config.override_threads:
        raise ConfigurationError("OVERRIDE_THREADS CANNOT BE SET TO 1")
    warnings: list[str] = []
    if config.override_mem:
        warnings.append("OVERRIDE_MEM IS SET TO 1")
        warnings.append("RESULTS MAY DIFFER FROM DEFAULT SETTINGS")
    if _any_structs(config):
        if "DIA" in config.gpu_kernels and config.workgroup_size > config.max_ndiag_per_wg:
            raise ConfigurationError(
                "WORKGROUP_SIZE CANNOT BE GREATER THAN MAX_NDIAG_PER_WG"
            )
        if "JAD" in config.gpu_kernels and config.workgroup_size > config.max_njad_per_wg:
            raise ConfigurationError(
                "WORKGROUP_SIZE CANNOT BE GREATER THAN MAX_NJAD_PER_WG"
            )
    return warnings


def input_paths(config: SuiteConfig) -> list[str]:
    """Paths of the matrix files the suite loads, in processing order."""
    if config.input_file_mode:
        base = f"{config.input_folder}/{config.generator_folder}"
    else:
        base = config.input_folder
    return [f"{base}/{name}" for name in config.suite_input_files()]


def output_file_path(config: SuiteConfig, now: datetime | None = None) -> str:
    """Path of the report file for a run started at ``now``."""
    return (
        f"{config.output_folder}/{config.suite_output_folder}/"
        f"{config.output_filename}{time_of_run(now)}{config.output_fileformat}"
    )


def _value(value: float | int) -> str:
    if isinstance(value, float):
        return format(value, ".6g")
    return str(value)


def format_vector(y: Sequence[float]) -> str:
    """Vector values, each followed by a single space."""
    return "".join(f"{_value(v)} " for v in y)


def section_report(title: str, y: Sequence[float], print_output: bool) -> str:
    """Text written around one kernel operation, optionally with its output vector."""
    parts = [
        f"\n-- STARTING {title} OPERATION --\n\n",
        f"\n-- FINISHED {title} OPERATION --\n\n",
    ]
    if print_output:
        parts.append("\n-- PRINTING OUTPUT VECTOR RESULTS --\n")
        parts.append(format_vector(y))
        parts.append("\n")
    parts.append("\n")
    return "".join(parts)