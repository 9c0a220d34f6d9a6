"""Build-time settings of the benchmark suite, gathered into one configuration object."""

from __future__ import annotations

from dataclasses import dataclass, field

GPU_KERNELS = frozenset(
    {
        "GMVM",
        "CSR",
        "DIA",
        "HDIA",
        "HDIA_OLD",
        "ELL",
        "ELLG",
        "HLL",
        "HYB_ELL",
        "HYB_ELLG",
        "HYB_HLL",
        "JAD",
        "TRANSPOSED_ELL",
        "TRANSPOSED_ELLG",
        "TRANSPOSED_DIA",
    }
)

SEQ_KERNELS = frozenset(
    {
        "GMVM",
        "CSR",
        "DIA",
        "HDIA",
        "ELL",
        "ELLG",
        "HLL",
        "HYB_ELL",
        "HYB_ELLG",
        "HYB_HLL",
        "JAD",
    }
)

_DEFAULT_OUTPUT_LOG = frozenset(
    {"COO", "COO_SEQ"} | GPU_KERNELS | {f"{name}_SEQ" for name in SEQ_KERNELS}
)

_SUITE_INPUT_FILES = "dynamicSoaringProblem_1.mtx;sherman3.mtx;psmigr_1.mtx;msc01050.mtx"
_SUITE_RANDOM_INPUT_FILES = (
    "random_spread_1.mtx;random_spread_2.mtx;random_spread_3.mtx;random_spread_4.mtx;"
    "imbalanced_cols.mtx;imbalanced_cols_zigzag.mtx;imbalanced_cols_inverted.mtx;"
    "imbalanced_rows.mtx;imbalanced_rows_zigzag.mtx;imbalanced_rows_inverted.mtx;"
    "very_imbalanced_cols.mtx;very_imbalanced_rows.mtx"
)


def split_file_list(value: str) -> list[str]:
    """Split a ';'-delimited list of file names, keeping empty entries."""
    return value.split(";")


@dataclass(frozen=True)
class SuiteConfig:
    """Settings that steer which formats and kernels run and where files live."""

    # Storage-format related
    precision: int = 1
    use_constant_mem: bool = True
    override_threads: bool = False
    override_mem: bool = False
    max_diag: int = 20480
    max_hdiag: int = 20480
    max_ellg: int = 20480
    max_hll: int = 20480
    hll_hacksize: int = 32
    hdia_hacksize: int = 32
    ell_row_max: int = 256
    index_size: int = 4

    # Device and kernel related
    kernel_folder: str = "../kernels"
    core_count: int = 20
    core_clock_speed: int = 1_607_000_000
    warp_size: int = 32
    workgroup_size: int = 256
    max_conc_wg: int = 32
    max_local_mem: int = 49152
    max_workgroup_size: int = 1024
    local_mem_chunk_size: int = 256
    repeat: int = 200
    max_njad_per_wg: int = 256
    max_ndiag_per_wg: int = 256
    max_ndiag_per_hack: int = 256
    csr_workgroup_size: int = 128
    csr_workgroup_count_threshold: int = 1500
    seq_kernels: frozenset = frozenset()
    gpu_kernels: frozenset = GPU_KERNELS

    # Input/output related
    input_file_mode: bool = False
    input_folder: str = "../input"
    input_file: str = "_test_matrix_1.mtx"
    suite_input_list: str = _SUITE_INPUT_FILES
    suite_random_input_list: str = _SUITE_RANDOM_INPUT_FILES
    generator_folder: str = "random"
    random_input_file: str = "random_spread_4.mtx"
    output_folder: str = "../output"
    suite_output_folder: str = "SUITE"
    output_filename: str = "output"
    output_fileformat: str = ".txt"
    struct_log: frozenset = frozenset()
    output_log: frozenset = field(default=_DEFAULT_OUTPUT_LOG)

    def __post_init__(self) -> None:
        if self.precision not in (1, 2):
            raise ValueError(f"precision must be 1 or 2, got {self.precision}")
        unknown = set(self.gpu_kernels) - GPU_KERNELS
        if unknown:
            raise ValueError(f"unknown kernels: {sorted(unknown)}")
        unknown = set(self.seq_kernels) - SEQ_KERNELS
        if unknown:
            raise ValueError(f"unknown sequential kernels: {sorted(unknown)}")

    def real_size(self) -> int:
        """Size in bytes of one floating-point value at the configured precision."""
        return 8 if self.precision == 2 else 4

    def suite_input_files(self) -> list[str]:
        """The input files the suite processes, standard or generated."""
        source = self.suite_random_input_list if self.input_file_mode else self.suite_input_list
        return split_file_list(source)