import math
import re
from datetime import datetime

import pytest

from spmvsuite.config import SuiteConfig
from spmvsuite.metrics import (
    average_run_info_gpu,
    average_run_info_gpu_csr,
    average_run_info_gpu_hyb,
    average_run_info_seq,
    create_output_directory,
    get_cpwi,
    global_constants,
    header_info_gpu,
    header_info_gpu_hyb,
    header_info_seq,
    matrix_density,
    run_info_gpu,
    run_info_gpu_csr,
    run_info_gpu_hyb,
    run_info_seq,
    time_of_run,
)


def _field(text, label):
    match = re.search(re.escape(label) + r": (\S+)", text)
    assert match is not None
    return float(match.group(1))


def test_cpwi_zero_inputs():
    assert get_cpwi(0, 1000) == 0
    assert get_cpwi(100, 0) == 0


def test_cpwi_scales_linearly_with_time():
    config = SuiteConfig()
    one = get_cpwi(1000, 10_000, config)
    two = get_cpwi(1000, 20_000, config)
    assert one > 0
    assert two == pytest.approx(2 * one)


def test_cpwi_scales_with_core_count():
    base = get_cpwi(500, 10_000, SuiteConfig(core_count=10))
    doubled = get_cpwi(500, 10_000, SuiteConfig(core_count=20))
    assert doubled == pytest.approx(2 * base)


def test_global_constants_default():
    assert global_constants(SuiteConfig()) == "-DPRECISION=1 -DUSE_CONSTANT_MEM=1"


def test_global_constants_double_precision():
    text = global_constants(SuiteConfig(precision=2, use_constant_mem=False))
    assert "-DPRECISION=2" in text
    assert "-DUSE_CONSTANT_MEM=0" in text


def test_time_of_run_pads_minutes_and_seconds():
    assert time_of_run(datetime(2020, 3, 5, 9, 7, 4)) == "_202035_90704"


def test_time_of_run_for_current_time_starts_with_year():
    before = datetime.now().year
    result = time_of_run()
    after = datetime.now().year
    date_part, clock_part = result[1:].split("_")
    assert result[0] == "_"
    assert int(date_part[:4]) in (before, after)
    assert clock_part.isdigit()
    assert len(clock_part) >= 5


def test_matrix_density_full_and_empty():
    assert matrix_density(4, 16) == 1.0
    assert matrix_density(4, 0) == 0.0
    assert matrix_density(10, 25) == pytest.approx(0.25)


def test_header_info_seq_lines():
    text = header_info_seq(4, 8)
    lines = text.split("\n")
    assert lines[0] == "Matrix dimensions: 4"
    assert lines[1] == "Matrix non-zero element count: 8"
    assert _field(text, "Matrix density") == pytest.approx(0.5)
    assert text.endswith("\n\n")


def test_header_info_gpu_contains_device_and_macros():
    text = header_info_gpu(4, 16, "Device X", "-DFOO=1", 1234)
    assert "OpenCL device: Device X\n" in text
    assert "Kernel macros: -DFOO=1\n" in text
    assert _field(text, "Total kernel instructions") == 1234


def test_header_info_gpu_hyb_totals():
    text = header_info_gpu_hyb(4, 16, "dev", "", 100, 250)
    assert _field(text, "Total kernel instructions") == 350
    assert _field(text, "Total kernel (CSR) instructions") == 100
    assert _field(text, "Total kernel (ELL) instructions") == 250


def test_run_info_seq_throughput_and_bandwidth():
    config = SuiteConfig()
    text = run_info_seq(3, 1_000_000, 500, 100, 50, config)
    assert text.startswith("Run: 3 | Time elapsed: 1000000 ns")
    assert text.endswith(" GB/s\n")
    assert _field(text, "Effective throughput") == pytest.approx(2 * 500 / 1e-3 / 1e9)
    expected_bw = (100 * config.real_size() + 50 * config.index_size) / 1e-3 / 1e9
    assert _field(text, "Effective bandwidth") == pytest.approx(expected_bw)


def test_run_info_seq_bandwidth_grows_with_precision():
    single = run_info_seq(0, 1000, 10, 100, 0, SuiteConfig(precision=1))
    double = run_info_seq(0, 1000, 10, 100, 0, SuiteConfig(precision=2))
    assert _field(double, "Effective bandwidth") == pytest.approx(
        2 * _field(single, "Effective bandwidth")
    )


def test_run_info_seq_zero_time_gives_inf():
    text = run_info_seq(0, 0, 10, 1, 1)
    assert "Effective throughput: inf GFLOPS" in text


def test_average_run_info_seq_prefix():
    text = average_run_info_seq(2000, 10, 1, 1)
    assert text.startswith("\nAverage time: 2000 ns | Average effective throughput: ")


def test_run_info_gpu_reports_cpwi():
    config = SuiteConfig()
    text = run_info_gpu(1, 5000, 20, 10, 10, 400, config)
    assert _field(text, "Effective CPWI per Core") == pytest.approx(
        get_cpwi(400, 5000, config), rel=1e-5
    )


def test_run_info_gpu_csr_small_coop_counts_one_step():
    low = run_info_gpu_csr(0, 1000, 10, 0, 1, 1, 0)
    two = run_info_gpu_csr(0, 1000, 10, 2, 1, 1, 0)
    assert _field(low, "Effective throughput") == _field(two, "Effective throughput")
    assert _field(two, "Effective throughput") > _field(
        run_info_gpu(0, 1000, 10, 1, 1, 0), "Effective throughput"
    )


def test_run_info_gpu_csr_larger_coop_adds_steps():
    two = run_info_gpu_csr(0, 1000, 10, 2, 1, 1, 0)
    sixteen = run_info_gpu_csr(0, 1000, 10, 16, 1, 1, 0)
    assert _field(sixteen, "Effective throughput") > _field(two, "Effective throughput")


def test_run_info_gpu_hyb_empty_parts_give_zero_throughput():
    text = run_info_gpu_hyb(0, 100, 200, 0, 0, 4, 1, 1, 0, 0)
    assert "Time elapsed: 300 ns" in text
    assert _field(text, "Effective throughput") == 0
    assert _field(text, "Effective CPWI per Core") == 0


def test_run_info_gpu_hyb_ell_only_matches_plain():
    hyb = run_info_gpu_hyb(0, 0, 1000, 0, 10, 4, 1, 1, 0, 0)
    plain = run_info_gpu(0, 1000, 10, 1, 1, 0)
    assert _field(hyb, "Effective throughput") == _field(plain, "Effective throughput")


def test_average_gpu_lines():
    plain = average_run_info_gpu(1000, 10, 1, 1, 0)
    csr = average_run_info_gpu_csr(1000, 10, 2, 1, 1, 0)
    hyb = average_run_info_gpu_hyb(400, 600, 0, 10, 2, 1, 1, 0, 0)
    for text in (plain, csr, hyb):
        assert text.startswith("\nAverage time: 1000 ns")
        assert "Average CPWI per Core: 0\n" in text
    assert _field(hyb, "Average effective throughput") > 0
    assert math.isfinite(_field(csr, "Average effective bandwidth"))


def test_create_output_directory(tmp_path):
    root = tmp_path / "out"
    target = create_output_directory(root, "SUITE")
    assert target == root / "SUITE"
    assert target.is_dir()
    assert create_output_directory(root, "SUITE") == target


def test_create_output_directory_root_is_file(tmp_path):
    root = tmp_path / "file"
    root.write_text("x")
    with pytest.raises(OSError, match="Problem creating output directory"):
        create_output_directory(root, "SUITE")