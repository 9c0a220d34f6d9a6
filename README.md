# spmvsuite

Building blocks for benchmarking sparse matrix-vector multiplication (SpMV)
across several storage formats. The package provides the formats as plain
data, reference sequential products, report-line formatting and the settings
of a benchmark suite.

It needs nothing outside the standard library and supports Python 3.10 and
later.

## Modules

### `spmvsuite.formats`

Each storage format is a dataclass. Every dataclass checks the consistency of
its arrays when it is built and raises `ValueError` on a mismatch.

- `DenseMatrix(n, val)`: a square matrix stored column-major, so element
  (i, j) is `val[i + j * n]`.
- `CooMatrix(n, ir, jc, val)`: the coordinate format. `to_dense()` returns a
  `DenseMatrix` and sums any duplicate entries.
- `CsrMatrix(n, ia, ja, a)`: compressed sparse rows.
- `DiaMatrix(n, stride, ioff, diags)`: the diagonal format. It also has an
  `ndiags` property.
- `HdiaMatrix(n, stride, ndiags, hoff, memoff, ioff, diags)`: hacked diagonals.
- `EllgMatrix(n, stride, nell, jcoeff, a)`: ELLPACK-G. `nell[n]` holds the
  width of the widest row.
- `HllMatrix(n, nell, hoff, jcoeff, a)`: hacked ELLPACK.
- `JadMatrix(n, njad, ia, ja, a, perm)`: jagged diagonals.

### `spmvsuite.sequential`

Each function returns an `SpmvResult` with the output vector `y` and the
elapsed time `elapsed_ns`. Every function raises `ValueError` when the length
of `x` does not match the matrix.

- `coo_sequential(coo, x, y=None)`, `csr_sequential(csr, x, y=None)`,
  `gmvm_sequential(mat, x, y=None)` and `jad_sequential(jad, x, y=None)` add
  A·x into a copy of `y`. When `y` is `None`, they start from zeros.
- `dia_sequential(dia, x)`, `ell_sequential(ell, x)` and
  `ellg_sequential(ellg, x)` compute A·x. `ell_sequential` treats every row as
  `nell[n]` entries wide. `ellg_sequential` visits only the `nell[i]` entries
  of each row.
- `hdia_sequential(hdia, x, hack_size=32)` and
  `hll_sequential(hll, x, hack_size=32)` work on hacks of `hack_size` rows.

### `spmvsuite.config`

- `SuiteConfig` is a frozen dataclass that holds the suite's settings:
  - precision (1 or 2);
  - hack sizes;
  - workgroup and memory limits;
  - the device core count and clock speed;
  - input and output folders and file names;
  - which sequential kernels (`seq_kernels`) and device kernels
    (`gpu_kernels`) are enabled.

  An unknown precision or kernel name raises `ValueError`.
  - `real_size()` returns 4 or 8 bytes.
  - `suite_input_files()` returns the standard list of input files, or the
    generated list when `input_file_mode` is set.
- `split_file_list(value)` splits a `;`-separated list.

### `spmvsuite.metrics`

The report functions return strings and do not print anything.

- `matrix_density(matrix_n, matrix_nnz)`
- `get_cpwi(instr_count, nanoseconds, config)` returns cycles per warp
  instruction per core. It returns 0 when either input is zero.
- `global_constants(config)` returns the `-DPRECISION=… -DUSE_CONSTANT_MEM=…`
  option string.
- `time_of_run(now=None)` returns a timestamp suffix such as `_2024315_90507`.
- Header and run lines for sequential runs:
  - `header_info_seq`
  - `run_info_seq`
  - `average_run_info_seq`
- Header and run lines for device runs:
  - `header_info_gpu`, `header_info_gpu_hyb`
  - `run_info_gpu`, `run_info_gpu_csr`, `run_info_gpu_hyb`
  - `average_run_info_gpu`, `average_run_info_gpu_csr`,
    `average_run_info_gpu_hyb`
- `create_output_directory(output_dir_root, output_dir)` creates both
  directories if they are missing and returns the inner path. It raises
  `OSError` on failure.

### `spmvsuite.clutil`

- `is_prefix(prefix, string)`
- `file_to_string(file_path)` raises `OSError` with the path when the file
  cannot be read.
- `best_fit(global_size, local_size)` rounds a size up to a multiple of the
  local size.
- `readable_error(code)` returns the name of an OpenCL status code, or
  `"UNKNOWN ERROR CODE"`.
- `show_matrix(matrix, height, width)` returns a row-major matrix as text,
  with each cell six columns wide.

### `spmvsuite.suite`

- `validate_config(config)` raises `ConfigurationError` (a `ValueError`) for
  settings that cannot be used together. Otherwise it returns a list of
  warnings.
- `input_paths(config)` lists the matrix files in the order they are
  processed.
- `output_file_path(config, now=None)` gives the path of the report file.
- `format_vector(y)` and `section_report(title, y, print_output)` build the
  text written around one kernel operation.

## Examples

```python
from spmvsuite.formats import CsrMatrix, CooMatrix
from spmvsuite.sequential import csr_sequential

csr = CsrMatrix(n=2, ia=[0, 1, 2], ja=[0, 1], a=[2.0, 3.0])
csr_sequential(csr, [1.0, 2.0]).y      # [2.0, 6.0]

CooMatrix(n=2, ir=[0, 1], jc=[1, 0], val=[5.0, 7.0]).to_dense().val
# [0.0, 7.0, 5.0, 0.0]  (column-major)
```

```python
from spmvsuite.clutil import best_fit, readable_error, is_prefix
from spmvsuite.config import split_file_list
from spmvsuite.metrics import matrix_density

best_fit(1000, 256)                          # 1024
readable_error(-5)                           # "CL_OUT_OF_RESOURCES"
is_prefix("GeForce", "GeForce GTX 1080")     # True
split_file_list("sherman3.mtx;msc01050.mtx") # ["sherman3.mtx", "msc01050.mtx"]
matrix_density(4, 8)                         # 0.5
```

```python
from spmvsuite.config import SuiteConfig
from spmvsuite.suite import validate_config, input_paths, output_file_path

config = SuiteConfig()
warnings = validate_config(config)
for path in input_paths(config):
    print(path)
print(output_file_path(config))
```

## What the package does not do

- It has no command-line program.
- It does not read Matrix Market files.
- It does not convert between formats, apart from `CooMatrix.to_dense()`.
- It does not run device kernels.

The metrics and suite helpers produce the report text for such runs, but the
timings and instruction counts come from the caller.

## Testing

Install the `test` extra, which brings in pytest, then run `pytest`.