# conicalgebra

Linear algebra building blocks for interior point solvers of convex conic
optimization problems.

## Modules

- `conicalgebra.types`: the `MatrixShape` and `MatrixTriangle` markers,
  the `ShapedMatrix` base class, the `Adjoint` and `Symmetric` views, and
  the errors `SparseFormatError` and `DenseFactorizationError` (both
  subclasses of `ValueError`, with a `kind` attribute).
- `conicalgebra.vecmath`: vector operations on sequences of floats, such
  as `dot`, `norm`, `norm_inf`, `dist`, `axpby`, `clip`, `hadamard`,
  `normalize` and `dot_shifted`, plus the scalar helpers `scalar_clip`,
  `logsafe`, `triangular_number` and `triangular_index`. Vector functions
  return new lists rather than modifying their arguments.
- `conicalgebra.csc`: `CscMatrix`, a sparse matrix in compressed sparse
  column form, with format checking (`check_format`), `select_rows`,
  `to_triu`, `is_triu`, `hcat`/`vcat`, row and column norms, diagonal
  scaling (`lscale`, `rscale`, `lrscale`), `gemv`, `quad_form`, and the
  views `t()` (with `gemv`) and `sym()` (with `symv`).
- `conicalgebra.cscassembly`: low-level functions that count entries per
  column (`colcount_*`), turn counts into offsets (`colcount_to_colptr`),
  fill entries (`fill_*`) and restore the column pointer
  (`backshift_colptrs`) when a block-partitioned sparse matrix is built on
  a matrix from `CscMatrix.spalloc`.
- `conicalgebra.dense`: `Matrix`, a column-major dense matrix with `mul`,
  `gemv`, `syrk`, `syr2k`, `kron`, `hcat`/`vcat`, norms and scaling; the
  views `t()` (with `gemv`) and `sym()` (with `symv` and `pack_triu`); and
  `ReshapedMatrix`, a flat sequence viewed as a matrix.
- `conicalgebra.sym3`: `DenseMatrixSym3`, a symmetric 3x3 matrix stored as
  six packed upper-triangle values, with an unrolled Cholesky factor and
  solve.
- `conicalgebra.factor`: `CholeskyEngine`, `SVDEngine` (with a choice of
  `SVDEngineAlgorithm`) and `EigEngine`, built on NumPy.

Products return their result: `gemv` and `symv` return a new list, while
`Matrix.mul`, `syrk`, `syr2k` and `kron` overwrite the matrix they are
called on. `syrk` and `syr2k` write the upper triangle only.

## Installation

```
pip install conicalgebra
```

## Example

```python
from conicalgebra.csc import CscMatrix

# A = [I; -I]
upper = CscMatrix.identity(3)
lower = CscMatrix.identity(3)
lower.negate()
a = CscMatrix.vcat(upper, lower)

a.check_format()              # raises SparseFormatError on bad data
y = a.gemv([1.0, 2.0, 3.0], [0.0] * 6, 1.0, 0.0)
print(y)                      # [1.0, 2.0, 3.0, -1.0, -2.0, -3.0]
print(a.row_norms())          # [1.0, 1.0, 1.0, 1.0, 1.0, 1.0]
```

Dense factorizations read the upper triangle of a symmetric input:

```python
from conicalgebra.dense import Matrix
from conicalgebra.factor import EigEngine

s = Matrix((3, 3), [3., 2., 4., 2., 0., 2., 4., 2., 3.])
engine = EigEngine(3)
engine.eigvals(s)
print(engine.eigenvalues)     # ascending, approximately [-1.0, -1.0, 8.0]
```

Failures are raised as `DenseFactorizationError`; for example
`CholeskyEngine.cholesky` raises it when the matrix is not positive
definite.

## What this package does not do

It provides the algebra only. It contains no optimization solver, no cone
definitions, no settings or problem interface, and no command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```