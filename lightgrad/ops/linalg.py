# lightgrad/ops/linalg.py
"""
Dense matrix multiplication for rank-2 tensors.

    C = A @ B,   A: (n x m),  B: (m x p),  C: (n x p)

Reverse-mode rule with upstream gradient G (n x p):

    dA = G @ B^T      (n x m)
    dB = A^T @ G      (m x p)
"""

from typing import Any, List, Optional, Tuple

from ..core.tensor import Tensor
from ..core.errors import ShapeMismatchError, TensorTypeError
from .arithmetic import needs_grad


def _matrix_shape(x: Any, name: str) -> Tuple[int, int]:
    if not isinstance(x, Tensor):
        raise TensorTypeError(f"{name} must be a Tensor, got {type(x).__name__}")
    shape = x.shape
    if len(shape) != 2:
        raise ShapeMismatchError(f"{name} must be a matrix (rank 2), got shape {shape}", shape, None)
    return shape


def _matmul_data(a: List, b: List, n: int, m: int, p: int) -> List[List]:
    # (AB)ij is dot(row i of A, col j of B)
    res = []
    for i in range(n):
        row = []
        for j in range(p):
            s = 0
            for k in range(m):
                s = s + a[i][k] * b[k][j]
            row.append(s)
        res.append(row)
    return res


def transpose(x: Tensor) -> Tensor:
    """Transposed copy of a matrix (not recorded for autodiff)."""
    n, m = _matrix_shape(x, "x")
    return Tensor._from_data([[x.data[i][j] for i in range(n)] for j in range(m)])


class MatMulOp:
    tag = "matmul"
    differentiable = True

    def __repr__(self):
        return "MatMulOp()"

    def __call__(self, A: Tensor, B: Tensor) -> Tensor:
        n, m = _matrix_shape(A, "A")
        m2, p = _matrix_shape(B, "B")
        if m != m2:
            raise ShapeMismatchError(f"size mismatch: ({n}x{m}) @ ({m2}x{p})", m, m2)
        return Tensor._derived(_matmul_data(A.data, B.data, n, m, p), (A, B), self)

    def derivative(self, A: Tensor, B: Tensor) -> Tuple[Tensor, Tensor]:
        """Local factors (B^T, A^T): dA = G @ B^T, dB = A^T @ G."""
        return transpose(B), transpose(A)

    def vjp(self, A: Tensor, B: Tensor, grad: Tensor) -> Tuple[Optional[Tensor], Optional[Tensor]]:
        n, m = A.shape
        p = B.shape[1]
        bt, at = self.derivative(A, B)
        ga = gb = None
        if needs_grad(A):
            ga = Tensor._from_data(_matmul_data(grad.data, bt.data, n, p, m))
        if needs_grad(B):
            gb = Tensor._from_data(_matmul_data(at.data, grad.data, m, n, p))
        return ga, gb


_matmul = MatMulOp()


def matmul(A: Tensor, B: Tensor) -> Tensor:
    """
    Matrix product of an (n x m) and an (m x p) tensor, computed by explicit
    triple accumulation. Raises ShapeMismatchError if the inner sizes differ.
    """
    return _matmul(A, B)
