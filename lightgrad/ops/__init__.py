# lightgrad/ops/__init__.py

# Convenience re-exports so users can do: from lightgrad.ops import mul, matmul, ...
from .arithmetic import (
    lift_binary_op,
    ElementwiseOp,
    add, sub, mul, div, pow, floordiv, mod, neg,
)
from .linalg import matmul, transpose

__all__ = [
    "lift_binary_op", "ElementwiseOp",
    "add", "sub", "mul", "div", "pow", "floordiv", "mod", "neg",
    "matmul", "transpose",
]
