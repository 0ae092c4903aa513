# lightgrad/__init__.py
# Minimal nested-list tensor library with reverse-mode automatic differentiation

from .core import (
    Tensor,
    backward,
    zero_grad,
    Tape,
    Node,
    is_grad_enabled,
    set_grad_enabled,
    no_grad,
    enable_grad,
    with_no_grad,
    no_grad_fn,
    TensorConfig,
    get_config,
    set_config,
    TensorError,
    TensorTypeError,
    StructureError,
    ShapeMismatchError,
    StateError,
    graph_summary,
    format_graph,
)
from .ops import lift_binary_op, matmul, transpose

__version__ = "0.1.0"

__all__ = [
    # Core
    'Tensor',
    'backward',
    'zero_grad',
    'Tape',
    'Node',
    # Grad mode
    'is_grad_enabled',
    'set_grad_enabled',
    'no_grad',
    'enable_grad',
    'with_no_grad',
    'no_grad_fn',
    # Config
    'TensorConfig',
    'get_config',
    'set_config',
    # Errors
    'TensorError',
    'TensorTypeError',
    'StructureError',
    'ShapeMismatchError',
    'StateError',
    # Ops
    'lift_binary_op',
    'matmul',
    'transpose',
    # Debugging
    'graph_summary',
    'format_graph',
]
