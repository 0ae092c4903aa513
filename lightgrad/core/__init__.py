# lightgrad/core/__init__.py

"""
Core public API for lightgrad.

Exports:
    Tensor           : Nested numeric array with autodiff metadata.
    backward         : Reverse sweep from a derived tensor to everything it depends on.
    zero_grad        : Clear gradients on a tensor and its recorded ancestors.
    Tape, Node       : The arena the backward pass records the graph into.
    no_grad, enable_grad, with_no_grad, no_grad_fn,
    is_grad_enabled, set_grad_enabled : Gradient-recording mode (per thread).
    TensorConfig, get_config, set_config : Package configuration.
"""

from .errors import (
    TensorError,
    TensorTypeError,
    StructureError,
    ShapeMismatchError,
    StateError,
)
from .config import TensorConfig, get_config, set_config
from .grad_mode import (
    is_grad_enabled,
    set_grad_enabled,
    no_grad,
    enable_grad,
    with_no_grad,
    no_grad_fn,
)
from .tensor import Tensor
from .node import Node
from .tape import Tape
from .engine import backward, zero_grad
from .graph_utils import graph_summary, format_graph

__all__ = [
    "Tensor",
    "backward", "zero_grad",
    "Tape", "Node",
    "is_grad_enabled", "set_grad_enabled",
    "no_grad", "enable_grad", "with_no_grad", "no_grad_fn",
    "TensorConfig", "get_config", "set_config",
    "TensorError", "TensorTypeError", "StructureError",
    "ShapeMismatchError", "StateError",
    "graph_summary", "format_graph",
]
