# lightgrad/core/node.py
from dataclasses import dataclass, field
from typing import Any, List


@dataclass
class Node:
    """
    One entry of a Tape: a tensor in the recorded graph.

    Attributes
    ----------
    op_tag : str
        Name of the producing op ("add", "matmul", ...), or "leaf".
    out : Any
        The Tensor this entry stands for.
    parents : List[int]
        Tape indices of the operands, in operand order. Plain-number
        operands are stored as -1. Empty for leaves.
    """
    op_tag: str
    out: Any
    parents: List[int] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.parents
