# lightgrad/core/tape.py
from __future__ import annotations
from typing import Dict, List, Optional

from .node import Node
from .tensor import Tensor

NO_PARENT = -1


class Tape:
    """
    Arena of Nodes in topological order: every node appears after all of
    its parents. Parents are referenced by index into `nodes`.
    """

    def __init__(self):
        self.nodes: List[Node] = []
        self._index: Dict[int, int] = {}  # id(tensor) -> position in nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def index_of(self, tensor: Tensor) -> Optional[int]:
        return self._index.get(id(tensor))

    def push_node(self, *, op_tag: str, out: Tensor, parents: List[int]) -> int:
        """Append a Node(op_tag, out, parents); returns its index."""
        self.nodes.append(Node(op_tag=op_tag, out=out, parents=parents))
        idx = len(self.nodes) - 1
        self._index[id(out)] = idx
        return idx

    @classmethod
    def record(cls, output: Tensor) -> "Tape":
        """
        Record every tensor reachable from `output` through `parents`.
        `output` is always the last node. Iterative, so deep chains do not
        hit the recursion limit.
        """
        tape = cls()
        stack = [(output, False)]
        while stack:
            t, expanded = stack.pop()
            if tape.index_of(t) is not None:
                continue
            if expanded or t.parents is None:
                parents = [
                    tape._index[id(p)] if isinstance(p, Tensor) else NO_PARENT
                    for p in (t.parents or ())
                ]
                tape.push_node(op_tag=t.op_tag or "leaf", out=t, parents=parents)
                continue
            stack.append((t, True))
            for p in reversed(t.parents):
                if isinstance(p, Tensor) and tape.index_of(p) is None:
                    stack.append((p, False))
        return tape
