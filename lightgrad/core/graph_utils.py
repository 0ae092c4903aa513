"""
Graph inspection helpers.

Summarise or render the graph recorded behind a tensor, for debugging
autodiff results.
"""

from collections import Counter
from typing import Dict

from .tape import Tape
from .tensor import Tensor


def graph_summary(tensor: Tensor) -> Dict:
    """
    Statistics of the graph reachable from `tensor`.

    Returns:
        dict with keys: nodes, edges, leaves, max_fan_in, operations
        (op tag -> count, leaves excluded)
    """
    tape = Tape.record(tensor)
    fan_ins = [len(node.parents) for node in tape.nodes]
    ops = Counter(node.op_tag for node in tape.nodes if not node.is_leaf)
    return {
        'nodes': len(tape.nodes),
        'edges': sum(fan_ins),
        'leaves': sum(1 for node in tape.nodes if node.is_leaf),
        'max_fan_in': max(fan_ins) if fan_ins else 0,
        'operations': dict(ops),
    }


def format_graph(tensor: Tensor, max_nodes: int = 20) -> str:
    """
    One line per node, parents first:

        Node 0: leaf
        Node 1: leaf
        Node 2: mul          <- [Node0, Node1]

    Plain-number operands are shown as "const".
    """
    tape = Tape.record(tensor)
    lines = []
    for i, node in enumerate(tape.nodes[:max_nodes]):
        if node.is_leaf:
            lines.append(f"Node {i}: leaf shape={node.out.shape}")
            continue
        parent_info = ", ".join("const" if p < 0 else f"Node{p}" for p in node.parents)
        lines.append(f"Node {i}: {node.op_tag:12s} <- [{parent_info}]")
    if len(tape.nodes) > max_nodes:
        lines.append(f"... ({len(tape.nodes) - max_nodes} more nodes)")
    return "\n".join(lines)
