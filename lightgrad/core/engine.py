# lightgrad/core/engine.py
from __future__ import annotations
import logging
from typing import Dict

from . import config as config_mod
from .errors import StateError
from .grad_mode import no_grad_fn
from .tape import Tape
from .tensor import Tensor

logger = logging.getLogger(__name__)


@no_grad_fn
def backward(output: Tensor) -> None:
    """
    Reverse-mode sweep from `output`.

    The output is seeded with a tensor of ones of its own shape (a
    non-scalar output behaves as if it were summed into a loss). For each
    node, in reverse topological order, the producing op turns the node's
    gradient into gradients for its operands:

        grad[p] += vjp(grad[node])

    Contributions arriving through several paths are summed. Every tensor
    on the tape with requires_grad gets its `.gradient` written; earlier
    gradients are replaced unless config.accumulate_grad is set.

    Runs with gradient recording off, so gradient tensors have no parents.
    """
    if output.parents is None:
        raise StateError(
            "backward() needs a tensor produced by a recorded operation; "
            "this one is a leaf or was created with gradient recording disabled"
        )

    tape = Tape.record(output)
    logger.debug("backward: %d nodes on tape", len(tape))

    grads: Dict[int, Tensor] = {len(tape) - 1: Tensor.ones(output.shape)}
    for idx in reversed(range(len(tape))):
        g = grads.get(idx)
        node = tape.nodes[idx]
        if g is None or node.is_leaf:
            continue
        a, b = node.out.parents
        for p_idx, pg in zip(node.parents, node.out._op.vjp(a, b, g)):
            if pg is None or p_idx < 0:
                continue
            # Accumulate: p.grad += contribution
            grads[p_idx] = grads[p_idx] + pg if p_idx in grads else pg

    accumulate = config_mod.get_config().accumulate_grad
    written = 0
    for idx, g in grads.items():
        t = tape.nodes[idx].out
        if not t.requires_grad:
            continue
        if accumulate and t.gradient is not None:
            t.gradient = t.gradient + g
        else:
            t.gradient = g
        written += 1
    logger.debug("backward: wrote %d gradients", written)


def zero_grad(*tensors: Tensor) -> None:
    """Clear `.gradient` on the given tensors and everything they were computed from."""
    seen = set()
    for t in tensors:
        for node in Tape.record(t).nodes:
            if id(node.out) not in seen:
                node.out.gradient = None
                seen.add(id(node.out))
