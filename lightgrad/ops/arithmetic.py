# lightgrad/ops/arithmetic.py
import math
from typing import Any, Callable, NamedTuple, Optional, Sequence, Tuple, Union

from ..core.tensor import Tensor, is_number
from ..core.errors import ShapeMismatchError, StateError, TensorTypeError


# ---------------- operand resolution ---------------- #
class Scalar(NamedTuple):
    value: Any

    @property
    def broadcast(self) -> bool:
        return True


class TensorOperand(NamedTuple):
    tensor: Tensor

    @property
    def value(self) -> Any:
        return self.tensor.data

    @property
    def broadcast(self) -> bool:
        return False


Operand = Union[Scalar, TensorOperand]


def resolve_operand(x: Any) -> Operand:
    """Classify an operator argument once, at the call boundary."""
    if isinstance(x, Tensor):
        return TensorOperand(x)
    if is_number(x):
        return Scalar(x)
    raise TensorTypeError(f"unsupported operand {x!r}; expected a Tensor or a real number")


def _is_seq(x):
    return isinstance(x, (list, tuple))


def zip_map(fn: Callable, trees: Sequence[Any], broadcast: Sequence[bool]) -> Any:
    """
    Apply `fn` leaf by leaf across several nested structures.

    Entries flagged in `broadcast` are plain numbers passed unchanged to every
    call; all other entries must share the same nested lengths, level by
    level, or ShapeMismatchError is raised.
    """
    nested = [t for t, b in zip(trees, broadcast) if not b]
    first = nested[0]
    if _is_seq(first):
        n = len(first)
        for t in nested[1:]:
            if not _is_seq(t):
                raise ShapeMismatchError("rank mismatch: sequence combined with a number")
            if len(t) != n:
                raise ShapeMismatchError(f"#a ({n}) != #b ({len(t)})", n, len(t))
        return [
            zip_map(fn, [t if b else t[i] for t, b in zip(trees, broadcast)], broadcast)
            for i in range(n)
        ]
    for t in nested[1:]:
        if _is_seq(t):
            raise ShapeMismatchError("rank mismatch: number combined with a sequence")
    return fn(*trees)


def _pick(pairs: Any, i: int) -> Any:
    """Select the i-th entry of every (da, db) leaf pair produced by zip_map."""
    if isinstance(pairs, list):
        return [_pick(p, i) for p in pairs]
    return pairs[i]


def needs_grad(x: Any) -> bool:
    """Whether backward() should compute a gradient flowing into `x`."""
    return isinstance(x, Tensor) and (x.requires_grad or x.parents is not None)


# ---------------- elementwise engine ---------------- #
def _not_differentiable(tag: str):
    def rule(a, b):
        raise StateError(f"'{tag}' has no derivative rule; backward() cannot pass through it")
    return rule


class ElementwiseOp:
    """
    A scalar binary operation lifted to tensors.

    Calling the op computes the result leaf by leaf (broadcasting a plain
    number operand over the other tensor) and, while recording is on, tags
    the result with its operands and this op. `derivative(a, b)` gives the
    pointwise partials (d out/d a, d out/d b) used by backward().
    """

    def __init__(self, fn: Callable[[Any, Any], Any],
                 derivative: Optional[Callable[[Any, Any], Tuple[Any, Any]]] = None,
                 tag: str = "op"):
        self.fn = fn
        self.tag = tag
        self.differentiable = derivative is not None
        self.derivative = derivative if derivative is not None else _not_differentiable(tag)

    def __repr__(self):
        return f"ElementwiseOp({self.tag!r})"

    def __call__(self, a: Any, b: Any) -> Tensor:
        left, right = resolve_operand(a), resolve_operand(b)
        if left.broadcast and right.broadcast:
            # number (op) number is ordinary arithmetic, not a tensor op
            raise TensorTypeError(f"{self.tag}: at least one operand must be a Tensor")
        data = zip_map(self.fn, [left.value, right.value], [left.broadcast, right.broadcast])
        return Tensor._derived(data, (a, b), self)

    def vjp(self, a: Any, b: Any, grad: Tensor) -> Tuple[Optional[Tensor], Optional[Tensor]]:
        """Gradients for (a, b) given the gradient of the output; None where not needed."""
        if not self.differentiable:
            self.derivative(a, b)
        left, right = resolve_operand(a), resolve_operand(b)
        trees = [left.value, right.value, grad.data]
        flags = [left.broadcast, right.broadcast, False]
        rule = self.derivative

        want_a, want_b = needs_grad(a), needs_grad(b)
        if not (want_a or want_b):
            return None, None

        def leaf(x, y, g):
            # one rule evaluation per leaf; unneeded partials stay None
            da, db = rule(x, y)
            return (da * g if want_a else None, db * g if want_b else None)

        pairs = zip_map(leaf, trees, flags)
        ga = Tensor._from_data(_pick(pairs, 0)) if want_a else None
        gb = Tensor._from_data(_pick(pairs, 1)) if want_b else None
        return ga, gb


def lift_binary_op(scalar_op: Callable[[Any, Any], Any],
                   scalar_derivative: Optional[Callable[[Any, Any], Tuple[Any, Any]]] = None,
                   tag: str = "op") -> ElementwiseOp:
    """Turn a scalar binary function (and optional derivative rule) into a tensor operator."""
    return ElementwiseOp(scalar_op, scalar_derivative, tag)


def _pow_derivative(a, b):
    if a == 0 and b < 1:
        # b * 0^(b-1): zero at b == 0, unbounded for 0 < b < 1
        da = 0.0 if b == 0 else math.copysign(math.inf, b)
    else:
        da = b * a ** (b - 1)
    # d/db a^b = a^b ln a, only defined for a > 0
    db = a ** b * math.log(a) if a > 0 else 0.0
    return da, db


add      = lift_binary_op(lambda a, b: a + b,  lambda a, b: (1, 1),             "add")
sub      = lift_binary_op(lambda a, b: a - b,  lambda a, b: (1, -1),            "sub")
mul      = lift_binary_op(lambda a, b: a * b,  lambda a, b: (b, a),             "mul")
div      = lift_binary_op(lambda a, b: a / b,  lambda a, b: (1 / b, -a / b ** 2), "div")
pow      = lift_binary_op(lambda a, b: a ** b, _pow_derivative,                 "pow")
floordiv = lift_binary_op(lambda a, b: a // b, tag="floordiv")
mod      = lift_binary_op(lambda a, b: a % b,  tag="mod")


def neg(x: Tensor) -> Tensor:
    """Unary negation, recorded as 0 - x."""
    return sub(0, x)
