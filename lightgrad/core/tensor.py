# lightgrad/core/tensor.py
from __future__ import annotations
import numbers
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from . import grad_mode
from .errors import StructureError, ShapeMismatchError, TensorTypeError

Number = Union[int, float]


def is_number(x: Any) -> bool:
    """Real numbers (including numpy real scalars) count as leaves; bools do not."""
    return isinstance(x, numbers.Real) and not isinstance(x, bool)


def _is_seq(x: Any) -> bool:
    return isinstance(x, (list, tuple))


def _typecheck(data: Any) -> None:
    """
    Validate nested tensor data: every leaf must be a real number and no
    Tensor may appear anywhere inside. Raises on the first offending value.
    """
    if isinstance(data, Tensor):
        raise StructureError("nested tensors are not allowed; index the source tensor to get a view")
    if _is_seq(data):
        for v in data:
            _typecheck(v)
    elif not is_number(data):
        raise TensorTypeError(f"Tensor contains non number {data!r}")


def _fill(dims: Sequence[int], value: Number) -> Any:
    if not dims:
        return value
    return [_fill(dims[1:], value) for _ in range(dims[0])]


def _as_dims(shape: Any) -> List[int]:
    if isinstance(shape, Tensor):
        shape = shape.tolist()
    if is_number(shape):
        shape = [shape]
    dims = list(shape)
    if not dims:
        raise TensorTypeError("shape must have at least one dimension")
    for d in dims:
        if not isinstance(d, (int, np.integer)) or isinstance(d, bool) or d <= 0:
            raise TensorTypeError(f"shape entries must be positive integers, got {d!r}")
    return [int(d) for d in dims]


def _deep_equal(a: Any, b: Any) -> bool:
    a_seq, b_seq = _is_seq(a), _is_seq(b)
    if a_seq != b_seq:
        return False
    if not a_seq:
        return bool(a == b)
    if len(a) != len(b):
        return False
    return all(_deep_equal(x, y) for x, y in zip(a, b))


def _leaf_sum(data: Any) -> Number:
    if _is_seq(data):
        s = 0
        for v in data:
            s = s + _leaf_sum(v)
        return s
    return data


def _leaf_map(fn: Callable[[Number], Number], data: Any) -> Any:
    if _is_seq(data):
        return [_leaf_map(fn, v) for v in data]
    return fn(data)


def _copy(data: Any) -> Any:
    if _is_seq(data):
        return [_copy(v) for v in data]
    return data


class Tensor:
    """
    Nested numeric array with reverse-mode autodiff metadata.

    Attributes
    ----------
    data : list | tuple
        Nested sequences with real-number leaves (rank >= 1). Stored by
        reference: construction and indexing never copy.
    gradient : Tensor | None
        Same shape as `data`; written by backward().
    parents : tuple | None
        The two operands (Tensors or plain numbers) of the operation that
        produced this tensor. None for leaves and for anything created while
        gradient recording was off.
    requires_grad : bool
        Whether backward() may write a gradient onto this tensor.
    base : Tensor | None
        For views returned by indexing: the tensor whose storage this one
        points into.
    """

    # numpy scalars on the left defer to the reflected dunders below
    __array_ufunc__ = None
    __array_priority__ = 1000

    def __new__(cls, data: Any = None, disable_grad: bool = False):
        # Tensor(t) is t: no re-wrapping of an existing tensor
        if isinstance(data, Tensor):
            return data
        return super().__new__(cls)

    def __init__(self, data: Any, disable_grad: bool = False):
        if data is self:
            return
        if isinstance(data, np.ndarray):
            data = data.tolist()
        if not _is_seq(data):
            if is_number(data):
                raise TensorTypeError("Tensor data must be a sequence; rank 0 tensors are not supported")
            raise TensorTypeError(f"Tensor contains non number {data!r}")
        _typecheck(data)
        self._init_fields(data, requires_grad=not disable_grad and grad_mode.is_grad_enabled())

    def _init_fields(self, data: Any, requires_grad: bool, base: Optional["Tensor"] = None):
        self.data = data
        self.gradient: Optional[Tensor] = None
        self.parents: Optional[Tuple[Any, Any]] = None
        self.requires_grad = requires_grad
        self.base = base
        self._op = None

    # ---------------- internal constructors ---------------- #
    @classmethod
    def _from_data(cls, data: Any, base: Optional["Tensor"] = None) -> "Tensor":
        """Wrap already-validated data without re-checking it."""
        out = object.__new__(cls)
        out._init_fields(data, requires_grad=grad_mode.is_grad_enabled(), base=base)
        return out

    @classmethod
    def _derived(cls, data: Any, parents: Tuple[Any, Any], op: Any) -> "Tensor":
        """Result of an operator; provenance is kept only while recording is on."""
        out = cls._from_data(data)
        if grad_mode.is_grad_enabled():
            out.parents = tuple(parents)
            out._op = op
        return out

    # ---------------- factories ---------------- #
    @classmethod
    def filled(cls, shape: Any, value: Number) -> "Tensor":
        if not is_number(value):
            raise TensorTypeError(f"Tensor contains non number {value!r}")
        return cls(_fill(_as_dims(shape), value))

    @classmethod
    def ones(cls, shape: Any) -> "Tensor":
        return cls.filled(shape, 1)

    @classmethod
    def zeros(cls, shape: Any) -> "Tensor":
        return cls.filled(shape, 0)

    @classmethod
    def ones_like(cls, other: "Tensor") -> "Tensor":
        return cls.filled(other.shape, 1)

    @classmethod
    def zeros_like(cls, other: "Tensor") -> "Tensor":
        return cls.filled(other.shape, 0)

    @classmethod
    def from_numpy(cls, array: Any, disable_grad: bool = False) -> "Tensor":
        """Build a tensor from a numpy array (copies into nested lists)."""
        return cls(np.asarray(array).tolist(), disable_grad=disable_grad)

    # ---------------- shape ---------------- #
    @property
    def shape(self) -> Tuple[int, ...]:
        """
        Dimension sizes, read off the first element at each level. The data
        is assumed rectangular; ragged data gives a meaningless answer.
        """
        dims = []
        level = self.data
        while _is_seq(level):
            dims.append(len(level))
            if not level:
                break
            level = level[0]
        return tuple(dims)

    @property
    def ndim(self) -> int:
        return len(self.shape)

    def size(self) -> "Tensor":
        """The shape as a rank-1 Tensor, e.g. Tensor.ones([2, 3]).size() == Tensor([2, 3])."""
        return Tensor(list(self.shape))

    def __len__(self) -> int:
        return len(self.data)

    # ---------------- autodiff metadata ---------------- #
    @property
    def local_derivative_rule(self) -> Optional[Callable]:
        """Pointwise (d out/d a, d out/d b) rule of the producing op, or None for leaves."""
        return self._op.derivative if self._op is not None else None

    @property
    def op_tag(self) -> Optional[str]:
        return self._op.tag if self._op is not None else None

    @property
    def is_leaf(self) -> bool:
        return self.parents is None

    def backward(self) -> None:
        from .engine import backward
        backward(self)

    def zero_grad(self) -> None:
        from .engine import zero_grad
        zero_grad(self)

    # Recording-mode helpers, reachable as Tensor.with_no_grad / Tensor.no_grad_fn
    with_no_grad = staticmethod(grad_mode.with_no_grad)
    no_grad_fn = staticmethod(grad_mode.no_grad_fn)
    no_grad = staticmethod(grad_mode.no_grad)

    # ---------------- indexing ---------------- #
    @staticmethod
    def _check_key(key: Any) -> int:
        if not isinstance(key, (int, np.integer)) or isinstance(key, bool):
            raise TensorTypeError(f"Tensor indices must be integers, got {type(key).__name__}")
        return int(key)

    def __getitem__(self, key: int) -> Union[Number, "Tensor"]:
        """A number at leaf level, otherwise a view sharing this tensor's storage."""
        item = self.data[self._check_key(key)]
        if _is_seq(item):
            return Tensor._from_data(item, base=self)
        return item

    def __setitem__(self, key: int, value: Any) -> None:
        key = self._check_key(key)
        _typecheck(value)
        self.data[key] = value

    def __iter__(self) -> Iterator[Union[Number, "Tensor"]]:
        for i in range(len(self.data)):
            yield self[i]

    # ---------------- comparison ---------------- #
    def __eq__(self, other: Any) -> bool:
        # Structural: a length mismatch anywhere is simply "not equal"
        if not isinstance(other, Tensor):
            return NotImplemented
        return _deep_equal(self.data, other.data)

    def __ne__(self, other: Any) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        return not _deep_equal(self.data, other.data)

    __hash__ = None  # type: ignore[assignment]

    # ---------------- helpers ---------------- #
    def sum(self) -> Number:
        """Sum of every leaf."""
        return _leaf_sum(self.data)

    def dot(self, other: "Tensor") -> Number:
        if len(self) != len(other):
            raise ShapeMismatchError(
                f"vectors are of different lengths ({len(self)} != {len(other)})",
                len(self), len(other),
            )
        with grad_mode.no_grad():
            return (self * other).sum()

    def map(self, fn: Callable[[Number], Number]) -> "Tensor":
        """New tensor with `fn` applied to every leaf (not recorded for autodiff)."""
        return Tensor(_leaf_map(fn, self.data))

    def reduce(self, fn: Callable[[Any, Any], Any], initial: Any) -> Any:
        """Fold `fn` over the top-level elements (numbers or views)."""
        acc = initial
        for item in self:
            acc = fn(acc, item)
        return acc

    def tolist(self) -> list:
        return _copy(self.data)

    def numpy(self) -> np.ndarray:
        return np.asarray(self.data, dtype=np.float64)

    @property
    def T(self) -> "Tensor":
        from ..ops.linalg import transpose
        return transpose(self)

    # ---------------- printing ---------------- #
    def __repr__(self):
        suffix = f", grad_fn=<{self.op_tag}>" if self.op_tag else ""
        return f"Tensor({_copy(self.data)!r}{suffix})"

    def __str__(self):
        s = "Tensor {\n"
        for item in self:
            s += "\t" + str(item).replace("\n", "\n\t") + ",\n"
        return s + "}"

    # ---------------- operators ---------------- #
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __floordiv__(self, other):
        from ..ops.arithmetic import floordiv
        return floordiv(self, other)

    def __rfloordiv__(self, other):
        from ..ops.arithmetic import floordiv
        return floordiv(other, self)

    def __mod__(self, other):
        from ..ops.arithmetic import mod
        return mod(self, other)

    def __rmod__(self, other):
        from ..ops.arithmetic import mod
        return mod(other, self)

    def __pow__(self, other):
        from ..ops.arithmetic import pow
        return pow(self, other)

    def __rpow__(self, other):
        from ..ops.arithmetic import pow
        return pow(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __matmul__(self, other):
        from ..ops.linalg import matmul
        return matmul(self, other)

    def matmul(self, other: "Tensor") -> "Tensor":
        """Matrix product; usable as Tensor.matmul(A, B) or A.matmul(B)."""
        from ..ops.linalg import matmul
        return matmul(self, other)
