# lightgrad/core/errors.py
"""
Error kinds raised by lightgrad.

Every error derives from `TensorError` and from the builtin exception a
caller would naturally catch (TypeError / ValueError / RuntimeError), so
both `except TensorError` and `except TypeError` work.
"""


class TensorError(Exception):
    """Base class for all lightgrad errors."""


class TensorTypeError(TensorError, TypeError):
    """A leaf value is not a real number (or an index key is not an int)."""


class StructureError(TensorError, ValueError):
    """A Tensor was found nested inside another Tensor's data."""


class ShapeMismatchError(TensorError, ValueError):
    """
    Operand lengths/shapes are incompatible.

    Attributes
    ----------
    left, right : int | tuple
        The two sizes that failed to match.
    """

    def __init__(self, message: str, left=None, right=None) -> None:
        super().__init__(message)
        self.left = left
        self.right = right


class StateError(TensorError, RuntimeError):
    """backward() was called where no usable graph was recorded."""
