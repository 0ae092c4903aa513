import pytest

from lightgrad import Tensor, ShapeMismatchError, TensorTypeError, matmul, transpose


def test_matmul_2x2():
    A = Tensor([[1, 2], [3, 4]])
    B = Tensor([[5, 6], [7, 8]])
    assert Tensor.matmul(A, B) == Tensor([[19, 22], [43, 50]])
    assert A @ B == Tensor([[19, 22], [43, 50]])
    assert A.matmul(B) == Tensor([[19, 22], [43, 50]])


def test_matmul_rectangular():
    A = Tensor([[1, 2, 3], [4, 5, 6]])      # 2x3
    B = Tensor([[1], [0], [-1]])            # 3x1
    C = matmul(A, B)
    assert C.shape == (2, 1)
    assert C == Tensor([[-2], [-2]])


def test_matmul_inner_mismatch():
    with pytest.raises(ShapeMismatchError):
        Tensor.matmul(Tensor([[1, 2, 3], [4, 5, 6]]), Tensor([[1, 2], [3, 4]]))


def test_matmul_requires_matrices():
    with pytest.raises(ShapeMismatchError):
        matmul(Tensor([1, 2]), Tensor([[1], [2]]))
    with pytest.raises(TensorTypeError):
        matmul(Tensor([[1]]), [[1]])


def test_transpose():
    A = Tensor([[1, 2, 3], [4, 5, 6]])
    assert transpose(A) == Tensor([[1, 4], [2, 5], [3, 6]])
    assert A.T.T == A
    assert A.T.parents is None


def test_matmul_records_provenance():
    A = Tensor([[1, 2], [3, 4]])
    B = Tensor([[5, 6], [7, 8]])
    C = A @ B
    assert C.parents == (A, B)
    assert C.op_tag == "matmul"
    bt, at = C.local_derivative_rule(A, B)
    assert bt == B.T and at == A.T
