import threading

import pytest

from lightgrad import (
    Tensor,
    enable_grad,
    is_grad_enabled,
    no_grad,
    no_grad_fn,
    set_grad_enabled,
    with_no_grad,
)


def test_recording_is_on_by_default():
    assert is_grad_enabled()


def test_with_no_grad_records_nothing_and_restores():
    a, b = Tensor([1, 2]), Tensor([3, 4])

    def body():
        assert not is_grad_enabled()
        c = a + b
        d = Tensor([5, 6])
        return c, d

    c, d = Tensor.with_no_grad(body)
    assert c.parents is None and c.local_derivative_rule is None
    assert not d.requires_grad
    assert c == Tensor([4, 6])
    assert is_grad_enabled()


def test_with_no_grad_forwards_arguments():
    assert with_no_grad(lambda x, y=0: x + y, 1, y=2) == 3


def test_with_no_grad_restores_on_error():
    err = ValueError("boom")

    def body():
        raise err

    with pytest.raises(ValueError) as excinfo:
        Tensor.with_no_grad(body)
    assert excinfo.value is err
    assert is_grad_enabled()


def test_nested_scopes_restore_previous_value():
    set_grad_enabled(False)
    with no_grad():
        assert not is_grad_enabled()
    assert not is_grad_enabled()
    with enable_grad():
        assert is_grad_enabled()
        with no_grad():
            assert not is_grad_enabled()
        assert is_grad_enabled()
    assert not is_grad_enabled()


def test_no_grad_fn_decorator():
    @no_grad_fn
    def combine(a, b, scale=1):
        """combine docs"""
        return (a + b) * scale

    a, b = Tensor([1, 2]), Tensor([3, 4])
    out = combine(a, b, scale=2)
    assert out == Tensor([8, 12])
    assert out.parents is None
    assert combine.__doc__ == "combine docs"
    assert is_grad_enabled()


def test_no_grad_fn_restores_on_error():
    @Tensor.no_grad_fn
    def fail():
        raise KeyError("k")

    with pytest.raises(KeyError):
        fail()
    assert is_grad_enabled()


def test_context_manager_form():
    a = Tensor([1, 2])
    with Tensor.no_grad():
        b = a * 2
    assert b.parents is None
    assert (a * 2).parents is not None


def test_flag_is_thread_local():
    seen = {}
    ready = threading.Event()
    release = threading.Event()

    def worker():
        with no_grad():
            ready.set()
            release.wait(5)
            seen["worker"] = is_grad_enabled()

    t = threading.Thread(target=worker)
    t.start()
    ready.wait(5)
    seen["main"] = is_grad_enabled()
    c = Tensor([1]) + Tensor([2])
    release.set()
    t.join(5)
    assert seen == {"main": True, "worker": False}
    assert c.parents is not None
