import math

import numpy as np
import pytest

from scalargrad.engine import Op, Value, ieee_divide, safe_divide


def test_leaf_defaults():
    v = Value(3)
    assert v.data == 3.0
    assert isinstance(v.data, float)
    assert v.grad == 0.0
    assert v.op is Op.NONE


def test_op_is_read_only():
    v = Value(1.0) + Value(2.0)
    with pytest.raises(AttributeError):
        v.op = Op.MUL
    assert v.op is Op.ADD


@pytest.mark.parametrize("a, b", [(2.0, -3.0), (0.5, 0.25), (-1.5, 4.0)])
def test_binary_ops_data_and_tag(a, b):
    x, y = Value(a), Value(b)
    assert (x + y).data == a + b
    assert (x - y).data == a - b
    assert (x * y).data == a * b
    assert (x / y).data == a / b
    assert (x + y).op is Op.ADD
    assert (x - y).op is Op.SUB
    assert (x * y).op is Op.MUL
    assert (x / y).op is Op.DIV


def test_binary_ops_copy_left_grad():
    x, y = Value(2.0), Value(5.0)
    x.grad = 0.75
    y.grad = -4.0
    for out in (x + y, x - y, x * y, x / y):
        assert out.grad == 0.75


def test_operands_unchanged():
    x, y = Value(2.0), Value(5.0)
    x.grad = 1.5
    x * y
    x.tanh()
    x.relu()
    assert (x.data, x.grad, x.op) == (2.0, 1.5, Op.NONE)
    assert (y.data, y.grad, y.op) == (5.0, 0.0, Op.NONE)


def test_division_by_zero_is_ieee():
    assert (Value(1.0) / Value(0.0)).data == math.inf
    assert (Value(-1.0) / Value(0.0)).data == -math.inf
    assert math.isnan((Value(0.0) / Value(0.0)).data)


def test_plain_numbers_are_wrapped():
    v = Value(2.0)
    v.grad = 3.0
    assert (v + 1).data == 3.0
    assert (v + 1).grad == 3.0
    # the wrapped number is the left operand, so its zero grad is copied
    assert (1 + v).grad == 0.0
    assert (10 - v).data == 8.0
    assert (3 * v).data == 6.0
    assert (1 / v).data == 0.5


@pytest.mark.parametrize("x", [-2.0, -0.3, 0.0, 0.8813735870195432, 5.0])
def test_tanh(x):
    v = Value(x)
    v.grad = 0.25
    out = v.tanh()
    assert math.isclose(out.data, math.tanh(x), rel_tol=2 ** -52)
    assert out.grad == 0.25
    assert out.op is Op.TANH


@pytest.mark.parametrize("x, expected", [(-3.0, 0.0), (0.0, 0.0), (2.5, 2.5)])
def test_relu_forward(x, expected):
    v = Value(x)
    v.grad = 9.0
    out = v.relu()
    assert out.data == expected
    assert out.grad == 0.0
    assert out.op is Op.RELU


def test_backward_noop_for_leaf_and_unhandled_tags():
    v = Value(2.0)
    v.grad = 0.5
    downstream = Value(7.0)
    downstream.grad = 3.0
    v.backward(downstream)
    assert v.grad == 0.5

    for produced in (v - Value(1.0), v / Value(4.0)):
        produced.grad = 3.0
        v.backward(produced)
    assert v.grad == 0.5


def test_add_backward():
    a, b = Value(2.0), Value(5.0)
    s = a + b
    s.grad = 0.5
    a.backward(s)
    b.backward(s)
    assert a.grad == 0.5
    assert b.grad == 0.5


def test_add_backward_doubles_for_self_sum():
    a = Value(3.0)
    s = a + a
    s.grad = 1.25
    a.backward(s)
    assert a.grad == 2.5


def test_add_backward_accumulates():
    a = Value(1.0)
    a.grad = 1.0
    s = Value(1.0) + Value(4.0)
    s.grad = 2.0
    a.backward(s)
    assert a.grad == 3.0


def test_mul_backward():
    x, w = Value(2.0), Value(-3.0)
    p = x * w
    x.backward(p)
    w.backward(p)
    # downstream.data / self.data, independent of downstream.grad
    assert x.grad == -3.0
    assert w.grad == 2.0


def test_mul_backward_doubles_for_square():
    a = Value(3.0)
    sq = a * a
    a.backward(sq)
    assert a.grad == 6.0


def test_mul_backward_safe_divide_at_zero():
    a = Value(0.0)
    p = a * Value(0.0)
    a.backward(p)
    assert a.grad == 1.0


def test_tanh_backward_uses_own_data():
    v = Value(0.5)
    t = Value(10.0).tanh()
    v.backward(t)
    assert v.grad == pytest.approx(1 - math.tanh(0.5) ** 2)


@pytest.mark.parametrize("x, expected", [(5.0, 1.0), (-3.0, 0.0)])
def test_relu_backward_overwrites(x, expected):
    v = Value(x)
    v.grad = 42.0
    v.backward(Value(1.0).relu())
    assert v.grad == expected


def test_relu_backward_nan_at_zero():
    v = Value(0.0)
    v.backward(Value(1.0).relu())
    assert math.isnan(v.grad)


def test_safe_divide():
    assert safe_divide(4.0, 2.0) == 2.0
    assert safe_divide(4.0, 0.0) == 1.0
    assert safe_divide(4.0, np.finfo(float).eps / 2) == 1.0


def test_repr():
    assert repr(Value(1.0, name='x')) == "Value('x' data=1.0, grad=0.0)"
    assert repr(Value(1.0) * Value(2.0)) == "Value(data=2.0, grad=0.0 from *)"


def test_ieee_divide():
    assert ieee_divide(1.0, 4.0) == 0.25
    assert ieee_divide(1.0, 0.0) == math.inf
    assert ieee_divide(-1.0, 0.0) == -math.inf
    assert math.isnan(ieee_divide(0.0, 0.0))
