"""
Graph-based scalar autograd.

Unlike the heuristic `scalargrad.engine.Value`, a Node keeps references to
the nodes it was computed from, so `backward()` can walk the whole graph and
accumulate exact partial derivatives, including through nodes that are used
more than once.
"""

import numpy as np

from scalargrad.engine import ieee_divide


class Node:
    """
    A scalar in a computational graph.

    Example:
        >>> x = Node(2.0)
        >>> y = Node(3.0)
        >>> z = x * y + x
        >>> z.backward()  # Compute gradients
        >>> print(x.grad)  # dz/dx = y + 1 = 4.0
    """

    def __init__(self, data, _children=(), _op='', name=""):
        """
        Initialize a Node.

        Args:
            data: The numerical data, coerced to float
            _children: Tuple of operand Nodes (internal use for autograd)
            _op: String describing the operation that created this Node (internal)
            name: Optional name for debugging and visualization
        """
        self.data = float(data)
        self.grad = 0.0
        self.name = name

        # Internal variables for building the computational graph
        self._backward = lambda: None
        self._prev = set(_children)
        self._op = _op

    def __add__(self, other):
        """Addition: d(a+b)/da = 1, d(a+b)/db = 1"""
        other = other if isinstance(other, Node) else Node(other)
        out = Node(self.data + other.data, (self, other), '+')

        def _backward():
            self.grad += out.grad
            other.grad += out.grad

        out._backward = _backward
        return out

    def __sub__(self, other):
        """Subtraction: d(a-b)/da = 1, d(a-b)/db = -1"""
        other = other if isinstance(other, Node) else Node(other)
        out = Node(self.data - other.data, (self, other), '-')

        def _backward():
            self.grad += out.grad
            other.grad -= out.grad

        out._backward = _backward
        return out

    def __mul__(self, other):
        """Multiplication: d(a*b)/da = b, d(a*b)/db = a"""
        other = other if isinstance(other, Node) else Node(other)
        out = Node(self.data * other.data, (self, other), '*')

        def _backward():
            self.grad += other.data * out.grad
            other.grad += self.data * out.grad

        out._backward = _backward
        return out

    def __truediv__(self, other):
        """
        Division: d(a/b)/da = 1/b, d(a/b)/db = -a/b^2

        Division by zero yields inf or nan rather than raising.
        """
        other = other if isinstance(other, Node) else Node(other)
        out = Node(ieee_divide(self.data, other.data), (self, other), '/')

        def _backward():
            self.grad += ieee_divide(out.grad, other.data)
            other.grad += ieee_divide(-self.data * out.grad, other.data * other.data)

        out._backward = _backward
        return out

    def __pow__(self, other):
        """
        Power operation: raises a Node to a constant power.

        Example:
            >>> x = Node(3.0)
            >>> y = x ** 2  # y.data = 9.0
        """
        assert isinstance(other, (int, float)), "Only supporting int/float powers"
        out = Node(self.data ** other, (self,), f'**{other}')

        def _backward():
            # power rule: d(x^n)/dx = n * x^(n-1)
            self.grad += (other * self.data ** (other - 1)) * out.grad

        out._backward = _backward
        return out

    def tanh(self):
        """Hyperbolic tangent: d(tanh x)/dx = 1 - tanh(x)^2"""
        t = float(np.tanh(self.data))
        out = Node(t, (self,), 'tanh')

        def _backward():
            self.grad += (1 - t * t) * out.grad

        out._backward = _backward
        return out

    def relu(self):
        """ReLU activation: max(0, x). The gradient only flows where the output is positive."""
        out = Node(self.data if self.data > 0 else 0.0, (self,), 'ReLU')

        def _backward():
            self.grad += (out.data > 0) * out.grad

        out._backward = _backward
        return out

    def backward(self):
        """
        Backpropagate from this node through the whole graph.

        The node's own gradient is seeded to 1.0, then every node is visited
        in reverse topological order so that each one has received all of
        its downstream contributions before passing gradient on.
        """
        topo = []
        visited = set()

        def build_topo(v):
            if v not in visited:
                visited.add(v)
                for child in v._prev:
                    build_topo(child)
                topo.append(v)

        build_topo(self)

        self.grad = 1.0
        for v in reversed(topo):
            v._backward()

    def __neg__(self):
        """Negation: -x = x * -1"""
        return self * -1

    def __radd__(self, other):
        """Right addition: other + self"""
        return self + other

    def __rsub__(self, other):
        """Right subtraction: other - self"""
        return Node(other) - self

    def __rmul__(self, other):
        """Right multiplication: other * self"""
        return self * other

    def __rtruediv__(self, other):
        """Right division: other / self"""
        return Node(other) / self

    def __repr__(self):
        name_str = f"'{self.name}' " if self.name else ""
        op_str = f" from {self._op}" if self._op else ""
        return f"Node({name_str}data={self.data}, grad={self.grad}{op_str})"
