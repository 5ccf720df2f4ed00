"""
Formatting and visualization utilities for scalargrad.

`draw_dot` renders the computational graph built by `scalargrad.autograd.Node`.
The heuristic `Value` keeps no graph, so it has nothing to draw.
"""

import math

import numpy as np
from graphviz import Digraph


def format_float(x):
    """
    Format a float with the shortest digits that round-trip, never in
    scientific notation, and without a trailing ".0".

    Example:
        >>> format_float(-6.0)
        '-6'
        >>> format_float(0.1 + 0.2)
        '0.30000000000000004'
        >>> format_float(float('nan'))
        'NaN'
    """
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    return np.format_float_positional(x, unique=True, trim='-')


def trace(root):
    """
    Trace the computational graph starting from a root Node.

    Args:
        root: A Node representing the output of a computation

    Returns:
        tuple: (nodes, edges) where nodes is the set of all Nodes in the graph
        and edges is a set of (operand, result) tuples

    Example:
        >>> x = Node(2.0)
        >>> y = Node(3.0)
        >>> z = x * y + x
        >>> nodes, edges = trace(z)
        >>> len(nodes)  # x, y, x*y and z
        4
    """
    nodes, edges = set(), set()

    def build(v):
        if v not in nodes:
            nodes.add(v)
            for child in v._prev:
                edges.add((child, v))
                build(child)

    build(root)
    return nodes, edges


def draw_dot(root, format='svg', rankdir='LR'):
    """
    Visualize the computational graph of a Node as a directed graph.

    Each Node becomes a record showing its name, data and gradient. Nodes
    produced by an operation get an extra operation node feeding them.

    Args:
        root: A Node (typically the output) to visualize from
        format: Output format ('svg', 'png', 'pdf', etc.)
        rankdir: Graph direction - 'LR' (left-right) or 'TB' (top-bottom)

    Returns:
        Digraph: A graphviz Digraph object that can be rendered or displayed

    Note:
        Rendering to a file needs the Graphviz binaries installed
        (apt install graphviz, brew install graphviz). Building the graph
        and reading `.source` does not.
    """
    assert rankdir in ['LR', 'TB'], "rankdir must be 'LR' (left-right) or 'TB' (top-bottom)"

    nodes, edges = trace(root)
    dot = Digraph(format=format, graph_attr={'rankdir': rankdir})

    for n in nodes:
        label = f'{{ {n.name} | data {n.data:.4f} | grad {n.grad:.4f} }}'
        dot.node(name=str(id(n)), label=label, shape='record')

        if n._op:
            dot.node(name=str(id(n)) + n._op, label=n._op)
            dot.edge(str(id(n)) + n._op, str(id(n)))

    for n1, n2 in edges:
        # Connect the operand to the operation that produced n2
        dot.edge(str(id(n1)), str(id(n2)) + n2._op)

    return dot
