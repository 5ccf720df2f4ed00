"""
Hand-wired single neuron: o = tanh(x1*w1 + x2*w2 + b).

Run with `python -m scalargrad`. The report lists every intermediate value
and then the gradients left on each of them after a manual backward pass.
"""

import argparse
import logging
import sys

from scalargrad.autograd import Node
from scalargrad.engine import Value
from scalargrad.utils import format_float

logger = logging.getLogger(__name__)

# Bias chosen so that n = asinh(1) and o = 1/sqrt(2)
BIAS = 6.8813735870195432

# Print order of the report
NAMES = ('o', 'n', 'b', 'x1w1x2w2', 'x1w1', 'x2w2', 'x1', 'w1', 'x2', 'w2')


def run_legacy():
    """
    Evaluate the neuron with the heuristic engine and backpropagate by hand.

    Returns:
        dict mapping each name in NAMES to its Value, in print order
    """
    x1 = Value(2.0, name='x1')
    x2 = Value(0.0, name='x2')
    w1 = Value(-3.0, name='w1')
    w2 = Value(1.0, name='w2')
    b = Value(BIAS, name='b')

    x1w1 = x1 * w1
    x2w2 = x2 * w2
    x1w1x2w2 = x1w1 + x2w2
    n = x1w1x2w2 + b
    o = n.tanh()
    logger.debug("forward: n=%r o=%r", n, o)

    # Each value receives gradient from the value built directly from it,
    # visited in reverse construction order.
    o.grad = 1.0
    n.backward(o)
    b.backward(n)
    x1w1x2w2.backward(n)
    x1w1.backward(x1w1x2w2)
    x2w2.backward(x1w1x2w2)
    w1.backward(x1w1)
    x1.backward(x1w1)
    w2.backward(x2w2)
    x2.backward(x2w2)
    logger.debug("backward: done")

    return dict(zip(NAMES, (o, n, b, x1w1x2w2, x1w1, x2w2, x1, w1, x2, w2)))


def run_graph():
    """Evaluate the same neuron with the graph engine. Returns the Nodes in print order."""
    x1 = Node(2.0, name='x1')
    x2 = Node(0.0, name='x2')
    w1 = Node(-3.0, name='w1')
    w2 = Node(1.0, name='w2')
    b = Node(BIAS, name='b')

    x1w1 = x1 * w1
    x2w2 = x2 * w2
    x1w1x2w2 = x1w1 + x2w2
    n = x1w1x2w2 + b
    o = n.tanh()
    o.backward()

    return dict(zip(NAMES, (o, n, b, x1w1x2w2, x1w1, x2w2, x1, w1, x2, w2)))


def report(values, file=None):
    """Print the VALUES and GRADIENTS sections for a name -> value mapping."""
    file = file or sys.stdout

    print("\nVALUES\n", file=file)
    for name, v in values.items():
        print(f"{name:<14}:: {format_float(v.data)}", file=file)

    print("\nGRADIENTS\n", file=file)
    for name, v in values.items():
        print(f"{name + ' grd':<14}:: {format_float(v.grad)}", file=file)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='scalargrad',
        description="Backpropagate through a single hand-wired neuron.",
    )
    parser.add_argument(
        '--graph', action='store_true',
        help="also run the graph-based engine and print its gradients",
    )
    parser.add_argument(
        '--log-level', default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help="logging level (default: WARNING)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    report(run_legacy())

    if args.graph:
        logger.info("running graph engine")
        print("\nGRAPH ENGINE")
        report(run_graph())

    return 0
