"""
Neural network building blocks for scalargrad.

Neurons, layers and MLPs evaluate the forward pass only. Each neuron wraps its
pre-activation in a fresh leaf Value before applying ReLU, and layers pass
plain floats to each other, so no gradient lineage survives a forward call.
"""

import logging

import numpy as np

from scalargrad.engine import Value

logger = logging.getLogger(__name__)


class InvalidArgument(ValueError):
    """Raised when a network is built or called with mismatched sizes."""


class Module:
    """
    Base class for all neural network modules.

    Provides common functionality for managing parameters and gradients.
    """

    def zero_grad(self):
        """Reset all parameter gradients to zero."""
        for p in self.parameters():
            p.grad = 0.0

    def parameters(self):
        """
        Return a list of all parameters (weights and biases).

        Override this in subclasses to return actual parameters.
        """
        return []


def _check_width(width, what):
    if width < 1:
        raise InvalidArgument(f"{what} must be positive, got {width}")


class Neuron(Module):
    """
    A single ReLU unit: relu(sum(w_i * x_i) + b).

    Args:
        nin: Number of inputs
        rng: Random source for initialization. Anything accepted by
             numpy.random.default_rng: None (fresh OS entropy), an int seed,
             or an existing Generator
        weights: Optional explicit weights (length nin)
        bias: Optional explicit bias

    Example:
        >>> neuron = Neuron(2, weights=[1.0, -1.0], bias=0.5)
        >>> neuron([3.0, 1.0]).data
        2.5
    """

    def __init__(self, nin, rng=None, weights=None, bias=None):
        _check_width(nin, "nin")
        rng = np.random.default_rng(rng)

        if weights is not None:
            if len(weights) != nin:
                raise InvalidArgument(f"expected {nin} weights, got {len(weights)}")
            self.w = [Value(wi) for wi in weights]
        else:
            self.w = [Value(wi) for wi in rng.uniform(-1.0, 1.0, nin)]

        if bias is not None:
            self.b = Value(bias)
        else:
            self.b = Value(rng.uniform(-1.0, 1.0))

    @property
    def nin(self):
        return len(self.w)

    def __call__(self, x):
        """
        Forward pass.

        Args:
            x: Sequence of nin floats

        Returns:
            A relu-tagged Value holding the activation
        """
        if len(x) != self.nin:
            raise InvalidArgument(f"neuron expects {self.nin} inputs, got {len(x)}")

        # Weighted sum on raw floats; the result is a fresh leaf, so weight lineage is dropped
        act = sum(wi.data * float(xi) for wi, xi in zip(self.w, x)) + self.b.data
        return Value(act).relu()

    def parameters(self):
        return self.w + [self.b]

    def __repr__(self):
        return f"ReLUNeuron({self.nin})"


class Layer(Module):
    """
    A set of neurons evaluated on the same input.

    Args:
        nin: Number of inputs to every neuron
        nout: Number of neurons
        rng: Random source shared by the neurons (see Neuron)
    """

    def __init__(self, nin, nout, rng=None):
        _check_width(nout, "nout")
        rng = np.random.default_rng(rng)
        self.neurons = [Neuron(nin, rng=rng) for _ in range(nout)]
        logger.debug("Layer: built %d neurons with %d inputs", nout, nin)

    @property
    def nin(self):
        return self.neurons[0].nin

    @property
    def nout(self):
        return len(self.neurons)

    def __call__(self, x):
        """Return one Value per neuron, in construction order."""
        return [neuron(x) for neuron in self.neurons]

    def parameters(self):
        return [p for neuron in self.neurons for p in neuron.parameters()]

    def __repr__(self):
        return f"Layer({self.nin} → {self.nout})"


class MLP(Module):
    """
    Multi-Layer Perceptron: a sequence of layers evaluated left to right.

    Args:
        nin: Number of input features
        nouts: List of output sizes for each layer
               Example: [4, 4, 1] creates 3 layers: 3→4→4→1 for nin=3
        rng: Random source shared by every layer, so a single seed makes the
             whole network reproducible

    Example:
        >>> mlp = MLP(3, [4, 4, 1], rng=0)
        >>> out = mlp([2.0, 3.0, -1.0])
        >>> len(out)
        1
    """

    def __init__(self, nin, nouts, rng=None):
        if not nouts:
            raise InvalidArgument("MLP needs at least one layer")
        rng = np.random.default_rng(rng)

        # Build layer sizes: [input_size, hidden1, hidden2, ..., output_size]
        layer_sizes = [nin] + list(nouts)
        self.layers = [
            Layer(layer_sizes[i], layer_sizes[i + 1], rng=rng)
            for i in range(len(nouts))
        ]
        logger.debug("MLP: built %s", self)

    def __call__(self, x):
        """
        Forward pass through all layers.

        Only the numeric data of each layer's outputs is handed to the next
        layer. The final outputs are returned as fresh leaf Values.
        """
        out = [float(xi) for xi in x]
        for layer in self.layers:
            # Only data survives between layers
            out = [v.data for v in layer(out)]
        return [Value(v) for v in out]

    def parameters(self):
        """Return all parameters from all layers."""
        return [p for layer in self.layers for p in layer.parameters()]

    def __repr__(self):
        layer_str = ' → '.join(str(layer) for layer in self.layers)
        return f"MLP[\n  {layer_str}\n]"
