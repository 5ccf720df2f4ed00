"""
Scalargrad: a minimal scalar automatic-differentiation engine.

`Value` is the heuristic engine: it keeps no graph, and the caller runs the
backward steps by hand. `Node` is the graph-based engine with a full
`backward()`. `nn` builds neurons, layers and MLPs on top of `Value`.
"""

from scalargrad.engine import Op, Value
from scalargrad.autograd import Node
from scalargrad import nn
from scalargrad.utils import draw_dot

__version__ = "0.1.0"
__all__ = ["Op", "Value", "Node", "nn", "draw_dot"]
