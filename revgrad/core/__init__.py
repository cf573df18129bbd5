# revgrad/core/__init__.py

"""
Core public API for the revgrad package.

Exports:
    GraphStore       : Append-only arena of nodes; owns all graph state.
    Builder, Handle  : Expression builder bound to a store, and node references.
    use_store        : Context manager yielding a builder on a fresh store.
    reverse          : Run a single reverse pass from an entry node.
    zero_gradients   : Reset all gradients on a store to zero.
    grad, grads      : Convenience: gradient of a function at a point.
    value            : Convenience: extract the value of a Handle.
"""

from .errors import AutodiffError, GraphInvariantError, StoreMismatchError
from .node import Node, OpKind, Operation
from .store import GraphStore
from .builder import Builder, Handle, use_store
from .engine import reverse, zero_gradients, topological_order
from .seeds import grad, grads, grads_list, value

__all__ = [
    "AutodiffError", "GraphInvariantError", "StoreMismatchError",
    "Node", "OpKind", "Operation",
    "GraphStore",
    "Builder", "Handle", "use_store",
    "reverse", "zero_gradients", "topological_order",
    "grad", "grads", "grads_list", "value",
]
