# revgrad/__init__.py
# Scalar reverse-mode automatic differentiation

from .core.store import GraphStore
from .core.builder import Builder, Handle, use_store
from .core.errors import AutodiffError, GraphInvariantError, StoreMismatchError
from .core.node import OpKind
from .core.engine import reverse, zero_gradients
from .core.seeds import grad, grads, grads_list, value

# Finite differences and graph inspection
from .core.bumping import central_difference, finite_difference_grads
from .core.graph_utils import get_graph_stats, print_graph_summary, print_computation_graph, check_dag

__version__ = "0.1.0"

__all__ = [
    # Core
    'GraphStore',
    'Builder',
    'Handle',
    'use_store',
    'OpKind',
    # Errors
    'AutodiffError',
    'GraphInvariantError',
    'StoreMismatchError',
    # Engine
    'reverse',
    'zero_gradients',
    # Helpers
    'grad',
    'grads',
    'grads_list',
    'value',
    'central_difference',
    'finite_difference_grads',
    # Graph inspection
    'get_graph_stats',
    'print_graph_summary',
    'print_computation_graph',
    'check_dag',
]
