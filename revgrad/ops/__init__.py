# revgrad/ops/__init__.py

# Convenience re-exports so users can do: from revgrad.ops import forward_fn, ...
from .arithmetic import add, mul, pow, relu, forward_fn, local_partials

__all__ = [
    "add", "mul", "pow", "relu",
    "forward_fn", "local_partials",
]
