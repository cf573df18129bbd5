# revgrad/core/bumping.py
"""
Finite-difference (bumping) gradients.

    df/dx_i ≈ [f(x + ε e_i) - f(x - ε e_i)] / (2ε)

Every evaluation builds the expression on its own fresh store; no backward
pass is run. Used as an independent oracle for the reverse-mode results.
"""
from typing import Callable, Dict

from .builder import Builder, Handle, use_store


def _evaluate(f: Callable, inputs: Dict[str, float]) -> float:
    with use_store() as b:
        xs = {k: b.constant(v, name=k) for k, v in inputs.items()}
        y = f(b, xs)
        return float(y.value if isinstance(y, Handle) else y)


def finite_difference_grads(f: Callable[[Builder, Dict[str, Handle]], Handle],
                            inputs: Dict[str, float], eps: float = 1e-6) -> Dict[str, float]:
    """Central-difference gradient of y = f(b, vars) w.r.t. every named input."""
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")
    base = {k: float(v) for k, v in inputs.items()}
    out = {}
    for k in base:
        up = dict(base); up[k] += eps
        down = dict(base); down[k] -= eps
        out[k] = (_evaluate(f, up) - _evaluate(f, down)) / (2.0 * eps)
    return out


def central_difference(f: Callable[[Builder, Handle], Handle], x0: float, eps: float = 1e-6) -> float:
    """Single-input form: f receives the builder and the input handle."""
    g = finite_difference_grads(lambda b, xs: f(b, xs["x"]), {"x": x0}, eps=eps)
    return g["x"]
