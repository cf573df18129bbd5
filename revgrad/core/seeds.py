# revgrad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the store. Each helper builds its graph on a fresh store,
# so calls never see each other's nodes.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .builder import Builder, Handle, use_store


def value(x: Any) -> Any:
    """Return the numeric value of a Handle; pass through plain numbers unchanged."""
    return x.value if isinstance(x, Handle) else x


def _leaf(b: Builder, v: Any, *, name: str) -> Handle:
    return b.constant(value(v), name=name)


def _run(y: Any, where: str):
    if not isinstance(y, Handle):
        raise TypeError(f"{where} expects f to return a Handle, got {type(y)}")
    y.store.reset_gradients()
    y.backward()


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Builder, Handle], Handle], x0: float) -> float:
    """
    Derivative of a scalar function y = f(b, x) at x0.
    `f` receives the builder and the input handle and returns the output handle.
    """
    with use_store() as b:
        x = _leaf(b, x0, name="x")
        _run(f(b, x), "grad(f, x0)")
        return x.gradient


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Builder, Dict[str, Handle]], Handle],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of y = f(b, vars) w.r.t. ALL inputs (dict form), from ONE
    backward pass.

    Returns
    -------
    dict {name: float}  # same key order as `inputs`
    """
    with use_store() as b:
        xs = {k: _leaf(b, v, name=k) for k, v in inputs.items()}
        _run(f(b, xs), "grads(f, inputs)")
        return {k: xs[k].gradient for k in inputs.keys()}


def grads_list(f: Callable[[Builder, List[Handle]], Handle],
               x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), with the inputs given as a list.

    Example
    -------
    f = lambda b, xs: b.add(b.multiply(xs[0], xs[0]), xs[1])
    grads_list(f, [2.0, 4.0]) -> [4.0, 1.0]
    """
    with use_store() as b:
        xs = [_leaf(b, v, name=f"x{i}") for i, v in enumerate(x0_list)]
        _run(f(b, xs), "grads_list(f, x0_list)")
        return [x.gradient for x in xs]
