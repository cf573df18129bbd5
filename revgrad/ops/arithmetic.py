# revgrad/ops/arithmetic.py
"""
Forward functions and local partials for the primitive operations.

Each primitive is described by
  - a forward function  f(a, b)          -> out value
  - one local partial per operand  d(a, b, out) -> ∂out/∂operand
The backward engine multiplies each local partial by the output adjoint and
accumulates the product onto the matching operand.
"""
from typing import Callable, Sequence, Tuple

import numpy as np

from ..core.node import OpKind


def add(a, b): return a + b
def mul(a, b): return a * b
def pow(a, b): return a ** b
def relu(a): return np.maximum(a, 0.0)


_FORWARD = {
    OpKind.ADD: add,
    OpKind.MULTIPLY: mul,
    OpKind.POWER: pow,
    OpKind.RELU: relu,
}

# ∂out/∂x = y * x^(y-1)
# ∂out/∂y = x^y * log(x)   only meaningful for x > 0, NaN otherwise
_PARTIALS = {
    OpKind.ADD:      (lambda a, b, out: 1.0,                lambda a, b, out: 1.0),
    OpKind.MULTIPLY: (lambda a, b, out: b,                  lambda a, b, out: a),
    OpKind.POWER:    (lambda a, b, out: b * a ** (b - 1.0), lambda a, b, out: out * np.log(a)),
    OpKind.RELU:     (lambda a, out: 1.0 if a > 0 else 0.0,),
}


def forward_fn(kind: OpKind) -> Callable:
    """Return the forward function for `kind`."""
    return _FORWARD[kind]


def local_partials(kind: OpKind, operand_values: Sequence[float], out_value: float) -> Tuple[float, ...]:
    """
    Evaluate ∂out/∂operand for every operand of a `kind` node.

    Domain problems (log of a non-positive base, 0 ** negative) yield NaN/inf
    under IEEE semantics; numpy's floating-point warnings are silenced here.
    """
    with np.errstate(all="ignore"):
        return tuple(np.float64(d(*operand_values, out_value)) for d in _PARTIALS[kind])
