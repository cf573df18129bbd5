# revgrad/core/builder.py
from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Optional

from .errors import StoreMismatchError
from .node import Node, OpKind
from .store import GraphStore
from ..ops.arithmetic import forward_fn


@dataclass(frozen=True)
class Handle:
    """
    Reference to one node of a `GraphStore`.

    A handle is just (store, id): copying it never copies the node, and all
    reads go through the store.
    """
    store: GraphStore
    id: int

    @property
    def node(self) -> Node:
        return self.store.node(self.id)

    @property
    def value(self) -> float:
        return self.store.value_of(self.id)

    @property
    def gradient(self) -> float:
        return self.store.gradient_of(self.id)

    @property
    def is_leaf(self) -> bool:
        return self.node.is_leaf

    def backward(self):
        """Shortcut for `store.backward(id)`. Does not reset gradients first."""
        self.store.backward(self.id)

    def __repr__(self):
        return f"Handle(id={self.id}, value={self.value!r}, grad={self.gradient!r})"


class Builder:
    """
    Expression builder bound to one `GraphStore`.

    Every method evaluates its result eagerly and records it as a new node;
    the return value is a `Handle` to that node. Builders are cheap: `clone()`
    gives another builder on the same store.
    """

    def __init__(self, store: Optional[GraphStore] = None):
        self.store = store if store is not None else GraphStore()

    def clone(self) -> "Builder":
        return Builder(self.store)

    def __eq__(self, other):
        return isinstance(other, Builder) and other.store is self.store

    def __hash__(self):
        return id(self.store)

    def __repr__(self):
        return f"Builder({self.store!r})"

    def handle(self, node_id: int) -> Handle:
        """Handle to an existing node of this builder's store."""
        self.store.node(node_id)
        return Handle(self.store, node_id)

    def _bind(self, x) -> Handle:
        if not isinstance(x, Handle):
            raise TypeError(f"expected a Handle, got {type(x)}; wrap numbers with constant()")
        if x.store is not self.store:
            raise StoreMismatchError(
                f"node {x.id} belongs to {x.store!r}, not to this builder's {self.store!r}"
            )
        return x

    def _apply(self, kind: OpKind, *operands, name: Optional[str] = None) -> Handle:
        handles = [self._bind(x) for x in operands]
        node_id = self.store.create_op(kind, [h.id for h in handles], forward_fn(kind), name=name)
        return Handle(self.store, node_id)

    # ---------------------------- primitives ---------------------------- #
    def constant(self, value, name: Optional[str] = None) -> Handle:
        return Handle(self.store, self.store.create_leaf(value, name=name))

    def add(self, x: Handle, y: Handle, name: Optional[str] = None) -> Handle:
        return self._apply(OpKind.ADD, x, y, name=name)

    def multiply(self, x: Handle, y: Handle, name: Optional[str] = None) -> Handle:
        return self._apply(OpKind.MULTIPLY, x, y, name=name)

    def power(self, base: Handle, exponent: Handle, name: Optional[str] = None) -> Handle:
        return self._apply(OpKind.POWER, base, exponent, name=name)

    def relu(self, x: Handle, name: Optional[str] = None) -> Handle:
        return self._apply(OpKind.RELU, x, name=name)

    # ----------------------------- derived ------------------------------ #
    # Built from primitives, so their gradients need no rules of their own.
    def subtract(self, x: Handle, y: Handle, name: Optional[str] = None) -> Handle:
        """x - y  ==  x + (-1) * y"""
        self._bind(x)
        self._bind(y)
        neg_y = self.multiply(self.constant(-1.0), y)
        return self.add(x, neg_y, name=name)

    def divide(self, x: Handle, y: Handle, name: Optional[str] = None) -> Handle:
        """x / y  ==  x * y^(-1)"""
        self._bind(x)
        self._bind(y)
        inv_y = self.power(y, self.constant(-1.0))
        return self.multiply(x, inv_y, name=name)


@contextmanager
def use_store(store: Optional[GraphStore] = None):
    """
    Context manager yielding a Builder on a fresh (or the given) store:
        with use_store() as b:
            x = b.constant(2.0)
            y = b.multiply(x, x)
            y.backward()
    """
    yield Builder(store if store is not None else GraphStore())
