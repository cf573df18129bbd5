# revgrad/core/store.py
from __future__ import annotations
from numbers import Real
from typing import Callable, Iterator, List, Optional, Sequence, Set

import numpy as np

from .errors import GraphInvariantError
from .node import Node, OpKind, Operation


class GraphStore:
    """
    Append-only arena of `Node`s recorded in forward order.

    A node's id is its position in the arena, so ids grow monotonically and
    are never reused. The store is the only place node state is written:
    builders and handles only hold ids.

    Not thread-safe; one logical thread of control per store.
    """

    def __init__(self):
        self._nodes: List[Node] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __repr__(self):
        return f"GraphStore(nodes={len(self._nodes)})"

    def node(self, node_id: int) -> Node:
        """Return the Node record for `node_id`."""
        if isinstance(node_id, bool) or not isinstance(node_id, (int, np.integer)):
            raise GraphInvariantError(f"node ids are integers, got {type(node_id)}")
        if not 0 <= node_id < len(self._nodes):
            raise GraphInvariantError(
                f"node id {node_id} was never allocated by this store ({len(self._nodes)} nodes)"
            )
        return self._nodes[node_id]

    def value_of(self, node_id: int) -> float:
        return self.node(node_id).value

    def gradient_of(self, node_id: int) -> float:
        return self.node(node_id).gradient

    # ------------------------------------------------------------------ #
    def create_leaf(self, value, name: Optional[str] = None) -> int:
        """Append a node with no operation record; returns its id."""
        node_id = len(self._nodes)
        self._nodes.append(Node(id=node_id, value=_as_value(value), name=name))
        return node_id

    def create_op(self, kind: OpKind, operands: Sequence[int],
                  forward_fn: Callable, name: Optional[str] = None) -> int:
        """
        Evaluate `forward_fn` on the operand values and append the result as a
        node recording (kind, operands). Returns the new id.

        Raises GraphInvariantError when the operand count does not match the
        kind, or an operand id is not smaller than the new node's id.
        """
        node_id = len(self._nodes)
        operand_ids = tuple(operands)
        if len(operand_ids) != kind.arity:
            raise GraphInvariantError(
                f"{kind.tag} takes {kind.arity} operand(s), got {len(operand_ids)}"
            )
        for operand_id in operand_ids:
            if isinstance(operand_id, bool) or not isinstance(operand_id, (int, np.integer)):
                raise GraphInvariantError(f"operand ids are integers, got {type(operand_id)}")
            if not 0 <= operand_id < node_id:
                raise GraphInvariantError(
                    f"operand id {operand_id} is not smaller than new node id {node_id}"
                )

        with np.errstate(all="ignore"):
            out = forward_fn(*(self._nodes[i].value for i in operand_ids))
        self._nodes.append(
            Node(id=node_id, value=np.float64(out),
                 operation=Operation(kind=kind, operand_ids=operand_ids), name=name)
        )
        return node_id

    # ------------------------------------------------------------------ #
    def reset_gradients(self):
        from .engine import zero_gradients
        zero_gradients(self)

    def backward(self, entry_id: int):
        """Accumulate d(entry)/d(node) onto every node reachable from `entry_id`."""
        from .engine import reverse
        reverse(self, entry_id)

    def reachable_from(self, entry_id: int) -> Set[int]:
        """Ids of `entry_id` and every node it depends on."""
        seen = set()
        stack = [entry_id]
        while stack:
            node_id = stack.pop()
            if node_id in seen:
                continue
            seen.add(node_id)
            op = self.node(node_id).operation
            if op is not None:
                stack.extend(op.operand_ids)
        return seen

    def _add_gradient(self, node_id: int, amount: float):
        node = self._nodes[node_id]
        node.gradient = np.float64(node.gradient + amount)

    def _set_gradient(self, node_id: int, gradient: float):
        self._nodes[node_id].gradient = np.float64(gradient)


def _as_value(value) -> np.float64:
    # Only real scalars; the graph is scalar-only.
    if not isinstance(value, (Real, np.number)) or isinstance(value, np.complexfloating):
        raise TypeError(
            f"GraphStore only accepts real scalars (int, float, numpy number), but got {type(value)}"
        )
    try:
        return np.float64(value)
    except OverflowError:
        # ints beyond the float64 range become +/-inf
        return np.float64(np.inf if value > 0 else -np.inf)
