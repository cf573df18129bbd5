# revgrad/core/engine.py
from __future__ import annotations
from typing import List, TYPE_CHECKING

import numpy as np

from ..ops.arithmetic import local_partials

if TYPE_CHECKING:
    from .store import GraphStore


def zero_gradients(store: "GraphStore"):
    """
    Set the gradient of every node on `store` to zero.

    Gradients accumulate additively, so this must run between two unrelated
    backward passes over the same store.
    """
    for node in store:
        store._set_gradient(node.id, 0.0)


def topological_order(store: "GraphStore", entry_id: int) -> List[int]:
    """
    Post-order of the nodes reachable from `entry_id`: every node appears
    after all of its operands. Reversing it gives the order in which the
    backward sweep may visit nodes.

    Iterative depth-first search, so deep chains do not hit the recursion limit.
    """
    order: List[int] = []
    visited = set()
    stack = [(entry_id, False)]
    while stack:
        node_id, expanded = stack.pop()
        if expanded:
            order.append(node_id)
            continue
        if node_id in visited:
            continue
        visited.add(node_id)
        stack.append((node_id, True))
        op = store.node(node_id).operation
        if op is not None:
            for operand_id in reversed(op.operand_ids):
                if operand_id not in visited:
                    stack.append((operand_id, False))
    return order


def reverse(store: "GraphStore", entry_id: int, seed: float = 1.0):
    """
    Run a single reverse pass from `entry_id`.

    Args:
        store:    the store owning the graph.
        entry_id: node whose gradient w.r.t. its ancestors is wanted.
        seed:     adjoint assigned (not added) to the entry, d entry / d entry.

    Notes:
        - Nodes are swept in reverse topological order, so a node propagates
          only after every consumer reachable from the entry has added its
          share to the node's gradient (fan-out).
        - For each operand p of node y: p.gradient += y.gradient * (∂y/∂p).
        - Leaves are never expanded; a pass entered at a leaf only seeds it.
    """
    store.node(entry_id)
    store._set_gradient(entry_id, seed)

    for node_id in reversed(topological_order(store, entry_id)):
        node = store.node(node_id)
        if node.is_leaf:
            continue
        op = node.operation
        operand_values = [store.value_of(i) for i in op.operand_ids]
        partials = local_partials(op.kind, operand_values, node.value)
        with np.errstate(all="ignore"):
            for operand_id, partial in zip(op.operand_ids, partials):
                store._add_gradient(operand_id, partial * node.gradient)
