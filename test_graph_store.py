"""
GraphStore: allocation, invariant checks, reset and accessors.
"""

import numpy as np
import pytest

from revgrad import GraphStore, GraphInvariantError, OpKind, check_dag, reverse
from revgrad.ops import forward_fn


def test_leaf_ids_are_sequential():
    store = GraphStore()
    ids = [store.create_leaf(v) for v in (1.0, 2, np.float32(3.5))]
    assert ids == [0, 1, 2]
    assert len(store) == 3
    assert store.value_of(2) == pytest.approx(3.5)
    assert all(store.gradient_of(i) == 0.0 for i in ids)
    assert all(store.node(i).is_leaf for i in ids)


def test_values_are_float64():
    store = GraphStore()
    a = store.create_leaf(2)
    b = store.create_op(OpKind.ADD, [a, a], forward_fn(OpKind.ADD))
    assert isinstance(store.value_of(a), np.float64)
    assert isinstance(store.value_of(b), np.float64)


def test_create_op_records_operation_and_evaluates_eagerly():
    store = GraphStore()
    a = store.create_leaf(3.0)
    b = store.create_leaf(4.0)
    c = store.create_op(OpKind.MULTIPLY, [a, b], forward_fn(OpKind.MULTIPLY), name="c")
    node = store.node(c)
    assert node.value == 12.0
    assert node.gradient == 0.0
    assert node.operation.kind is OpKind.MULTIPLY
    assert node.operation.operand_ids == (a, b)
    assert node.name == "c"


def test_forward_reference_is_rejected():
    store = GraphStore()
    a = store.create_leaf(1.0)
    with pytest.raises(GraphInvariantError):
        store.create_op(OpKind.ADD, [a, a + 1], forward_fn(OpKind.ADD))
    with pytest.raises(GraphInvariantError):
        store.create_op(OpKind.ADD, [a, -1], forward_fn(OpKind.ADD))
    # nothing was appended by the failed calls
    assert len(store) == 1


def test_wrong_arity_is_rejected():
    store = GraphStore()
    a = store.create_leaf(1.0)
    with pytest.raises(GraphInvariantError):
        store.create_op(OpKind.RELU, [a, a], forward_fn(OpKind.RELU))
    with pytest.raises(GraphInvariantError):
        store.create_op(OpKind.POWER, [a], forward_fn(OpKind.POWER))


def test_unknown_ids_are_rejected():
    store = GraphStore()
    store.create_leaf(1.0)
    with pytest.raises(GraphInvariantError):
        store.value_of(1)
    with pytest.raises(GraphInvariantError):
        store.gradient_of(-1)
    with pytest.raises(GraphInvariantError):
        store.backward(7)


@pytest.mark.parametrize("bad", ["1.0", None, [1.0], 1 + 2j])
def test_non_real_leaf_values_raise_type_error(bad):
    store = GraphStore()
    with pytest.raises(TypeError):
        store.create_leaf(bad)


def test_reset_gradients_zeroes_every_node():
    store = GraphStore()
    a = store.create_leaf(2.0)
    b = store.create_op(OpKind.MULTIPLY, [a, a], forward_fn(OpKind.MULTIPLY))
    store.backward(b)
    assert store.gradient_of(a) == 4.0
    store.reset_gradients()
    assert [n.gradient for n in store] == [0.0, 0.0]


def test_gradients_accumulate_without_reset():
    store = GraphStore()
    a = store.create_leaf(2.0)
    b = store.create_op(OpKind.MULTIPLY, [a, a], forward_fn(OpKind.MULTIPLY))
    store.backward(b)
    store.backward(b)
    # the entry is re-seeded to 1.0, its operands keep adding up: 4 + 4
    assert store.gradient_of(b) == 1.0
    assert store.gradient_of(a) == 8.0


def test_reachable_from():
    store = GraphStore()
    a = store.create_leaf(1.0)
    b = store.create_leaf(2.0)
    unrelated = store.create_leaf(3.0)
    c = store.create_op(OpKind.ADD, [a, b], forward_fn(OpKind.ADD))
    d = store.create_op(OpKind.RELU, [c], forward_fn(OpKind.RELU))
    assert store.reachable_from(d) == {a, b, c, d}
    assert unrelated not in store.reachable_from(d)
    assert store.reachable_from(a) == {a}


def test_store_built_through_create_op_is_a_dag():
    store = GraphStore()
    x = store.create_leaf(1.5)
    for _ in range(10):
        x = store.create_op(OpKind.ADD, [x, 0], forward_fn(OpKind.ADD))
    assert check_dag(store)
    for node in store:
        if node.operation is not None:
            assert all(i < node.id for i in node.operation.operand_ids)


def test_reverse_seed_keyword():
    store = GraphStore()
    a = store.create_leaf(3.0)
    b = store.create_op(OpKind.MULTIPLY, [a, a], forward_fn(OpKind.MULTIPLY))
    reverse(store, b, seed=2.0)
    assert store.gradient_of(b) == 2.0
    assert store.gradient_of(a) == 12.0


def test_out_of_range_operands_always_raise_invariant_error():
    store = GraphStore()
    a = store.create_leaf(1.0)
    for bad in (-1, a + 1, a + 5, 1.0, True):
        with pytest.raises(GraphInvariantError):
            store.create_op(OpKind.ADD, [a, bad], forward_fn(OpKind.ADD))
    assert len(store) == 1
    assert check_dag(store)


@pytest.mark.parametrize("big, expected", [(10 ** 400, np.inf), (-(10 ** 400), -np.inf)])
def test_huge_int_leaf_becomes_inf(big, expected):
    store = GraphStore()
    a = store.create_leaf(big)
    assert store.value_of(a) == expected
    assert isinstance(store.value_of(a), np.float64)
