"""
Graph utilities: print and analyse the structure of a GraphStore.
"""

import numpy as np
from typing import Dict
from collections import Counter


def _fan_outs(store):
    fan_outs = [0] * len(store)
    for node in store:
        if node.operation is not None:
            for operand_id in node.operation.operand_ids:
                fan_outs[operand_id] += 1
    return fan_outs


def get_graph_stats(store) -> Dict:
    """
    Graph statistics (no printing).

    Returns:
        dict with nodes, leaves, edges, fan-in/fan-out maxima and means, and
        the count of nodes per operation tag ("leaf" for leaves).
    """
    if len(store) == 0:
        return {
            'nodes': 0,
            'leaves': 0,
            'edges': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    n_nodes = len(store)
    fan_ins = [0 if node.is_leaf else len(node.operation.operand_ids) for node in store]
    fan_outs = _fan_outs(store)
    op_counter = Counter("leaf" if node.is_leaf else node.operation.kind.tag for node in store)

    return {
        'nodes': n_nodes,
        'leaves': op_counter.get("leaf", 0),
        'edges': sum(fan_ins),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter)
    }


def print_graph_summary(store, detailed: bool = False) -> Dict:
    """
    Print a summary of the computation graph.

    Args:
        store: GraphStore to describe
        detailed: also list every node (only for graphs of at most 100 nodes)

    Returns:
        the statistics dict from get_graph_stats
    """
    if len(store) == 0:
        print("Empty computation graph")
        return get_graph_stats(store)

    stats = get_graph_stats(store)
    n_nodes = stats['nodes']

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {n_nodes:,}")
    print(f"Leaves:             {stats['leaves']:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common(10):
        pct = 100.0 * count / n_nodes
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")

    if detailed and n_nodes <= 100:
        print()
        print("="*70)
        print("DETAILED NODE LIST")
        print("="*70)
        for node in store:
            tag = "leaf" if node.is_leaf else node.operation.kind.tag
            operands = "" if node.is_leaf else ", ".join(f"Node{i}" for i in node.operation.operand_ids)
            print(f"Node {node.id:3d}: {tag:12s} <- [{operands}]")

    print("="*70 + "\n")
    return stats


def print_computation_graph(store, max_nodes: int = 20) -> None:
    """
    Print one line per node: id, tag, value, gradient and operands.
    """
    print("\n" + "="*70)
    print("COMPUTATION GRAPH STRUCTURE")
    print("="*70)

    if len(store) == 0:
        print("Empty graph")
        return

    for node in list(store)[:max_nodes]:
        if node.is_leaf:
            label = f"leaf {node.name}" if node.name else "leaf"
            print(f"Node {node.id:4d}: {label:12s} ({node.value:10.6f}, grad {node.gradient:10.6f}) [leaf/input]")
        else:
            operands = ", ".join(f"Node{i}" for i in node.operation.operand_ids)
            print(f"Node {node.id:4d}: {node.operation.kind.tag:12s} "
                  f"({node.value:10.6f}, grad {node.gradient:10.6f}) <- [{operands}]")

    if len(store) > max_nodes:
        print(f"... ({len(store) - max_nodes} more nodes)")

    print("="*70 + "\n")


def check_dag(store) -> bool:
    """True iff every operand id is smaller than the id of the node using it."""
    for node in store:
        if node.operation is None:
            continue
        if any(not 0 <= i < node.id for i in node.operation.operand_ids):
            return False
    return True
