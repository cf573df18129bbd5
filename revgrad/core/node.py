# revgrad/core/node.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class OpKind(Enum):
    """Primitive operation kinds, with (debug tag, arity)."""
    ADD = ("add", 2)
    MULTIPLY = ("mul", 2)
    POWER = ("pow", 2)
    RELU = ("relu", 1)

    @property
    def tag(self) -> str:
        return self.value[0]

    @property
    def arity(self) -> int:
        return self.value[1]


@dataclass(frozen=True)
class Operation:
    """
    Record of the primitive that produced a node.

    Attributes
    ----------
    kind        : OpKind
    operand_ids : Tuple[int, ...]
        Ids of the operand nodes, in operand order (base before exponent for
        POWER). Every id is smaller than the id of the node holding this record.
    """
    kind: OpKind
    operand_ids: Tuple[int, ...]


@dataclass
class Node:
    """
    One scalar computation result stored in a `GraphStore`.

    Attributes
    ----------
    id        : int
        Position in the store; assigned at creation and never reused.
    value     : float
        Forward (primal) value, computed eagerly when the node is created.
    gradient  : float
        Reverse-mode adjoint accumulator, 0.0 until a backward pass reaches it.
    operation : Optional[Operation]
        None for leaves (values supplied directly by the caller).
    name      : Optional[str]
        Optional debug/pretty-print name.
    """
    id: int
    value: float
    gradient: float = 0.0
    operation: Optional[Operation] = None
    name: Optional[str] = None

    @property
    def is_leaf(self) -> bool:
        return self.operation is None

    def __repr__(self):
        tag = "leaf" if self.is_leaf else self.operation.kind.tag
        return f"Node({self.id}, {tag}, value={self.value!r}, grad={self.gradient!r}, name={self.name!r})"
