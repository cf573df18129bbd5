# revgrad/core/errors.py


class AutodiffError(Exception):
    """Base class for errors raised by the revgrad graph machinery."""


class GraphInvariantError(AutodiffError):
    """
    A graph invariant was violated: an operand id that is not strictly smaller
    than the id of the node being created, a wrong operand count for an
    operation kind, or a node id the store never allocated.

    Always a bug in the caller or the builder, never a recoverable condition.
    """


class StoreMismatchError(AutodiffError):
    """A handle bound to one store was passed to a builder bound to another."""
