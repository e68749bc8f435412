"""
Exception taxonomy for graph mutations and algorithm runs.

Duplicate edges and unreachable targets are deliberately absent: the first
is a silent no-op and the second is a normal path result.
"""

from dataclasses import dataclass
from typing import Any


class GraphError(Exception):
    """Base class for all graph engine errors."""

    pass


class NodeNotFound(GraphError, KeyError):
    """Raised when an operation references a node id that is not in the graph."""

    def __init__(self, node_id: Any, context: str | None = None):
        self.node_id = node_id
        self.context = context
        message = f"Node {node_id!r} not found"
        if context:
            message += f" ({context})"
        super().__init__(message)

    def __str__(self):
        # KeyError.__str__ would repr() the message
        return self.args[0]


@dataclass
class InputError:
    """A single structural problem found in input data."""

    location: str  # e.g. "nodes[3].properties.activity"
    message: str

    def __str__(self):
        return f"{self.location}: {self.message}"


class MalformedInput(GraphError, ValueError):
    """Raised when bulk or partial input data is structurally invalid."""

    def __init__(self, errors: list[InputError]):
        self.errors = errors
        message = f"Malformed graph input with {len(errors)} error(s):\n"
        message += "\n".join(f"  - {e}" for e in errors)
        super().__init__(message)


class UnknownAlgorithm(GraphError, ValueError):
    """Raised when an algorithm name is not registered."""

    pass
