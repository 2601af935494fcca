"""Exception types raised by the concept-map core.

Every condition the core reports derives from ConceptMapperError so that
collaborators can catch them in one place. I/O failures are not wrapped:
OSError and its subclasses propagate unchanged.
"""

from __future__ import annotations


class ConceptMapperError(Exception):
    """Base exception for concept-map operations."""


class InvalidStateError(ConceptMapperError):
    """Raised when an operation is invoked in a state that violates a precondition.

    Examples: adding a node while the graph has a root but no current
    selection, or searching for the next image without an output log set.
    """


class CorruptGraphError(ConceptMapperError):
    """Raised when neighbor membership between two nodes is not symmetric."""

    def __init__(self, node_a: int, node_b: int):
        self.node_a = node_a
        self.node_b = node_b
        super().__init__(
            f"Neighbor sets of node #{node_a} and node #{node_b} disagree"
        )


class NotConnectedError(ConceptMapperError):
    """Raised when a hop distance is requested between unconnected nodes."""

    def __init__(self, source: int, target: int):
        self.source = source
        self.target = target
        super().__init__(f"No path from node #{source} to node #{target}")


class NotReadyError(ConceptMapperError):
    """Raised when exporting a model that is not completable."""


__all__ = [
    "ConceptMapperError",
    "InvalidStateError",
    "CorruptGraphError",
    "NotConnectedError",
    "NotReadyError",
]
