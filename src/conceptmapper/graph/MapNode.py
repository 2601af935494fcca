"""MapNode - Node representation for the concept-map graph.

This module provides the core data structures of the graph:
- Point: 2D canvas coordinate
- NodeIdAllocator: Sequential ID source owned by a GraphModel
- MapNode: Node with undirected neighbor management and BFS helpers
"""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from typing import Iterator

from conceptmapper.errors import NotConnectedError


@dataclass(frozen=True)
class Point:
    """A 2D coordinate on the annotation canvas."""

    x: float
    y: float

    def __str__(self) -> str:
        """Return string representation for display."""
        return f"({self.x}, {self.y})"


class NodeIdAllocator:
    """Issues sequential node IDs for a single model.

    Example:
        >>> ids = NodeIdAllocator()
        >>> ids.allocate(), ids.allocate()
        (0, 1)
    """

    def __init__(self, start: int = 0) -> None:
        self._next = start

    def allocate(self) -> int:
        """Return the next unused ID."""
        node_id = self._next
        self._next += 1
        return node_id

    def peek(self) -> int:
        """Return the ID the next allocate() call will issue."""
        return self._next


@dataclass(eq=False)
class MapNode:
    """A node in the concept-map graph.

    Nodes are compared and hashed by their ID. Neighbor links are
    undirected and non-owning: the GraphModel keeps membership symmetric,
    so if A lists B then B lists A.

    Attributes:
        id: Sequential identifier issued by the owning model.
        position: Canvas position, used only for hit-testing and rendering.
    """

    id: int
    position: Point = field(default_factory=lambda: Point(0, 0))

    # Internal storage (prefixed)
    _neighbors: list[MapNode] = field(default_factory=list, repr=False)

    def __eq__(self, other: object) -> bool:
        """Check equality based on ID."""
        if not isinstance(other, MapNode):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID."""
        return hash(self.id)

    def __str__(self) -> str:
        """Return the node and its neighbor IDs, for diagnostics."""
        neighbor_ids = " ".join(str(n.id) for n in self._neighbors)
        return f"Node #{self.id}: {neighbor_ids}".rstrip()

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    # Iterator access
    def iter_neighbors(self) -> Iterator[MapNode]:
        """Iterate over neighboring nodes."""
        yield from self._neighbors

    def neighbor_count(self) -> int:
        """Return number of neighbors."""
        return len(self._neighbors)

    def has_neighbor(self, node: MapNode) -> bool:
        """Check if node is a neighbor."""
        return node in self._neighbors

    # Link management (the model is responsible for keeping links symmetric)
    def _connect(self, other: MapNode) -> None:
        if other not in self._neighbors:
            self._neighbors.append(other)
        if self not in other._neighbors:
            other._neighbors.append(self)

    def _disconnect(self, other: MapNode) -> None:
        if other in self._neighbors:
            self._neighbors.remove(other)
        if self in other._neighbors:
            other._neighbors.remove(self)

    def get_whole_graph(self) -> list[MapNode]:
        """Return every node reachable from this node, level by level.

        Each reachable node appears exactly once. This node comes first,
        followed by its neighbors, then their unvisited neighbors, and so on.
        """
        seen: set[int] = {self.id}
        ordered: list[MapNode] = [self]
        queue: deque[MapNode] = deque([self])
        while queue:
            node = queue.popleft()
            for nxt in node._neighbors:
                if nxt.id not in seen:
                    seen.add(nxt.id)
                    ordered.append(nxt)
                    queue.append(nxt)
        return ordered

    def hops_to(self, other: MapNode) -> int:
        """Return the minimum number of edges between this node and other.

        Args:
            other: The node to measure to.

        Returns:
            Hop count (0 when other is this node).

        Raises:
            NotConnectedError: If other cannot be reached via neighbor links.
        """
        if other == self:
            return 0

        seen: set[int] = {self.id}
        level: list[MapNode] = [self]
        hops = 0
        while level:
            hops += 1
            next_level: list[MapNode] = []
            for node in level:
                for nxt in node._neighbors:
                    if nxt == other:
                        return hops
                    if nxt.id not in seen:
                        seen.add(nxt.id)
                        next_level.append(nxt)
            level = next_level

        raise NotConnectedError(self.id, other.id)

    def distance_to(self, point: Point) -> float:
        """Euclidean distance from this node's position to point."""
        return math.hypot(self.x - point.x, self.y - point.y)


__all__ = ["Point", "NodeIdAllocator", "MapNode"]
