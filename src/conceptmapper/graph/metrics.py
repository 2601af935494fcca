"""Structural metrics for a rooted concept map.

This module defines the metric snapshot and the pure functions that
compute it from the current graph state:
- GraphMetrics: Immutable snapshot of every derived value
- compute_width_and_depth: BFS layering from the root
- compute_max_num_details: Largest detail subtree under a main idea
- compute_max_crosslink_distance: Longest crosslink span in hops
- compute_metrics: All of the above in one pass
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from conceptmapper.graph.MapNode import MapNode
    from conceptmapper.graph.relations import Crosslink


@dataclass(frozen=True)
class GraphMetrics:
    """Derived metrics for one state of the graph.

    An empty graph has width 0 and depth -1, so its HSS is -1.

    Attributes:
        num_nodes: Nodes reachable from the root.
        num_edges: Normal (non-crosslink) edges.
        width: Size of the widest BFS layer from the root.
        depth: Index of the deepest BFS layer (root is layer 0).
        num_main_ideas: Direct neighbors of the root.
        max_num_details: Largest number of details hanging off one main idea.
        num_crosslinks: Crosslinks recorded on the graph.
        max_crosslink_dist: Longest crosslink span in hops (0 if none).
    """

    num_nodes: int = 0
    num_edges: int = 0
    width: int = 0
    depth: int = -1
    num_main_ideas: int = 0
    max_num_details: int = 0
    num_crosslinks: int = 0
    max_crosslink_dist: int = 0

    @property
    def hss(self) -> int:
        """Width plus depth."""
        return self.width + self.depth


EMPTY_METRICS = GraphMetrics()


def compute_width_and_depth(root: MapNode | None) -> tuple[int, int]:
    """Compute (width, depth) by BFS layering from root.

    Each node is counted in exactly one layer: the first one that reaches it.

    Returns:
        (0, -1) when root is None.
    """
    max_width = 0
    max_depth = -1
    if root is None:
        return max_width, max_depth

    visited: set[int] = set()
    level: list[MapNode] = [root]
    while level:
        max_depth += 1
        max_width = max(max_width, len(level))
        visited.update(n.id for n in level)

        next_level: list[MapNode] = []
        queued: set[int] = set()
        for node in level:
            for nxt in node.iter_neighbors():
                if nxt.id not in visited and nxt.id not in queued:
                    queued.add(nxt.id)
                    next_level.append(nxt)
        level = next_level

    return max_width, max_depth


def count_main_ideas(root: MapNode | None) -> int:
    """Number of nodes directly connected to root."""
    return root.neighbor_count() if root is not None else 0


def collect_details(idea: MapNode, root: MapNode) -> list[MapNode]:
    """Return idea plus every node reachable from it without stepping onto root."""
    found: list[MapNode] = [idea]
    seen: set[int] = {idea.id, root.id}
    queue: deque[MapNode] = deque([idea])
    while queue:
        node = queue.popleft()
        for nxt in node.iter_neighbors():
            if nxt.id not in seen:
                seen.add(nxt.id)
                found.append(nxt)
                queue.append(nxt)
    return found


def compute_max_num_details(root: MapNode | None) -> int:
    """Largest detail count (subtree size minus the idea itself) over main ideas.

    Returns:
        0 when the graph is empty or the root has no main ideas.
    """
    if root is None:
        return 0
    sizes = [len(collect_details(idea, root)) - 1 for idea in root.iter_neighbors()]
    return max(sizes, default=0)


def compute_max_crosslink_distance(crosslinks: Iterable[Crosslink]) -> int:
    """Longest hop distance between crosslinked nodes, or 0 with no crosslinks.

    Raises:
        NotConnectedError: If a crosslink joins nodes with no path between them.
    """
    return max((link.span() for link in crosslinks), default=0)


def count_edges(nodes: Iterable[MapNode]) -> int:
    """Count undirected edges: each edge appears in two neighbor lists."""
    return sum(n.neighbor_count() for n in nodes) // 2


def compute_metrics(root: MapNode | None, crosslinks: list[Crosslink]) -> GraphMetrics:
    """Compute every derived metric for the graph hanging off root."""
    if root is None:
        return EMPTY_METRICS

    nodes = root.get_whole_graph()
    width, depth = compute_width_and_depth(root)
    return GraphMetrics(
        num_nodes=len(nodes),
        num_edges=count_edges(nodes),
        width=width,
        depth=depth,
        num_main_ideas=count_main_ideas(root),
        max_num_details=compute_max_num_details(root),
        num_crosslinks=len(crosslinks),
        max_crosslink_dist=compute_max_crosslink_distance(crosslinks),
    )


__all__ = [
    "GraphMetrics",
    "EMPTY_METRICS",
    "compute_width_and_depth",
    "count_main_ideas",
    "collect_details",
    "compute_max_num_details",
    "compute_max_crosslink_distance",
    "count_edges",
    "compute_metrics",
]
