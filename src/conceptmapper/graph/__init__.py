"""Graph module - Core concept-map data structures.

Exports:
- Point: 2D canvas coordinate
- MapNode: Node with undirected neighbor links
- NodeIdAllocator: Per-model sequential node IDs
- Crosslink: Unordered node pair outside the structural graph
- GraphMetrics: Snapshot of derived metrics
- GraphModel: The mutable rooted concept map
"""

from conceptmapper.graph.MapNode import MapNode, NodeIdAllocator, Point
from conceptmapper.graph.metrics import GraphMetrics, compute_metrics
from conceptmapper.graph.model import GraphModel
from conceptmapper.graph.relations import Crosslink

__all__ = [
    "Point",
    "MapNode",
    "NodeIdAllocator",
    "Crosslink",
    "GraphMetrics",
    "GraphModel",
    "compute_metrics",
]
