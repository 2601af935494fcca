"""Graph Model - The mutable rooted concept map.

GraphModel is the aggregate root for one annotated image: it owns the node
arena, the root and current selection, the crosslinks, the manual
annotations and the image/log paths. Every mutation recomputes the derived
metrics and returns the fresh GraphMetrics snapshot so callers can redraw.

The model is not thread-safe. All mutations are expected to come from a
single actor (normally the UI event handler that owns the model).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from conceptmapper.errors import CorruptGraphError, InvalidStateError
from conceptmapper.graph.MapNode import MapNode, NodeIdAllocator, Point
from conceptmapper.graph.metrics import EMPTY_METRICS, GraphMetrics, compute_metrics
from conceptmapper.graph.relations import Crosslink
from conceptmapper.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class GraphModel:
    """Container for a single concept map and its derived metrics.

    Attributes:
        image_path: The diagram image being annotated.
        output_path: The CSV log rows are appended to.
        prior_knowledge: Manual annotation, cleared on reset.
        questions: Manual annotation, cleared on reset.
    """

    image_path: Path | None = None
    output_path: Path | None = None
    prior_knowledge: int | None = None
    questions: int | None = None

    # Internal storage (prefixed) - excluded from constructor
    _root: MapNode | None = field(default=None, init=False)
    _current: MapNode | None = field(default=None, init=False)
    _crosslinks: list[Crosslink] = field(default_factory=list, init=False)
    _index: dict[int, MapNode] = field(default_factory=dict, init=False, repr=False)
    _ids: NodeIdAllocator = field(default_factory=NodeIdAllocator, init=False, repr=False)
    _metrics: GraphMetrics = field(default=EMPTY_METRICS, init=False)

    # ─────────────────────────────────────────────────────────────────────────
    # Read access
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def root(self) -> MapNode | None:
        """The first node added; None while the graph is empty."""
        return self._root

    @property
    def current(self) -> MapNode | None:
        """The node new nodes attach to."""
        return self._current

    @property
    def metrics(self) -> GraphMetrics:
        """The metrics computed after the last mutation."""
        return self._metrics

    @property
    def is_completable(self) -> bool:
        """True once there is a graph, an image and a log to export to."""
        return (
            self._root is not None
            and self.image_path is not None
            and self.output_path is not None
        )

    def all_nodes(self) -> Iterator[MapNode]:
        """Iterate the whole graph breadth-first from the root."""
        if self._root is not None:
            yield from self._root.get_whole_graph()

    def iter_crosslinks(self) -> Iterator[Crosslink]:
        """Iterate crosslinks in the order they were added."""
        yield from self._crosslinks

    def main_ideas(self) -> list[MapNode]:
        """Nodes directly connected to the root."""
        return list(self._root.iter_neighbors()) if self._root is not None else []

    def find_by_id(self, node_id: int) -> MapNode | None:
        """Find node by ID."""
        return self._index.get(node_id)

    def contains(self, node: MapNode) -> bool:
        """True if node belongs to this model."""
        return self._index.get(node.id) is node

    def has_edge(self, a: MapNode, b: MapNode) -> bool:
        """True if a normal edge joins a and b."""
        return a.has_neighbor(b) or b.has_neighbor(a)

    def has_crosslink(self, a: MapNode, b: MapNode) -> bool:
        """True if a crosslink joins a and b, in either orientation."""
        return any(link.connects(a, b) for link in self._crosslinks)

    def node_at(self, point: Point, radius: float) -> MapNode | None:
        """Return the first node (BFS order) within radius of point, if any."""
        for node in self.all_nodes():
            if node.distance_to(point) <= radius:
                return node
        return None

    # Derived metrics
    @property
    def num_nodes(self) -> int:
        return self._metrics.num_nodes

    @property
    def num_edges(self) -> int:
        return self._metrics.num_edges

    @property
    def width(self) -> int:
        return self._metrics.width

    @property
    def depth(self) -> int:
        return self._metrics.depth

    @property
    def hss(self) -> int:
        return self._metrics.hss

    @property
    def num_main_ideas(self) -> int:
        return self._metrics.num_main_ideas

    @property
    def max_num_details(self) -> int:
        return self._metrics.max_num_details

    @property
    def num_crosslinks(self) -> int:
        return self._metrics.num_crosslinks

    @property
    def max_crosslink_dist(self) -> int:
        return self._metrics.max_crosslink_dist

    # ─────────────────────────────────────────────────────────────────────────
    # Mutation API
    # ─────────────────────────────────────────────────────────────────────────

    def new_node(self, point: Point) -> MapNode:
        """Create a detached node with the next ID from this model."""
        return MapNode(id=self._ids.allocate(), position=point)

    def add_node_at(self, point: Point) -> MapNode:
        """Create a node at point and attach it with add_node().

        Returns:
            The new node, which is now the current selection.
        """
        node = self.new_node(point)
        self.add_node(node)
        return node

    def add_node(self, node: MapNode) -> GraphMetrics:
        """Attach node to the graph.

        The first node becomes the root. Every later node is connected to
        the current selection and then becomes the current selection.

        Raises:
            InvalidStateError: If the graph has a root but nothing is
                selected, or node is already part of the graph.
        """
        if node.id in self._index:
            raise InvalidStateError(f"Node #{node.id} is already in the graph")

        if self._root is None:
            self._root = node
            self._current = node
        elif self._current is not None:
            self._current._connect(node)
            self._current = node
        else:
            raise InvalidStateError("No current node selected to attach the new node to")

        self._index[node.id] = node
        logger.debug(f"Added node #{node.id} at {node.position}")
        return self._recalculate()

    def select(self, node: MapNode | None) -> None:
        """Move the current selection to node (or clear it with None).

        Raises:
            InvalidStateError: If node is not part of this graph.
        """
        if node is not None:
            self._require_member(node)
        self._current = node

    def add_edge(self, a: MapNode, b: MapNode) -> GraphMetrics:
        """Connect a and b with a normal edge.

        Does nothing if a and b are already joined by an edge or a crosslink.

        Raises:
            CorruptGraphError: If a and b disagree about being neighbors.
            InvalidStateError: If a or b is foreign, or a is b.
        """
        self._check_pair(a, b)

        if self.has_edge(a, b) or self.has_crosslink(a, b):
            logger.debug(f"Edge #{a.id} -- #{b.id} already present, not adding duplicate")
        else:
            a._connect(b)
        return self._recalculate()

    def add_crosslink(self, a: MapNode, b: MapNode) -> GraphMetrics:
        """Record a crosslink between a and b.

        Does nothing if a and b are already joined by an edge or a crosslink.

        Raises:
            CorruptGraphError: If a and b disagree about being neighbors.
            InvalidStateError: If a or b is foreign, or a is b.
        """
        self._check_pair(a, b)

        if self.has_edge(a, b) or self.has_crosslink(a, b):
            logger.debug(f"Crosslink #{a.id} <~> #{b.id} blocked by existing link")
        else:
            self._crosslinks.append(Crosslink(a, b))
        return self._recalculate()

    def delete_current_node(self) -> GraphMetrics:
        """Delete the current node.

        Deleting the root resets the whole graph. Any other node is removed
        from every neighbor list and every crosslink, and the selection is
        cleared. Nodes that were only reachable through the deleted node are
        dropped from the model along with their crosslinks.
        """
        current = self._current
        if current is None:
            return self._metrics
        if current is self._root:
            return self.reset_graph()

        for neighbor in list(current.iter_neighbors()):
            current._disconnect(neighbor)
        self._crosslinks = [link for link in self._crosslinks if not link.involves(current)]
        del self._index[current.id]
        self._current = None
        self._prune_unreachable()

        logger.debug(f"Deleted node #{current.id}")
        return self._recalculate()

    def reset_graph(self) -> GraphMetrics:
        """Discard every node, crosslink and manual annotation.

        image_path and output_path are kept.
        """
        self._root = None
        self._current = None
        self._crosslinks = []
        self._index.clear()
        self.prior_knowledge = None
        self.questions = None
        self._metrics = EMPTY_METRICS
        logger.debug("Graph reset")
        return self._metrics

    def set_annotations(
        self,
        prior_knowledge: int | None = None,
        questions: int | None = None,
    ) -> None:
        """Set both manual annotation fields."""
        self.prior_knowledge = prior_knowledge
        self.questions = questions

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _require_member(self, node: MapNode) -> None:
        if not self.contains(node):
            raise InvalidStateError(f"Node #{node.id} is not part of this graph")

    def _check_pair(self, a: MapNode, b: MapNode) -> None:
        self._require_member(a)
        self._require_member(b)
        if a == b:
            raise InvalidStateError(f"Cannot link node #{a.id} to itself")
        if a.has_neighbor(b) != b.has_neighbor(a):
            raise CorruptGraphError(a.id, b.id)

    def _prune_unreachable(self) -> None:
        reachable = {n.id for n in self.all_nodes()}
        stranded = [node_id for node_id in self._index if node_id not in reachable]
        for node_id in stranded:
            del self._index[node_id]
        if stranded:
            self._crosslinks = [
                link
                for link in self._crosslinks
                if link.a.id in reachable and link.b.id in reachable
            ]
            logger.debug(f"Dropped {len(stranded)} node(s) no longer connected to the root")

    def _recalculate(self) -> GraphMetrics:
        self._metrics = compute_metrics(self._root, self._crosslinks)
        logger.debug(
            f"Calculated width={self._metrics.width} and depth={self._metrics.depth}"
        )
        return self._metrics


__all__ = ["GraphModel"]
