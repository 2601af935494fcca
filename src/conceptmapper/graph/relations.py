"""Relations - Crosslink annotations between graph nodes.

Normal edges are not a separate type: they exist only as mutual neighbor
membership on MapNode. Crosslinks are stored separately by the model and
never take part in width, depth or edge counts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from conceptmapper.graph.MapNode import MapNode


@dataclass(frozen=True, eq=False)
class Crosslink:
    """An unordered pair of nodes marked as conceptually linked.

    Attributes:
        a: The node the crosslink was drawn from.
        b: The node the crosslink was drawn to.
    """

    a: MapNode
    b: MapNode

    def __eq__(self, other: object) -> bool:
        """Check equality regardless of orientation."""
        if not isinstance(other, Crosslink):
            return NotImplemented
        return self.connects(other.a, other.b)

    def __hash__(self) -> int:
        """Hash that ignores orientation."""
        return hash(frozenset((self.a.id, self.b.id)))

    def __str__(self) -> str:
        return f"#{self.a.id} <~> #{self.b.id}"

    def connects(self, first: MapNode, second: MapNode) -> bool:
        """True if this crosslink joins first and second, in either order."""
        return (self.a == first and self.b == second) or (
            self.a == second and self.b == first
        )

    def involves(self, node: MapNode) -> bool:
        """True if node is either endpoint."""
        return self.a == node or self.b == node

    def span(self) -> int:
        """Hop distance between the endpoints over normal edges."""
        return self.a.hops_to(self.b)
