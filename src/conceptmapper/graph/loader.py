"""Map files - Describe a concept map in TOML and replay it onto a GraphModel.

A map file names nodes by free-form labels::

    root = "Topic"
    prior_knowledge = 2
    questions = 1
    edges = [["Topic", "Idea A"], ["Idea A", "Detail"], ["Topic", "Idea B"]]
    crosslinks = [["Detail", "Idea B"]]

    [positions]
    Topic = [400, 80]

The graph is rebuilt through the public mutation API (add_node, select,
add_edge, add_crosslink), so the model's attach-on-create rules apply: every
edge must be reachable from the root.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from conceptmapper.config import parse_toml
from conceptmapper.errors import InvalidStateError
from conceptmapper.graph.MapNode import MapNode, Point
from conceptmapper.graph.model import GraphModel


@dataclass
class MapSpec:
    """Parsed contents of a map file."""

    root: str
    edges: list[tuple[str, str]] = field(default_factory=list)
    crosslinks: list[tuple[str, str]] = field(default_factory=list)
    positions: dict[str, Point] = field(default_factory=dict)
    prior_knowledge: int | None = None
    questions: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MapSpec:
        """Create a MapSpec from parsed TOML data.

        Raises:
            ValueError: If root is missing or a pair is malformed.
        """
        root = data.get("root")
        if not root:
            raise ValueError("Map file must name a root node")

        positions = {
            str(label): Point(float(xy[0]), float(xy[1]))
            for label, xy in data.get("positions", {}).items()
        }
        return cls(
            root=str(root),
            edges=[_pair(p, "edges") for p in data.get("edges", [])],
            crosslinks=[_pair(p, "crosslinks") for p in data.get("crosslinks", [])],
            positions=positions,
            prior_knowledge=data.get("prior_knowledge"),
            questions=data.get("questions"),
        )


def _pair(value: Any, section: str) -> tuple[str, str]:
    if not isinstance(value, list) or len(value) != 2:
        raise ValueError(f"Entries in '{section}' must be two-element lists, got {value!r}")
    return str(value[0]), str(value[1])


def load_map_spec(path: Path) -> MapSpec:
    """Read and parse a map file."""
    return MapSpec.from_dict(parse_toml(Path(path).read_text(encoding="utf-8")))


def build_model(spec: MapSpec, model: GraphModel | None = None) -> tuple[GraphModel, dict[str, MapNode]]:
    """Replay spec onto model (a fresh one by default).

    Returns:
        The model and a label -> node mapping.

    Raises:
        InvalidStateError: If some edge is not connected to the root.
    """
    model = model or GraphModel()
    nodes: dict[str, MapNode] = {}

    def position(label: str) -> Point:
        return spec.positions.get(label, Point(0, 0))

    nodes[spec.root] = model.add_node_at(position(spec.root))

    pending = list(spec.edges)
    while pending:
        remaining: list[tuple[str, str]] = []
        for a, b in pending:
            if a in nodes and b in nodes:
                model.add_edge(nodes[a], nodes[b])
            elif a in nodes or b in nodes:
                known, new = (a, b) if a in nodes else (b, a)
                model.select(nodes[known])
                nodes[new] = model.add_node_at(position(new))
            else:
                remaining.append((a, b))
        if len(remaining) == len(pending):
            labels = ", ".join(f"{a}-{b}" for a, b in remaining)
            raise InvalidStateError(f"Edges not connected to root '{spec.root}': {labels}")
        pending = remaining

    for a, b in spec.crosslinks:
        if a not in nodes or b not in nodes:
            raise InvalidStateError(f"Crosslink {a}-{b} refers to an unknown node")
        model.add_crosslink(nodes[a], nodes[b])

    model.select(None)
    model.set_annotations(spec.prior_knowledge, spec.questions)
    return model, nodes


def load_map(path: Path, model: GraphModel | None = None) -> tuple[GraphModel, dict[str, MapNode]]:
    """Read a map file and build a model from it."""
    return build_model(load_map_spec(path), model)


__all__ = ["MapSpec", "load_map_spec", "build_model", "load_map"]
