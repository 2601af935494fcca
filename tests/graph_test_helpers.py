"""Test helpers for concept-map graph tests.

Factories for common graph shapes plus a reference BFS layering used to
cross-check the metrics engine.
"""

from __future__ import annotations

from conceptmapper.graph import GraphModel, MapNode, Point


def build_scenario() -> tuple[GraphModel, dict[str, MapNode]]:
    """Root R with main ideas M1, M2; detail D1 under M1; crosslink D1-M2.

    Expected metrics: width 2, depth 2, hss 4, 2 main ideas, max 1 detail,
    1 crosslink spanning 3 hops, 4 nodes, 3 edges.
    """
    model = GraphModel()
    r = model.add_node_at(Point(100, 100))
    m1 = model.add_node_at(Point(200, 100))
    d1 = model.add_node_at(Point(300, 100))
    model.select(r)
    m2 = model.add_node_at(Point(100, 200))
    model.add_crosslink(d1, m2)
    return model, {"R": r, "M1": m1, "D1": d1, "M2": m2}


def build_chain(length: int) -> tuple[GraphModel, list[MapNode]]:
    """A path of length nodes, each attached to the previous one."""
    model = GraphModel()
    nodes = [model.add_node_at(Point(i * 50, 0)) for i in range(length)]
    return model, nodes


def build_star(spokes: int) -> tuple[GraphModel, MapNode, list[MapNode]]:
    """A root with spokes leaf nodes attached directly to it."""
    model = GraphModel()
    root = model.add_node_at(Point(0, 0))
    leaves = []
    for i in range(spokes):
        model.select(root)
        leaves.append(model.add_node_at(Point(50, i * 50)))
    return model, root, leaves


def reference_layers(root: MapNode) -> list[set[int]]:
    """Textbook BFS layering: each node in the layer of its shortest distance."""
    distance = {root.id: 0}
    frontier = [root]
    while frontier:
        nxt = []
        for node in frontier:
            for neighbor in node.iter_neighbors():
                if neighbor.id not in distance:
                    distance[neighbor.id] = distance[node.id] + 1
                    nxt.append(neighbor)
        frontier = nxt
    layers: list[set[int]] = [set() for _ in range(max(distance.values()) + 1)]
    for node_id, d in distance.items():
        layers[d].add(node_id)
    return layers


def assert_symmetric(model: GraphModel) -> None:
    """Every neighbor link in the model is mutual."""
    for node in model.all_nodes():
        for neighbor in node.iter_neighbors():
            assert neighbor.has_neighbor(node), f"#{neighbor.id} does not list #{node.id}"


def adjacency(model: GraphModel) -> dict[int, set[int]]:
    """Node ID -> neighbor IDs, for comparing graph states."""
    return {n.id: {m.id for m in n.iter_neighbors()} for n in model.all_nodes()}
