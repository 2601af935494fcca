"""Test helpers for metrics-log tests."""

from conceptmapper.export.log import LogRow

HEADER_LINE = (
    "Image,NumNodes,NumEdges,Width,Depth,HSS,NumMainIdeas,MaxNumDetails,"
    "NumCrosslinks,MaxCrosslinkDist,PriorKnowledge,Questions"
)


def make_row(image: str, **overrides) -> LogRow:
    """A single-node row for image, with any field overridden."""
    values = dict(
        image=image,
        num_nodes=1,
        num_edges=0,
        width=1,
        depth=0,
        hss=1,
        num_main_ideas=0,
        max_num_details=0,
        num_crosslinks=0,
        max_crosslink_dist=0,
    )
    values.update(overrides)
    return LogRow(**values)
