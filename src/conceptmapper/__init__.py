"""
conceptmapper - Concept-map annotation metrics

Annotate diagram images with a rooted concept-map graph (ideas, connections
and crosslinks) and append per-image structural metrics (width, depth, HSS,
main ideas, details, crosslink span) to a CSV log for later analysis.
"""

from importlib.metadata import PackageNotFoundError, version

from loguru import logger

try:
    __version__ = version("conceptmapper")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

# Library use stays silent until the CLI (or the caller) opts in
logger.disable("conceptmapper")

from conceptmapper.errors import (  # noqa: E402
    ConceptMapperError,
    CorruptGraphError,
    InvalidStateError,
    NotConnectedError,
    NotReadyError,
)
from conceptmapper.graph import Crosslink, GraphMetrics, GraphModel, MapNode, Point  # noqa: E402

__all__ = [
    "__version__",
    "ConceptMapperError",
    "CorruptGraphError",
    "InvalidStateError",
    "NotConnectedError",
    "NotReadyError",
    "Crosslink",
    "GraphMetrics",
    "GraphModel",
    "MapNode",
    "Point",
]
