"""
conceptmapper.session - The annotate / export / advance workflow.

AnnotationSession sits between a UI layer and the core. It turns canvas
clicks into model mutations and implements "done": log the current image,
move on to the next unprocessed image in the same folder, start a new graph.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from conceptmapper.config import DEFAULT_CONFIG
from conceptmapper.errors import NotReadyError
from conceptmapper.export.image_queue import find_next_unprocessed
from conceptmapper.export.log import LogRow, export, image_already_logged
from conceptmapper.graph.MapNode import MapNode, Point
from conceptmapper.graph.metrics import GraphMetrics
from conceptmapper.graph.model import GraphModel
from conceptmapper.utils.logger import get_logger

if TYPE_CHECKING:
    from PIL.Image import Image

logger = get_logger(__name__)


class AnnotationSession:
    """Drives one GraphModel through a folder of images.

    Args:
        output_path: The metrics log.
        config: Loaded configuration (defaults when None).
        model: Model to drive; a new one is created when None.
    """

    def __init__(
        self,
        output_path: Path | None = None,
        config: dict[str, Any] | None = None,
        model: GraphModel | None = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.model = model or GraphModel()
        if output_path is not None:
            self.model.output_path = Path(output_path)

    @property
    def hit_radius(self) -> float:
        return float(self.config["canvas"]["hit_radius"])

    def open_image(self, image_path: Path) -> bool:
        """Start annotating image_path.

        Returns:
            True if the image already has a row in the log. The image is
            opened either way; the caller decides whether to warn.
        """
        self.model.image_path = Path(image_path)
        logged = image_already_logged(self.model.output_path, self.model.image_path.name)
        if logged:
            logger.warning(f"{self.model.image_path.name} is already in {self.model.output_path}")
        return logged

    def click(self, point: Point) -> GraphMetrics:
        """Apply a primary click on the canvas.

        - On another node while one is current: connect them, select the other.
        - On the current node: clear the selection.
        - On a node with nothing current: select it.
        - On empty canvas: add a node if there is somewhere to attach it.
        """
        model = self.model
        selected = model.node_at(point, self.hit_radius)
        current = model.current

        if selected is not None and current is not None and selected != current:
            model.add_edge(selected, current)
            model.select(selected)
        elif selected is not None:
            model.select(None if selected == current else selected)
        elif current is not None or model.root is None:
            model.add_node_at(point)
        else:
            logger.debug(f"Click at {point} ignored: nothing selected")
        return model.metrics

    def crosslink_click(self, point: Point) -> GraphMetrics:
        """Crosslink the current node to the node under point, if both exist."""
        model = self.model
        selected = model.node_at(point, self.hit_radius)
        if selected is not None and model.current is not None and selected != model.current:
            model.add_crosslink(model.current, selected)
        return model.metrics

    def clear_selection(self) -> None:
        self.model.select(None)

    def delete_current(self) -> GraphMetrics:
        return self.model.delete_current_node()

    def done(self, snapshot: Image | None = None) -> Path | None:
        """Log the current image, then advance to the next unprocessed one.

        Returns:
            The image now open, or None when the folder is exhausted.

        Raises:
            NotReadyError: If the model is not completable.
        """
        model = self.model
        if not model.is_completable:
            raise NotReadyError("Select an image and an output log, and add a root node")

        row: LogRow = export(
            model,
            snapshot,
            screenshot_dir=self.config["export"]["screenshot_dir"],
            snapshot_suffix=self.config["export"]["snapshot_suffix"],
        )
        logger.info(f"{row.image}: HSS={row.hss}, main ideas={row.num_main_ideas}")

        next_image = find_next_unprocessed(
            Path(model.image_path).parent,
            model.output_path,
            self.config["images"]["extensions"],
        )
        model.image_path = next_image
        model.reset_graph()
        return next_image

    def node_for(self, point: Point) -> MapNode | None:
        """The node a click at point would hit."""
        return self.model.node_at(point, self.hit_radius)


__all__ = ["AnnotationSession"]
