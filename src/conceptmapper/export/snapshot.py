"""
conceptmapper.export.snapshot - Save annotated canvas snapshots.

Snapshots go to a fixed subfolder beside the source image and keep the
image's stem and extension, with a suffix: ``a.png`` becomes
``ConceptMapperScreenshots/a_nodes.png``. The data is always PNG.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from conceptmapper.utils.logger import get_logger

if TYPE_CHECKING:
    from PIL.Image import Image

logger = get_logger(__name__)

SCREENSHOT_DIR = "ConceptMapperScreenshots"
SNAPSHOT_SUFFIX = "_nodes"


def snapshot_path(
    image_path: Path,
    screenshot_dir: str = SCREENSHOT_DIR,
    suffix: str = SNAPSHOT_SUFFIX,
) -> Path:
    """Return where the snapshot for image_path is stored."""
    image_path = Path(image_path)
    return image_path.parent / screenshot_dir / f"{image_path.stem}{suffix}{image_path.suffix}"


def write_snapshot(
    snapshot: Image,
    image_path: Path,
    screenshot_dir: str = SCREENSHOT_DIR,
    suffix: str = SNAPSHOT_SUFFIX,
) -> Path:
    """Save snapshot as a PNG next to image_path, creating the folder on demand.

    Returns:
        The path written.
    """
    target = snapshot_path(image_path, screenshot_dir, suffix)
    target.parent.mkdir(parents=True, exist_ok=True)
    snapshot.save(target, format="PNG")
    logger.debug(f"Saved snapshot {target}")
    return target


__all__ = ["SCREENSHOT_DIR", "SNAPSHOT_SUFFIX", "snapshot_path", "write_snapshot"]
