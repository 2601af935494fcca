"""
conceptmapper.export.log - Append-only CSV metrics log.

One row per annotated image. The header is written once, when the log is
first created; image names containing commas are quoted; a row is never
glued onto a partial last line.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Iterator

from conceptmapper.errors import NotReadyError
from conceptmapper.export.snapshot import SCREENSHOT_DIR, SNAPSHOT_SUFFIX, write_snapshot
from conceptmapper.utils.logger import get_logger

if TYPE_CHECKING:
    from PIL.Image import Image

    from conceptmapper.graph.model import GraphModel

logger = get_logger(__name__)

HEADER = [
    "Image",
    "NumNodes",
    "NumEdges",
    "Width",
    "Depth",
    "HSS",
    "NumMainIdeas",
    "MaxNumDetails",
    "NumCrosslinks",
    "MaxCrosslinkDist",
    "PriorKnowledge",
    "Questions",
]

ENCODING = "utf-8"
LINE_TERMINATOR = "\n"


@dataclass(frozen=True)
class LogRow:
    """One parsed row of the metrics log.

    Manual annotations are None when they were left blank.
    """

    image: str
    num_nodes: int
    num_edges: int
    width: int
    depth: int
    hss: int
    num_main_ideas: int
    max_num_details: int
    num_crosslinks: int
    max_crosslink_dist: int
    prior_knowledge: int | None = None
    questions: int | None = None

    def to_dict(self) -> dict[str, str | int | None]:
        return dict(zip(HEADER, self.values()))

    def values(self) -> list[str | int | None]:
        return [
            self.image,
            self.num_nodes,
            self.num_edges,
            self.width,
            self.depth,
            self.hss,
            self.num_main_ideas,
            self.max_num_details,
            self.num_crosslinks,
            self.max_crosslink_dist,
            self.prior_knowledge,
            self.questions,
        ]


def row_from_model(model: GraphModel) -> LogRow:
    """Snapshot the model's current fields as a log row."""
    if model.image_path is None:
        raise NotReadyError("No image selected")
    return LogRow(
        image=Path(model.image_path).name,
        num_nodes=model.num_nodes,
        num_edges=model.num_edges,
        width=model.width,
        depth=model.depth,
        hss=model.hss,
        num_main_ideas=model.num_main_ideas,
        max_num_details=model.max_num_details,
        num_crosslinks=model.num_crosslinks,
        max_crosslink_dist=model.max_crosslink_dist,
        prior_knowledge=model.prior_knowledge,
        questions=model.questions,
    )


def _image_cell(name: str) -> str:
    # Quoted on a comma, or a leading quote that a reader would take as quoting
    if "," in name or name.startswith('"'):
        return '"' + name.replace('"', '""') + '"'
    return name


def format_row(row: LogRow) -> str:
    """Render row as one log line, without the line terminator."""
    image, *rest = row.values()
    return ",".join([_image_cell(image)] + ["" if v is None else str(v) for v in rest])


def _needs_header(path: Path) -> bool:
    return not path.exists() or path.stat().st_size == 0


def _ends_with_newline(path: Path) -> bool:
    with open(path, "rb") as f:
        f.seek(-1, 2)
        return f.read(1) in (b"\n", b"\r")


def append_row(output_path: Path, row: LogRow) -> None:
    """Append row to the log at output_path, creating it with a header if needed."""
    output_path = Path(output_path)
    write_header = _needs_header(output_path)
    needs_break = not write_header and not _ends_with_newline(output_path)

    with open(output_path, "a", encoding=ENCODING, newline="") as f:
        if needs_break:
            f.write(LINE_TERMINATOR)
        if write_header:
            f.write(",".join(HEADER) + LINE_TERMINATOR)
        f.write(format_row(row) + LINE_TERMINATOR)


def export(
    model: GraphModel,
    snapshot: Image | None = None,
    screenshot_dir: str = SCREENSHOT_DIR,
    snapshot_suffix: str = SNAPSHOT_SUFFIX,
) -> LogRow:
    """Append the model's metrics to its output log.

    Args:
        model: A completable model (root, image and log all set).
        snapshot: Optional rendered canvas, saved as a PNG beside the image.
        screenshot_dir: Subfolder of the image folder that holds snapshots.
        snapshot_suffix: Appended to the image stem in the snapshot name.

    Returns:
        The row that was written.

    Raises:
        NotReadyError: If the model is not completable.
        OSError: If the log or snapshot cannot be written.
    """
    if not model.is_completable:
        raise NotReadyError("Export needs a graph, an image and an output log")

    row = row_from_model(model)
    append_row(model.output_path, row)
    logger.info(f"Logged {row.image} to {model.output_path}")

    if snapshot is not None:
        write_snapshot(snapshot, Path(model.image_path), screenshot_dir, snapshot_suffix)

    return row


def first_column(line: str) -> str:
    """Return the first CSV field of line, honouring double quotes."""
    fields = next(csv.reader([line]), [])
    return fields[0] if fields else ""


def _iter_lines(output_path: Path) -> Iterator[str]:
    with open(output_path, encoding=ENCODING, newline="") as f:
        for line in f:
            line = line.rstrip("\r\n")
            if line:
                yield line


def image_already_logged(output_path: Path | None, image_name: str) -> bool:
    """Check whether image_name already has a row in the log.

    Returns:
        True on the first matching row; False if there is none or the log
        does not exist yet.
    """
    if output_path is None or not Path(output_path).exists():
        return False
    return any(first_column(line) == image_name for line in _iter_lines(Path(output_path)))


def read_logged_images(output_path: Path) -> set[str]:
    """Collect the image names of every row after the header."""
    lines = _iter_lines(Path(output_path))
    next(lines, None)
    return {first_column(line) for line in lines}


def _parse_optional(value: str | None) -> int | None:
    value = (value or "").strip()
    return int(value) if value else None


def read_log(output_path: Path) -> list[LogRow]:
    """Parse every row of the log into LogRow records.

    Raises:
        ValueError: If a metric column is not an integer.
    """
    rows: list[LogRow] = []
    with open(output_path, encoding=ENCODING, newline="") as f:
        for record in csv.DictReader(f):
            if not record.get("Image"):
                continue
            rows.append(
                LogRow(
                    image=record["Image"],
                    num_nodes=int(record["NumNodes"]),
                    num_edges=int(record["NumEdges"]),
                    width=int(record["Width"]),
                    depth=int(record["Depth"]),
                    hss=int(record["HSS"]),
                    num_main_ideas=int(record["NumMainIdeas"]),
                    max_num_details=int(record["MaxNumDetails"]),
                    num_crosslinks=int(record["NumCrosslinks"]),
                    max_crosslink_dist=int(record["MaxCrosslinkDist"]),
                    prior_knowledge=_parse_optional(record.get("PriorKnowledge")),
                    questions=_parse_optional(record.get("Questions")),
                )
            )
    return rows


__all__ = [
    "HEADER",
    "LogRow",
    "row_from_model",
    "append_row",
    "format_row",
    "export",
    "first_column",
    "image_already_logged",
    "read_logged_images",
    "read_log",
]
