"""
conceptmapper.export.image_queue - Pick the next image to annotate.

Images are taken in locale-aware name order; anything already present in
the metrics log is skipped.
"""

from __future__ import annotations

import locale
from pathlib import Path
from typing import Iterable, Iterator

from conceptmapper.errors import InvalidStateError
from conceptmapper.export.log import read_logged_images

IMAGE_EXTENSIONS = (".png",)


def _is_eligible(path: Path, extensions: Iterable[str]) -> bool:
    return path.is_file() and path.suffix.lower() in {e.lower() for e in extensions}


def _sort_key(path: Path) -> tuple[str, str]:
    # Case is only a tie-breaker, even under the C locale
    return locale.strxfrm(path.name.casefold()), locale.strxfrm(path.name)


def iter_images(folder: Path, extensions: Iterable[str] = IMAGE_EXTENSIONS) -> Iterator[Path]:
    """Yield eligible image files in folder, sorted by locale-aware name order.

    Collation follows LC_COLLATE. The CLI adopts the user's locale at
    startup; library callers that want the same order should call
    ``locale.setlocale(locale.LC_COLLATE, "")`` first.
    """
    extensions = tuple(extensions)
    files = sorted(Path(folder).iterdir(), key=_sort_key)
    for path in files:
        if _is_eligible(path, extensions):
            yield path


def find_next_unprocessed(
    folder: Path,
    output_path: Path | None,
    extensions: Iterable[str] = IMAGE_EXTENSIONS,
) -> Path | None:
    """Return the first image in folder that has no row in the log yet.

    Name order depends on LC_COLLATE, which Python leaves at "C" until
    ``locale.setlocale(locale.LC_COLLATE, "")`` is called.

    Args:
        folder: Directory of diagram images.
        output_path: The metrics log; it need not exist yet.
        extensions: Accepted file extensions, compared case-insensitively.

    Returns:
        Path of the next image in the order of iter_images, or None when
        every eligible image is logged.

    Raises:
        InvalidStateError: If output_path is not set.
    """
    if output_path is None:
        raise InvalidStateError("No output log selected")

    output_path = Path(output_path)
    processed = read_logged_images(output_path) if output_path.exists() else set()

    for path in iter_images(folder, extensions):
        if path.name not in processed:
            return path
    return None


__all__ = ["IMAGE_EXTENSIONS", "iter_images", "find_next_unprocessed"]
