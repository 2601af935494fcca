"""
conceptmapper.export - CSV metrics log, snapshots and the image queue
"""

from conceptmapper.export.image_queue import find_next_unprocessed, iter_images
from conceptmapper.export.log import (
    HEADER,
    LogRow,
    export,
    image_already_logged,
    read_log,
    read_logged_images,
)
from conceptmapper.export.snapshot import snapshot_path, write_snapshot

__all__ = [
    "HEADER",
    "LogRow",
    "export",
    "image_already_logged",
    "read_log",
    "read_logged_images",
    "find_next_unprocessed",
    "iter_images",
    "snapshot_path",
    "write_snapshot",
]
