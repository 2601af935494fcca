"""
conceptmapper.commands.next_cmd - Show the next image to annotate.
"""

from __future__ import annotations

import argparse
import sys

from conceptmapper.commands import resolve_log_path
from conceptmapper.export.image_queue import find_next_unprocessed


def run(args: argparse.Namespace) -> int:
    """Print the next unprocessed image in args.folder.

    Returns:
        0 when an image was found, 1 when every image is already logged.
    """
    log_path = resolve_log_path(args.log, args.config_data)
    if not args.folder.is_dir():
        print(f"Error: Not a directory: {args.folder}", file=sys.stderr)
        return 1

    next_image = find_next_unprocessed(
        args.folder,
        log_path,
        args.config_data["images"]["extensions"],
    )
    if next_image is None:
        if not args.quiet:
            print(f"All images in {args.folder} are logged in {log_path}")
        return 1

    print(next_image)
    return 0
