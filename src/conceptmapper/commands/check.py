"""
conceptmapper.commands.check - Report whether an image is already logged.
"""

from __future__ import annotations

import argparse

from conceptmapper.commands import resolve_log_path
from conceptmapper.export.log import image_already_logged


def run(args: argparse.Namespace) -> int:
    """Check args.image against the log.

    Returns:
        0 if the image still needs annotating, 1 if it is already logged.
    """
    log_path = resolve_log_path(args.log, args.config_data)
    name = args.image.name

    if image_already_logged(log_path, name):
        if not args.quiet:
            print(f"{name}: already logged in {log_path}")
        return 1

    if not args.quiet:
        print(f"{name}: not logged")
    return 0
