"""
conceptmapper.commands.record - Log an image from a TOML map file.

Lets a concept map drawn elsewhere (or typed by hand) be scored and
appended to the log without the interactive canvas.
"""

from __future__ import annotations

import argparse
import sys

from conceptmapper.commands import resolve_log_path
from conceptmapper.export.log import export, image_already_logged
from conceptmapper.graph.loader import load_map


def run(args: argparse.Namespace) -> int:
    """Build the graph in args.map_file and append a row for args.image."""
    log_path = resolve_log_path(args.log, args.config_data)

    if image_already_logged(log_path, args.image.name) and not args.force:
        print(
            f"Error: {args.image.name} is already logged in {log_path} (use --force to add again)",
            file=sys.stderr,
        )
        return 1

    model, _ = load_map(args.map_file)
    model.image_path = args.image
    model.output_path = log_path
    if args.prior_knowledge is not None:
        model.prior_knowledge = args.prior_knowledge
    if args.questions is not None:
        model.questions = args.questions

    row = export(model)
    if not args.quiet:
        print(
            f"{row.image}: nodes={row.num_nodes} edges={row.num_edges} "
            f"width={row.width} depth={row.depth} HSS={row.hss} "
            f"main ideas={row.num_main_ideas} max details={row.max_num_details} "
            f"crosslinks={row.num_crosslinks} max crosslink dist={row.max_crosslink_dist}"
        )
    return 0
