"""
conceptmapper.commands.summary - Print the rows of the metrics log.
"""

from __future__ import annotations

import argparse
import json
import sys

from conceptmapper.commands import resolve_log_path
from conceptmapper.export.log import HEADER, LogRow, read_log


def format_table(rows: list[LogRow]) -> str:
    """Render rows as a fixed-width text table."""
    cells = [HEADER] + [["" if v is None else str(v) for v in row.values()] for row in rows]
    widths = [max(len(line[i]) for line in cells) for i in range(len(HEADER))]
    lines = ["  ".join(c.ljust(w) for c, w in zip(line, widths)).rstrip() for line in cells]
    lines.insert(1, "  ".join("-" * w for w in widths))
    return "\n".join(lines)


def run(args: argparse.Namespace) -> int:
    """Print every logged row, as a table or as JSON."""
    log_path = resolve_log_path(args.log, args.config_data)
    if not log_path.exists():
        print(f"Error: Log file not found: {log_path}", file=sys.stderr)
        return 1

    rows = read_log(log_path)
    if args.json:
        print(json.dumps([row.to_dict() for row in rows], indent=2))
        return 0

    if not rows:
        print(f"No images logged in {log_path}")
        return 0

    print(format_table(rows))
    if not args.quiet:
        mean_hss = sum(r.hss for r in rows) / len(rows)
        print(f"\n{len(rows)} image(s), mean HSS {mean_hss:.2f}")
    return 0
