"""
conceptmapper.cli - Command-line interface.

Main entry point for the conceptmapper CLI tool.
"""

import argparse
import locale
import sys
from pathlib import Path
from typing import List, Optional

from conceptmapper import __version__
from conceptmapper.commands import check, next_cmd, record, summary
from conceptmapper.config import load_config
from conceptmapper.errors import ConceptMapperError
from conceptmapper.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="conceptmapper",
        description="Concept-map annotation metrics for folders of diagram images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  conceptmapper next images/                    # Next image still to annotate
  conceptmapper check images/map_03.png         # Is this image already logged?
  conceptmapper record map.toml images/a.png    # Score a map file and log it
  conceptmapper summary                         # Show every logged row
  conceptmapper summary -j                      # Same, as JSON

Configuration:
  Settings are read from .conceptmapper.toml (searched upward from the
  current directory) and CONCEPTMAPPER_<SECTION>_<KEY> environment
  variables, e.g. CONCEPTMAPPER_EXPORT_LOG=results.csv

For detailed command help: conceptmapper <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"conceptmapper {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output (debug tracing, full tracebacks)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    # Shared --log option
    log_parent = argparse.ArgumentParser(add_help=False)
    log_parent.add_argument(
        "--log",
        type=Path,
        help="CSV metrics log (default: [export] log from config)",
        metavar="PATH",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # next command
    next_parser = subparsers.add_parser(
        "next",
        parents=[log_parent],
        help="Show the next image in a folder that is not logged yet",
    )
    next_parser.add_argument(
        "folder",
        type=Path,
        help="Folder of diagram images",
    )

    # check command
    check_parser = subparsers.add_parser(
        "check",
        parents=[log_parent],
        help="Check whether an image is already logged",
    )
    check_parser.add_argument(
        "image",
        type=Path,
        help="Image file (only the file name is compared)",
    )

    # summary command
    summary_parser = subparsers.add_parser(
        "summary",
        parents=[log_parent],
        help="Print the rows of the metrics log",
    )
    summary_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output rows as JSON",
    )

    # record command
    record_parser = subparsers.add_parser(
        "record",
        parents=[log_parent],
        help="Score a TOML map file and append a row for an image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Map file format:
  root = "Topic"
  edges = [["Topic", "Idea A"], ["Idea A", "Detail"], ["Topic", "Idea B"]]
  crosslinks = [["Detail", "Idea B"]]
  prior_knowledge = 2
  questions = 1
""",
    )
    record_parser.add_argument(
        "map_file",
        type=Path,
        help="TOML map file describing the concept map",
    )
    record_parser.add_argument(
        "image",
        type=Path,
        help="Image the map belongs to",
    )
    record_parser.add_argument(
        "--prior-knowledge",
        type=int,
        help="Override prior_knowledge from the map file",
        metavar="N",
    )
    record_parser.add_argument(
        "--questions",
        type=int,
        help="Override questions from the map file",
        metavar="N",
    )
    record_parser.add_argument(
        "--force",
        action="store_true",
        help="Log the image even if it already has a row",
    )

    return parser


def _use_user_collation() -> None:
    """Sort image names the way the user's locale does."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.warning(f"Keeping C collation: {e}")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        args.config_data = load_config(args.config)

        if args.verbose:
            setup_logging("DEBUG")
        elif args.quiet:
            setup_logging("ERROR")
        else:
            setup_logging(args.config_data["logging"]["level"])

        _use_user_collation()

        # Dispatch to command handlers
        if args.command == "next":
            return next_cmd.run(args)
        elif args.command == "check":
            return check.run(args)
        elif args.command == "summary":
            return summary.run(args)
        elif args.command == "record":
            return record.run(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except (ConceptMapperError, OSError, ValueError) as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
