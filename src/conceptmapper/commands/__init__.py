"""
conceptmapper.commands - CLI command implementations
"""

from pathlib import Path
from typing import Any


def resolve_log_path(log: Path | None, config: dict[str, Any]) -> Path:
    """Use the --log argument, falling back to the configured log file."""
    return Path(log) if log is not None else Path(config["export"]["log"])


__all__ = ["resolve_log_path"]
