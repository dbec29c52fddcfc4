"""Program 1: Care guide generation from a record snapshot.

Reads a JSON snapshot of children, child CareRecords and the family
CareRecord, generates one guide and writes it as markdown or HTML. With
``--preview`` the guide is printed to the terminal instead.

Usage
-----
python -m careguide.program1_generate_guides --snapshot data/snapshot.json --guide-type babysitter [--child-id ID] [--output PATH] [--html] [--preview] [--log-level LEVEL]

Notes
-----
All configuration defaults come from ``careguide.config``. Setting
``DISABLE_FILE_LOGS`` keeps logging on the console only.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from careguide.config import DEFAULT_SNAPSHOT_PATH, GUIDE_TYPES
from careguide.exceptions import AppError
from careguide.pipeline.guide_exporter import preview_guide
from careguide.pipeline.guide_generator import load_snapshot
from careguide.pipeline.guide_generator.runner import (
    configure_logging,
    generate_from_snapshot,
    run_from_config,
)

logger = logging.getLogger(__name__)


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Arguments to parse; ``None`` uses ``sys.argv``.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Generate a care guide from a record snapshot."
    )
    parser.add_argument(
        "--snapshot",
        type=Path,
        default=DEFAULT_SNAPSHOT_PATH,
        help="Path to the JSON snapshot file.",
    )
    parser.add_argument(
        "--guide-type",
        choices=GUIDE_TYPES,
        default="babysitter",
        help="Kind of guide to generate.",
    )
    parser.add_argument(
        "--child-id",
        default=None,
        help="Child to generate a child guide for.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output file (defaults to the output/guides directory).",
    )
    parser.add_argument("--html", action="store_true", help="Write HTML instead of markdown.")
    parser.add_argument(
        "--preview", action="store_true", help="Print the guide to the terminal instead of writing it."
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=os.environ.get("LOG_LEVEL", "INFO"),
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )
    return parser.parse_args(argv)


def run_preview(snapshot_path: Path, guide_type: str, child_id: str | None) -> bool:
    """Generate a guide and print it with rich formatting."""
    try:
        text = generate_from_snapshot(load_snapshot(snapshot_path), guide_type, child_id)
    except (AppError, OSError) as exc:
        logger.error("Could not generate %s guide: %s", guide_type, exc)
        return False
    preview_guide(text)
    return True


def main(argv: list[str] | None = None) -> int:
    """Run guide generation from CLI arguments.

    Returns
    -------
    int
        Process exit code: 0 on success, 1 on failure.
    """
    args = parse_arguments(argv)
    disable_file = bool(
        os.environ.get("DISABLE_FILE_LOGS") or os.environ.get("PYTEST_CURRENT_TEST")
    )
    configure_logging(args.log_level, enable_file=not disable_file)
    logger.info(
        "Generating %s guide from %s", args.guide_type, args.snapshot
    )
    if args.preview:
        ok = run_preview(args.snapshot, args.guide_type, args.child_id)
    else:
        ok = run_from_config(
            snapshot_path=args.snapshot,
            guide_type=args.guide_type,
            child_id=args.child_id,
            output_path=args.output,
            html=args.html,
        )
    return 0 if ok else 1


def flush_and_close_log_handlers() -> None:
    """Flush and close all root logging handlers."""
    for handler in logging.root.handlers:
        handler.flush()
        handler.close()


if __name__ == "__main__":  # pragma: no cover - CLI entry
    exit_code = main()
    flush_and_close_log_handlers()
    sys.exit(exit_code)
