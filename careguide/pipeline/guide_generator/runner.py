"""Guide generator runner module.

Programmatic entrypoints and logging configuration for generating a guide
from a snapshot file. This is the boundary between the command-line program
and the pure generator: it performs the file I/O (reading the snapshot,
writing markdown or HTML) and reports failures as a boolean, while all
document logic stays in the dispatcher, builders and composers.

Examples
--------
>>> from pathlib import Path
>>> from careguide.pipeline.guide_generator.runner import configure_logging, run_from_config
>>> configure_logging(log_level="INFO", enable_file=False)
>>> ok = run_from_config(snapshot_path=Path("data/snapshot.json"), guide_type="family")
>>> assert isinstance(ok, bool)
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path

from careguide.config import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_SNAPSHOT_PATH,
    GUIDE_HTML_SUFFIX,
    GUIDE_MARKDOWN_SUFFIX,
    LOG_DIR,
    LOG_FILENAME_GENERATE_GUIDES,
    LOG_FORMAT,
)
from careguide.exceptions import AppError
from careguide.pipeline.guide_exporter.renderer import guide_to_html, write_guide_output

from .data_loader import GuideSnapshot, load_snapshot
from .dispatcher import generate

logger = logging.getLogger(__name__)


def configure_logging(log_level: str = "INFO", enable_file: bool = True) -> None:
    """Configure stream and optional file logging for guide generation.

    Parameters
    ----------
    log_level : str, optional
        Logging level name. Defaults to ``"INFO"``.
    enable_file : bool, optional
        Also log to ``LOG_DIR / LOG_FILENAME_GENERATE_GUIDES``.

    Notes
    -----
    Existing root handlers are removed first, so repeated calls do not
    duplicate output. A log directory that cannot be created leaves only
    the console handler.
    """
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    file_error: OSError | None = None
    if enable_file:
        try:
            LOG_DIR.mkdir(exist_ok=True)
            handlers.insert(
                0, logging.FileHandler(LOG_DIR / LOG_FILENAME_GENERATE_GUIDES, mode="a")
            )
        except OSError as exc:
            file_error = exc
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )
    if file_error is not None:
        logger.warning("File logging disabled: %s", file_error)


def generate_from_snapshot(
    snapshot: GuideSnapshot,
    guide_type: str,
    child_id: str | None = None,
    *,
    generated_at: datetime | None = None,
    today: date | None = None,
) -> str:
    """Pick the entities ``guide_type`` needs out of ``snapshot`` and generate.

    For a child guide, ``child_id`` selects the child; it may be omitted
    when the snapshot holds a single child. Entities that cannot be found
    are passed as ``None`` so the dispatcher reports them as missing.
    """
    if guide_type == "child":
        child = snapshot.find_child(child_id)
        record = snapshot.find_child_record(child.id if child else child_id)
        return generate(
            "child", child=child, child_record=record, generated_at=generated_at, today=today
        )
    if guide_type == "family":
        return generate("family", family_record=snapshot.family_record, generated_at=generated_at)
    return generate(
        guide_type,
        children=list(snapshot.children),
        child_records=list(snapshot.child_records),
        family_record=snapshot.family_record,
        generated_at=generated_at,
        today=today,
    )


def default_output_path(guide_type: str, child_id: str | None = None, html: bool = False) -> Path:
    stem = f"{guide_type}_{child_id}" if child_id else guide_type
    suffix = GUIDE_HTML_SUFFIX if html else GUIDE_MARKDOWN_SUFFIX
    return DEFAULT_OUTPUT_DIR / f"{stem}{suffix}"


def run_from_config(
    snapshot_path: Path | None = None,
    guide_type: str = "babysitter",
    child_id: str | None = None,
    output_path: Path | None = None,
    html: bool = False,
) -> bool:
    """Generate one guide from a snapshot file and write it to disk.

    Returns
    -------
    bool
        True when the guide was written, False when loading, generation or
        writing failed (the error is logged).
    """
    snapshot_path = Path(snapshot_path) if snapshot_path is not None else DEFAULT_SNAPSHOT_PATH
    output_path = (
        Path(output_path) if output_path is not None else default_output_path(guide_type, child_id, html)
    )
    try:
        snapshot = load_snapshot(snapshot_path)
        text = generate_from_snapshot(snapshot, guide_type, child_id)
        if html:
            text = guide_to_html(text)
        write_guide_output(text, output_path)
    except AppError as exc:
        logger.error("Could not generate %s guide: %s", guide_type, exc, extra={"error": exc.to_dict()})
        return False
    except OSError as exc:
        logger.error("Could not generate %s guide: %s", guide_type, exc)
        return False
    logger.info("Wrote %s guide to %s", guide_type, output_path)
    return True


__all__ = [
    "configure_logging",
    "default_output_path",
    "generate_from_snapshot",
    "run_from_config",
]
