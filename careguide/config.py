"""Global configuration constants for the project.

Defines paths, filenames and fixed document text used across the guide
generator, the exporter and the command-line program.
"""

from __future__ import annotations

from pathlib import Path

# Project directories
PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
LOG_DIR: Path = PROJECT_ROOT / "logs"

# Logging
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILENAME_GENERATE_GUIDES: str = "generate_guides.log"

# Guide types accepted by the dispatcher
GUIDE_TYPES: tuple[str, ...] = ("child", "family", "babysitter", "school", "grandparent")

# Document text
APP_DISPLAY_NAME: str = "Care Guide"
FOOTER_TIMESTAMP_FORMAT: str = "%Y-%m-%d %H:%M"
LIST_SEPARATOR: str = ", "
POISON_CONTROL_NUMBER: str = "1-800-222-1222"
POISON_CONTROL_LINE: str = f"**Poison Control:** {POISON_CONTROL_NUMBER} (24/7)"
ALLERGY_CALLOUT_PREFIX: str = "⚠️ ALLERGIES:"

# Output defaults
DEFAULT_OUTPUT_DIR: Path = PROJECT_ROOT / "output" / "guides"
DEFAULT_SNAPSHOT_PATH: Path = PROJECT_ROOT / "data" / "snapshot.json"
GUIDE_MARKDOWN_SUFFIX: str = ".md"
GUIDE_HTML_SUFFIX: str = ".html"
MARKDOWN2_EXTRAS: list[str] = ["break-on-newline"]
