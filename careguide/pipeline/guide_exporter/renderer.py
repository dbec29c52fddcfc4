"""Export helpers for generated guides.

The generator returns plain text in a lightweight markup dialect. This
module turns that text into the forms a caller hands to a person: a
standalone HTML page (via ``markdown2``), a file on disk, or a formatted
terminal preview (via ``rich``).
"""

from __future__ import annotations

import html
from pathlib import Path
from typing import cast

import markdown2
from rich.console import Console
from rich.markdown import Markdown

from careguide.config import APP_DISPLAY_NAME, MARKDOWN2_EXTRAS

HTML_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
{body}
</body>
</html>
"""


def guide_title(text: str) -> str:
    """Return the ``# Title`` of a guide, or the application name."""
    for line in text.splitlines():
        if line.startswith("# "):
            return line[2:].strip()
    return APP_DISPLAY_NAME


def guide_to_html(text: str) -> str:
    """Convert guide markup to a standalone HTML page.

    Examples
    --------
    >>> page = guide_to_html("# Babysitter Guide\\n\\n**Bedtime:** 7pm\\n")
    >>> "<strong>Bedtime:</strong> 7pm" in page
    True
    """
    body = cast(str, markdown2.markdown(text, extras=MARKDOWN2_EXTRAS, safe_mode="escape"))
    return HTML_PAGE.format(title=html.escape(guide_title(text)), body=body.strip())


def write_guide_output(content: str, output_file: Path) -> None:
    """Write ``content`` to ``output_file``, creating parent directories.

    Raises
    ------
    OSError
        If the directory or file cannot be written.
    """
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(content, encoding="utf-8")


def preview_guide(text: str, console: Console | None = None) -> None:
    """Print a guide to the terminal with rich markdown formatting."""
    (console or Console()).print(Markdown(text))
