"""Guide exporter package.

Converts generated guide text to HTML, writes it to disk and previews it
in the terminal. Consumers import from this package rather than from the
``renderer`` submodule.
"""

from .renderer import guide_title, guide_to_html, preview_guide, write_guide_output

__all__ = [
    "guide_title",
    "guide_to_html",
    "preview_guide",
    "write_guide_output",
]
