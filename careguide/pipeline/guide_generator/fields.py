"""Field projection: one labeled value in, one markup line (or nothing) out.

The projector is the only place where a single field value is turned into
guide text, so the redaction check lives here. It never raises: absent,
blank and malformed values all project to ``None``.
"""

from __future__ import annotations

from typing import Any, Collection

from careguide.config import LIST_SEPARATOR


def normalize_list(value: Any) -> list[str]:
    """Return the non-blank string items of a list value.

    Anything that is not a list or tuple yields an empty list, so a scalar
    stored where a list is expected is treated as absent.

    Examples
    --------
    >>> normalize_list([" peanuts ", "", 3, "eggs"])
    ['peanuts', 'eggs']
    >>> normalize_list("peanuts")
    []
    """
    if not isinstance(value, (list, tuple)):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def normalize_value(value: Any) -> str | None:
    """Coerce a raw field value to display text, or ``None`` when absent.

    Strings are stripped, lists are joined with ``LIST_SEPARATOR`` and plain
    numbers are rendered as text. Every other type is treated as absent.

    Examples
    --------
    >>> normalize_value("  7pm ")
    '7pm'
    >>> normalize_value(["milk", "bread"])
    'milk, bread'
    >>> normalize_value({"nested": "dict"}) is None
    True
    """
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (list, tuple)):
        items = normalize_list(value)
        return LIST_SEPARATOR.join(items) if items else None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def project_field(
    label: str, value: Any, field_key: str, redacted: Collection[str]
) -> str | None:
    """Project one field to a ``**label:** value`` line.

    Parameters
    ----------
    label : str
        Human-readable label.
    value : Any
        Raw value (string, list of strings, or absent).
    field_key : str
        Key of the field inside its section.
    redacted : Collection[str]
        Field keys hidden in this section (groups already expanded).

    Returns
    -------
    str | None
        The formatted line, or ``None`` when the field is redacted or empty.

    Examples
    --------
    >>> project_field("Bedtime", "7:30pm", "bedtime", set())
    '**Bedtime:** 7:30pm'
    >>> project_field("Bedtime", "7:30pm", "bedtime", {"bedtime"}) is None
    True
    """
    if field_key in redacted:
        return None
    text = normalize_value(value)
    if text is None:
        return None
    return f"**{label}:** {text}"
