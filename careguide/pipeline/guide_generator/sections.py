"""Section rendering for care guides.

A section is rendered from an ordered list of entries. Each entry is either
a ``FieldSpec`` that goes through the field projector, or an already
rendered block (``str``) such as the allergy callout or a contact card,
which has applied the same redaction check to its own fields. ``None``
entries are skipped, so callers can pass the result of a block helper
directly.

The entry order is the reading order of the guide.
"""

from __future__ import annotations

from typing import Any, Collection, NamedTuple, Sequence, Union

from .fields import normalize_value, project_field


class FieldSpec(NamedTuple):
    """A ``(label, value, field_key)`` triple for the field projector."""

    label: str
    value: Any
    field_key: str


SectionEntry = Union[FieldSpec, str, None]


def render_entries(entries: Sequence[SectionEntry], redacted: Collection[str]) -> list[str]:
    """Render entries in order, dropping everything that projects to nothing."""
    lines: list[str] = []
    for entry in entries:
        if isinstance(entry, FieldSpec):
            line = project_field(entry.label, entry.value, entry.field_key, redacted)
        else:
            line = entry
        if line:
            lines.append(line)
    return lines


def render_section(
    title: str,
    entries: Sequence[SectionEntry],
    notes: Any,
    redacted: Collection[str],
    trailer: Sequence[str] = (),
) -> str:
    """Render a titled section, or ``""`` when there is nothing to show.

    Parameters
    ----------
    title : str
        Section title rendered as a ``##`` header.
    entries : Sequence[SectionEntry]
        Ordered field specs and pre-rendered blocks.
    notes : Any
        Free-text notes of the section. Not redactable; blank means absent.
    redacted : Collection[str]
        Hidden field keys of the section.
    trailer : Sequence[str], optional
        Fixed lines appended after the fields. They are only emitted with a
        section that has content of its own.

    Returns
    -------
    str
        The section text ending with a blank line, or the empty string.
    """
    lines = render_entries(entries, redacted)
    note_text = normalize_value(notes) if isinstance(notes, str) else None
    if not lines and note_text is None:
        return ""
    parts = [f"## {title}", "", *lines, *trailer]
    if note_text is not None:
        if lines or trailer:
            parts.append("")
        parts.append(f"*Notes:* {note_text}")
    return "\n".join(parts) + "\n\n"


def render_block(
    anchor: FieldSpec,
    details: Sequence[FieldSpec],
    redacted: Collection[str],
) -> str | None:
    """Render a multi-line card headed by an anchor field.

    The card exists only when the anchor (e.g. ``parent1_name``) is present
    and not hidden. Each detail line is checked against ``redacted`` on its
    own, so hiding a phone number keeps the rest of the card.

    Examples
    --------
    >>> render_block(
    ...     FieldSpec("Parent 1", "Sam", "parent1_name"),
    ...     [FieldSpec("Phone", "555-0100", "parent1_phone")],
    ...     set(),
    ... )
    '**Parent 1:** Sam\\n- Phone: 555-0100'
    """
    if anchor.field_key in redacted:
        return None
    heading = normalize_value(anchor.value)
    if heading is None:
        return None
    lines = [f"**{anchor.label}:** {heading}"]
    for detail in details:
        if detail.field_key in redacted:
            continue
        text = normalize_value(detail.value)
        if text is not None:
            lines.append(f"- {detail.label}: {text}")
    return "\n".join(lines)
