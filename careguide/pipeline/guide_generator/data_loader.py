"""Snapshot loading for the guide generator.

Converts the plain structured data handed over by the persistence layer
into typed records. A CareRecord row stores each section as four columns:
``<section>`` (a mapping of field values), ``<section>_notes``,
``<section>_redacted_fields`` and ``<section>_updated_at``.

Value problems are coerced: a section that is not a mapping is treated as
empty and unknown field keys are dropped. A malformed or unknown redaction
key is not coerced, because guessing there could expose a field the owner
meant to hide; it raises ``DataValidationError``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from careguide.exceptions import DataValidationError

from .schema import (
    CHILD_SECTIONS,
    FAMILY_SECTIONS,
    Child,
    ChildCareRecord,
    FamilyCareRecord,
    Section,
    field_keys,
)

logger = logging.getLogger(__name__)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp (a trailing ``Z`` is accepted).

    Examples
    --------
    >>> parse_timestamp("2024-05-01T10:00:00Z").year
    2024
    >>> parse_timestamp("yesterday") is None
    True
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _redaction_keys(value: Any, column: str) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, (list, tuple, set, frozenset)):
        raise DataValidationError(
            f"{column} must be a list of field keys", context={"column": column}
        )
    if not all(isinstance(key, str) for key in value):
        raise DataValidationError(
            f"{column} must only contain strings", context={"column": column}
        )
    return frozenset(value)


def section_from_row(row: Mapping[str, Any], name: str, fields_cls: type) -> Section[Any]:
    """Build the typed ``Section`` called ``name`` from a record row."""
    raw = row.get(name)
    if raw is None:
        raw = {}
    elif not isinstance(raw, Mapping):
        logger.debug("Section %s is not a mapping, treating it as empty", name)
        raw = {}
    known = field_keys(fields_cls)
    dropped = sorted(str(key) for key in raw if key not in known)
    if dropped:
        logger.debug("Dropping unknown %s fields: %s", name, ", ".join(dropped))
    notes = row.get(f"{name}_notes")
    return Section(
        fields_cls(**{key: value for key, value in raw.items() if key in known}),
        notes=notes if isinstance(notes, str) else None,
        redacted=_redaction_keys(row.get(f"{name}_redacted_fields"), f"{name}_redacted_fields"),
        updated_at=parse_timestamp(row.get(f"{name}_updated_at")),
    )


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise DataValidationError(f"{what} must be an object", context={"type": type(value).__name__})
    return value


def child_from_mapping(row: Mapping[str, Any]) -> Child:
    row = _require_mapping(row, "child")
    name = row.get("name")
    return Child(
        id=row.get("id"),
        name=name if isinstance(name, str) else "",
        birthdate=row.get("birthdate"),
        gender=row.get("gender"),
    )


def child_record_from_mapping(row: Mapping[str, Any]) -> ChildCareRecord:
    row = _require_mapping(row, "child care record")
    sections = {name: section_from_row(row, name, cls) for name, cls in CHILD_SECTIONS.items()}
    return ChildCareRecord(id=row.get("id"), child_id=row.get("child_id"), **sections)


def family_record_from_mapping(row: Mapping[str, Any]) -> FamilyCareRecord:
    row = _require_mapping(row, "family care record")
    sections = {name: section_from_row(row, name, cls) for name, cls in FAMILY_SECTIONS.items()}
    return FamilyCareRecord(id=row.get("id"), family_id=row.get("family_id"), **sections)


@dataclass(frozen=True)
class GuideSnapshot:
    """A consistent read of every entity a guide may need."""

    children: tuple[Child, ...] = ()
    child_records: tuple[ChildCareRecord, ...] = ()
    family_record: FamilyCareRecord | None = None

    def find_child(self, child_id: str | None) -> Child | None:
        """Return the child with ``child_id``; the only child when ``None``."""
        if child_id is None:
            return self.children[0] if len(self.children) == 1 else None
        return next((child for child in self.children if child.id == child_id), None)

    def find_child_record(self, child_id: str | None) -> ChildCareRecord | None:
        if child_id is None:
            return None
        return next((r for r in self.child_records if r.child_id == child_id), None)


def _list_of(data: Mapping[str, Any], key: str) -> list[Any]:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise DataValidationError(f"'{key}' must be a list", context={"key": key})
    return value


def snapshot_from_mapping(data: Any) -> GuideSnapshot:
    """Build a ``GuideSnapshot`` from decoded JSON.

    Raises
    ------
    DataValidationError
        If the top-level structure is not as expected or a redaction set is
        invalid.
    """
    data = _require_mapping(data, "snapshot")
    family_raw = data.get("family_record")
    return GuideSnapshot(
        children=tuple(child_from_mapping(row) for row in _list_of(data, "children")),
        child_records=tuple(
            child_record_from_mapping(row) for row in _list_of(data, "child_records")
        ),
        family_record=family_record_from_mapping(family_raw) if family_raw is not None else None,
    )


def load_snapshot(path: Path) -> GuideSnapshot:
    """Read a JSON snapshot file.

    Raises
    ------
    FileNotFoundError
        If the file is missing.
    DataValidationError
        If the file is not UTF-8 encoded JSON or fails structural validation.
    """
    with path.open("r", encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise DataValidationError(
                f"Snapshot {path} is not valid UTF-8 JSON: {exc}", context={"path": str(path)}
            ) from exc
    return snapshot_from_mapping(data)
