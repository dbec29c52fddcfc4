"""Shared fixtures for guide generator tests.

``kit`` builds child and family CareRecords in which every field holds a
unique token (``Q001X``, ``Q002X``, ...), so a test can tell exactly which
field values made it into a guide.
"""

from datetime import date, datetime

import pytest

from careguide.pipeline.guide_generator.schema import (
    CHILD_SECTIONS,
    FAMILY_SECTIONS,
    Child,
    ChildCareRecord,
    FamilyCareRecord,
    Section,
    field_keys,
)

LIST_FIELDS = {"allergies"}


class RecordKit:
    """Factory for fully populated records with per-field tokens."""

    def __init__(self) -> None:
        self.values: dict[tuple[str, str], str] = {}
        counter = 1
        for sections in (CHILD_SECTIONS, FAMILY_SECTIONS):
            for name, fields_cls in sections.items():
                for key in field_keys(fields_cls):
                    self.values[(name, key)] = f"Q{counter:03d}X"
                    counter += 1

    def value(self, section: str, key: str) -> str:
        return self.values[(section, key)]

    def _section(self, name, fields_cls, redacted, notes, empty):
        raw = {}
        if name not in empty:
            for key in field_keys(fields_cls):
                token = self.values[(name, key)]
                raw[key] = [token] if key in LIST_FIELDS else token
        return Section(
            fields_cls(**raw),
            notes=(notes or {}).get(name),
            redacted=frozenset((redacted or {}).get(name, ())),
        )

    def child_record(self, redacted=None, notes=None, empty=(), child_id="c1", record_id="r1"):
        sections = {
            name: self._section(name, cls, redacted, notes, empty)
            for name, cls in CHILD_SECTIONS.items()
        }
        return ChildCareRecord(id=record_id, child_id=child_id, **sections)

    def family_record(self, redacted=None, notes=None, empty=()):
        sections = {
            name: self._section(name, cls, redacted, notes, empty)
            for name, cls in FAMILY_SECTIONS.items()
        }
        return FamilyCareRecord(id="f1", family_id="fam1", **sections)


@pytest.fixture
def kit() -> RecordKit:
    return RecordKit()


@pytest.fixture
def child() -> Child:
    return Child(id="c1", name="Avery", birthdate="2022-03-01")


@pytest.fixture
def generated_at() -> datetime:
    return datetime(2024, 5, 1, 9, 30)


@pytest.fixture
def today() -> date:
    return date(2024, 5, 1)
