"""Audience guide composition (babysitter, school, grandparent packs).

One composer serves every audience. What an audience gets to see is data:
an ``AudiencePolicy`` lists, in reading order, the child fields shown per
child and the family fields shown in the shared block at the end. Besides
plain field references a policy may name three special entries: the
allergy callout, the combined Wi-Fi credentials line and the poison
control line.

The school and grandparent packs currently use the same policy content as
the babysitter pack and therefore produce byte-identical documents.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Sequence, Union

from careguide.config import POISON_CONTROL_LINE
from careguide.exceptions import ConfigurationError

from .builders import allergy_callout, document_footer, require_record_id
from .fields import normalize_value, project_field
from .schema import (
    CHILD_SECTIONS,
    FAMILY_SECTIONS,
    Child,
    ChildCareRecord,
    FamilyCareRecord,
    HomeBaseFields,
    Section,
    field_keys,
)
from .sections import render_section

logger = logging.getLogger(__name__)

ALLERGY_CALLOUT = "allergy_callout"
WIFI_CREDENTIALS = "wifi_credentials"
POISON_CONTROL = "poison_control"


@dataclass(frozen=True)
class PolicyField:
    """Reference to one field of a record section, with its display label."""

    section: str
    field_key: str
    label: str


PolicyEntry = Union[PolicyField, str]


def _check_entries(entries: Sequence[PolicyEntry], sections: dict[str, type], allowed: set[str]) -> None:
    for entry in entries:
        if isinstance(entry, PolicyField):
            fields_cls = sections.get(entry.section)
            if fields_cls is None or entry.field_key not in field_keys(fields_cls):
                raise ConfigurationError(
                    f"Policy field {entry.section}.{entry.field_key} does not exist",
                    context={"section": entry.section, "field_key": entry.field_key},
                )
        elif entry not in allowed:
            raise ConfigurationError(f"Unsupported policy entry: {entry!r}")


@dataclass(frozen=True)
class AudiencePolicy:
    """Field subset and order of one audience pack.

    Attributes
    ----------
    audience : str
        Guide type served by the policy.
    title : str
        Document title.
    child_entries : tuple[PolicyEntry, ...]
        Per-child entries; fields refer to child record sections.
    family_title : str
        Title of the shared block.
    family_entries : tuple[PolicyEntry, ...]
        Shared-block entries; fields refer to family record sections.
    """

    audience: str
    title: str
    child_entries: tuple[PolicyEntry, ...]
    family_title: str
    family_entries: tuple[PolicyEntry, ...]

    def __post_init__(self) -> None:
        _check_entries(self.child_entries, CHILD_SECTIONS, {ALLERGY_CALLOUT})
        _check_entries(self.family_entries, FAMILY_SECTIONS, {WIFI_CREDENTIALS, POISON_CONTROL})


BABYSITTER_POLICY = AudiencePolicy(
    audience="babysitter",
    title="Babysitter Guide",
    child_entries=(
        PolicyField("routines", "bedtime", "Bedtime"),
        PolicyField("routines", "meals", "Meals"),
        ALLERGY_CALLOUT,
        PolicyField("comfort", "calming_tips", "How to Calm"),
        PolicyField("safety", "donts", "Safety Rules"),
    ),
    family_title="Home & Emergency Info",
    family_entries=(
        WIFI_CREDENTIALS,
        PolicyField("emergency", "emergency_plan", "Emergency Plan"),
        POISON_CONTROL,
    ),
)
SCHOOL_POLICY = replace(BABYSITTER_POLICY, audience="school")
GRANDPARENT_POLICY = replace(BABYSITTER_POLICY, audience="grandparent")

AUDIENCE_POLICIES: dict[str, AudiencePolicy] = {
    policy.audience: policy
    for policy in (BABYSITTER_POLICY, SCHOOL_POLICY, GRANDPARENT_POLICY)
}


def wifi_credentials_line(home_base: Section[HomeBaseFields]) -> str | None:
    """Combined ``network / password`` line.

    Suppressed as a whole when either credential is hidden: half of a
    credential pair is of no use and still discloses the other half. An
    open network (no password) shows the network name alone.
    """
    hidden = home_base.hidden
    if "wifi_network" in hidden or "wifi_password" in hidden:
        return None
    network = normalize_value(home_base.get("wifi_network"))
    if network is None:
        return None
    password = normalize_value(home_base.get("wifi_password"))
    value = f"{network} / {password}" if password else network
    return f"**Wi-Fi:** {value}"


def _resolve(entry: PolicyEntry, record: ChildCareRecord | FamilyCareRecord) -> str | None:
    if isinstance(entry, PolicyField):
        section = getattr(record, entry.section)
        return project_field(entry.label, section.get(entry.field_key), entry.field_key, section.hidden)
    if entry == ALLERGY_CALLOUT:
        return allergy_callout(record.health, with_reaction=False)
    if entry == WIFI_CREDENTIALS:
        return wifi_credentials_line(record.home_base)
    return POISON_CONTROL_LINE


def compose_audience_guide(
    policy: AudiencePolicy,
    children: Sequence[Child],
    child_records: Sequence[ChildCareRecord],
    family_record: FamilyCareRecord,
    *,
    generated_at: datetime | None = None,
) -> str:
    """Compose one pack covering several children and the family.

    Parameters
    ----------
    policy : AudiencePolicy
        Which fields to show, in which order.
    children : Sequence[Child]
        Children in output order.
    child_records : Sequence[ChildCareRecord]
        CareRecords matched to children by ``child_id``. Children without a
        record are skipped.
    family_record : FamilyCareRecord
        The family CareRecord feeding the shared block.
    generated_at : datetime | None, optional
        Footer timestamp; defaults to now.

    Returns
    -------
    str
        The composed document.

    Raises
    ------
    MissingInputError
        If the family record or one of the child records has no ``id``.
    """
    require_record_id(family_record, "family_record")
    records_by_child: dict[str, ChildCareRecord] = {}
    for index, record in enumerate(child_records):
        require_record_id(record, f"child_records[{index}]")
        if record.child_id:
            records_by_child.setdefault(record.child_id, record)

    parts = [f"# {policy.title}\n\n"]
    for child in children:
        record = records_by_child.get(child.id) if child.id else None
        if record is None:
            logger.debug("No care record for child %s, skipping", child.id)
            continue
        lines = [_resolve(entry, record) for entry in policy.child_entries]
        name = normalize_value(child.name) or "Child"
        parts.append(render_section(name, lines, None, ()))

    shared = [_resolve(entry, family_record) for entry in policy.family_entries]
    parts.append(render_section(policy.family_title, shared, None, ()))
    parts.append(document_footer(generated_at))
    return "".join(parts)
