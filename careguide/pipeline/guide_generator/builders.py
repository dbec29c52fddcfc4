"""Entity guide builders: the full child guide and the full family guide.

Each builder walks the sections of one CareRecord in a fixed order and
hands every section to ``render_section``. Sections without shareable
content disappear entirely. Composite blocks (contact cards, the address,
the school and hospital cards) check every one of their fields against the
section's hidden set before emitting it.

Both builders end with the shared document footer. Missing sections and
fields are treated as absent; a record without an ``id`` is a caller error
and raises ``MissingInputError``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from careguide.config import (
    ALLERGY_CALLOUT_PREFIX,
    APP_DISPLAY_NAME,
    FOOTER_TIMESTAMP_FORMAT,
    LIST_SEPARATOR,
    POISON_CONTROL_LINE,
)
from careguide.exceptions import MissingInputError

from .age import format_age
from .fields import normalize_list, normalize_value, project_field
from .schema import (
    Child,
    ChildCareRecord,
    ComfortFields,
    ContactsFields,
    EmergencyFields,
    FamilyCareRecord,
    HealthFields,
    HomeBaseFields,
    HouseRulesFields,
    RoutinesFields,
    SafetyFields,
    ScheduleFields,
    Section,
)
from .sections import FieldSpec, SectionEntry, render_block, render_section

# (label, field_key) in reading order
ROUTINES_LAYOUT = (
    ("Wake Time", "wake_time"),
    ("Nap Schedule", "naps"),
    ("Meal Times", "meals"),
    ("Bedtime", "bedtime"),
    ("Bedtime Routine", "bedtime_routine"),
    ("Screen Time Rules", "screen_time"),
    ("Potty/Diaper", "potty"),
)
HEALTH_LAYOUT = (
    ("Daily Medications", "medications"),
    ("As-Needed Medications", "as_needed_meds"),
    ("Medical Conditions", "conditions"),
)
COMFORT_LAYOUT = (
    ("How to Calm Them", "calming_tips"),
    ("Comfort Items", "comfort_items"),
    ("Favorites", "favorites"),
    ("Dislikes/Triggers", "dislikes"),
    ("Behavioral Notes", "behavior"),
)
SAFETY_LAYOUT = (
    ("✅ Things They CAN Do", "dos"),
    ("❌ Things They CANNOT Do", "donts"),
    ("⚠️ Safety Warnings", "warnings"),
    ("Car Seat Info", "car_seat"),
)
HOUSE_RULES_LAYOUT = (
    ("Screen Time", "screen_rules"),
    ("Food & Snacks", "food_rules"),
    ("Pets", "pet_rules"),
    ("Visitors", "visitor_rules"),
    ("Off-Limits Areas", "off_limits"),
)


def field_specs(section: Section[Any], layout: tuple[tuple[str, str], ...]) -> list[FieldSpec]:
    """Pair each ``(label, key)`` of a layout with the section's value."""
    return [FieldSpec(label, section.get(key), key) for label, key in layout]


def require_record_id(record: Any, argument: str) -> None:
    """Raise ``MissingInputError`` unless ``record`` carries an ``id``."""
    if record is None:
        raise MissingInputError(argument)
    if not getattr(record, "id", None):
        raise MissingInputError(f"{argument}.id")


def document_footer(generated_at: datetime | None = None) -> str:
    stamp = (generated_at or datetime.now()).strftime(FOOTER_TIMESTAMP_FORMAT)
    return f"---\n\n*Generated by {APP_DISPLAY_NAME} on {stamp}*\n"


def allergy_callout(health: Section[HealthFields], *, with_reaction: bool = True) -> str | None:
    """Highlighted allergy warning, optionally followed by the reaction plan.

    ``allergies`` must be a list; any other shape counts as no allergies.
    The reaction plan is only shown under a visible allergy list.
    """
    hidden = health.hidden
    if "allergies" in hidden:
        return None
    allergies = normalize_list(health.get("allergies"))
    if not allergies:
        return None
    lines = [f"**{ALLERGY_CALLOUT_PREFIX} {LIST_SEPARATOR.join(allergies)}**"]
    if with_reaction:
        reaction = project_field("If Exposed", health.get("allergy_reaction"), "allergy_reaction", hidden)
        if reaction:
            lines.append(reaction)
    return "\n".join(lines)


def address_block(home_base: Section[HomeBaseFields]) -> str | None:
    """Assemble the address from its visible parts.

    Hidden parts are left out one by one. ``formatted_address`` is only
    used when the record has no structured address at all, since it
    usually repeats the street.
    """
    hidden = home_base.hidden

    def part(key: str) -> str | None:
        return None if key in hidden else normalize_value(home_base.get(key))

    structured = ("street_address", "city", "state", "zip_code")
    region = " ".join(p for p in (part("state"), part("zip_code")) if p)
    locality = ", ".join(p for p in (part("city"), region) if p)
    address = ", ".join(p for p in (part("street_address"), locality) if p)
    if not address and not any(normalize_value(home_base.get(key)) for key in structured):
        address = part("formatted_address") or ""
    return f"**Address:** {address}" if address else None


def _routines(section: Section[RoutinesFields]) -> str:
    return render_section(
        "Daily Routines", field_specs(section, ROUTINES_LAYOUT), section.notes, section.hidden
    )


def _health(section: Section[HealthFields]) -> str:
    entries: list[SectionEntry] = [allergy_callout(section)]
    entries.extend(field_specs(section, HEALTH_LAYOUT))
    return render_section("Health Information", entries, section.notes, section.hidden)


def _comfort(section: Section[ComfortFields]) -> str:
    return render_section(
        "Comfort & Behavior", field_specs(section, COMFORT_LAYOUT), section.notes, section.hidden
    )


def _safety(section: Section[SafetyFields]) -> str:
    return render_section(
        "Safety Rules", field_specs(section, SAFETY_LAYOUT), section.notes, section.hidden
    )


def _contacts(section: Section[ContactsFields]) -> str:
    hidden = section.hidden
    get = section.get
    entries: list[SectionEntry] = []
    for number in ("1", "2"):
        prefix = f"parent{number}"
        entries.append(
            render_block(
                FieldSpec(f"Parent {number}", get(f"{prefix}_name"), f"{prefix}_name"),
                [
                    FieldSpec("Phone", get(f"{prefix}_phone"), f"{prefix}_phone"),
                    FieldSpec("Email", get(f"{prefix}_email"), f"{prefix}_email"),
                ],
                hidden,
            )
        )
    entries.append(
        render_block(
            FieldSpec("Pediatrician", get("doctor_name"), "doctor_name"),
            [
                FieldSpec("Phone", get("doctor_phone"), "doctor_phone"),
                FieldSpec("Clinic", get("doctor_clinic"), "doctor_clinic"),
            ],
            hidden,
        )
    )
    entries.append(FieldSpec("Other Emergency Contacts", get("emergency_contacts"), "emergency_contacts"))
    entries.append(FieldSpec("Authorized Pickup", get("authorized_pickup"), "authorized_pickup"))
    return render_section("Emergency Contacts", entries, section.notes, hidden)


def build_child_guide(
    child: Child,
    record: ChildCareRecord,
    *,
    generated_at: datetime | None = None,
    today: date | None = None,
) -> str:
    """Build the complete guide for one child.

    Parameters
    ----------
    child : Child
        The child the record belongs to; supplies name and birthdate.
    record : ChildCareRecord
        The child's CareRecord snapshot.
    generated_at : datetime | None, optional
        Timestamp printed in the footer; defaults to now.
    today : date | None, optional
        Reference day for the age line; defaults to the current date.

    Returns
    -------
    str
        The guide in the lightweight markup dialect.

    Raises
    ------
    MissingInputError
        If ``record`` has no ``id``.
    """
    require_record_id(record, "child_record")
    name = normalize_value(child.name) or "Your Child"
    parts = [f"# Care Guide for {name}\n\n"]
    age = format_age(child.birthdate, today)
    if age:
        parts.append(f"**Age:** {age}\n\n")
    parts.append(_routines(record.routines))
    parts.append(_health(record.health))
    parts.append(_comfort(record.comfort))
    parts.append(_safety(record.safety))
    parts.append(_contacts(record.contacts))
    parts.append(document_footer(generated_at))
    return "".join(parts)


def _home_base(section: Section[HomeBaseFields]) -> str:
    get = section.get
    entries: list[SectionEntry] = [
        address_block(section),
        FieldSpec("Wi-Fi Network", get("wifi_network"), "wifi_network"),
        FieldSpec("Wi-Fi Password", get("wifi_password"), "wifi_password"),
        FieldSpec("Door Codes & Keys", get("access"), "access"),
        FieldSpec("Parking", get("parking"), "parking"),
    ]
    return render_section("Home Information", entries, section.notes, section.hidden)


def _house_rules(section: Section[HouseRulesFields]) -> str:
    return render_section(
        "House Rules", field_specs(section, HOUSE_RULES_LAYOUT), section.notes, section.hidden
    )


def _schedule(section: Section[ScheduleFields]) -> str:
    hidden = section.hidden
    get = section.get
    entries: list[SectionEntry] = [
        render_block(
            FieldSpec("School/Daycare", get("school_name"), "school_name"),
            [
                FieldSpec("Address", get("school_address"), "school_address"),
                FieldSpec("Drop-off", get("school_dropoff"), "school_dropoff"),
                FieldSpec("Pickup", get("school_pickup"), "school_pickup"),
            ],
            hidden,
        ),
        FieldSpec("Weekly Activities", get("activities"), "activities"),
        FieldSpec("Transportation", get("transportation"), "transportation"),
        FieldSpec("Homework Rules", get("homework"), "homework"),
    ]
    return render_section("Schedule", entries, section.notes, hidden)


def _emergency(section: Section[EmergencyFields]) -> str:
    hidden = section.hidden
    get = section.get
    entries: list[SectionEntry] = [
        FieldSpec("Emergency Plan", get("emergency_plan"), "emergency_plan"),
        render_block(
            FieldSpec("Nearest Hospital", get("hospital_name"), "hospital_name"),
            [
                FieldSpec("Address", get("hospital_address"), "hospital_address"),
                FieldSpec("Distance", get("hospital_distance"), "hospital_distance"),
            ],
            hidden,
        ),
        FieldSpec("Urgent Care", get("urgent_care"), "urgent_care"),
        render_block(
            FieldSpec("Insurance", get("insurance_provider"), "insurance_provider"),
            [
                FieldSpec("Policy #", get("insurance_policy"), "insurance_policy"),
                FieldSpec("Group #", get("insurance_group"), "insurance_group"),
            ],
            hidden,
        ),
    ]
    return render_section(
        "Emergency Information", entries, section.notes, hidden, trailer=(POISON_CONTROL_LINE,)
    )


def build_family_guide(
    record: FamilyCareRecord, *, generated_at: datetime | None = None
) -> str:
    """Build the family-wide guide: home, house rules, schedule, emergency.

    Raises
    ------
    MissingInputError
        If ``record`` has no ``id``.
    """
    require_record_id(record, "family_record")
    parts = ["# Family Care Guide\n\n"]
    parts.append(_home_base(record.home_base))
    parts.append(_house_rules(record.house_rules))
    parts.append(_schedule(record.schedule))
    parts.append(_emergency(record.emergency))
    parts.append(document_footer(generated_at))
    return "".join(parts)
