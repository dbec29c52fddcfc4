"""Typed CareRecord schemas for the guide generator.

Each section kind of a child or family CareRecord is a frozen dataclass
with one optional attribute per field, so the set of field keys a section
can carry is enumerable. A section may also declare *group keys*: single
redaction switches that cover a block of related fields (the Wi-Fi
credentials, an insurance card, a parent's contact details).

``Section`` wraps one of these field records together with its notes, its
redaction set and its display timestamp. Redaction keys are validated when
the section is built: a key that names neither a field nor a group of that
section raises ``DataValidationError`` instead of silently redacting
nothing.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, ClassVar, Generic, Mapping, TypeVar

from careguide.exceptions import DataValidationError

# Raw values are kept as handed over by the persistence layer and coerced
# by the field projector, so malformed data degrades instead of failing.
FieldValue = Any


# -- child sections --------------------------------------------------------


@dataclass(frozen=True)
class RoutinesFields:
    """Daily rhythm of a child."""

    wake_time: FieldValue = None
    naps: FieldValue = None
    meals: FieldValue = None
    bedtime: FieldValue = None
    bedtime_routine: FieldValue = None
    screen_time: FieldValue = None
    potty: FieldValue = None

    GROUPS: ClassVar[Mapping[str, tuple[str, ...]]] = {}


@dataclass(frozen=True)
class HealthFields:
    """Allergies, medication and conditions. ``allergies`` is a list."""

    allergies: FieldValue = None
    allergy_reaction: FieldValue = None
    medications: FieldValue = None
    as_needed_meds: FieldValue = None
    conditions: FieldValue = None

    GROUPS: ClassVar[Mapping[str, tuple[str, ...]]] = {}


@dataclass(frozen=True)
class ComfortFields:
    calming_tips: FieldValue = None
    comfort_items: FieldValue = None
    favorites: FieldValue = None
    dislikes: FieldValue = None
    behavior: FieldValue = None

    GROUPS: ClassVar[Mapping[str, tuple[str, ...]]] = {}


@dataclass(frozen=True)
class SafetyFields:
    dos: FieldValue = None
    donts: FieldValue = None
    warnings: FieldValue = None
    car_seat: FieldValue = None

    GROUPS: ClassVar[Mapping[str, tuple[str, ...]]] = {}


@dataclass(frozen=True)
class ContactsFields:
    """Parents, pediatrician and other people allowed to act for the child."""

    parent1_name: FieldValue = None
    parent1_phone: FieldValue = None
    parent1_email: FieldValue = None
    parent2_name: FieldValue = None
    parent2_phone: FieldValue = None
    parent2_email: FieldValue = None
    doctor_name: FieldValue = None
    doctor_phone: FieldValue = None
    doctor_clinic: FieldValue = None
    emergency_contacts: FieldValue = None
    authorized_pickup: FieldValue = None

    GROUPS: ClassVar[Mapping[str, tuple[str, ...]]] = {
        "parent1": ("parent1_name", "parent1_phone", "parent1_email"),
        "parent2": ("parent2_name", "parent2_phone", "parent2_email"),
        "doctor": ("doctor_name", "doctor_phone", "doctor_clinic"),
    }


# -- family sections -------------------------------------------------------


@dataclass(frozen=True)
class HomeBaseFields:
    formatted_address: FieldValue = None
    street_address: FieldValue = None
    city: FieldValue = None
    state: FieldValue = None
    zip_code: FieldValue = None
    wifi_network: FieldValue = None
    wifi_password: FieldValue = None
    access: FieldValue = None
    parking: FieldValue = None

    GROUPS: ClassVar[Mapping[str, tuple[str, ...]]] = {
        "address": ("formatted_address", "street_address", "city", "state", "zip_code"),
        "wifi": ("wifi_network", "wifi_password"),
    }


@dataclass(frozen=True)
class HouseRulesFields:
    screen_rules: FieldValue = None
    food_rules: FieldValue = None
    pet_rules: FieldValue = None
    visitor_rules: FieldValue = None
    off_limits: FieldValue = None

    GROUPS: ClassVar[Mapping[str, tuple[str, ...]]] = {}


@dataclass(frozen=True)
class ScheduleFields:
    school_name: FieldValue = None
    school_address: FieldValue = None
    school_dropoff: FieldValue = None
    school_pickup: FieldValue = None
    activities: FieldValue = None
    transportation: FieldValue = None
    homework: FieldValue = None

    GROUPS: ClassVar[Mapping[str, tuple[str, ...]]] = {
        "school": ("school_name", "school_address", "school_dropoff", "school_pickup"),
    }


@dataclass(frozen=True)
class EmergencyFields:
    emergency_plan: FieldValue = None
    hospital_name: FieldValue = None
    hospital_address: FieldValue = None
    hospital_distance: FieldValue = None
    urgent_care: FieldValue = None
    insurance_provider: FieldValue = None
    insurance_policy: FieldValue = None
    insurance_group: FieldValue = None

    GROUPS: ClassVar[Mapping[str, tuple[str, ...]]] = {
        "hospital": ("hospital_name", "hospital_address", "hospital_distance"),
        "insurance": ("insurance_provider", "insurance_policy", "insurance_group"),
    }


def field_keys(fields_cls: type) -> tuple[str, ...]:
    """Return the field keys of a section field record, in declaration order."""
    return tuple(f.name for f in dataclasses.fields(fields_cls))


def redaction_keys(fields_cls: type) -> frozenset[str]:
    """Return every key a redaction set of this section kind may contain."""
    return frozenset(field_keys(fields_cls)) | frozenset(fields_cls.GROUPS)


FieldsT = TypeVar("FieldsT")


@dataclass(frozen=True)
class Section(Generic[FieldsT]):
    """One section of a CareRecord.

    Parameters
    ----------
    fields : FieldsT
        The typed field record (e.g. ``HealthFields``).
    notes : str | None
        Free text shown as a trailer; never subject to per-field redaction.
    redacted : Iterable[str]
        Field or group keys that must never appear in any guide.
    updated_at : datetime | None
        Display-only timestamp of the last edit.

    Raises
    ------
    DataValidationError
        If ``redacted`` contains a key unknown to this section kind.
    """

    fields: FieldsT
    notes: str | None = None
    redacted: frozenset[str] = frozenset()
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        redacted = frozenset(self.redacted or ())
        object.__setattr__(self, "redacted", redacted)
        fields_cls = type(self.fields)
        unknown = redacted - redaction_keys(fields_cls)
        if unknown:
            raise DataValidationError(
                f"Unknown redaction key(s) for {fields_cls.__name__}: "
                f"{', '.join(sorted(unknown))}",
                context={"section": fields_cls.__name__, "keys": sorted(unknown)},
            )

    @property
    def hidden(self) -> frozenset[str]:
        """Field keys suppressed by the redaction set, with groups expanded."""
        groups = type(self.fields).GROUPS
        hidden: set[str] = set()
        for key in self.redacted:
            hidden.update(groups.get(key, (key,)))
        return frozenset(hidden)

    def get(self, field_key: str) -> FieldValue:
        return getattr(self.fields, field_key)


def _section(fields_cls: type) -> Any:
    return field(default_factory=lambda: Section(fields_cls()))


@dataclass(frozen=True)
class Child:
    """A child as known to the family; ``birthdate`` may lie in the future."""

    id: str | None
    name: str
    birthdate: date | str | None = None
    gender: str | None = None


@dataclass(frozen=True)
class ChildCareRecord:
    id: str | None
    child_id: str | None
    routines: Section[RoutinesFields] = _section(RoutinesFields)
    health: Section[HealthFields] = _section(HealthFields)
    comfort: Section[ComfortFields] = _section(ComfortFields)
    safety: Section[SafetyFields] = _section(SafetyFields)
    contacts: Section[ContactsFields] = _section(ContactsFields)


@dataclass(frozen=True)
class FamilyCareRecord:
    id: str | None
    family_id: str | None = None
    home_base: Section[HomeBaseFields] = _section(HomeBaseFields)
    house_rules: Section[HouseRulesFields] = _section(HouseRulesFields)
    schedule: Section[ScheduleFields] = _section(ScheduleFields)
    emergency: Section[EmergencyFields] = _section(EmergencyFields)


CHILD_SECTIONS: dict[str, type] = {
    "routines": RoutinesFields,
    "health": HealthFields,
    "comfort": ComfortFields,
    "safety": SafetyFields,
    "contacts": ContactsFields,
}

FAMILY_SECTIONS: dict[str, type] = {
    "home_base": HomeBaseFields,
    "house_rules": HouseRulesFields,
    "schedule": ScheduleFields,
    "emergency": EmergencyFields,
}
