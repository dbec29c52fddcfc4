"""Guide dispatcher: the public entry point of the guide generator.

``generate`` looks the guide type up in a static route table, checks that
every input the route needs is present and hands over to the matching
builder or audience composer. A missing input raises
``MissingInputError``; it is never answered with an empty guide.

Entities may be passed as typed records or as the plain rows produced by
the persistence layer; rows are converted with the data loader first.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Callable

from careguide.exceptions import DataValidationError, MissingInputError, UnknownGuideTypeError

from .builders import build_child_guide, build_family_guide
from .composers import AUDIENCE_POLICIES, compose_audience_guide
from .data_loader import child_from_mapping, child_record_from_mapping, family_record_from_mapping

logger = logging.getLogger(__name__)

ENTITY_KEYS: tuple[str, ...] = ("child", "children", "child_record", "child_records", "family_record")


def _coerce(value: Any, from_mapping: Callable[[Mapping[str, Any]], Any]) -> Any:
    if isinstance(value, Mapping):
        return from_mapping(value)
    return value


def _coerce_many(value: Any, what: str, from_mapping: Callable[[Mapping[str, Any]], Any]) -> list[Any]:
    if isinstance(value, (str, bytes, Mapping)) or not hasattr(value, "__iter__"):
        raise DataValidationError(
            f"'{what}' must be a list",
            context={"type": type(value).__name__},
        )
    return [_coerce(item, from_mapping) for item in value]


def _require(entities: Mapping[str, Any], guide_type: str, *names: str) -> list[Any]:
    values = []
    for name in names:
        value = entities.get(name)
        if value is None:
            raise MissingInputError(name, guide_type=guide_type)
        values.append(value)
    return values


def _child_guide(entities: Mapping[str, Any], guide_type: str, generated_at: datetime | None, today: date | None) -> str:
    child, record = _require(entities, guide_type, "child", "child_record")
    child = _coerce(child, child_from_mapping)
    record = _coerce(record, child_record_from_mapping)
    if record.child_id and child.id and record.child_id != child.id:
        raise DataValidationError(
            "child_record belongs to a different child",
            context={"child_id": child.id, "record_child_id": record.child_id},
        )
    return build_child_guide(child, record, generated_at=generated_at, today=today)


def _family_guide(entities: Mapping[str, Any], guide_type: str, generated_at: datetime | None, today: date | None) -> str:
    (record,) = _require(entities, guide_type, "family_record")
    record = _coerce(record, family_record_from_mapping)
    return build_family_guide(record, generated_at=generated_at)


def _audience_guide(entities: Mapping[str, Any], guide_type: str, generated_at: datetime | None, today: date | None) -> str:
    children, records, family = _require(
        entities, guide_type, "children", "child_records", "family_record"
    )
    return compose_audience_guide(
        AUDIENCE_POLICIES[guide_type],
        _coerce_many(children, "children", child_from_mapping),
        _coerce_many(records, "child_records", child_record_from_mapping),
        _coerce(family, family_record_from_mapping),
        generated_at=generated_at,
    )


_ROUTES: dict[str, Callable[[Mapping[str, Any], str, datetime | None, date | None], str]] = {
    "child": _child_guide,
    "family": _family_guide,
    "babysitter": _audience_guide,
    "school": _audience_guide,
    "grandparent": _audience_guide,
}


def generate(
    guide_type: str,
    entities: Mapping[str, Any] | None = None,
    *,
    generated_at: datetime | None = None,
    today: date | None = None,
    **kwargs: Any,
) -> str:
    """Generate a guide of ``guide_type`` from the given entities.

    Parameters
    ----------
    guide_type : str
        One of ``child``, ``family``, ``babysitter``, ``school``,
        ``grandparent``.
    entities : Mapping[str, Any] | None, optional
        Entities keyed by ``child``, ``children``, ``child_record``,
        ``child_records`` and ``family_record``. Keyword arguments with the
        same names are merged in and take precedence.
    generated_at : datetime | None, optional
        Footer timestamp; defaults to now.
    today : date | None, optional
        Reference day for age lines; defaults to the current date.

    Returns
    -------
    str
        The guide text.

    Raises
    ------
    MissingInputError
        If an input required by ``guide_type`` is missing or ``None``, or a
        record has no ``id``.
    UnknownGuideTypeError
        If ``guide_type`` has no route.
    DataValidationError
        If a raw row is malformed or a child record belongs to another child.
    TypeError
        If an unknown entity key is passed.

    Examples
    --------
    >>> generate("child", {})
    Traceback (most recent call last):
    ...
    careguide.exceptions.MissingInputError: MISSING_INPUT_ERROR: 'child' is required for a 'child' guide
    """
    provided = dict(entities or {})
    provided.update(kwargs)
    unknown = sorted(set(provided) - set(ENTITY_KEYS))
    if unknown:
        raise TypeError(f"generate() got unexpected entities: {', '.join(unknown)}")
    route = _ROUTES.get(guide_type)
    if route is None:
        raise UnknownGuideTypeError(guide_type)
    logger.debug("Generating %s guide", guide_type)
    return route(provided, guide_type, generated_at, today)
