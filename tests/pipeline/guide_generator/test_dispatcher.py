"""Tests for the guide dispatcher ``generate``."""

import pytest

from careguide.exceptions import (
    DataValidationError,
    MissingInputError,
    UnknownGuideTypeError,
)
from careguide.pipeline.guide_generator import generate
from careguide.pipeline.guide_generator.schema import Child, FamilyCareRecord


@pytest.mark.parametrize(
    "guide_type, entities, missing",
    [
        ("child", {}, "child"),
        ("child", {"child": Child(id="c1", name="Avery")}, "child_record"),
        ("child", {"child": None, "child_record": None}, "child"),
        ("family", {}, "family_record"),
        ("babysitter", {}, "children"),
        ("school", {"children": [], "child_records": []}, "family_record"),
        ("grandparent", {"children": [], "family_record": FamilyCareRecord(id="f1")}, "child_records"),
    ],
)
def test_missing_input_raises(guide_type, entities, missing):
    with pytest.raises(MissingInputError) as excinfo:
        generate(guide_type, entities)
    assert excinfo.value.argument == missing
    assert excinfo.value.code == "MISSING_INPUT_ERROR"
    assert f"'{guide_type}' guide" in str(excinfo.value)


def test_missing_input_is_never_an_empty_guide():
    with pytest.raises(MissingInputError):
        generate("child", {})


def test_unknown_guide_type():
    with pytest.raises(UnknownGuideTypeError) as excinfo:
        generate("nanny", {})
    assert excinfo.value.context == {"guide_type": "nanny"}


def test_unknown_entity_key_is_a_type_error():
    with pytest.raises(TypeError):
        generate("family", family_record=FamilyCareRecord(id="f1"), pets=[])


def test_keyword_entities_override_mapping(generated_at):
    text = generate(
        "family",
        {"family_record": None},
        family_record=FamilyCareRecord(id="f1"),
        generated_at=generated_at,
    )
    assert text.startswith("# Family Care Guide\n\n---")


def test_child_guide_via_dispatcher(kit, child, generated_at, today):
    text = generate(
        "child",
        child=child,
        child_record=kit.child_record(),
        generated_at=generated_at,
        today=today,
    )
    assert text.startswith("# Care Guide for Avery\n\n**Age:** 2 years\n\n")


def test_child_record_of_another_child_is_rejected(kit, child):
    with pytest.raises(DataValidationError):
        generate("child", child=child, child_record=kit.child_record(child_id="c2"))


def test_raw_rows_are_accepted(generated_at):
    text = generate(
        "babysitter",
        children=[{"id": "c1", "name": "Avery"}],
        child_records=[
            {
                "id": "r1",
                "child_id": "c1",
                "routines": {"bedtime": "7:30pm", "meals": "noon"},
                "routines_redacted_fields": ["meals"],
                "health": {"allergies": ["peanuts"]},
            }
        ],
        family_record={
            "id": "f1",
            "home_base": {"wifi_network": "HomeNet", "wifi_password": "hunter2"},
            "home_base_redacted_fields": ["wifi_password"],
        },
        generated_at=generated_at,
    )
    assert "**Bedtime:** 7:30pm" in text
    assert "noon" not in text
    assert "⚠️ ALLERGIES: peanuts" in text
    assert "HomeNet" not in text
    assert "hunter2" not in text


def test_collection_inputs_must_be_lists():
    with pytest.raises(DataValidationError):
        generate(
            "babysitter",
            children="c1",
            child_records=[],
            family_record=FamilyCareRecord(id="f1"),
        )


def test_generation_is_deterministic_with_fixed_timestamp(kit, child, generated_at, today):
    entities = {"child": child, "child_record": kit.child_record()}
    first = generate("child", entities, generated_at=generated_at, today=today)
    second = generate("child", entities, generated_at=generated_at, today=today)
    assert first == second


def test_generation_does_not_mutate_inputs(kit, generated_at):
    children = [{"id": "c1", "name": "Avery"}]
    rows = [{"id": "r1", "child_id": "c1", "routines": {"bedtime": "7pm"}}]
    generate(
        "school",
        children=children,
        child_records=rows,
        family_record=kit.family_record(),
        generated_at=generated_at,
    )
    assert children == [{"id": "c1", "name": "Avery"}]
    assert rows == [{"id": "r1", "child_id": "c1", "routines": {"bedtime": "7pm"}}]


def test_audience_types_share_one_document(kit, generated_at):
    entities = {
        "children": [Child(id="c1", name="Avery")],
        "child_records": [kit.child_record()],
        "family_record": kit.family_record(),
    }
    babysitter = generate("babysitter", entities, generated_at=generated_at)
    assert generate("school", entities, generated_at=generated_at) == babysitter
    assert generate("grandparent", entities, generated_at=generated_at) == babysitter
