"""Tests for the field projector and value normalization."""

import pytest

from careguide.pipeline.guide_generator.fields import (
    normalize_list,
    normalize_value,
    project_field,
)


def test_project_field_formats_label_and_value():
    assert project_field("Bedtime", "7:30pm", "bedtime", set()) == "**Bedtime:** 7:30pm"


def test_project_field_joins_lists():
    line = project_field("Favorites", ["trains", " blocks "], "favorites", set())
    assert line == "**Favorites:** trains, blocks"


def test_project_field_redacted_returns_none():
    assert project_field("Bedtime", "7:30pm", "bedtime", {"bedtime"}) is None


@pytest.mark.parametrize("value", [None, "", "   ", [], ["", "  "], {"a": 1}, True, object()])
def test_project_field_empty_or_malformed_returns_none(value):
    """Absent, blank and malformed values never produce a line."""
    assert project_field("Label", value, "key", set()) is None


def test_project_field_other_redacted_keys_do_not_matter():
    assert project_field("Meals", "noon", "meals", {"bedtime", "naps"}) == "**Meals:** noon"


def test_normalize_value_numbers_become_text():
    assert normalize_value(90210) == "90210"
    assert normalize_value(2.5) == "2.5"


def test_normalize_list_rejects_scalars_and_filters_items():
    assert normalize_list("peanuts") == []
    assert normalize_list(None) == []
    assert normalize_list(["peanuts", 3, None, " eggs "]) == ["peanuts", "eggs"]
    assert normalize_list(("milk",)) == ["milk"]
