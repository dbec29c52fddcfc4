"""Tests for section rendering and composite blocks."""

from careguide.pipeline.guide_generator.sections import (
    FieldSpec,
    render_block,
    render_section,
)


def test_render_section_keeps_entry_order():
    entries = [
        FieldSpec("Wake Time", "6am", "wake_time"),
        FieldSpec("Bedtime", "7pm", "bedtime"),
        FieldSpec("Naps", "1pm", "naps"),
    ]
    out = render_section("Daily Routines", entries, None, set())
    assert out == (
        "## Daily Routines\n\n"
        "**Wake Time:** 6am\n"
        "**Bedtime:** 7pm\n"
        "**Naps:** 1pm\n\n"
    )


def test_render_section_empty_when_nothing_renders():
    entries = [FieldSpec("Bedtime", "7pm", "bedtime"), FieldSpec("Naps", "", "naps"), None]
    assert render_section("Daily Routines", entries, None, {"bedtime"}) == ""
    assert render_section("Daily Routines", [], "   ", set()) == ""


def test_render_section_notes_only_still_renders():
    out = render_section("Health Information", [FieldSpec("Meds", None, "medications")], "Ask us first", set())
    assert out == "## Health Information\n\n*Notes:* Ask us first\n\n"


def test_render_section_notes_trailer_after_fields():
    out = render_section("Comfort", [FieldSpec("Favorites", "trains", "favorites")], "Loves songs", set())
    assert out.index("**Favorites:** trains") < out.index("*Notes:* Loves songs")


def test_render_section_trailer_does_not_make_section_non_empty():
    assert render_section("Emergency", [FieldSpec("Plan", None, "plan")], None, set(), trailer=("fixed",)) == ""
    out = render_section("Emergency", [FieldSpec("Plan", "call", "plan")], None, set(), trailer=("fixed",))
    assert out.endswith("**Plan:** call\nfixed\n\n")


def test_render_section_accepts_prerendered_blocks():
    out = render_section("Health", ["**⚠️ ALLERGIES: nuts**", FieldSpec("Meds", "none", "medications")], None, set())
    assert out.splitlines()[2] == "**⚠️ ALLERGIES: nuts**"


def test_render_block_hides_redacted_details_only():
    block = render_block(
        FieldSpec("Parent 1", "Sam", "parent1_name"),
        [
            FieldSpec("Phone", "555-0100", "parent1_phone"),
            FieldSpec("Email", "sam@example.com", "parent1_email"),
        ],
        {"parent1_phone"},
    )
    assert block == "**Parent 1:** Sam\n- Email: sam@example.com"


def test_render_block_needs_visible_anchor():
    details = [FieldSpec("Phone", "555-0100", "parent1_phone")]
    assert render_block(FieldSpec("Parent 1", "Sam", "parent1_name"), details, {"parent1_name"}) is None
    assert render_block(FieldSpec("Parent 1", "", "parent1_name"), details, set()) is None


def test_render_section_notes_follow_trailer_after_one_blank_line():
    out = render_section("Emergency", [FieldSpec("Plan", None, "plan")], "Call grandma", set(), trailer=("fixed",))
    assert out == "## Emergency\n\nfixed\n\n*Notes:* Call grandma\n\n"
    assert "\n\n\n" not in out
