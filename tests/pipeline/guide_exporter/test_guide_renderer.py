"""Tests for the guide exporter (HTML conversion, writing and preview)."""

from pathlib import Path

import pytest
from rich.console import Console

from careguide.pipeline.guide_exporter import (
    guide_title,
    guide_to_html,
    preview_guide,
    write_guide_output,
)
from careguide.pipeline.guide_generator import FamilyCareRecord, Section, generate
from careguide.pipeline.guide_generator.schema import EmergencyFields

GUIDE = (
    "# Care Guide for Avery & Co\n\n"
    "## Daily Routines\n\n"
    "**Bedtime:** 7:30pm\n"
    "**Naps:** 1pm\n\n"
    "---\n\n*Generated by Care Guide on 2024-05-01 09:30*\n"
)


def test_guide_title():
    assert guide_title(GUIDE) == "Care Guide for Avery & Co"
    assert guide_title("no heading here") == "Care Guide"


def test_guide_to_html_page():
    page = guide_to_html(GUIDE)
    assert page.startswith("<!DOCTYPE html>")
    assert "<title>Care Guide for Avery &amp; Co</title>" in page
    assert "<h2>Daily Routines</h2>" in page
    assert "<strong>Bedtime:</strong> 7:30pm" in page
    assert "<hr" in page


def test_guide_to_html_keeps_consecutive_lines_apart():
    page = guide_to_html(GUIDE)
    assert "<br" in page.split("<strong>Bedtime:</strong>", 1)[1].split("<strong>Naps:</strong>", 1)[0]


def test_write_guide_output_creates_directories(tmp_path: Path):
    target = tmp_path / "a" / "b" / "guide.md"
    write_guide_output(GUIDE, target)
    assert target.read_text(encoding="utf-8") == GUIDE


def test_write_guide_output_raises_oserror(tmp_path: Path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(OSError):
        write_guide_output(GUIDE, blocker / "guide.md")


def test_preview_guide_renders_to_console():
    console = Console(record=True, width=80, color_system=None)
    preview_guide(GUIDE, console=console)
    out = console.export_text()
    assert "Care Guide for Avery & Co" in out
    assert "Bedtime: 7:30pm" in out
    assert "**" not in out


def test_guide_to_html_escapes_raw_html_in_values():
    record = FamilyCareRecord(
        id="f1", emergency=Section(EmergencyFields(emergency_plan="<script>alert(1)</script>"))
    )
    page = guide_to_html(generate("family", family_record=record))
    assert "<script>" not in page
    assert "&lt;script&gt;" in page
    assert "<strong>Emergency Plan:</strong>" in page
