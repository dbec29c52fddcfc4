"""Care guide generator package.

Projects child and family CareRecords into readable guides for a child,
the family, or an audience such as a babysitter, while honoring each
section's redaction set. Every generator function is pure: records go in,
text comes out, nothing is mutated and no I/O is performed. File handling
lives in ``runner``.

A consumer (CLI, web handler, notebook) should import from this package
rather than reaching into submodules.

Examples
--------
>>> from careguide.pipeline.guide_generator import FamilyCareRecord, generate
>>> text = generate("family", family_record=FamilyCareRecord(id="f1"))
>>> text.startswith("# Family Care Guide")
True
"""

from .builders import build_child_guide, build_family_guide
from .composers import (
    AUDIENCE_POLICIES,
    AudiencePolicy,
    PolicyField,
    compose_audience_guide,
)
from .data_loader import (
    GuideSnapshot,
    child_from_mapping,
    child_record_from_mapping,
    family_record_from_mapping,
    load_snapshot,
    snapshot_from_mapping,
)
from .dispatcher import generate
from .fields import project_field
from .schema import Child, ChildCareRecord, FamilyCareRecord, Section
from .sections import FieldSpec, render_section

__all__ = [
    "AUDIENCE_POLICIES",
    "AudiencePolicy",
    "Child",
    "ChildCareRecord",
    "FamilyCareRecord",
    "FieldSpec",
    "GuideSnapshot",
    "PolicyField",
    "Section",
    "build_child_guide",
    "build_family_guide",
    "child_from_mapping",
    "child_record_from_mapping",
    "compose_audience_guide",
    "family_record_from_mapping",
    "generate",
    "load_snapshot",
    "project_field",
    "render_section",
    "snapshot_from_mapping",
]
