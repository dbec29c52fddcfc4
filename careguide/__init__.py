"""Care Guide package.

This package turns the care information a family keeps about its children
and home into shareable guides: a complete guide for one child, a
family-wide guide, and reduced packs for a babysitter, a school or a
grandparent. Every field the family has marked as hidden stays out of
every guide.

Package Structure
-----------------
- `pipeline/guide_generator/`:
    Typed record schemas, snapshot loading, field projection, section
    rendering, entity builders, audience composers and the ``generate``
    dispatcher. Pure and free of I/O except for ``runner``.
- `pipeline/guide_exporter/`:
    HTML conversion, file output and terminal preview of generated guides.
- `config.py`: Configuration constants, as UPPER_SNAKE_CASE.
- `exceptions.py`: Project-specific exception classes.
- `program1_generate_guides.py`: Command-line entrypoint.

Examples
--------
>>> from careguide.pipeline.guide_generator import generate
>>> # generate("babysitter", children=[...], child_records=[...], family_record=...)
"""
