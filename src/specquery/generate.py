"""The generation pipeline: load, group, plan, write.

:func:`generate` is the programmatic entry point used by the ``generate``
CLI command::

    from specquery.generate import generate
    from specquery.models import GenerateOptions

    result = generate(GenerateOptions(schema_source="openapi.yaml", out_dir="src/api"))
    print(result.paths)

Any failure to load the spec aborts before a single file is written. A
broken integration descriptor only produces a warning.
"""

from __future__ import annotations

from pathlib import Path

from specquery.grouping import group_by_tag
from specquery.integration import load_integration_config
from specquery.models import GenerateOptions, GenerationResult
from specquery.output import debug
from specquery.parser import load_operation_model
from specquery.planner import plan_files
from specquery.writer import write_files


def generate(options: GenerateOptions) -> GenerationResult:
    """Run one generation.

    Args:
        options: Resolved run options.

    Returns:
        A :class:`~specquery.models.GenerationResult`. On a dry run,
        ``files`` holds the same plan a real run would write and ``written``
        is empty.

    Raises:
        SpecParseError: If the spec cannot be loaded.
        OutputWriteError: If a file cannot be written.
    """
    model = load_operation_model(options.schema_source)
    integration = load_integration_config(options.openapi_ts_config)

    grouped = group_by_tag(model)
    debug(f"Grouped operations into {len(grouped)} tag(s): {', '.join(grouped)}")

    files = plan_files(model, grouped, options, integration)

    written: list[Path] = []
    if options.dry_run:
        debug("Dry run: no files written")
    else:
        written = write_files(files, options.out_dir)

    return GenerationResult(
        files=files,
        written=[str(p.resolve()) for p in written],
        operation_count=len(model.operations),
        integration_configured=integration is not None,
        out_dir=options.out_dir,
        dry_run=options.dry_run,
    )
