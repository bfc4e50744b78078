"""Generate command -- write TanStack Query hooks for an OpenAPI spec.

Resolves options from flags, ``SPECQUERY_*`` environment variables, and
``./specquery.json`` (see :mod:`specquery.config`), runs the generation
pipeline, and reports what was written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from specquery.exceptions import SpecQueryError
from specquery.output import error, info, print_data, success, suggest


def generate_command(
    schema: Optional[str] = typer.Option(
        None, "--schema", "-s", help="URL or file path to the OpenAPI spec ('-' for stdin)."
    ),
    out: Optional[str] = typer.Option(
        None, "--out", "-o", help="Output directory. [default: examples/out]"
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Base URL baked into the client. [default: /api]"
    ),
    openapi_ts_config: Optional[str] = typer.Option(
        None, "--openapi-ts-config", help="Path to an openapi-typescript integration JSON."
    ),
    generate_types: Optional[bool] = typer.Option(
        None, "--generate-types/--no-generate-types", help="Also emit types.ts."
    ),
    group_by_tag: Optional[bool] = typer.Option(
        None,
        "--group-by-tag/--no-group-by-tag",
        help="One hooks file per tag, or a single hooks.generated.ts. [default: group]",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="List the files that would be written."
    ),
) -> None:
    """Generate the client, query keys, invalidation helpers, and hooks.

    Example::

        specquery generate --schema openapi.yaml --out src/api
        specquery generate -s https://petstore3.swagger.io/api/v3/openapi.json --no-group-by-tag
        specquery generate -s openapi.yaml --dry-run
    """
    from specquery.config import resolve_options
    from specquery.generate import generate

    try:
        options = resolve_options(
            schema=schema,
            out=out,
            base_url=base_url,
            openapi_ts_config=openapi_ts_config,
            generate_types=generate_types,
            group_by_tag=group_by_tag,
            dry_run=dry_run,
        )
        result = generate(options)
    except SpecQueryError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if result.dry_run:
        for path in result.paths:
            print_data(str(Path(result.out_dir) / path))
        info(
            f"Dry run: {len(result.files)} files for {result.operation_count} "
            f"operations would be written to {result.out_dir}"
        )
        return

    success(f"Generated {result.operation_count} operations to {result.out_dir}")
    if result.integration_configured:
        success("OpenAPI-TS integration configured")
    if result.operation_count == 0:
        suggest("The spec declares no operations under 'paths'.")
