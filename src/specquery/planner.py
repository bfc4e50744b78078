"""Plan the set of generated files for a run.

The plan is a list of :class:`~specquery.models.GeneratedFile` entries with
paths relative to the output directory. It is computed the same way for
dry runs and real runs; only :func:`~specquery.writer.write_files` touches
the filesystem.

Core files are always singular::

    client.ts
    queryKeys.ts
    invalidate.ts
    types.ts                    (with --generate-types)

followed by the hooks, either one file per tag::

    hooks/<tag>.generated.ts

or one combined ``hooks.generated.ts``, and finally
``openapi-ts.config.ts`` when an integration descriptor is configured.
"""

from __future__ import annotations

from typing import Optional

from specquery.emit import (
    render_client,
    render_hooks_by_tag,
    render_hooks_combined,
    render_invalidate,
    render_query_keys,
    render_types,
)
from specquery.integration import render_integration_config
from specquery.models import (
    GeneratedFile,
    GenerateOptions,
    GroupedOperations,
    OpenApiTsIntegration,
    OperationModel,
)
from specquery.naming import combined_hooks_file_path, hooks_file_path

DEFAULT_BASE_URL = "/api"


def effective_base_url(
    options: GenerateOptions,
    model: OperationModel,
    integration: Optional[OpenApiTsIntegration] = None,
) -> str:
    """Pick the base URL baked into the client.

    Precedence: explicit option (CLI, environment, project config), then
    the integration descriptor's ``baseUrl``, then the document's first
    server, then ``/api``.
    """
    if options.base_url:
        return options.base_url
    if integration is not None and integration.base_url:
        return integration.base_url
    if model.base_url:
        return model.base_url
    return DEFAULT_BASE_URL


def plan_files(
    model: OperationModel,
    grouped: GroupedOperations,
    options: GenerateOptions,
    integration: Optional[OpenApiTsIntegration] = None,
) -> list[GeneratedFile]:
    """Render every output file for *model* without writing anything.

    Args:
        model: The extracted operation model.
        grouped: ``model``'s operations grouped by tag.
        options: Resolved run options (grouping mode, types, extension).
        integration: Optional openapi-typescript descriptor.

    Returns:
        Files in a fixed order: core files, hooks, integration config.
    """
    ext = options.extension
    files = [
        GeneratedFile(
            path=f"client.{ext}",
            contents=render_client(effective_base_url(options, model, integration), integration),
        ),
        GeneratedFile(path=f"queryKeys.{ext}", contents=render_query_keys(grouped)),
        GeneratedFile(path=f"invalidate.{ext}", contents=render_invalidate(grouped)),
    ]

    if options.generate_types:
        files.append(GeneratedFile(path=f"types.{ext}", contents=render_types(model)))

    if options.group_by_tag:
        files.extend(
            GeneratedFile(path=hooks_file_path(tag, ext), contents=render_hooks_by_tag(tag, ops))
            for tag, ops in grouped.items()
        )
    else:
        files.append(
            GeneratedFile(
                path=combined_hooks_file_path(ext),
                contents=render_hooks_combined(grouped),
            )
        )

    if integration is not None:
        files.append(
            GeneratedFile(
                path=f"openapi-ts.config.{ext}",
                contents=render_integration_config(integration),
            )
        )

    return files
