"""Inspect commands -- examine what a spec will generate.

Provides the ``specquery inspect`` sub-command group:

* ``operations`` -- one row per operation with its tag, hook name, method,
  path, and whether it becomes a query or a mutation.
* ``request`` -- preview the request path, query string, and cache key a
  generated hook produces for given arguments, without running any
  TypeScript.
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from specquery.exceptions import InvalidUsageError, SpecQueryError
from specquery.output import error, format_response, get_output, info


inspect_app = typer.Typer(no_args_is_help=True)


def _load_model(schema: Optional[str]):  # noqa: ANN202
    """Resolve the schema source and load its operation model."""
    from specquery.config import resolve_options
    from specquery.parser import load_operation_model

    options = resolve_options(schema=schema)
    return load_operation_model(options.schema_source)


def _parse_pairs(pairs: list[str], option: str) -> dict[str, Any]:
    """Parse repeated ``key=value`` options. A repeated key collects a list."""
    result: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise InvalidUsageError(f"Expected key=value for {option}, got '{pair}'")
        if key in result:
            existing = result[key]
            result[key] = [*existing, value] if isinstance(existing, list) else [existing, value]
        else:
            result[key] = value
    return result


@inspect_app.command("operations")
def inspect_operations(
    schema: Optional[str] = typer.Option(
        None, "--schema", "-s", help="URL or file path to the OpenAPI spec."
    ),
) -> None:
    """List every operation and the hook generated for it.

    Example::

        specquery inspect operations --schema openapi.yaml
        specquery --json inspect operations -s openapi.yaml
    """
    from specquery.naming import hook_name

    try:
        model = _load_model(schema)
    except SpecQueryError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if not model.operations:
        info("No operations defined in this spec.")
        return

    headers = ["Tag", "Hook", "Method", "Path", "Kind"]
    rows: list[list[str]] = []
    for op in model.operations:
        rows.append([
            op.tag,
            hook_name(op),
            op.method.value.upper(),
            op.path,
            "query" if op.is_query else "mutation",
        ])

    title = model.title or "API"
    get_output().print_table(headers, rows, title=f"{title} -- Operations ({len(rows)})")


@inspect_app.command("request")
def inspect_request(
    operation: str = typer.Argument(
        help="Operation id, function name, or hook name (e.g. getPetById)."
    ),
    schema: Optional[str] = typer.Option(
        None, "--schema", "-s", help="URL or file path to the OpenAPI spec."
    ),
    path: Optional[list[str]] = typer.Option(
        None, "--path", help="Path parameter as key=value. Repeatable."
    ),
    query: Optional[list[str]] = typer.Option(
        None, "--query", help="Query parameter as key=value. Repeat a key for arrays."
    ),
) -> None:
    """Preview the request and cache key a generated hook produces.

    Example::

        specquery inspect request getPetById -s openapi.yaml --path petId=42
        specquery inspect request listPets -s openapi.yaml --query status=available --query status=sold
    """
    from specquery.preview import describe_request, find_operation

    try:
        model = _load_model(schema)
        op = find_operation(model, operation)
        description = describe_request(
            op,
            _parse_pairs(path or [], "--path"),
            _parse_pairs(query, "--query") if query else None,
        )
    except SpecQueryError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    format_response(description)
