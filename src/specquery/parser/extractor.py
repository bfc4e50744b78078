"""Extract the operation model from a bundled OpenAPI spec.

This module walks a ``$ref``-bundled OpenAPI spec dictionary and builds an
:class:`~specquery.models.OperationModel`: one
:class:`~specquery.models.Operation` per path + HTTP method, with
categorised parameters, the first declared request-body content type, and
the first declared content type of every response.

The public entry points are :func:`extract_model` and the convenience
pipeline :func:`load_operation_model`. Internally the work is split into
private helpers that each handle one section of the OpenAPI structure:

* ``_extract_operations`` -- the ``paths`` object, iterating over every
  path + HTTP method combination.
* ``_extract_parameters`` -- parameter dicts to
  :class:`~specquery.models.Parameter` models.
* ``_extract_request_body`` / ``_extract_responses`` -- first content type
  of the request body and of each response.

Parameter merging concatenates path-level and operation-level lists without
de-duplicating by ``(name, in)``. An operation that redeclares a path-level
parameter therefore carries both entries.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError

from specquery.exceptions import SpecParseError
from specquery.models import (
    HTTPMethod,
    Operation,
    OperationModel,
    Parameter,
    ParameterLocation,
    RequestBody,
    ResponseInfo,
    SchemaShape,
)
from specquery.naming import sanitize_operation_id, synthesize_operation_id
from specquery.output import debug
from specquery.parser.loader import load_spec, validate_openapi_version
from specquery.parser.resolver import bundle_refs

_SHAPE_BY_TYPE: dict[str, SchemaShape] = {
    "string": SchemaShape.STRING,
    "integer": SchemaShape.NUMBER,
    "number": SchemaShape.NUMBER,
    "boolean": SchemaShape.BOOLEAN,
    "array": SchemaShape.ARRAY,
    "object": SchemaShape.OBJECT,
}


def load_operation_model(source: str) -> OperationModel:
    """Load, validate, and extract the operation model for *source*.

    Args:
        source: A URL, file path, or ``-`` for stdin.

    Returns:
        The extracted :class:`~specquery.models.OperationModel`.

    Raises:
        SpecParseError: If the document cannot be loaded, parsed, or bundled.
    """
    debug(f"Loading spec from {source}")
    raw = load_spec(source)
    version = validate_openapi_version(raw)
    debug(f"OpenAPI version {version}")
    model = extract_model(raw, None if source == "-" else source)
    debug(f"Extracted {len(model.operations)} operations")
    return model


def extract_model(raw_spec: dict[str, Any], source: Optional[str] = None) -> OperationModel:
    """Extract an :class:`~specquery.models.OperationModel` from a raw OpenAPI dict.

    First bundles all ``$ref`` pointers via
    :func:`~specquery.parser.resolver.bundle_refs`, then walks the result.

    Args:
        raw_spec: The raw OpenAPI spec dictionary as returned by
            :func:`~specquery.parser.loader.load_spec`.
        source: Where *raw_spec* was loaded from, used to resolve relative
            external references.

    Returns:
        The operation model, with document title, version, and the URL of
        the first declared server.

    Raises:
        SpecParseError: If ``paths`` is not a mapping or a field cannot be
            represented in the model.

    Example::

        raw = load_spec("petstore.yaml")
        model = extract_model(raw, "petstore.yaml")
        for op in model.operations:
            print(f"{op.method.value.upper()} {op.path} -> {op.operation_id}")
    """
    spec = bundle_refs(raw_spec, source)
    info = spec.get("info")
    if not isinstance(info, dict):
        info = {}

    try:
        return OperationModel(
            operations=_extract_operations(spec),
            title=_optional_str(info.get("title")),
            version=_optional_str(info.get("version")),
            base_url=_first_server_url(spec),
        )
    except ValidationError as exc:
        raise SpecParseError(f"Malformed OpenAPI document: {exc}") from exc


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _first_server_url(spec: dict[str, Any]) -> Optional[str]:
    servers = spec.get("servers")
    if not isinstance(servers, list) or not servers:
        return None
    first = servers[0]
    url = first.get("url") if isinstance(first, dict) else None
    return url if isinstance(url, str) else None


def _extract_operations(spec: dict[str, Any]) -> list[Operation]:
    """Extract all operations from the spec's ``paths`` object.

    Path items are visited in document order and methods in
    :class:`~specquery.models.HTTPMethod` order.

    Raises:
        SpecParseError: If ``paths`` is present but not a mapping.
    """
    paths = spec.get("paths") or {}
    if not isinstance(paths, dict):
        raise SpecParseError(
            f"'paths' must be an object (got {type(paths).__name__})"
        )

    operations: list[Operation] = []

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue

        path_params = path_item.get("parameters") or []

        for method in HTTPMethod:
            operation = path_item.get(method.value)
            if not isinstance(operation, dict):
                continue

            op_params = operation.get("parameters") or []
            tags = operation.get("tags") or []
            declared_id = operation.get("operationId")
            if declared_id:
                operation_id = sanitize_operation_id(str(declared_id))
            else:
                operation_id = synthesize_operation_id(method.value, str(path))

            operations.append(
                Operation(
                    tag=str(tags[0]) if tags else "default",
                    operation_id=operation_id,
                    method=method,
                    path=str(path),
                    summary=_optional_str(operation.get("summary")),
                    description=_optional_str(operation.get("description")),
                    parameters=_extract_parameters([*path_params, *op_params]),
                    request_body=_extract_request_body(operation.get("requestBody")),
                    responses=_extract_responses(operation.get("responses") or {}),
                )
            )

    return operations


def _extract_parameters(params_list: list[Any]) -> list[Parameter]:
    """Convert raw OpenAPI parameter dicts into :class:`~specquery.models.Parameter` models.

    Parameters with unrecognised ``in`` locations, and entries that are not
    mappings (such as circular references left by the bundler), are skipped.
    """
    parameters: list[Parameter] = []

    for param in params_list:
        if not isinstance(param, dict) or "name" not in param:
            continue
        try:
            location = ParameterLocation(param.get("in", "query"))
        except ValueError:
            continue

        schema = param.get("schema")
        if not isinstance(schema, dict):
            schema = None
        shape = schema_shape(schema)

        parameters.append(
            Parameter(
                name=str(param["name"]),
                location=location,
                required=bool(param.get("required", False)),
                shape=SchemaShape.STRING if shape == SchemaShape.UNKNOWN else shape,
                schema_format=_optional_str(schema.get("format")) if schema else None,
                schema=schema,
            )
        )

    return parameters


def schema_shape(schema: Any) -> SchemaShape:
    """Classify a schema by its top-level ``type`` only.

    OpenAPI 3.1 type arrays (e.g. ``["string", "null"]``) use the first
    non-null entry. Missing or unrecognised types yield
    :attr:`~specquery.models.SchemaShape.UNKNOWN`.
    """
    if not isinstance(schema, dict):
        return SchemaShape.UNKNOWN

    type_value = schema.get("type")
    if isinstance(type_value, list):
        non_null = [t for t in type_value if t != "null"]
        type_value = non_null[0] if non_null else None

    return _SHAPE_BY_TYPE.get(str(type_value), SchemaShape.UNKNOWN)


def _first_content(content: Any) -> tuple[Optional[str], Optional[dict[str, Any]]]:
    """Return the first ``(content_type, schema)`` pair of a content map."""
    if not isinstance(content, dict) or not content:
        return None, None
    content_type, media = next(iter(content.items()))
    schema = media.get("schema") if isinstance(media, dict) else None
    return (
        str(content_type) if content_type else None,
        schema if isinstance(schema, dict) else None,
    )


def _extract_request_body(body: Any) -> Optional[RequestBody]:
    """Extract the first declared content type of an operation's ``requestBody``.

    Returns:
        ``None`` when there is no body or it declares no content type.
    """
    if not isinstance(body, dict):
        return None

    content_type, schema = _first_content(body.get("content"))
    if not content_type:
        return None

    return RequestBody(
        content_type=content_type,
        required=bool(body.get("required", False)),
        schema=schema,
    )


def _extract_responses(responses: Any) -> dict[str, ResponseInfo]:
    """Extract response metadata, keyed by status code string, in document order."""
    result: dict[str, ResponseInfo] = {}
    if not isinstance(responses, dict):
        return result

    for status_code, response in responses.items():
        if not isinstance(response, dict):
            continue

        description = response.get("description")
        if not isinstance(description, str):
            description = None

        content_type, schema = _first_content(response.get("content"))
        result[str(status_code)] = ResponseInfo(
            status_code=str(status_code),
            content_type=content_type,
            description=description,
            schema=schema,
        )

    return result
