"""Coarse TypeScript typing of parameters, bodies, and responses.

Type fidelity is deliberately limited to the top-level ``type`` of a schema:
``$ref``, ``oneOf``, ``allOf`` and discriminated unions are not followed, so
response and body types resolve to ``any``, ``any[]`` or
``Record<string, any>``. Projects that need precise types pair the hooks
with ``openapi-typescript`` output through the integration descriptor.
"""

from __future__ import annotations

import re

from specquery.models import Operation, Parameter, SchemaShape

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")
_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

_PARAM_TYPES: dict[SchemaShape, str] = {
    SchemaShape.NUMBER: "number",
    SchemaShape.BOOLEAN: "boolean",
    SchemaShape.ARRAY: "any[]",
    SchemaShape.OBJECT: "Record<string, any>",
}


def ts_param_type(param: Parameter) -> str:
    """TypeScript type of a parameter; anything unrecognised is ``string``."""
    return _PARAM_TYPES.get(param.shape, "string")


def response_type(op: Operation) -> str:
    """Type of the first 2xx response with a schema.

    ``any[]`` for arrays that declare ``items``, ``Record<string, any>`` for
    objects, ``any`` otherwise or when no such response exists.
    """
    response = op.success_response
    if response is None or response.schema_ is None:
        return "any"

    schema = response.schema_
    if schema.get("type") == "array" and schema.get("items"):
        return "any[]"
    if schema.get("type") == "object":
        return "Record<string, any>"
    return "any"


def request_body_type(op: Operation) -> str:
    """Type of the request body. Always ``any``; see the module docstring."""
    return "any"


def ts_property_name(name: str) -> str:
    """Quote *name* when it is not a valid TypeScript identifier (``X-Request-Id``)."""
    if _IDENTIFIER_RE.fullmatch(name):
        return name
    return "'" + name.replace("\\", "\\\\").replace("'", "\\'") + "'"


def ts_field(param: Parameter, optional_unless_required: bool) -> str:
    """One ``name?: type`` member of an inline object type or interface."""
    marker = "?" if optional_unless_required and not param.required else ""
    return f"{ts_property_name(param.name)}{marker}: {ts_param_type(param)}"


def _inline_fields(params: list[Parameter], optional_unless_required: bool) -> str:
    return "{ " + "; ".join(ts_field(p, optional_unless_required) for p in params) + " }"


def params_type(op: Operation, include_body: bool = False, body_type: str = "any") -> str:
    """The ``{ path?, query?, headers?, body? }`` variables type of a hook.

    Path fields are always typed as present; query and header fields are
    optional unless declared required. Empty groups fall back to
    ``Record<string, never>`` (headers: ``Record<string, string>``).
    """
    path_type = (
        _inline_fields(op.path_params, False) if op.path_params else "Record<string, never>"
    )
    query_type = (
        _inline_fields(op.query_params, True) if op.query_params else "Record<string, never>"
    )
    header_type = (
        _inline_fields(op.header_params, True) if op.header_params else "Record<string, string>"
    )

    lines = [
        f"  path?: {path_type};",
        f"  query?: {query_type};",
        f"  headers?: {header_type};",
    ]
    if include_body:
        lines.append(f"  body?: {body_type};")

    return "{\n" + "\n".join(lines) + "\n}"


def _param_accessor(base: str, name: str) -> str:
    """Property access on *base*; a trailing ``?`` or any ``?.`` makes it optional."""
    optional = base.endswith("?")
    clean = base[:-1] if optional else base
    if optional or "?." in clean:
        return f"{clean}?.{name}"
    return f"{clean}.{name}"


def build_path_expression(path: str, path_params: list[Parameter], accessor_base: str) -> str:
    """Build the TypeScript expression that produces the request path.

    Without path parameters the path is a plain string literal. Otherwise
    every ``{name}`` placeholder becomes an interpolation: ``${accessor}`` for
    required parameters and ``${accessor ?? ''}`` for optional (or
    undeclared) ones, so a missing value yields an empty segment rather than
    the text ``undefined``.

    Example::

        >>> build_path_expression("/pets/{petId}", [pet_id], "params?.path")
        '`/pets/${params?.path?.petId}`'
    """
    if not path_params:
        return f"'{path}'"

    by_name = {p.name: p for p in path_params}

    def _interpolate(match: re.Match[str]) -> str:
        name = match.group(1)
        accessor = _param_accessor(accessor_base, name)
        param = by_name.get(name)
        if param is not None and param.required:
            return "${" + accessor + "}"
        return "${" + accessor + " ?? ''}"

    return "`" + _PLACEHOLDER_RE.sub(_interpolate, path) + "`"
