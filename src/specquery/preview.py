"""Preview what a generated hook will send, without running any TypeScript.

The functions here mirror the runtime behaviour the renderers emit, so that
``specquery inspect request`` can show the request path, query string, and
cache key a hook produces for given arguments:

* :func:`serialize_query` mirrors the emitted ``serializeQuery`` helper:
  ``None`` values are skipped, sequences become repeated keys in order,
  everything else is stringified the way JavaScript's ``String()`` does,
  and a non-empty result is prefixed with ``?``.
* :func:`interpolate_path` mirrors the path template literal: required
  parameters are substituted as-is, optional ones fall back to ``""``.
* :func:`query_key` mirrors ``queryKeys.<tag>.<name>(params?.query)``.

Example::

    >>> serialize_query({"status": ["available", "pending"], "limit": 10, "q": None})
    '?status=available&status=pending&limit=10'
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional
from urllib.parse import quote_plus

from specquery.exceptions import InvalidUsageError
from specquery.models import Operation, OperationModel
from specquery.naming import hook_name, operation_function_name, tag_key

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


def _js_string(value: Any) -> str:
    """Stringify *value* like JavaScript's ``String()`` for JSON-ish values."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, dict):
        return "[object Object]"
    if isinstance(value, (list, tuple)):
        return ",".join("" if v is None else _js_string(v) for v in value)
    return str(value)


def _form_encode(text: str) -> str:
    """Encode like ``URLSearchParams``: spaces as ``+``, ``*-._`` left as-is."""
    return quote_plus(text, safe="*").replace("~", "%7E")


def serialize_query(params: Optional[Mapping[str, Any]]) -> str:
    """Serialise query parameters in mapping order.

    Returns:
        ``""`` for an empty (or all-``None``) mapping, otherwise
        ``"?k=v&..."`` with no trailing ``&``.
    """
    if not params:
        return ""

    pairs: list[str] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend(f"{_form_encode(key)}={_form_encode(_js_string(item))}" for item in value)
            continue
        pairs.append(f"{_form_encode(key)}={_form_encode(_js_string(value))}")

    return f"?{'&'.join(pairs)}" if pairs else ""


def interpolate_path(op: Operation, values: Mapping[str, Any]) -> str:
    """Substitute path parameter values into *op*'s path template.

    Raises:
        InvalidUsageError: If a required path parameter has no value.
    """
    declared = {p.name: p for p in op.path_params}

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        param = declared.get(name)
        value = values.get(name)
        if param is not None and param.required:
            if value is None:
                raise InvalidUsageError(
                    f"Missing required path parameter '{name}' for {op.operation_id}"
                )
            return _js_string(value)
        return "" if value is None else _js_string(value)

    if not declared:
        return op.path
    return _PLACEHOLDER_RE.sub(_substitute, op.path)


def query_key(op: Operation, query: Optional[Mapping[str, Any]] = None) -> list[Any]:
    """The cache key a query hook uses: ``[tagKey, name, query ?? {}]``.

    Path parameters are not part of the key.
    """
    return [tag_key(op.tag), operation_function_name(op), dict(query) if query is not None else {}]


def find_operation(model: OperationModel, name: str) -> Operation:
    """Look up an operation by operation id, function name, or hook name.

    Raises:
        InvalidUsageError: If no operation matches.
    """
    for op in model.operations:
        if name in (op.operation_id, operation_function_name(op), hook_name(op)):
            return op
    raise InvalidUsageError(f"Unknown operation: {name}")


def describe_request(
    op: Operation,
    path_values: Optional[Mapping[str, Any]] = None,
    query: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Summarise the request a hook issues for the given arguments."""
    description: dict[str, Any] = {
        "hook": hook_name(op),
        "kind": "query" if op.is_query else "mutation",
        "method": op.method.value.upper(),
        "path": interpolate_path(op, path_values or {}) + serialize_query(query),
    }
    if op.is_query:
        description["query_key"] = query_key(op, query)
    return description
