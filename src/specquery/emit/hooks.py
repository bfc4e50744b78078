"""Render the hooks files: one TanStack Query hook per operation.

GET and HEAD operations become ``useQuery`` hooks keyed by
``queryKeys.<tag>.<name>(params?.query)``; every other method becomes a
``useMutation`` hook. Path parameters are interpolated into the request path
(see :func:`~specquery.emit.ts_types.build_path_expression`) and query
parameters are serialised by the inlined ``serializeQuery`` helper.

Per-tag files live in ``hooks/`` and import the client and key factory from
``../``; the combined file sits next to them and imports from ``./``. The
grouping mode changes nothing else.
"""

from __future__ import annotations

from typing import Any

from specquery.emit.environment import render_template
from specquery.emit.ts_types import (
    build_path_expression,
    params_type,
    request_body_type,
    response_type,
)
from specquery.models import GroupedOperations, Operation
from specquery.naming import hook_name, operation_function_name, tag_key


def _hook_context(tag: str, op: Operation) -> dict[str, Any]:
    """Template context for a single hook."""
    context: dict[str, Any] = {
        "name": hook_name(op),
        "is_query": op.is_query,
        "method": op.method.value.upper(),
        "response_type": response_type(op),
        "key_factory": f"queryKeys.{tag_key(tag)}.{operation_function_name(op)}",
    }

    if op.is_query:
        context["variables_type"] = params_type(op)
        context["path_expression"] = build_path_expression(
            op.path, op.path_params, "params?.path"
        )
    else:
        has_body = op.request_body is not None
        context["has_body"] = has_body
        context["variables_type"] = params_type(op, has_body, request_body_type(op))
        context["destructured"] = (
            "{ path, query, headers, body }" if has_body else "{ path, query, headers }"
        )
        context["path_expression"] = build_path_expression(op.path, op.path_params, "path?")

    return context


def _render(entries: list[tuple[str, list[Operation]]], import_base: str) -> str:
    hooks = [_hook_context(tag, op) for tag, ops in entries for op in ops]
    return render_template("hooks.ts.j2", import_base=import_base, hooks=hooks)


def render_hooks_by_tag(tag: str, ops: list[Operation]) -> str:
    """Render ``hooks/<tag>.generated.<ext>`` for a single tag."""
    return _render([(tag, ops)], "../")


def render_hooks_combined(grouped: GroupedOperations) -> str:
    """Render ``hooks.generated.<ext>`` with the hooks of every tag."""
    return _render(list(grouped.items()), "./")
