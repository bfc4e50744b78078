"""Render ``queryKeys.<ext>``: the query-key factory.

Every key is the 3-tuple ``[tagKey, functionName, params ?? {}]``. The hooks
use it as the cache key of reads and ``invalidate`` as the invalidation
target, so its shape must not change independently of those files.
"""

from __future__ import annotations

from typing import Any

from specquery.emit.environment import render_template
from specquery.models import GroupedOperations
from specquery.naming import operation_function_name, tag_key


def key_groups(grouped: GroupedOperations) -> list[dict[str, Any]]:
    """Template context shared by the query-key and invalidation renderers."""
    return [
        {
            "key": tag_key(tag),
            "operations": [
                {"name": operation_function_name(op), "is_query": op.is_query}
                for op in ops
            ],
        }
        for tag, ops in grouped.items()
    ]


def render_query_keys(grouped: GroupedOperations) -> str:
    """Render the ``queryKeys`` object: a ``root`` key plus one factory per operation."""
    return render_template("query_keys.ts.j2", groups=key_groups(grouped))
