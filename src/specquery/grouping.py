"""Partition an operation model by tag.

Each tag becomes one logical API area: one namespace in ``queryKeys`` and
``invalidate``, and one hooks file when grouping by tag is enabled.
"""

from __future__ import annotations

from specquery.models import GroupedOperations, OperationModel


def group_by_tag(model: OperationModel) -> GroupedOperations:
    """Group operations by tag in a single pass.

    Tags appear in the order they are first seen; operations keep their
    source order within a tag. An empty model yields an empty mapping.

    Example::

        grouped = group_by_tag(model)
        for tag, ops in grouped.items():
            print(tag, [op.operation_id for op in ops])
    """
    grouped: GroupedOperations = {}
    for op in model.operations:
        grouped.setdefault(op.tag, []).append(op)
    return grouped
