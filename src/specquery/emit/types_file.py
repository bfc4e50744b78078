"""Render the optional ``types.<ext>`` file.

It declares ``ApiResponse``/``ApiError`` shapes and one coarse
``<Name>Params`` interface per operation: path parameters as required
members, query parameters optional unless declared required.
"""

from __future__ import annotations

from specquery.emit.environment import render_template
from specquery.emit.ts_types import ts_field
from specquery.models import OperationModel
from specquery.naming import params_type_name


def render_types(model: OperationModel) -> str:
    """Render the parameter interfaces for every operation in *model*."""
    entries = [
        {
            "name": params_type_name(op),
            "fields": [ts_field(p, False) for p in op.path_params]
            + [ts_field(p, True) for p in op.query_params],
        }
        for op in model.operations
    ]
    return render_template("types.ts.j2", entries=entries)
