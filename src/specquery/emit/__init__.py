"""Renderers -- turn the operation model into TypeScript source text.

Every renderer is a pure function of the model (or its tag grouping) and a
few options, returning one string. Identifiers are always taken from
:mod:`specquery.naming` so that files produced by different renderers
reference each other consistently.

Sub-modules:

* :mod:`~specquery.emit.client` -- ``client.ts`` fetch wrapper.
* :mod:`~specquery.emit.query_keys` -- ``queryKeys.ts`` key factory.
* :mod:`~specquery.emit.invalidate` -- ``invalidate.ts`` helpers.
* :mod:`~specquery.emit.hooks` -- per-tag or combined hooks files.
* :mod:`~specquery.emit.types_file` -- optional ``types.ts``.
* :mod:`~specquery.emit.ts_types` -- coarse TypeScript typing helpers.
* :mod:`~specquery.emit.environment` -- the shared Jinja2 environment.
"""

from specquery.emit.client import render_client
from specquery.emit.hooks import render_hooks_by_tag, render_hooks_combined
from specquery.emit.invalidate import render_invalidate
from specquery.emit.query_keys import render_query_keys
from specquery.emit.types_file import render_types

__all__ = [
    "render_client",
    "render_hooks_by_tag",
    "render_hooks_combined",
    "render_invalidate",
    "render_query_keys",
    "render_types",
]
