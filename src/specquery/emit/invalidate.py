"""Render ``invalidate.<ext>``: cache invalidation helpers.

Only query operations (GET/HEAD) get a helper, since mutations are never
cached.
"""

from __future__ import annotations

from specquery.emit.environment import render_template
from specquery.emit.query_keys import key_groups
from specquery.models import GroupedOperations


def render_invalidate(grouped: GroupedOperations) -> str:
    """Render ``invalidate(qc)``, keyed by tag and then by operation name."""
    return render_template("invalidate.ts.j2", groups=key_groups(grouped))
