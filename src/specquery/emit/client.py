"""Render ``client.<ext>``: the fetch wrapper every hook calls through.

The emitted ``createClient`` merges default headers, applies a per-request
timeout through ``AbortController``, classifies failures into ``ApiError``
(HTTP status, ``408`` on timeout, ``0``/``NETWORK_ERROR`` on network
failure), and retries retryable failures according to ``ClientConfig.retry``.
A caller's ``signal`` is linked to the timeout controller, so a cancelled
query aborts its fetch and surfaces as an ``AbortError``, not a timeout.
"""

from __future__ import annotations

from typing import Optional

from specquery.emit.environment import render_template
from specquery.models import OpenApiTsIntegration


def render_client(base_url: str, integration: Optional[OpenApiTsIntegration] = None) -> str:
    """Render the client module.

    Args:
        base_url: Default base URL baked into ``createClient``.
        integration: When given, the client imports ``paths`` from the
            integration's types module, re-exports ``paths``/``components``,
            and sends the descriptor's headers by default.

    Returns:
        The generated TypeScript source.
    """
    return render_template(
        "client.ts.j2",
        base_url=base_url,
        integration=integration,
        headers=(integration.headers or {}) if integration else {},
    )
