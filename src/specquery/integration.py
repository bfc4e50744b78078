"""Optional ``openapi-typescript`` integration descriptor.

Projects that already generate a ``paths``/``components`` type module with
`openapi-typescript <https://openapi-ts.dev>`_ can point specquery at it
through a small JSON file::

    {
      "typesPath": "./src/api/types.ts",
      "baseUrl": "https://api.example.com",
      "headers": {"x-client": "web"}
    }

The descriptor only decorates the generated client (type imports, base URL,
default headers) and is re-emitted as ``openapi-ts.config.ts``. It is an
optional enhancement, so every failure to read it is a warning and the run
continues as if no descriptor had been given.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from specquery.emit.environment import render_template
from specquery.models import OpenApiTsIntegration
from specquery.output import debug, warning


def load_integration_config(config_path: Optional[str]) -> Optional[OpenApiTsIntegration]:
    """Read the integration descriptor at *config_path*.

    Args:
        config_path: Path to the JSON descriptor, or ``None`` when the
            feature is not configured.

    Returns:
        The validated descriptor, or ``None`` when *config_path* is ``None``
        or the file is missing, unreadable, not a JSON object, or invalid.
        A missing ``typesPath`` defaults to ``./src/api/types.ts``; a
        non-string ``baseUrl`` and a non-object ``headers`` are dropped, as
        are individual header entries whose value is not a string.
    """
    if not config_path:
        return None

    path = Path(config_path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        warning(f"Ignoring OpenAPI-TS config {config_path}: {exc}")
        return None

    if not isinstance(data, dict):
        warning(f"Ignoring OpenAPI-TS config {config_path}: expected a JSON object")
        return None

    payload: dict = {}
    if data.get("typesPath"):
        payload["typesPath"] = data["typesPath"]
    if isinstance(data.get("baseUrl"), str):
        payload["baseUrl"] = data["baseUrl"]
    if isinstance(data.get("headers"), dict):
        payload["headers"] = _string_headers(data["headers"], config_path)

    try:
        integration = OpenApiTsIntegration.model_validate(payload)
    except ValidationError as exc:
        warning(f"Ignoring OpenAPI-TS config {config_path}: {exc}")
        return None

    debug(f"OpenAPI-TS integration: types at {integration.types_path}")
    return integration


def _string_headers(headers: dict, config_path: str) -> dict[str, str]:
    """Keep the header entries whose value is a string; warn about the rest."""
    kept: dict[str, str] = {}
    for name, value in headers.items():
        if isinstance(value, str):
            kept[str(name)] = value
        else:
            warning(
                f"Ignoring header '{name}' in OpenAPI-TS config {config_path}: "
                "value must be a string"
            )
    return kept


def render_integration_config(integration: OpenApiTsIntegration) -> str:
    """Render ``openapi-ts.config.<ext>``, re-emitting the descriptor as source."""
    return render_template(
        "openapi_ts_config.ts.j2",
        types_path=integration.types_path,
        base_url=integration.base_url or "",
        headers=integration.headers or {},
    )
