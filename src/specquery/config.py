"""Option resolution for generation runs.

Options come from four layers, highest precedence first:

1. CLI flags
2. Environment variables (``SPECQUERY_SCHEMA``, ``SPECQUERY_OUT``,
   ``SPECQUERY_BASE_URL``, ``SPECQUERY_OPENAPI_TS_CONFIG``)
3. Project config (``./specquery.json``)
4. Defaults declared on :class:`~specquery.models.GenerateOptions`

A project config pins the generator for a repository so ``specquery generate``
can run without flags::

    {
      "schema": "openapi.yaml",
      "out": "src/api",
      "group_by_tag": false,
      "generate_types": true
    }
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from specquery.exceptions import ConfigError, InvalidUsageError
from specquery.models import GenerateOptions

_PROJECT_CONFIG_FILENAME = "specquery.json"

_ENV_VARS: dict[str, str] = {
    "schema_source": "SPECQUERY_SCHEMA",
    "out_dir": "SPECQUERY_OUT",
    "base_url": "SPECQUERY_BASE_URL",
    "openapi_ts_config": "SPECQUERY_OPENAPI_TS_CONFIG",
}

# Project config key -> GenerateOptions field
_PROJECT_KEYS: dict[str, str] = {
    "schema": "schema_source",
    "out": "out_dir",
    "base_url": "base_url",
    "openapi_ts_config": "openapi_ts_config",
    "generate_types": "generate_types",
    "group_by_tag": "group_by_tag",
    "extension": "extension",
}


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./specquery.json``.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a valid JSON object.
    """
    path = (directory or Path.cwd()) / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def resolve_options(
    schema: Optional[str] = None,
    out: Optional[str] = None,
    base_url: Optional[str] = None,
    openapi_ts_config: Optional[str] = None,
    generate_types: Optional[bool] = None,
    group_by_tag: Optional[bool] = None,
    dry_run: bool = False,
    directory: Optional[Path] = None,
) -> GenerateOptions:
    """Resolve the effective :class:`~specquery.models.GenerateOptions`.

    ``None`` arguments mean "not given on the command line" and fall through
    to the lower layers.

    Raises:
        ConfigError: If the project config is invalid or holds bad values.
        InvalidUsageError: If no layer supplies a schema source.
    """
    values: dict[str, Any] = {}

    # 3. Project config
    project = load_project_config(directory)
    if project is not None:
        for key, field in _PROJECT_KEYS.items():
            if project.get(key) is not None:
                values[field] = project[key]

    # 2. Environment variables
    for field, env_var in _ENV_VARS.items():
        env_value = os.environ.get(env_var)
        if env_value:
            values[field] = env_value

    # 1. CLI flags
    cli_values = {
        "schema_source": schema,
        "out_dir": out,
        "base_url": base_url,
        "openapi_ts_config": openapi_ts_config,
        "generate_types": generate_types,
        "group_by_tag": group_by_tag,
    }
    values.update({k: v for k, v in cli_values.items() if v is not None})
    values["dry_run"] = dry_run

    if not values.get("schema_source"):
        raise InvalidUsageError(
            "No OpenAPI schema given. Pass --schema, set SPECQUERY_SCHEMA, "
            f"or add \"schema\" to {_PROJECT_CONFIG_FILENAME}."
        )

    try:
        return GenerateOptions.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid generator options: {exc}") from exc
