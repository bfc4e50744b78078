"""Jinja2 environment shared by every renderer.

Templates live in ``emit/templates/`` next to this module, one ``.ts.j2``
file per generated file. Rendering is pure: the same context always yields
the same text, which keeps regeneration byte-identical.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``emit/templates/``)."""


def ts_string(value: Any) -> str:
    """Render *value* as a single-quoted TypeScript string literal."""
    text = str(value).replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return f"'{text}'"


def ts_json(value: Any) -> str:
    """Render *value* as an indented JSON literal (valid TypeScript)."""
    return json.dumps(value, indent=2, ensure_ascii=False)


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    """Create (once) the Jinja2 environment for the TypeScript templates.

    Autoescape is disabled for ``.ts.j2`` templates, which produce source code
    rather than HTML. Undefined variables raise instead of rendering empty.
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(disabled_extensions=("ts.j2",)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["ts_string"] = ts_string
    env.filters["ts_json"] = ts_json
    return env


def render_template(template_name: str, **context: Any) -> str:
    """Render *template_name* with *context* and return the text."""
    return get_environment().get_template(template_name).render(**context)
