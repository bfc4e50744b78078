"""Shared test fixtures for specquery.

Provides reusable fixtures for loading spec fixtures, building operation
models, isolating the working directory and environment, managing output
state, and running CLI commands. These fixtures are automatically
discovered by pytest and available to all test modules without explicit
imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from specquery.models import (
    GroupedOperations,
    HTTPMethod,
    Operation,
    OperationModel,
    Parameter,
    ParameterLocation,
    SchemaShape,
)
from specquery.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Raw spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def petstore_path() -> Path:
    return FIXTURES_DIR / "petstore.json"


@pytest.fixture
def petstore_raw() -> dict[str, Any]:
    """Load the raw petstore 3.0 spec dict."""
    with open(FIXTURES_DIR / "petstore.json") as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Operation model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_model(petstore_raw: dict[str, Any]) -> OperationModel:
    """Operation model extracted from the petstore fixture."""
    from specquery.parser import extract_model

    return extract_model(petstore_raw, str(FIXTURES_DIR / "petstore.json"))


@pytest.fixture
def petstore_grouped(petstore_model: OperationModel) -> GroupedOperations:
    from specquery.grouping import group_by_tag

    return group_by_tag(petstore_model)


def _make_operation(
    operation_id: str = "getPetById",
    method: HTTPMethod = HTTPMethod.GET,
    path: str = "/pets/{petId}",
    tag: str = "pets",
    parameters: list[Parameter] | None = None,
    **kwargs: Any,
) -> Operation:
    """Build an :class:`Operation` with sensible defaults for unit tests."""
    if parameters is None:
        parameters = [
            Parameter(name="petId", location=ParameterLocation.PATH, required=True)
        ]
    return Operation(
        tag=tag,
        operation_id=operation_id,
        method=method,
        path=path,
        parameters=parameters,
        **kwargs,
    )


def _make_param(
    name: str,
    location: ParameterLocation = ParameterLocation.QUERY,
    required: bool = False,
    shape: SchemaShape = SchemaShape.STRING,
) -> Parameter:
    return Parameter(name=name, location=location, required=required, shape=shape)


@pytest.fixture
def make_operation():
    """Factory fixture for ad-hoc operations."""
    return _make_operation


@pytest.fixture
def make_param():
    """Factory fixture for ad-hoc parameters."""
    return _make_param


# ---------------------------------------------------------------------------
# Environment isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty working directory with no SPECQUERY_* vars.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    for var in [
        "SPECQUERY_SCHEMA",
        "SPECQUERY_OUT",
        "SPECQUERY_BASE_URL",
        "SPECQUERY_OPENAPI_TS_CONFIG",
        "NO_COLOR",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def plain_output() -> OutputManager:
    """Install a PLAIN-format, colourless OutputManager as the global output."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
