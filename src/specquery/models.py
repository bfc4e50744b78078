"""Canonical Pydantic models shared across all specquery modules.

This is the single source of truth for data shapes in the project. The models
fall into three groups:

**Operation model** -- produced by the OpenAPI parser and consumed by the
renderers:
    :class:`HTTPMethod`, :class:`ParameterLocation`, :class:`SchemaShape`,
    :class:`Parameter`, :class:`RequestBody`, :class:`ResponseInfo`,
    :class:`Operation`, and :class:`OperationModel`.

**Integration descriptor** -- :class:`OpenApiTsIntegration`, read from the
optional side JSON file that points at externally generated
``openapi-typescript`` types.

**Generation models** -- :class:`GenerateOptions` (the resolved run
configuration), :class:`GeneratedFile` (one planned output file), and
:class:`GenerationResult` (what a run produced).

The operation model is frozen: it is built once per run by
:func:`~specquery.parser.extractor.extract_model` and never mutated after.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Operation model ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods the generator emits hooks for.

    Declaration order is the order in which methods are visited inside a
    path item, which fixes the order of operations in the model.
    """

    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"
    HEAD = "head"


class ParameterLocation(str, enum.Enum):
    """Locations where an API parameter can appear, per OpenAPI ``in`` field."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


class SchemaShape(str, enum.Enum):
    """Coarse classification of a schema, derived from its top-level ``type``.

    No ``$ref``, ``oneOf`` or ``allOf`` is followed. ``UNKNOWN`` is only
    produced for bodies and responses; parameters without a usable type
    fall back to ``STRING``.
    """

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    UNKNOWN = "unknown"


class Parameter(BaseModel):
    """A single parameter of an :class:`Operation`.

    ``required`` is taken verbatim from the document (default ``False``),
    including for path parameters, so that an optional path placeholder
    renders with an empty-string fallback.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    location: ParameterLocation
    required: bool = False
    shape: SchemaShape = SchemaShape.STRING
    schema_format: Optional[str] = None
    schema_: Optional[dict[str, Any]] = Field(default=None, alias="schema")


class RequestBody(BaseModel):
    """The first declared content type of an operation's ``requestBody``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    content_type: str
    required: bool = False
    schema_: Optional[dict[str, Any]] = Field(default=None, alias="schema")


class ResponseInfo(BaseModel):
    """Response metadata for a single status code.

    Only the first declared content type is kept. Responses without a
    ``content`` map carry just their description.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status_code: str
    content_type: Optional[str] = None
    description: Optional[str] = None
    schema_: Optional[dict[str, Any]] = Field(default=None, alias="schema")


class Operation(BaseModel):
    """One path + HTTP method pair, normalised for code emission.

    The flat ``parameters`` list is the source of truth; the four
    location views are derived from it on access.
    """

    model_config = ConfigDict(frozen=True)

    tag: str = "default"
    operation_id: str
    method: HTTPMethod
    path: str
    summary: Optional[str] = None
    description: Optional[str] = None
    parameters: list[Parameter] = Field(default_factory=list)
    request_body: Optional[RequestBody] = None
    responses: dict[str, ResponseInfo] = Field(default_factory=dict)

    def _params_in(self, location: ParameterLocation) -> list[Parameter]:
        return [p for p in self.parameters if p.location == location]

    @property
    def path_params(self) -> list[Parameter]:
        return self._params_in(ParameterLocation.PATH)

    @property
    def query_params(self) -> list[Parameter]:
        return self._params_in(ParameterLocation.QUERY)

    @property
    def header_params(self) -> list[Parameter]:
        return self._params_in(ParameterLocation.HEADER)

    @property
    def cookie_params(self) -> list[Parameter]:
        return self._params_in(ParameterLocation.COOKIE)

    @property
    def is_query(self) -> bool:
        """``True`` for cache-backed reads (GET/HEAD), ``False`` for mutations."""
        return self.method in (HTTPMethod.GET, HTTPMethod.HEAD)

    @property
    def success_response(self) -> Optional[ResponseInfo]:
        """The first 2xx response that carries a schema, if any."""
        for code, response in self.responses.items():
            if code.startswith("2") and response.schema_:
                return response
        return None


class OperationModel(BaseModel):
    """Complete normalised representation of an OpenAPI document.

    Produced once per run by the parser and consumed read-only by the
    grouper, the renderers, and the file planner.
    """

    model_config = ConfigDict(frozen=True)

    operations: list[Operation] = Field(default_factory=list)
    title: Optional[str] = None
    version: Optional[str] = None
    base_url: Optional[str] = Field(
        default=None, description="URL of the first declared server"
    )


GroupedOperations = dict[str, list[Operation]]
"""Operations keyed by tag, in first-seen tag order."""


# --- Integration descriptor ---


class OpenApiTsIntegration(BaseModel):
    """Where ``openapi-typescript`` generated types live and how to call the API.

    Loaded from the side JSON file by
    :func:`~specquery.integration.load_integration_config`. It decorates the
    client output only and never changes the operation model.

    Example::

        OpenApiTsIntegration.model_validate(
            {"typesPath": "./src/api/types.ts", "headers": {"x-app": "web"}}
        )
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    types_path: str = Field(default="./src/api/types.ts", alias="typesPath")
    base_url: Optional[str] = Field(default=None, alias="baseUrl")
    headers: Optional[dict[str, str]] = None


# --- Generation ---


class GenerateOptions(BaseModel):
    """Resolved options for one generation run.

    Built by :func:`~specquery.config.resolve_options` from CLI flags,
    environment variables, and ``./specquery.json``.
    """

    schema_source: str = Field(description="URL or file path to the OpenAPI spec")
    out_dir: str = Field(default="examples/out", description="Output directory")
    base_url: Optional[str] = Field(
        default=None, description="Base URL baked into the generated client"
    )
    group_by_tag: bool = Field(
        default=True, description="One hooks file per tag instead of a combined file"
    )
    generate_types: bool = Field(
        default=False, description="Emit the coarse parameter types file"
    )
    openapi_ts_config: Optional[str] = Field(
        default=None, description="Path to the openapi-typescript integration descriptor"
    )
    dry_run: bool = Field(default=False, description="Plan files without writing")
    extension: str = Field(default="ts", description="Extension of generated files")


class GeneratedFile(BaseModel):
    """A planned output file, relative to the output directory."""

    model_config = ConfigDict(frozen=True)

    path: str
    contents: str


class GenerationResult(BaseModel):
    """Summary of a generation run returned by :func:`~specquery.generate.generate`."""

    files: list[GeneratedFile] = Field(default_factory=list)
    written: list[str] = Field(
        default_factory=list, description="Absolute paths written (empty on dry run)"
    )
    operation_count: int = 0
    integration_configured: bool = False
    out_dir: str
    dry_run: bool = False

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.files]
