"""specquery -- Generate TanStack Query hooks from OpenAPI 3.0/3.1 specs.

This package reads an OpenAPI document (JSON or YAML, local file or URL) and
emits a small set of TypeScript files that give a React application typed,
cache-aware access to the API:

* ``client.ts`` -- a fetch wrapper with timeout handling and ``ApiError``.
* ``queryKeys.ts`` -- a deterministic query-key factory per tag.
* ``invalidate.ts`` -- helpers that invalidate cached queries by key.
* ``hooks/<tag>.generated.ts`` -- one ``useQuery``/``useMutation`` hook per
  operation (or a single ``hooks.generated.ts``).

Typical workflow::

    specquery generate --schema openapi.yaml --out src/api

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: Option resolution (CLI, environment, project config).
    generate: The load -> group -> plan -> write pipeline.
    naming: Identifier derivation shared by every renderer.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
