"""OpenAPI spec parser -- load, bundle ``$ref`` pointers, and extract operations.

This sub-package is responsible for the first stage of the specquery
pipeline: turning a raw OpenAPI 3.x document (JSON or YAML, local file or
remote URL) into an :class:`~specquery.models.OperationModel` that the
renderers can consume.

Typical usage::

    from specquery.parser import load_operation_model

    model = load_operation_model("https://petstore3.swagger.io/api/v3/openapi.json")

Sub-modules:

* :mod:`~specquery.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection and OpenAPI version validation.
* :mod:`~specquery.parser.resolver` -- Internal and external ``$ref``
  bundling with circular-reference preservation.
* :mod:`~specquery.parser.extractor` -- Walks the bundled tree and produces
  the :class:`~specquery.models.OperationModel`.
"""

from specquery.parser.extractor import extract_model, load_operation_model
from specquery.parser.loader import load_spec, validate_openapi_version

__all__ = ["extract_model", "load_operation_model", "load_spec", "validate_openapi_version"]
