"""Bundle ``$ref`` JSON Reference pointers in OpenAPI specifications.

OpenAPI documents commonly use ``$ref`` pointers (e.g.,
``{"$ref": "#/components/schemas/Pet"}``) to avoid repetition, and larger
APIs split their definitions across several files
(``{"$ref": "./schemas/pet.yaml#/Pet"}``). This module performs a recursive
deep-copy traversal of the spec, replacing every ``$ref`` with the object it
points to, so that the extractor sees a single self-contained tree.

Both **internal** references (``#/...``) and **external** references
(relative file paths or http(s) URLs, optionally followed by a ``#/``
fragment) are supported. External documents are loaded through
:func:`~specquery.parser.loader.load_document`, relative to the document
that contains the reference, and each one is loaded at most once per call.
References found inside an external document resolve against that document.

Circular references are detected via a ``seen`` set and left unresolved:
the ``{"$ref": ...}`` dict is kept as-is at the cycle point instead of being
inlined again. A schema that references itself therefore still appears in
the output, just with a reference at its recursive edge.

The single public function is :func:`bundle_refs`.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Optional
from urllib.parse import unquote, urljoin

from specquery.exceptions import SpecParseError
from specquery.parser.loader import is_url, load_document


def bundle_refs(spec: dict[str, Any], base: Optional[str] = None) -> dict[str, Any]:
    """Resolve all ``$ref`` pointers in *spec* into one self-contained tree.

    Creates a deep copy of the input; the original is never mutated.

    Args:
        spec: The raw OpenAPI spec dictionary, as returned by
            :func:`~specquery.parser.loader.load_spec`.
        base: The location *spec* was loaded from (file path or URL).
            Relative external references are resolved against it. When
            ``None`` (e.g. stdin), they are resolved against the current
            working directory.

    Returns:
        A **new** dictionary with every resolvable ``$ref`` replaced by its
        target. Circular references remain as ``$ref`` dicts.

    Raises:
        SpecParseError: If a pointer does not exist in its document, or if an
            external document cannot be loaded or parsed.

    Example::

        raw = load_spec("petstore.yaml")
        bundled = bundle_refs(raw, "petstore.yaml")
        # bundled["paths"]["/pets"]["get"]["responses"]["200"]["content"]
        # now contains the inlined schema instead of a $ref pointer.
    """
    root = copy.deepcopy(spec)
    root_key = _document_key(base)
    bundler = _Bundler(root_key, root)
    return bundler.resolve(root, root_key, frozenset())


class _Bundler:
    """Holds the per-call document cache while walking the tree."""

    def __init__(self, root_key: str, root: dict[str, Any]) -> None:
        self._documents: dict[str, Any] = {root_key: root}

    def resolve(self, obj: Any, doc_key: str, seen: frozenset[str]) -> Any:
        """Recursively resolve all ``$ref`` pointers within *obj*.

        *seen* holds the absolute reference keys currently on the resolution
        stack. Each branch gets its own set so that sibling references to
        the same target are both inlined.
        """
        if isinstance(obj, dict):
            ref = obj.get("$ref")
            if isinstance(ref, str):
                target_key, pointer = _split_ref(ref, doc_key)
                ref_key = f"{target_key}#{pointer}"
                if ref_key in seen:
                    return obj
                document = self._document(target_key, ref)
                target = _follow_pointer(document, pointer, ref)
                return self.resolve(target, target_key, seen | {ref_key})

            return {key: self.resolve(value, doc_key, seen) for key, value in obj.items()}

        if isinstance(obj, list):
            return [self.resolve(item, doc_key, seen) for item in obj]

        return obj

    def _document(self, key: str, ref: str) -> Any:
        if key not in self._documents:
            try:
                self._documents[key] = load_document(key)
            except SpecParseError as exc:
                raise SpecParseError(f"Cannot resolve $ref '{ref}': {exc}") from exc
        return self._documents[key]


def _document_key(source: Optional[str]) -> str:
    """Normalise a document location into a cache key."""
    if source is None or source == "-":
        return str(Path.cwd() / "<stdin>")
    if is_url(source):
        return source
    return str(Path(source).resolve())


def _split_ref(ref: str, doc_key: str) -> tuple[str, str]:
    """Split *ref* into ``(absolute document key, JSON pointer)``.

    ``#/a/b`` stays in the current document; ``other.yaml#/a`` and
    ``https://host/doc.json`` point at another one.
    """
    location, _, fragment = ref.partition("#")
    if not location:
        return doc_key, fragment

    if is_url(location):
        target = location
    elif is_url(doc_key):
        target = urljoin(doc_key, location)
    else:
        target = str((Path(doc_key).parent / location).resolve())
    return target, fragment


def _follow_pointer(document: Any, pointer: str, ref: str) -> Any:
    """Navigate *document* along an RFC 6901 JSON Pointer.

    An empty pointer addresses the whole document. Segments are
    percent-decoded, then ``~1``/``~0`` are unescaped.

    Raises:
        SpecParseError: If any segment does not exist.
    """
    if pointer in ("", "/"):
        return document
    if not pointer.startswith("/"):
        raise SpecParseError(
            f"Cannot resolve $ref '{ref}': fragment must be a JSON pointer"
        )

    current: Any = document
    for raw_segment in pointer[1:].split("/"):
        segment = unquote(raw_segment).replace("~1", "/").replace("~0", "~")

        if isinstance(current, dict):
            if segment not in current:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': "
                    f"key '{segment}' not found at path"
                )
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError) as exc:
                raise SpecParseError(
                    f"Cannot resolve $ref '{ref}': "
                    f"invalid array index '{segment}'"
                ) from exc
        else:
            raise SpecParseError(
                f"Cannot resolve $ref '{ref}': "
                f"cannot navigate into {type(current).__name__}"
            )

    return current
