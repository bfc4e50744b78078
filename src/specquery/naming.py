"""Identifier derivation shared by every renderer.

All generated TypeScript identifiers -- hook names, query-key entries,
invalidation entries, parameter interface names, and hook file names -- are
derived here and nowhere else. The client, query-key, invalidation, and
hooks files reference each other by these names, so they stay consistent
only as long as every renderer goes through this module.

**Derivation rules:**

* ``camel_case`` splits text into words at lower-to-upper boundaries
  (``petId`` -> ``pet Id``), at acronym boundaries (``HTTPServer`` ->
  ``HTTP Server``), and at any run of characters that are neither letters nor
  digits. The first word is lower-cased; every later word is capitalised
  with the rest lower-cased. A later word that starts with a digit is
  prefixed with ``_`` so ``v1 2`` becomes ``v1_2`` rather than ``v12``.
* The function name of an operation is ``camel_case(operation_id)``.
* The hook name is ``use`` + the function name with its first letter
  upper-cased (``getPetById`` -> ``useGetPetById``).
* The tag namespace in ``queryKeys``/``invalidate`` is ``camel_case(tag)``.
"""

from __future__ import annotations

from specquery.models import Operation

_SEPARATOR = "\0"


def split_words(text: str) -> list[str]:
    """Split *text* into words using the rules described in the module docstring.

    Example::

        >>> split_words("get_/pets/{petId}")
        ['get', 'pets', 'pet', 'Id']
        >>> split_words("HTTPServerError")
        ['HTTP', 'Server', 'Error']
    """
    chars = text.strip()
    marked: list[str] = []
    for i, ch in enumerate(chars):
        if i > 0 and ch.isupper():
            prev = chars[i - 1]
            next_is_lower = i + 1 < len(chars) and chars[i + 1].islower()
            if prev.islower() or prev.isdigit() or (prev.isupper() and next_is_lower):
                marked.append(_SEPARATOR)
        marked.append(ch if ch.isalpha() or ch.isdigit() else _SEPARATOR)
    return [word for word in "".join(marked).split(_SEPARATOR) if word]


def camel_case(text: str) -> str:
    """Convert *text* to ``camelCase``.

    Example::

        >>> camel_case("get_/pets/{petId}")
        'getPetsPetId'
        >>> camel_case("list-pets")
        'listPets'
        >>> camel_case("getPetById")
        'getPetById'
    """
    parts: list[str] = []
    for index, word in enumerate(split_words(text)):
        if index == 0:
            parts.append(word.lower())
        elif "0" <= word[0] <= "9":
            parts.append("_" + word.lower())
        else:
            parts.append(word[0].upper() + word[1:].lower())
    return "".join(parts)


def capitalize_first(text: str) -> str:
    """Upper-case the first character only (``getPet`` -> ``GetPet``)."""
    return text[:1].upper() + text[1:]


def sanitize_operation_id(operation_id: str) -> str:
    """Strip ``{`` and ``}`` from an operation id. Idempotent."""
    return operation_id.replace("{", "").replace("}", "")


def synthesize_operation_id(method: str, path: str) -> str:
    """Build an operation id for operations that do not declare one.

    Example::

        >>> synthesize_operation_id("get", "/pets/{petId}")
        'getPetsPetId'
    """
    return sanitize_operation_id(camel_case(f"{method}_{path}"))


def operation_function_name(op: Operation) -> str:
    """Name of the operation's entry in ``queryKeys`` and ``invalidate``."""
    return camel_case(op.operation_id)


def hook_name(op: Operation) -> str:
    """Exported hook name (``useGetPetById``)."""
    return "use" + capitalize_first(operation_function_name(op))


def params_type_name(op: Operation) -> str:
    """Name of the operation's interface in the types file (``GetPetByIdParams``)."""
    return capitalize_first(operation_function_name(op)) + "Params"


def tag_key(tag: str) -> str:
    """Namespace of a tag inside ``queryKeys`` and ``invalidate``."""
    return camel_case(tag)


def hooks_file_path(tag: str, extension: str) -> str:
    """Relative path of a per-tag hooks file (``hooks/pets.generated.ts``)."""
    return f"hooks/{tag}.generated.{extension}"


def combined_hooks_file_path(extension: str) -> str:
    """Relative path of the combined hooks file (``hooks.generated.ts``)."""
    return f"hooks.generated.{extension}"
