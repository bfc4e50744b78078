"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specquery.exceptions.SpecQueryError` subclass.
Build scripts can inspect the exit code to tell a broken spec apart from a
bad invocation without parsing stderr.

Example::

    $ specquery generate --schema missing.yaml
    $ echo $?
    7   # EXIT_SPEC_PARSE_ERROR -- the document could not be loaded
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred (including output write failures)."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required options."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI specification could not be fetched, parsed, or bundled."""

EXIT_INTERRUPTED = 130
"""The run was cancelled with Ctrl-C."""
