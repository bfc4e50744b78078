"""Exception hierarchy for specquery.

All exceptions inherit from :class:`SpecQueryError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specquery.exit_codes`.
The top-level error handler in :func:`specquery.app.main` catches
``SpecQueryError`` and exits with the appropriate code.

Subclass hierarchy::

    SpecQueryError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- SpecParseError      (exit 7)
    +-- ConfigError         (exit 1)
    +-- OutputWriteError    (exit 1)

The OpenAPI-TS integration descriptor never raises: a broken descriptor is
reported as a warning and the feature is treated as not configured.
"""

from specquery.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
)


class SpecQueryError(Exception):
    """Base exception for all specquery errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecQueryError):
    """Raised for invalid CLI arguments or missing required options."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(SpecQueryError):
    """Raised when the OpenAPI spec cannot be fetched, parsed, or bundled."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class ConfigError(SpecQueryError):
    """Raised for configuration problems (invalid ``specquery.json``)."""

    exit_code = EXIT_GENERIC_FAILURE


class OutputWriteError(SpecQueryError):
    """Raised when a generated file cannot be written.

    Files written before the failure are left in place; re-running the
    generator is the recovery path.
    """

    exit_code = EXIT_GENERIC_FAILURE
