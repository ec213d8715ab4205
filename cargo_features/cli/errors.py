"""
Error formatting and top-level handling for the cargo-features CLI.

Turns :class:`cargo_features.errors.FeaturesError` and unexpected
exceptions into consistent stderr messages and exit codes.
"""

import sys
import traceback

import click

from ..config import Settings
from ..errors import FeaturesError

# Length limits for the one-line detail of unexpected errors and for tracebacks
_DETAIL_LIMIT = 280
_TRACE_LIMIT = 4000


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else f"{text[:limit - 3]}..."


def format_cli_error(
    exc: BaseException,
    *,
    verbose: bool = False,
    include_traceback: bool = False
) -> str:
    """
    Format exception for CLI display with context and hints.

    Args:
        exc: Exception to format
        verbose: Include the error context
        include_traceback: Include the exception's traceback

    Returns:
        Formatted error message suitable for CLI output

    Examples:
        >>> from cargo_features.errors import ManifestParseError
        >>> print(format_cli_error(ManifestParseError("bad toml", hint="fix it")))
        Error [MANIFEST_PARSE_FAILED]: bad toml
        Hint: fix it
        >>> format_cli_error(ValueError("boom"))
        'Error: ValueError: boom'
    """
    lines = []

    if isinstance(exc, FeaturesError):
        lines.append(f"Error [{exc.code}]: {exc.message}")

        if exc.hint:
            lines.append(f"Hint: {exc.hint}")

        if verbose and exc.context:
            lines.append("\nContext:")
            for key, value in exc.context.items():
                lines.append(f"  {key}: {value}")
    else:
        detail = f"{exc.__class__.__name__}: {exc}"
        lines.append(f"Error: {_truncate(detail, _DETAIL_LIMIT)}")

    if include_traceback:
        trace = "".join(traceback.format_exception(exc)).strip()
        lines.append("\nTraceback:")
        lines.append(_truncate(trace, _TRACE_LIMIT))

    return "\n".join(lines)


def handle_cli_exception(
    exc: BaseException,
    settings: Settings,
    *,
    exit_code: int = 1
) -> None:
    """
    Print ``exc`` to stderr and exit, or re-raise it in debug mode.

    Note:
        This function calls sys.exit() and does not return.
    """
    if settings.reraise:
        raise exc

    error_message = format_cli_error(
        exc,
        verbose=settings.verbose,
        include_traceback=settings.verbose,
    )
    click.echo(error_message, err=True)
    sys.exit(exit_code)
