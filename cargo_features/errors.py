"""
Error types for cargo-features.

Every failure the tool can surface carries a machine-readable code, an
optional hint and free-form context so the CLI layer can format it
consistently. Cancelling a prompt is not an error: stages return the
``CANCELLED`` sentinel instead of raising.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class FeaturesError(Exception):
    """
    Base exception for cargo-features operations.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code
        hint: Optional suggestion for resolving the error
        context: Additional metadata about the error
    """

    default_code = "FEATURES_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.hint = hint
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class MetadataQueryError(FeaturesError):
    """
    Workspace metadata could not be obtained.

    Raised when:
    - The cargo binary is missing or ``cargo metadata`` exits non-zero
    - Its output is not JSON or lacks the expected keys
    """

    default_code = "METADATA_QUERY_FAILED"


class ManifestParseError(FeaturesError):
    """The manifest could not be read or is not valid TOML."""

    default_code = "MANIFEST_PARSE_FAILED"


class ManifestWriteError(FeaturesError):
    """The updated manifest could not be written back to disk."""

    default_code = "MANIFEST_WRITE_FAILED"


class SelectionError(FeaturesError):
    """
    An interactive prompt failed for a reason other than cancellation.

    Typically raised when stdin is not a terminal.
    """

    default_code = "SELECTION_FAILED"


class WorkspaceError(FeaturesError):
    """The workspace offers nothing to act on (no packages, no dependencies, missing target)."""

    default_code = "WORKSPACE_ERROR"


class InvariantViolation(FeaturesError):
    """A chosen label did not map back to exactly one source record."""

    default_code = "INTERNAL_INVARIANT"

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("hint", "This is an internal error - please report it")
        super().__init__(message, **kwargs)


class Cancelled:
    """Outcome of a prompt the user dismissed (Ctrl-C, Esc)."""

    _instance: Optional["Cancelled"] = None

    def __new__(cls) -> "Cancelled":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CANCELLED"


CANCELLED = Cancelled()


def is_cancelled(value: Any) -> bool:
    """Return True when ``value`` is the cancellation sentinel."""
    return value is CANCELLED


__all__ = [
    "FeaturesError",
    "MetadataQueryError",
    "ManifestParseError",
    "ManifestWriteError",
    "SelectionError",
    "WorkspaceError",
    "InvariantViolation",
    "Cancelled",
    "CANCELLED",
    "is_cancelled",
]
