"""Exception hierarchy for gdtext-core.

Parsing never raises; these are for the sandbox and for calling layers that
turn a missing node / setting / bad argument into a user-visible failure.
"""

from __future__ import annotations


class GdTextError(Exception):
    """Base class.  ``code`` is a stable machine-readable tag."""

    code = "ERROR"

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion


class NotFound(GdTextError):
    code = "NOT_FOUND"


class AccessDenied(GdTextError):
    code = "ACCESS_DENIED"


class InvalidArgument(GdTextError):
    code = "INVALID_ARGS"


def format_error(exc: BaseException) -> str:
    """Render an exception as ``Error [CODE]: message`` (+ suggestion line)."""
    if isinstance(exc, GdTextError):
        text = f"Error [{exc.code}]: {exc.message}"
        if exc.suggestion:
            text += f"\nSuggestion: {exc.suggestion}"
        return text
    return f"Error: {exc}"
