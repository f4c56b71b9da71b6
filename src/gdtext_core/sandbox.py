"""Path sandbox: resolve untrusted paths strictly inside a trusted root."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .errors import AccessDenied

_LOG = logging.getLogger(__name__)


def resolve(root: str | os.PathLike, user_path: str | os.PathLike) -> Path:
    """Resolve *user_path* against *root* and return the absolute path.

    ``""`` and ``"."`` give *root* itself.  Relative and absolute inputs are
    both accepted, but the result must be *root* or lie below it, compared
    component by component after symlinks are resolved.  Anything else raises
    ``AccessDenied``; the path is never clamped.
    """
    raw = os.fspath(user_path)
    if "\x00" in raw:
        _LOG.warning("rejected path with NUL byte: %r", raw)
        raise AccessDenied(
            f"Access denied: {raw!r}",
            suggestion="Ensure the path is within the project directory.",
        )

    base = Path(root).resolve()
    candidate = (base / raw).resolve()

    if not candidate.is_relative_to(base):
        _LOG.warning("rejected path outside %s: %s", base, raw)
        raise AccessDenied(
            f"Access denied: {raw}",
            suggestion="Ensure the path is within the project directory.",
        )
    return candidate
