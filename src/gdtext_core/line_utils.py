"""Line-level utilities shared by the scene reader, patcher and settings store."""

from __future__ import annotations

import re
from typing import Iterator

# A section header is ``[word`` followed by whitespace or ``]``.  Array
# continuation lines such as ``[1, 2]`` or ``["a"]`` never match.
_HEADER_RE = re.compile(r"^\[([A-Za-z_]\w*)(?=[\s\]])")

_OPENERS = "([{"
_CLOSERS = ")]}"


def is_section_header(line: str) -> bool:
    return _HEADER_RE.match(line.strip()) is not None


def section_kind(line: str) -> str | None:
    """Return the declaration word of a header line (``node``, ``connection``…)."""
    m = _HEADER_RE.match(line.strip())
    return m.group(1) if m else None


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, keeping the endings (``\\r\\n`` stays whole).

    Unlike ``str.splitlines`` this never breaks on form feeds or Unicode
    separators that may sit inside string values.
    """
    lines = text.split("\n")
    tail = lines.pop()
    out = [ln + "\n" for ln in lines]
    if tail:
        out.append(tail)
    return out


def scan_state(
    text: str, depth: int = 0, in_string: bool = False
) -> tuple[int, bool]:
    """Continue a scan of *text* from ``(depth, in_string)``.

    Returns the bracket depth and whether a ``"`` string is still open at
    the end of *text*.  Brackets inside strings do not count.
    """
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
    return depth, in_string


def bracket_depth(text: str) -> int:
    """Net count of open brackets in *text*, ignoring quoted strings."""
    return scan_state(text)[0]


def matching_close(text: str, open_idx: int) -> int:
    """Index of the bracket closing ``text[open_idx]``, or -1."""
    depth = 0
    in_string = escaped = False
    for idx in range(open_idx, len(text)):
        ch = text[idx]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
            if depth == 0:
                return idx
    return -1


def collect_continuation(value: str, lines: list[str], i: int) -> tuple[str, int]:
    """Extend a multi-line *value* starting at ``lines[i]``.

    Lines are consumed while a bracket or a string is open.  A section
    header ends the value unless it sits inside an open string.  Returns the
    joined value and the index of the next unread line.
    """
    depth, in_string = scan_state(value)
    while (depth > 0 or in_string) and i < len(lines):
        line = lines[i].rstrip("\r\n")
        if not in_string and is_section_header(line):
            break
        value += "\n" + line
        depth, in_string = scan_state(line, depth, in_string)
        i += 1
    return value, i


def iter_spans(lines: list[str]) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` for every logical line of *lines*.

    A property whose value runs over several lines comes out as one span, so
    text inside a value is never taken for a section header.
    """
    i = 0
    while i < len(lines):
        line = lines[i]
        if is_section_header(line) or line.lstrip().startswith(";"):
            yield i, i + 1
            i += 1
            continue
        _, end = collect_continuation(line.rstrip("\r\n"), lines, i + 1)
        yield i, end
        i = end


def split_top_level(inner: str) -> list[str]:
    """Split on commas that are not nested in brackets or quotes.

    Example::

        'Vector2(1, 2), "a,b", 3'  →  ['Vector2(1, 2)', '"a,b"', '3']
    """
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None
    escaped = False
    for ch in inner:
        if quote is not None:
            current.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue
        if ch in ('"', "'"):
            quote = ch
        elif ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    parts.append("".join(current).strip())
    return parts


def detect_eol(lines: list[str]) -> str:
    for ln in lines:
        if ln.endswith("\r\n"):
            return "\r\n"
        if ln.endswith("\n"):
            return "\n"
    return "\n"


def last_content_index(lines: list[str], start: int, end: int) -> int:
    """Index of the last non-blank line in ``lines[start:end]``, or ``start - 1``."""
    idx = end - 1
    while idx >= start and not lines[idx].strip():
        idx -= 1
    return idx
