"""Text-patch mutations for ``.tscn`` content.

Every function takes raw text and returns new raw text.  Only the lines
touched by the operation change; comments, spacing and unrelated sections
are carried over byte for byte.  Preconditions (node exists, connection not
yet present, …) are the caller's to check with the ``getter`` lookups.

Text is walked in logical lines (``line_utils.iter_spans``), so a property
value that runs over several lines is always handled as one unit.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from .codec import encode
from .line_utils import (
    detect_eol,
    iter_spans,
    last_content_index,
    section_kind,
    split_lines,
)
from .reader import parse_property_line, quoted_attr

_LOG = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _line_ending(line: str) -> str:
    if line.endswith("\r\n"):
        return "\r\n"
    if line.endswith("\n"):
        return "\n"
    return ""


def _is_node(line: str, name: str) -> bool:
    return section_kind(line) == "node" and quoted_attr(line, "name") == name


def _node_span(lines: list[str], name: str) -> tuple[int, int] | None:
    """(header index, index of the next section header or len) for *name*."""
    start = None
    for idx, _ in iter_spans(lines):
        if section_kind(lines[idx]) is None:
            continue
        if start is not None:
            return start, idx
        if _is_node(lines[idx], name):
            start = idx
    if start is None:
        return None
    return start, len(lines)


def _sub_attr(line: str, key: str, fn: Callable[[str], str]) -> str:
    pattern = rf'((?<![\w/]){re.escape(key)}=")([^"]*)(")'
    return re.sub(pattern, lambda m: m.group(1) + fn(m.group(2)) + m.group(3), line)


def _rename_segments(path: str, old: str, new: str) -> str:
    return "/".join(new if seg == old else seg for seg in path.split("/"))


def _append_block(text: str, block: str, eol: str) -> str:
    body = text.rstrip()
    if not body:
        return block + eol
    return body + eol + eol + block + eol


def _connection_line(
    signal: str, from_: str, to: str, method: str, flags: int | None
) -> str:
    line = f'[connection signal="{signal}" from="{from_}" to="{to}" method="{method}"'
    if flags is not None:
        line += f" flags={flags}"
    return line + "]"


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------

def remove_node(text: str, name: str) -> str:
    """Drop every ``[node name="name"]`` section and connections from/to it."""
    lines = split_lines(text)
    out: list[str] = []
    skipping = False
    dropped = 0

    for start, end in iter_spans(lines):
        head = lines[start]
        kind = section_kind(head)
        if kind is not None:
            skipping = kind == "node" and quoted_attr(head, "name") == name
            if kind == "connection" and name in (
                quoted_attr(head, "from"), quoted_attr(head, "to")
            ):
                dropped += 1
                continue
        if skipping:
            dropped += end - start
            continue
        out.extend(lines[start:end])

    if dropped:
        _LOG.debug("remove_node %r: %d lines dropped", name, dropped)
    return "".join(out)


def rename_node(text: str, old: str, new: str) -> str:
    """Rename a node in its declaration, in parent paths and in connections.

    Paths are rewritten per segment, so renaming ``A`` turns ``parent="A/x"``
    into ``parent="B/x"`` but leaves ``AA`` or ``xA`` alone.
    """
    def seg(value: str) -> str:
        return _rename_segments(value, old, new)

    lines = split_lines(text)
    for start, _ in iter_spans(lines):
        line = lines[start]
        kind = section_kind(line)
        if kind == "node":
            line = _sub_attr(line, "name", lambda v: new if v == old else v)
            line = _sub_attr(line, "parent", seg)
        elif kind == "connection":
            line = _sub_attr(line, "from", seg)
            line = _sub_attr(line, "to", seg)
        lines[start] = line
    return "".join(lines)


def add_node(
    text: str,
    name: str,
    type_: str = "Node",
    parent: str | None = ".",
) -> str:
    """Declare a new node.

    ``parent=None`` declares a root (no parent attribute).  The section goes
    in front of the first connection so the file keeps the usual ordering,
    or at the end when there are none.
    """
    decl = f'[node name="{name}" type="{type_}"'
    if parent is not None:
        decl += f' parent="{parent}"'
    decl += "]"

    lines = split_lines(text)
    eol = detect_eol(lines)
    for start, _ in iter_spans(lines):
        if section_kind(lines[start]) == "connection":
            lines[start:start] = [decl + eol, eol]
            return "".join(lines)
    return _append_block(text, decl, eol)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

def set_property(text: str, node_name: str, key: str, value: object) -> str:
    """Set ``key = value`` inside the section of *node_name*.

    An existing line (multi-line values included) is replaced in place;
    otherwise the line is inserted after the last non-blank line of the
    section.  Non-string values are encoded first.  Unknown nodes leave the
    text unchanged.
    """
    expr = value if isinstance(value, str) else encode(value)
    lines = split_lines(text)
    span = _node_span(lines, node_name)
    if span is None:
        _LOG.debug("set_property: node %r not present", node_name)
        return text
    start, end = span

    for prop_start, prop_end in iter_spans(lines[start + 1:end]):
        prop_start += start + 1
        prop_end += start + 1
        prop = parse_property_line(lines[prop_start])
        if prop is not None and prop[0] == key:
            eol = _line_ending(lines[prop_end - 1])
            lines[prop_start:prop_end] = [f"{key} = {expr}{eol}"]
            return "".join(lines)

    eol = detect_eol(lines)
    pos = last_content_index(lines, start, end) + 1
    if not _line_ending(lines[pos - 1]):
        lines[pos - 1] += eol
    lines.insert(pos, f"{key} = {expr}{eol}")
    return "".join(lines)


# ---------------------------------------------------------------------------
# Connections
# ---------------------------------------------------------------------------

def add_connection(
    text: str,
    signal: str,
    from_: str,
    to: str,
    method: str,
    flags: int | None = None,
) -> str:
    """Append a ``[connection]`` line.  Duplicates are not checked here."""
    line = _connection_line(signal, from_, to, method, flags)
    eol = detect_eol(split_lines(text))
    body = text.rstrip()
    if not body:
        return line + eol
    if section_kind(body.rsplit("\n", 1)[-1]) == "connection":
        return body + eol + line + eol
    return body + eol + eol + line + eol


def remove_connection(text: str, signal: str, from_: str, to: str, method: str) -> str:
    """Filter out connection lines matching all four attributes."""
    wanted = (signal, from_, to, method)
    lines = split_lines(text)
    out: list[str] = []
    for start, end in iter_spans(lines):
        head = lines[start]
        if section_kind(head) == "connection" and wanted == (
            quoted_attr(head, "signal"),
            quoted_attr(head, "from"),
            quoted_attr(head, "to"),
            quoted_attr(head, "method"),
        ):
            continue
        out.extend(lines[start:end])
    return "".join(out)
