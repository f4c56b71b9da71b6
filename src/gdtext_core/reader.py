"""Reader layer: scans ``.tscn`` text into a SceneDocument.

The scan is line oriented and best effort.  Declarations missing a required
attribute are dropped without error, and property values are kept as raw
expression text (decode them with ``codec.decode`` when needed).
"""

from __future__ import annotations

import logging
import re

from .document import (
    Connection,
    ExtResource,
    SceneDocument,
    SceneNode,
    SubResource,
)
from .line_utils import collect_continuation, section_kind

_LOG = logging.getLogger(__name__)

_PROPERTY_RE = re.compile(r"^([\w/:.\-]+)\s*=\s*(.*)$")
_GROUP_TOKEN_RE = re.compile(r'"([^"]*)"')


# ---------------------------------------------------------------------------
# Attribute extraction
# ---------------------------------------------------------------------------

def quoted_attr(line: str, key: str) -> str | None:
    """Return the value of ``key="..."`` in a header line, or None."""
    m = re.search(rf'(?<![\w/]){re.escape(key)}="([^"]*)"', line)
    return m.group(1) if m else None


def bare_attr(line: str, key: str) -> str | None:
    """Return the unquoted token of ``key=token`` (``format=3``, ``instance=…``)."""
    m = re.search(rf'(?<![\w/]){re.escape(key)}=([^\s\]"][^\s\]]*)', line)
    return m.group(1) if m else None


def int_attr(line: str, key: str) -> int | None:
    raw = bare_attr(line, key)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def groups_attr(line: str) -> list[str]:
    m = re.search(r"(?<![\w/])groups=\[([^\]]*)\]", line)
    if not m:
        return []
    return _GROUP_TOKEN_RE.findall(m.group(1))


def parse_property_line(line: str) -> tuple[str, str] | None:
    """Split ``key = value`` / ``key=value`` into its parts."""
    m = _PROPERTY_RE.match(line.strip())
    if not m:
        return None
    return m.group(1), m.group(2).strip()


# ---------------------------------------------------------------------------
# Section handling
# ---------------------------------------------------------------------------

def _open_section(doc: SceneDocument, line: str) -> SceneNode | SubResource | None:
    """Record the declaration on *line*; return the entity that collects properties."""
    kind = section_kind(line)

    if kind == "gd_scene":
        fmt = int_attr(line, "format")
        steps = int_attr(line, "load_steps")
        doc.header.format = fmt if fmt is not None else 3
        doc.header.load_steps = steps if steps is not None else 1
        doc.header.uid = quoted_attr(line, "uid")
        return None

    if kind == "ext_resource":
        type_ = quoted_attr(line, "type")
        path = quoted_attr(line, "path")
        id_ = quoted_attr(line, "id")
        if type_ is None or path is None or id_ is None:
            return None
        doc.ext_resources.append(
            ExtResource(type=type_, path=path, id=id_, uid=quoted_attr(line, "uid"))
        )
        return None

    if kind == "sub_resource":
        type_ = quoted_attr(line, "type")
        id_ = quoted_attr(line, "id")
        if type_ is None or id_ is None:
            return None
        res = SubResource(type=type_, id=id_)
        doc.sub_resources.append(res)
        return res

    if kind == "node":
        name = quoted_attr(line, "name")
        if name is None:
            return None
        node = SceneNode(
            name=name,
            type=quoted_attr(line, "type"),
            parent=quoted_attr(line, "parent"),
            instance=bare_attr(line, "instance"),
            groups=groups_attr(line),
        )
        doc.nodes.append(node)
        return node

    if kind == "connection":
        signal = quoted_attr(line, "signal")
        from_ = quoted_attr(line, "from")
        to = quoted_attr(line, "to")
        method = quoted_attr(line, "method")
        if None in (signal, from_, to, method):
            return None
        doc.connections.append(
            Connection(
                signal=signal, from_=from_, to=to, method=method,
                flags=int_attr(line, "flags"),
            )
        )
        return None

    # editable, resource, gd_resource, … : passed over
    return None


# ---------------------------------------------------------------------------
# parse_scene
# ---------------------------------------------------------------------------

def parse_scene(text: str) -> SceneDocument:
    """Parse ``.tscn`` *text* into a SceneDocument.  Never raises."""
    doc = SceneDocument(raw=text)
    current: SceneNode | SubResource | None = None
    lines = text.split("\n")
    i = 0

    while i < len(lines):
        line = lines[i].strip()
        i += 1
        if not line or line.startswith(";"):
            continue

        if line.startswith("["):
            current = _open_section(doc, line)
            continue

        prop = parse_property_line(line)
        if prop is None:
            continue
        key, value = prop
        value, i = collect_continuation(value, lines, i)
        if current is not None:
            current.properties[key] = value

    _LOG.debug(
        "parsed scene: %d ext, %d sub, %d nodes, %d connections",
        len(doc.ext_resources), len(doc.sub_resources),
        len(doc.nodes), len(doc.connections),
    )
    return doc
