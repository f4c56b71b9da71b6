"""Settings store for ``project.godot`` style text.

Format::

    config_version=5          ; pre-header keys live in section ""

    [application]
    config/name="Game"        ; keys may contain "/"

A setting path is ``section/key``: the first segment names the section and
the rest (re-joined with ``/``) is the key.  Like the scene patcher, writes
patch the raw text and leave every other line untouched.
"""

from __future__ import annotations

import logging
import re

from .document import SettingsDocument
from .errors import InvalidArgument, NotFound
from .input_events import event_expr
from .line_utils import (
    collect_continuation,
    detect_eol,
    last_content_index,
    matching_close,
    split_lines,
    split_top_level,
)

_LOG = logging.getLogger(__name__)

_SECTION_RE = re.compile(r"^\[([^\[\]]+)\]$")
_KV_RE = re.compile(r"^([^=]+)=(.*)$")
_ACTION_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_EVENTS_RE = re.compile(r'"events"\s*:\s*\[(.*)\]', re.DOTALL)
_EVENTS_OPEN_RE = re.compile(r'"events"\s*:\s*\[')

INPUT_SECTION = "input"


def _split_path(path: str) -> tuple[str, str] | None:
    parts = path.split("/")
    if len(parts) < 2:
        return None
    return parts[0], "/".join(parts[1:])


def _header(line: str) -> str | None:
    m = _SECTION_RE.match(line.strip())
    return m.group(1) if m else None


def _kv(line: str) -> tuple[str, str] | None:
    m = _KV_RE.match(line.strip())
    if not m:
        return None
    return m.group(1).strip(), m.group(2).strip()


# ---------------------------------------------------------------------------
# Parsing / lookup
# ---------------------------------------------------------------------------

def parse_settings(text: str) -> SettingsDocument:
    """Parse settings *text*.  Never raises; section ``""`` is always present."""
    doc = SettingsDocument(raw=text)
    current = ""
    lines = text.split("\n")
    i = 0

    while i < len(lines):
        line = lines[i].strip()
        i += 1
        if not line or line.startswith(";"):
            continue

        name = _header(line)
        if name is not None:
            current = name
            doc.sections.setdefault(current, {})
            continue

        kv = _kv(line)
        if kv is None:
            continue
        key, value = kv
        value, i = collect_continuation(value, lines, i)
        doc.sections[current][key] = value

    _LOG.debug("parsed settings: %d sections", len(doc.sections))
    return doc


def get_setting(doc: SettingsDocument, path: str) -> str | None:
    """Raw value at ``section/key``; None when absent or *path* has one segment."""
    split = _split_path(path)
    if split is None:
        return None
    section, key = split
    return doc.sections.get(section, {}).get(key)


def get_input_actions(doc: SettingsDocument) -> dict[str, str]:
    """Entries of the ``[input]`` section (raw values), in file order."""
    return dict(doc.sections.get(INPUT_SECTION, {}))


def list_input_events(doc: SettingsDocument, action: str) -> list[str]:
    """Raw event expressions of *action*; empty if the action is unknown."""
    raw = get_input_actions(doc).get(action)
    if raw is None:
        return []
    m = _EVENTS_RE.search(raw)
    if not m or not m.group(1).strip():
        return []
    return [e for e in split_top_level(m.group(1)) if e]


# ---------------------------------------------------------------------------
# Patching
# ---------------------------------------------------------------------------

def _key_span(lines: list[str], section: str, key: str) -> tuple[int, int, int, bool]:
    """Locate *key* in *section*.

    Returns ``(key_start, key_end, section_end, section_found)``;
    ``key_start`` is -1 when the key is absent.  Section ``""`` is the area
    before the first header.
    """
    in_section = section == ""
    found = in_section
    section_end = len(lines) if in_section else -1
    key_start = key_end = -1
    i = 0

    while i < len(lines):
        name = _header(lines[i])
        if name is not None:
            if in_section:
                section_end = i
                break
            in_section = name == section
            if in_section:
                found = True
                section_end = len(lines)
            i += 1
            continue
        kv = _kv(lines[i])
        if kv is not None and not lines[i].lstrip().startswith(";"):
            _, next_i = collect_continuation(kv[1], lines, i + 1)
            if in_section and kv[0] == key and key_start < 0:
                key_start, key_end = i, next_i
            i = next_i
            continue
        i += 1

    return key_start, key_end, section_end, found


def set_setting(text: str, path: str, value: str) -> str:
    """Set ``section/key`` to the raw *value*.

    Replaces the existing line, or appends the key at the end of its section,
    or appends a new ``[section]`` block at EOF.  Single-segment paths leave
    the text unchanged.
    """
    split = _split_path(path)
    if split is None:
        return text
    section, key = split

    lines = split_lines(text)
    eol = detect_eol(lines)
    entry = f"{key}={value}{eol}"
    key_start, key_end, section_end, found = _key_span(lines, section, key)

    if key_start >= 0:
        tail = lines[key_end - 1]
        if not tail.endswith("\n"):
            entry = entry[: -len(eol)]
        lines[key_start:key_end] = [entry]
        return "".join(lines)

    if found:
        first = 0 if section == "" else _section_start(lines, section)
        pos = last_content_index(lines, first, section_end) + 1
        if pos > 0 and not lines[pos - 1].endswith("\n"):
            lines[pos - 1] += eol
        lines.insert(pos, entry)
        return "".join(lines)

    _LOG.debug("set_setting: adding section [%s]", section)
    if not text:
        return f"[{section}]{eol}{entry}"
    if not text.endswith("\n"):
        text += eol
    return f"{text}{eol}[{section}]{eol}{entry}"


def _section_start(lines: list[str], section: str) -> int:
    """Index just past the ``[section]`` header."""
    i = 0
    while i < len(lines):
        if _header(lines[i]) == section:
            return i + 1
        kv = _kv(lines[i])
        if kv is not None and not lines[i].lstrip().startswith(";"):
            _, i = collect_continuation(kv[1], lines, i + 1)
            continue
        i += 1
    return len(lines)


def add_input_action(text: str, action: str, deadzone: float = 0.5) -> str:
    """Declare an empty input *action*; an existing action is left as is."""
    _check_action_name(action)
    if action in get_input_actions(parse_settings(text)):
        return text
    eol = detect_eol(split_lines(text))
    value = f'{{{eol}"deadzone": {deadzone},{eol}"events": []{eol}}}'
    return set_setting(text, f"{INPUT_SECTION}/{action}", value)


def remove_input_action(text: str, action: str) -> str:
    """Drop *action* (all of its lines) from ``[input]``; no-op if absent."""
    _check_action_name(action)
    lines = split_lines(text)
    key_start, key_end, _, _ = _key_span(lines, INPUT_SECTION, action)
    if key_start < 0:
        return text
    del lines[key_start:key_end]
    return "".join(lines)


def add_input_event(text: str, action: str, event_type: str, event_value: str) -> str:
    """Append one key / mouse / joypad event to the ``"events"`` list of *action*.

    *event_value* is a key name (``KEY_SPACE``), a mouse button name
    (``MOUSE_BUTTON_LEFT``) or a number.  Unknown event types and names raise
    ``InvalidArgument``; an unknown action raises ``NotFound``.
    """
    _check_action_name(action)
    event = event_expr(event_type, event_value)

    lines = split_lines(text)
    key_start, key_end, _, _ = _key_span(lines, INPUT_SECTION, action)
    if key_start < 0:
        raise NotFound(
            f'Action "{action}" not found',
            suggestion="Add the action first with add_input_action.",
        )

    entry = "".join(lines[key_start:key_end])
    m = _EVENTS_OPEN_RE.search(entry)
    close = matching_close(entry, m.end() - 1) if m else -1
    if close < 0:
        raise InvalidArgument(
            f'Action "{action}" has no readable events list',
            suggestion="Check the action's value in [input].",
        )

    existing = entry[m.end():close]
    events = f"{existing.rstrip()}, {event}" if existing.strip() else event
    lines[key_start:key_end] = [entry[:m.end()] + events + entry[close:]]
    _LOG.debug("add_input_event %r: %s", action, event_type)
    return "".join(lines)


def _check_action_name(action: str) -> None:
    if not _ACTION_NAME_RE.match(action):
        raise InvalidArgument(
            f"Invalid action name: {action}",
            suggestion="Action names may contain only letters, digits, "
            "underscores and hyphens.",
        )
