"""Value codec: Godot expression text ⇄ Value."""

from __future__ import annotations

import re
from collections.abc import Mapping

from .line_utils import split_top_level
from .values import (
    Null,
    Value,
    VBool,
    VColor,
    VList,
    VNodePath,
    VNumber,
    VOpaque,
    VRect2,
    VResourceRef,
    VText,
    VVector2,
    VVector3,
    _Null,
)

_N = r"\s*(-?(?:\d+\.?\d*|\.\d+))\s*"
_I = r"\s*(-?\d+)\s*"

_NUMBER_RE = re.compile(r"^-?\d+(\.\d+)?$")
_VECTOR2_RE = re.compile(rf"^Vector2\({_N},{_N}\)$")
_VECTOR2I_RE = re.compile(rf"^Vector2i\({_I},{_I}\)$")
_VECTOR3_RE = re.compile(rf"^Vector3\({_N},{_N},{_N}\)$")
_COLOR_RE = re.compile(rf"^Color\({_N},{_N},{_N}(?:,{_N})?\)$")
_RECT2_RE = re.compile(rf"^Rect2\({_N},{_N},{_N},{_N}\)$")
_NODEPATH_RE = re.compile(r'^NodePath\("([^"]*)"\)$')
_RESOURCE_RE = re.compile(r'^(?:Ext|Sub)Resource\("([^"]*)"\)$')
# One double-quoted literal; newlines may appear unescaped
_STRING_RE = re.compile(r'^"((?:[^"\\]|\\.)*)"$', re.DOTALL)
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}

_VALUE_TYPES = (
    VBool, _Null, VNumber, VText, VVector2, VVector3, VColor, VRect2,
    VNodePath, VResourceRef, VList, VOpaque,
)


def _to_number(s: str) -> int | float:
    return float(s) if "." in s else int(s)


def _unescape(body: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), body)


# ---------------------------------------------------------------------------
# decode
# ---------------------------------------------------------------------------

def decode(text: str) -> Value:
    """Convert a raw Godot expression to a Value.

    First match wins: bool, null, number, quoted string, Vector2, Vector2i,
    Vector3, Color, Rect2, NodePath, Ext/SubResource, array.  Anything else
    comes back as ``VOpaque`` with the trimmed text.
    """
    s = text.strip()

    if s == "true":
        return VBool(True)
    if s == "false":
        return VBool(False)
    if s == "null":
        return Null

    if _NUMBER_RE.match(s):
        return VNumber(_to_number(s))

    m = _STRING_RE.match(s)
    if m:
        return VText(_unescape(m.group(1)))
    if len(s) >= 2 and s[0] == s[-1] == "'":
        return VText(s[1:-1])

    m = _VECTOR2_RE.match(s)
    if m:
        return VVector2(*(_to_number(g) for g in m.groups()))

    m = _VECTOR2I_RE.match(s)
    if m:
        return VVector2(*(int(g) for g in m.groups()))

    m = _VECTOR3_RE.match(s)
    if m:
        return VVector3(*(_to_number(g) for g in m.groups()))

    m = _COLOR_RE.match(s)
    if m:
        r, g, b, a = m.groups()
        return VColor(
            _to_number(r), _to_number(g), _to_number(b),
            _to_number(a) if a is not None else 1.0,
        )

    m = _RECT2_RE.match(s)
    if m:
        return VRect2(*(_to_number(g) for g in m.groups()))

    m = _NODEPATH_RE.match(s)
    if m:
        return VNodePath(m.group(1))

    if _RESOURCE_RE.match(s):
        return VResourceRef(s)

    if s.startswith("[") and s.endswith("]"):
        inner = s[1:-1].strip()
        if not inner:
            return VList([])
        return VList([decode(item) for item in split_top_level(inner)])

    return VOpaque(s)


# ---------------------------------------------------------------------------
# encode
# ---------------------------------------------------------------------------

def encode(value: object) -> str:
    """Render *value* as Godot expression text.

    Accepts Value instances as well as plain Python data.  Mappings are
    matched by shape: ``x,y,w,h`` → Rect2, ``x,y,z`` → Vector3, ``x,y`` →
    Vector2, ``r,g,b`` → Color (alpha defaults to 1).
    """
    if isinstance(value, _VALUE_TYPES):
        return str(value)
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return str(VText(value))
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(encode(v) for v in value) + "]"
    if isinstance(value, Mapping):
        return _encode_mapping(value)
    return str(value)


def _encode_mapping(obj: Mapping) -> str:
    keys = set(obj)
    if {"x", "y", "w", "h"} <= keys:
        return str(VRect2(obj["x"], obj["y"], obj["w"], obj["h"]))
    if {"x", "y", "z"} <= keys:
        return str(VVector3(obj["x"], obj["y"], obj["z"]))
    if {"x", "y"} <= keys:
        return str(VVector2(obj["x"], obj["y"]))
    if {"r", "g", "b"} <= keys:
        return str(VColor(obj["r"], obj["g"], obj["b"], obj.get("a", 1)))
    return str(obj)
