"""Value types for decoded Godot expressions.

``str(value)`` renders the Godot expression text for every variant, so the
codec's ``encode`` is a plain ``str()`` call on these classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass
class VBool:
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass
class VNumber:
    value: int | float

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class VText:
    value: str

    def __str__(self) -> str:
        # Newlines stay literal, as the editor writes them
        escaped = self.value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'


@dataclass
class VVector2:
    x: int | float
    y: int | float

    def __str__(self) -> str:
        return f"Vector2({self.x}, {self.y})"


@dataclass
class VVector3:
    x: int | float
    y: int | float
    z: int | float

    def __str__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"


@dataclass
class VColor:
    r: int | float
    g: int | float
    b: int | float
    a: int | float = 1.0

    def __str__(self) -> str:
        return f"Color({self.r}, {self.g}, {self.b}, {self.a})"


@dataclass
class VRect2:
    x: int | float
    y: int | float
    w: int | float
    h: int | float

    def __str__(self) -> str:
        return f"Rect2({self.x}, {self.y}, {self.w}, {self.h})"


@dataclass
class VNodePath:
    path: str

    def __str__(self) -> str:
        return f'NodePath("{self.path}")'


@dataclass
class VResourceRef:
    """``ExtResource("id")`` / ``SubResource("id")`` kept as the literal call text."""

    expr: str

    @property
    def kind(self) -> str:
        return self.expr.split("(", 1)[0]

    @property
    def id(self) -> str:
        return self.expr[self.expr.index("(") + 1:-1].strip().strip("\"'")

    def __str__(self) -> str:
        return self.expr


@dataclass
class VList:
    items: list["Value"]

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self.items) + "]"


@dataclass
class VOpaque:
    """Anything the codec does not recognise, passed through untouched."""

    text: str

    def __str__(self) -> str:
        return self.text


class _Null:
    """Singleton for the ``null`` literal."""

    _instance: "_Null | None" = None

    def __new__(cls) -> "_Null":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Null"

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return "null"


Null = _Null()

Value = Union[
    VBool, _Null, VNumber, VText, VVector2, VVector3, VColor, VRect2,
    VNodePath, VResourceRef, VList, VOpaque,
]
