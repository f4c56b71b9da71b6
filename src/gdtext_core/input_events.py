"""Input event expressions for the ``[input]`` section.

Key and mouse button names map to Godot 4's ``@GlobalScope.Key`` and
``MouseButton`` values.  ``event_expr`` renders the ``Object(...)`` text the
editor writes into an action's ``"events"`` list.
"""

from __future__ import annotations

from .errors import InvalidArgument

KEY_CODES: dict[str, int] = {
    # Letters and digits are their ASCII codes
    **{f"KEY_{chr(c)}": c for c in range(ord("A"), ord("Z") + 1)},
    **{f"KEY_{d}": ord(str(d)) for d in range(10)},
    "KEY_SPACE": 32,
    "KEY_ESCAPE": 4194305,
    "KEY_TAB": 4194306,
    "KEY_BACKSPACE": 4194308,
    "KEY_ENTER": 4194309,
    "KEY_INSERT": 4194311,
    "KEY_DELETE": 4194312,
    "KEY_PAUSE": 4194313,
    "KEY_HOME": 4194315,
    "KEY_END": 4194316,
    "KEY_LEFT": 4194319,
    "KEY_UP": 4194320,
    "KEY_RIGHT": 4194321,
    "KEY_DOWN": 4194322,
    "KEY_PAGEUP": 4194323,
    "KEY_PAGEDOWN": 4194324,
    "KEY_SHIFT": 4194325,
    "KEY_CTRL": 4194326,
    "KEY_ALT": 4194328,
    "KEY_META": 4194329,
    **{f"KEY_F{n}": 4194331 + n for n in range(1, 13)},
}

MOUSE_BUTTONS: dict[str, int] = {
    "MOUSE_BUTTON_LEFT": 1,
    "MOUSE_BUTTON_RIGHT": 2,
    "MOUSE_BUTTON_MIDDLE": 3,
    "MOUSE_BUTTON_WHEEL_UP": 4,
    "MOUSE_BUTTON_WHEEL_DOWN": 5,
    "MOUSE_BUTTON_WHEEL_LEFT": 6,
    "MOUSE_BUTTON_WHEEL_RIGHT": 7,
}

EVENT_TYPES = ("key", "mouse", "joypad")

_COMMON = '"resource_local_to_scene":false,"resource_name":"","device":-1'
_MODIFIERS = (
    '"window_id":0,"alt_pressed":false,"shift_pressed":false,'
    '"ctrl_pressed":false,"meta_pressed":false'
)


def _lookup(table: dict[str, int], value: str, what: str) -> int:
    """Resolve a table name (case-insensitive) or a plain integer."""
    code = table.get(value.upper())
    if code is not None:
        return code
    try:
        return int(value)
    except ValueError:
        raise InvalidArgument(
            f"Unknown {what}: {value}",
            suggestion=f"Valid {what}s: {', '.join(table)}",
        ) from None


def key_code(value: str) -> int:
    return _lookup(KEY_CODES, value, "key")


def mouse_button(value: str) -> int:
    return _lookup(MOUSE_BUTTONS, value, "mouse button")


def event_expr(event_type: str, event_value: str) -> str:
    """``Object(InputEvent…)`` text for one key, mouse or joypad event."""
    if event_type == "key":
        return (
            f"Object(InputEventKey,{_COMMON},{_MODIFIERS},"
            f'"pressed":false,"keycode":0,"physical_keycode":{key_code(event_value)},'
            '"key_label":0,"unicode":0,"location":0,"echo":false,"script":null)'
        )
    if event_type == "mouse":
        return (
            f"Object(InputEventMouseButton,{_COMMON},{_MODIFIERS},"
            '"button_mask":0,"position":Vector2(0,0),"global_position":Vector2(0,0),'
            f'"factor":1.0,"button_index":{mouse_button(event_value)},'
            '"canceled":false,"pressed":true,"double_click":false,"script":null)'
        )
    if event_type == "joypad":
        try:
            button = int(event_value)
        except ValueError:
            raise InvalidArgument(
                f"Invalid joypad button: {event_value}",
                suggestion="Use the numeric button index, e.g. 0.",
            ) from None
        return (
            f"Object(InputEventJoypadButton,{_COMMON},"
            f'"button_index":{button},"pressure":0.0,"pressed":true,"script":null)'
        )
    raise InvalidArgument(
        f"Unknown event type: {event_type}",
        suggestion=f"Valid types: {', '.join(EVENT_TYPES)}.",
    )
