"""gdtext-core — readers and text patchers for Godot scene and settings files."""

from .codec import decode, encode
from .document import (
    Connection,
    ExtResource,
    SceneDocument,
    SceneHeader,
    SceneNode,
    SettingsDocument,
    SubResource,
)
from .errors import AccessDenied, GdTextError, InvalidArgument, NotFound, format_error
from .getter import (
    find_connection,
    find_node,
    get_node_path,
    get_property,
    get_raw_property,
)
from .reader import parse_scene
from .sandbox import resolve
from .setter import (
    add_connection,
    add_node,
    remove_connection,
    remove_node,
    rename_node,
    set_property,
)
from .settings import (
    add_input_action,
    add_input_event,
    get_input_actions,
    get_setting,
    list_input_events,
    parse_settings,
    remove_input_action,
    set_setting,
)
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
from .repl import GdRepl

__all__ = [
    "parse_scene",
    "parse_settings",
    "decode",
    "encode",
    "resolve",
    "find_node",
    "find_connection",
    "get_node_path",
    "get_property",
    "get_raw_property",
    "add_node",
    "remove_node",
    "rename_node",
    "set_property",
    "add_connection",
    "remove_connection",
    "get_setting",
    "set_setting",
    "get_input_actions",
    "list_input_events",
    "add_input_action",
    "add_input_event",
    "remove_input_action",
    "SceneDocument",
    "SceneHeader",
    "SceneNode",
    "ExtResource",
    "SubResource",
    "Connection",
    "SettingsDocument",
    "Null",
    "Value",
    "VBool",
    "VColor",
    "VList",
    "VNodePath",
    "VNumber",
    "VOpaque",
    "VRect2",
    "VResourceRef",
    "VText",
    "VVector2",
    "VVector3",
    "_Null",
    "GdTextError",
    "NotFound",
    "AccessDenied",
    "InvalidArgument",
    "format_error",
    "GdRepl",
]
