"""Read-only lookups over a parsed SceneDocument."""

from __future__ import annotations

from .codec import decode
from .document import Connection, SceneDocument, SceneNode
from .values import Value


def find_node(doc: SceneDocument, name: str) -> SceneNode | None:
    """Return the first node called *name*.

    A name containing ``/`` is also tried as a node path (``"UI/Label"``)
    when no node carries it literally.
    """
    for node in doc.nodes:
        if node.name == name:
            return node
    if "/" in name:
        for node in doc.nodes:
            if get_node_path(doc, node) == name:
                return node
    return None


def get_node_path(doc: SceneDocument, node: SceneNode) -> str:
    """Path of *node* relative to the scene root.

    - root (no parent)   → ``name``
    - ``parent="."``     → ``name``
    - ``parent="A/B"``   → ``"A/B/name"``
    """
    if node.parent is None or node.parent == ".":
        return node.name
    return f"{node.parent}/{node.name}"


def get_raw_property(doc: SceneDocument, node_name: str, key: str) -> str | None:
    node = find_node(doc, node_name)
    if node is None:
        return None
    return node.properties.get(key)


def get_property(doc: SceneDocument, node_name: str, key: str) -> Value | None:
    """Decoded value of *key* on *node_name*; None if the node or key is absent."""
    raw = get_raw_property(doc, node_name, key)
    if raw is None:
        return None
    return decode(raw)


def find_connection(
    doc: SceneDocument, signal: str, from_: str, to: str, method: str
) -> Connection | None:
    for conn in doc.connections:
        if (
            conn.signal == signal
            and conn.from_ == from_
            and conn.to == to
            and conn.method == method
        ):
            return conn
    return None
