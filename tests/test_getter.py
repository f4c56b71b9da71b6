"""Tests for scene lookups."""

from gdtext_core.getter import (
    find_connection,
    find_node,
    get_node_path,
    get_property,
    get_raw_property,
)
from gdtext_core.reader import parse_scene
from gdtext_core.values import VNumber, VResourceRef, VText, VVector2


def test_find_node(complex_tscn):
    scene = parse_scene(complex_tscn)
    node = find_node(scene, "Sprite")
    assert node is not None
    assert node.type == "Sprite2D"

def test_find_node_missing(complex_tscn):
    assert find_node(parse_scene(complex_tscn), "NonExistent") is None

def test_find_node_by_path(complex_tscn):
    node = find_node(parse_scene(complex_tscn), "UI/Label")
    assert node is not None
    assert node.name == "Label"


# ---------------------------------------------------------------------------
# get_node_path
# ---------------------------------------------------------------------------

def test_node_path_root(complex_tscn):
    scene = parse_scene(complex_tscn)
    assert get_node_path(scene, scene.nodes[0]) == "Player"

def test_node_path_direct_child(complex_tscn):
    scene = parse_scene(complex_tscn)
    assert get_node_path(scene, find_node(scene, "Sprite")) == "Sprite"

def test_node_path_nested(complex_tscn):
    scene = parse_scene(complex_tscn)
    assert get_node_path(scene, find_node(scene, "Label")) == "UI/Label"


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

def test_get_property_decoded(complex_tscn):
    scene = parse_scene(complex_tscn)
    assert get_property(scene, "Player", "speed") == VNumber(300)
    assert get_property(scene, "Player", "position") == VVector2(100, 200)
    assert get_property(scene, "Label", "text") == VText("Hello")
    assert get_property(scene, "Player", "script") == VResourceRef('ExtResource("1_abc")')

def test_get_raw_property(complex_tscn):
    scene = parse_scene(complex_tscn)
    assert get_raw_property(scene, "Sprite", "scale") == "Vector2(0.5, 0.5)"

def test_get_property_missing_key(complex_tscn):
    assert get_property(parse_scene(complex_tscn), "Player", "nonexistent") is None

def test_get_property_missing_node(complex_tscn):
    assert get_property(parse_scene(complex_tscn), "Ghost", "speed") is None


# ---------------------------------------------------------------------------
# Connections
# ---------------------------------------------------------------------------

def test_find_connection(complex_tscn):
    scene = parse_scene(complex_tscn)
    conn = find_connection(scene, "pressed", "UI/Label", "Player", "_on_label_pressed")
    assert conn is not None
    assert conn.flags == 1

def test_find_connection_requires_all_fields(complex_tscn):
    scene = parse_scene(complex_tscn)
    assert find_connection(scene, "pressed", "UI/Label", "Player", "other") is None
