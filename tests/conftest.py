"""Shared sample texts."""

import pytest

MINIMAL_TSCN = """[gd_scene format=3]

[node name="Root" type="Node2D"]
"""

COMPLEX_TSCN = """[gd_scene load_steps=4 format=3 uid="uid://abc123"]

[ext_resource type="Script" uid="uid://def456" path="res://player.gd" id="1_abc"]
[ext_resource type="Texture2D" uid="uid://ghi789" path="res://icon.svg" id="2_def"]

[sub_resource type="RectangleShape2D" id="RectangleShape2D_abc"]
size = Vector2(32, 32)

[sub_resource type="CircleShape2D" id="CircleShape2D_def"]
radius = 16.0

[node name="Player" type="CharacterBody2D"]
script = ExtResource("1_abc")
position = Vector2(100, 200)
speed = 300

[node name="Sprite" type="Sprite2D" parent="."]
texture = ExtResource("2_def")
scale = Vector2(0.5, 0.5)

[node name="CollisionShape" type="CollisionShape2D" parent="."]
shape = SubResource("RectangleShape2D_abc")

[node name="Camera" type="Camera2D" parent="."]
zoom = Vector2(2, 2)

[node name="UI" type="CanvasLayer" parent="."]

[node name="Label" type="Label" parent="UI"]
text = "Hello"

[connection signal="body_entered" from="Player" to="Player" method="_on_body_entered"]
[connection signal="pressed" from="UI/Label" to="Player" method="_on_label_pressed" flags=1]
"""

SCENE_WITH_GROUPS = """[gd_scene format=3]

[node name="Root" type="Node2D"]

[node name="Enemy" type="CharacterBody2D" parent="." groups=["enemies", "damageable"]]

[node name="Coin" type="Area2D" parent="." groups=["collectibles"]]
"""

SAMPLE_PROJECT_GODOT = """; Engine configuration file.
; It's best edited using the editor UI and not directly.

config_version=5

[application]

config/name="TestProject"
run/main_scene="res://scenes/main.tscn"
config/features=PackedStringArray("4.4", "GL Compatibility")

[display]

window/size/viewport_width=1280
window/size/viewport_height=720

[input]

move_left={"deadzone": 0.5, "events": [Object(InputEventKey,"keycode":65)]}
move_right={"deadzone": 0.5, "events": [Object(InputEventKey,"keycode":68)]}
jump={
"deadzone": 0.5,
"events": [Object(InputEventKey,"keycode":32), Object(InputEventJoypadButton,"button_index":0)]
}

[rendering]

renderer/rendering_method="gl_compatibility"
"""


@pytest.fixture
def minimal_tscn() -> str:
    return MINIMAL_TSCN


@pytest.fixture
def complex_tscn() -> str:
    return COMPLEX_TSCN


@pytest.fixture
def scene_with_groups() -> str:
    return SCENE_WITH_GROUPS


@pytest.fixture
def project_godot() -> str:
    return SAMPLE_PROJECT_GODOT


# Label text with literal newlines; the second line looks like a header
SCENE_WITH_TEXT = """[gd_scene format=3]

[node name="M" type="Control"]
text = "one
two"

[node name="L" type="Label" parent="."]
text = "Hello
[b]World[/b]"
visible = false

[node name="After" type="Node" parent="."]
"""


@pytest.fixture
def scene_with_text() -> str:
    return SCENE_WITH_TEXT
