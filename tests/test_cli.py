"""Tests for CLI helpers: _fmt_inspect, _show_*, _process_line, main."""

import io

import pytest

from conftest import COMPLEX_TSCN, SAMPLE_PROJECT_GODOT
from gdtext_core import GdRepl
from gdtext_core.reader import parse_scene
from gdtext_core.repl import (
    ROOT_ENV,
    _build_parser,
    _fmt_inspect,
    _process_line,
    main,
)


@pytest.fixture
def project(tmp_path):
    root = tmp_path / "game"
    root.mkdir()
    (root / "player.tscn").write_text(COMPLEX_TSCN, encoding="utf-8")
    (root / "project.godot").write_text(SAMPLE_PROJECT_GODOT, encoding="utf-8")
    return root


def run(repl, *lines):
    out = io.StringIO()
    for line in lines:
        _process_line(repl, line, out)
    return out.getvalue()


# ---------------------------------------------------------------------------
# _fmt_inspect
# ---------------------------------------------------------------------------

def test_fmt_inspect_root():
    scene = parse_scene(COMPLEX_TSCN)
    out = _fmt_inspect(scene, scene.nodes[0])
    assert out.startswith("CharacterBody2D Player {")
    assert "speed    = 300" in out
    assert "position = Vector2(100, 200)" in out
    assert out.endswith("}")

def test_fmt_inspect_nested_path():
    scene = parse_scene(COMPLEX_TSCN)
    out = _fmt_inspect(scene, scene.nodes[-1])
    assert out.startswith("Label UI/Label {")
    assert 'text = "Hello"' in out

def test_fmt_inspect_groups_and_instance():
    scene = parse_scene(
        '[node name="R" type="Node"]\n\n'
        '[node name="E" parent="." groups=["enemies"] instance=ExtResource("1")]\n'
    )
    out = _fmt_inspect(scene, scene.nodes[1])
    assert out.startswith('? E (instance ExtResource("1")) {')
    assert "groups: enemies" in out


# ---------------------------------------------------------------------------
# _process_line
# ---------------------------------------------------------------------------

def test_quit(project):
    assert _process_line(GdRepl(project), ":q", io.StringIO()) is False
    assert _process_line(GdRepl(project), ":quit", io.StringIO()) is False

def test_blank_line(project):
    assert _process_line(GdRepl(project), "   ", io.StringIO()) is True

def test_open_and_query(project):
    out = run(GdRepl(project), ":open player.tscn", "? Player.speed")
    assert "loaded" in out
    assert out.endswith("300\n")

def test_nodes_and_connections(project):
    out = run(GdRepl(project), ":open player.tscn", ":nodes", ":conns")
    assert "  Player  (CharacterBody2D)" in out
    assert "  UI/Label  (Label)" in out
    assert "  Player.body_entered -> Player._on_body_entered()" in out
    assert "  UI/Label.pressed -> Player._on_label_pressed()  flags=1" in out

def test_inspect_commands(project):
    out = run(GdRepl(project), ":open player.tscn", "inspect(Sprite)", "i(Camera)")
    assert "Sprite2D Sprite {" in out
    assert "Camera2D Camera {" in out

def test_sections_and_actions(project):
    out = run(GdRepl(project), ":open project.godot", ":sections", ":actions")
    assert "  [application]  3 keys" in out
    assert "  jump" in out

def test_actions_on_scene(project):
    out = run(GdRepl(project), ":open player.tscn", ":actions")
    assert "Error [INVALID_ARGS]: Loaded file is not a settings file" in out

def test_edit_and_write(project):
    out = run(
        GdRepl(project),
        ":open player.tscn",
        ":set Player.speed 450",
        ":mv Camera Cam",
        ":rm Sprite",
        ":write",
    )
    assert "saved" in out
    text = (project / "player.tscn").read_text(encoding="utf-8")
    assert "speed = 450" in text
    assert '[node name="Cam" type="Camera2D" parent="."]' in text
    assert '[node name="Sprite"' not in text

def test_sandbox_rejection(project):
    out = run(GdRepl(project), ":open ../outside.tscn")
    assert "Error [ACCESS_DENIED]: Access denied: ../outside.tscn" in out
    assert "Suggestion:" in out

def test_usage_errors(project):
    out = run(GdRepl(project), ":open player.tscn", ":set Player.speed", ":mv Camera")
    assert "Usage: :set <target> <value>" in out
    assert "Usage: :mv <old> <new>" in out

def test_unknown_command(project):
    out = run(GdRepl(project), "frobnicate")
    assert "Error [INVALID_ARGS]: Unknown command: frobnicate" in out

def test_open_not_utf8(project):
    (project / "bad.tscn").write_bytes(b"[gd_scene format=3]\n\xff\n")
    repl = GdRepl(project)
    out = io.StringIO()
    assert _process_line(repl, ":open bad.tscn", out) is True
    assert "Error [INVALID_ARGS]: File is not valid UTF-8: bad.tscn" in out.getvalue()
    assert repl.path is None


# ---------------------------------------------------------------------------
# Argument parsing and main()
# ---------------------------------------------------------------------------

def test_parser_defaults(monkeypatch):
    monkeypatch.delenv(ROOT_ENV, raising=False)
    args = _build_parser().parse_args([])
    assert args.root == "."
    assert args.file is None

def test_parser_root_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv(ROOT_ENV, str(tmp_path))
    assert _build_parser().parse_args([]).root == str(tmp_path)

def _feed(monkeypatch, lines):
    it = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)

def test_main_session(monkeypatch, capsys, project):
    _feed(monkeypatch, ["? Player.position", ":q", "? Player.speed"])
    main(["--root", str(project), "player.tscn"])
    out = capsys.readouterr().out
    assert "Vector2(100, 200)" in out
    assert "300" not in out.split("Vector2(100, 200)")[1]

def test_main_stops_at_eof(monkeypatch, capsys, project):
    _feed(monkeypatch, [":open project.godot", "? application/config/name"])
    main(["--root", str(project)])
    assert '"TestProject"' in capsys.readouterr().out
