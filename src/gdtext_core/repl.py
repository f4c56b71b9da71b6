"""GdRepl — interactive inspector for scene and settings files.

Also provides the ``gdtext-repl`` CLI entry point via ``main()``.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import IO

from .codec import decode
from .document import SceneDocument, SceneNode, SettingsDocument
from .errors import GdTextError, InvalidArgument, NotFound, format_error
from .getter import find_node, get_node_path, get_property
from .reader import parse_scene
from .sandbox import resolve
from .setter import remove_node, rename_node, set_property
from .settings import get_input_actions, get_setting, parse_settings, set_setting
from .values import Value

_LOG = logging.getLogger(__name__)

ROOT_ENV = "GDTEXT_ROOT"
LOG_LEVEL_ENV = "GDTEXT_LOG_LEVEL"


# ---------------------------------------------------------------------------
# GdRepl class (notebook / programmatic use)
# ---------------------------------------------------------------------------

class GdRepl:
    """Holds one loaded file and applies queries / patches to it.

    Usage::

        repl = GdRepl("/path/to/project")
        repl.open("scenes/player.tscn")
        repl.query("Player.position")       # → VVector2(100, 200)
        repl.set("Player.speed", "500")
        repl.write()

    Every path goes through the sandbox, so nothing outside *root* is read
    or written.
    """

    def __init__(self, root: str | os.PathLike) -> None:
        self.root = Path(root).resolve()
        self.reset()

    def reset(self) -> None:
        """Forget the loaded file and any unsaved edits."""
        self.path: Path | None = None
        self.text = ""
        self.scene: SceneDocument | None = None
        self.settings: SettingsDocument | None = None

    # -- Loading / saving -----------------------------------------------

    def open(self, user_path: str) -> Path:
        path = resolve(self.root, user_path)
        if not path.is_file():
            raise NotFound(f"File not found: {user_path}", suggestion="Check the file path.")
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidArgument(
                f"File is not valid UTF-8: {user_path}",
                suggestion="Godot text files are UTF-8; re-save the file as UTF-8.",
            ) from exc
        self.reset()
        self.path = path
        self._load(text)
        _LOG.info("opened %s", path)
        return path

    def write(self) -> Path:
        path = self._require_file()
        path.write_text(self.text, encoding="utf-8")
        _LOG.info("wrote %s", path)
        return path

    def _load(self, text: str) -> None:
        self.text = text
        is_scene_file = self.path is not None and self.path.suffix == ".tscn"
        if is_scene_file or text.lstrip().startswith("[gd_scene"):
            self.scene = parse_scene(text)
            self.settings = None
        else:
            self.settings = parse_settings(text)
            self.scene = None

    def _require_file(self) -> Path:
        if self.path is None:
            raise InvalidArgument("No file loaded", suggestion="Use :open <path> first.")
        return self.path

    # -- Queries --------------------------------------------------------

    def query(self, expr: str) -> Value:
        """Decoded value of ``Node.property`` (scenes) or ``section/key`` (settings)."""
        self._require_file()
        if self.scene is not None:
            node_name, key = _split_target(expr)
            if find_node(self.scene, node_name) is None:
                raise NotFound(f"Node not found: {node_name}")
            value = get_property(self.scene, node_name, key)
            if value is None:
                raise NotFound(f"Property not found: {expr}")
            return value
        raw = get_setting(self.settings, expr)
        if raw is None:
            raise NotFound(f"Setting not found: {expr}")
        return decode(raw)

    def node(self, name: str) -> SceneNode:
        scene = self._require_scene()
        node = find_node(scene, name)
        if node is None:
            raise NotFound(f"Node not found: {name}")
        return node

    # -- Edits (in memory until write()) --------------------------------

    def set(self, target: str, value: str) -> None:
        self._require_file()
        if self.scene is not None:
            node_name, key = _split_target(target)
            self.node(node_name)
            self._load(set_property(self.text, node_name, key, value))
        else:
            if "/" not in target:
                raise InvalidArgument(
                    f"Invalid setting path: {target}",
                    suggestion="Use section/key, e.g. application/config/name.",
                )
            self._load(set_setting(self.text, target, value))

    def remove(self, name: str) -> None:
        self.node(name)
        self._load(remove_node(self.text, name))

    def rename(self, old: str, new: str) -> None:
        self.node(old)
        if find_node(self.scene, new) is not None:
            raise InvalidArgument(f'Node "{new}" already exists')
        self._load(rename_node(self.text, old, new))

    def _require_scene(self) -> SceneDocument:
        self._require_file()
        if self.scene is None:
            raise InvalidArgument("Loaded file is not a scene")
        return self.scene


def _split_target(expr: str) -> tuple[str, str]:
    node_name, _, key = expr.rpartition(".")
    if not node_name or not key:
        raise InvalidArgument(
            f"Invalid target: {expr}", suggestion="Use <node>.<property>."
        )
    return node_name, key


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------

def _fmt_inspect(doc: SceneDocument, node: SceneNode) -> str:
    """Pretty-print a node for inspect() / i()."""
    head = f"{node.type or '?'} {get_node_path(doc, node)}"
    if node.instance:
        head += f" (instance {node.instance})"
    lines = [head + " {"]
    if node.groups:
        lines.append(f"  groups: {', '.join(node.groups)}")
    if node.properties:
        width = max(len(k) for k in node.properties)
        for k, raw in node.properties.items():
            lines.append(f"  {k:<{width}} = {decode(raw)}")
    lines.append("}")
    return "\n".join(lines)


def _show_nodes(repl: GdRepl, dest: IO[str]) -> None:
    scene = repl._require_scene()
    if not scene.nodes:
        print("  (no nodes)", file=dest)
        return
    for node in scene.nodes:
        print(f"  {get_node_path(scene, node)}  ({node.type or '?'})", file=dest)


def _show_connections(repl: GdRepl, dest: IO[str]) -> None:
    scene = repl._require_scene()
    if not scene.connections:
        print("  (no connections)", file=dest)
        return
    for c in scene.connections:
        flags = f"  flags={c.flags}" if c.flags is not None else ""
        print(f"  {c.from_}.{c.signal} -> {c.to}.{c.method}(){flags}", file=dest)


def _show_sections(repl: GdRepl, dest: IO[str]) -> None:
    repl._require_file()
    if repl.settings is None:
        raise InvalidArgument("Loaded file is not a settings file")
    for name, entries in repl.settings.sections.items():
        print(f"  [{name}]  {len(entries)} keys", file=dest)


def _show_actions(repl: GdRepl, dest: IO[str]) -> None:
    repl._require_file()
    if repl.settings is None:
        raise InvalidArgument("Loaded file is not a settings file")
    actions = get_input_actions(repl.settings)
    if not actions:
        print("  (no input actions)", file=dest)
        return
    for name in actions:
        print(f"  {name}", file=dest)


def _process_line(repl: GdRepl, line: str, dest: IO[str]) -> bool:
    """Process one input line.  Returns False when the session should end."""
    line = line.strip()
    if not line:
        return True

    # ── Exit ──────────────────────────────────────────────────────────────
    if line in (":q", ":quit"):
        return False

    try:
        _dispatch(repl, line, dest)
    except GdTextError as exc:
        print(format_error(exc), file=dest)
    return True


def _dispatch(repl: GdRepl, line: str, dest: IO[str]) -> None:
    cmd, _, rest = line.partition(" ")
    rest = rest.strip()

    if cmd == ":open":
        path = repl.open(rest)
        print(f"  loaded {path}", file=dest)
    elif cmd == ":write":
        path = repl.write()
        print(f"  saved {path}", file=dest)
    elif cmd == ":reset":
        repl.reset()
    elif cmd == ":nodes":
        _show_nodes(repl, dest)
    elif cmd == ":conns":
        _show_connections(repl, dest)
    elif cmd == ":sections":
        _show_sections(repl, dest)
    elif cmd == ":actions":
        _show_actions(repl, dest)
    elif cmd == ":set":
        target, _, value = rest.partition(" ")
        if not value.strip():
            raise InvalidArgument("Usage: :set <target> <value>")
        repl.set(target, value.strip())
    elif cmd == ":rm":
        repl.remove(rest)
    elif cmd == ":mv":
        parts = rest.split()
        if len(parts) != 2:
            raise InvalidArgument("Usage: :mv <old> <new>")
        repl.rename(parts[0], parts[1])
    elif cmd == "?":
        print(repl.query(rest), file=dest)
    elif line.startswith(("inspect(", "i(")) and line.endswith(")"):
        name = line[line.index("(") + 1:-1].strip()
        print(_fmt_inspect(repl._require_scene(), repl.node(name)), file=dest)
    else:
        raise InvalidArgument(f"Unknown command: {line}")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gdtext-repl",
        description="Inspect and patch .tscn / project.godot files.",
    )
    parser.add_argument(
        "--root",
        default=os.environ.get(ROOT_ENV, "."),
        help=f"sandbox root; files outside it are refused (env {ROOT_ENV})",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, "WARNING"),
        help=f"logging level (env {LOG_LEVEL_ENV})",
    )
    parser.add_argument("file", nargs="?", help="file to open on start")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Interactive shell (``gdtext-repl`` / ``python -m gdtext_core.repl``)."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    repl = GdRepl(args.root)
    dest: IO[str] = sys.stdout
    if args.file:
        _process_line(repl, f":open {args.file}", dest)

    print("gdtext REPL  (:q to quit  |  :open :write :nodes :conns :sections :actions  |  ? <expr>  i(<node>))")

    while True:
        try:
            line = input("gd> ").strip()
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue

        try:
            if not _process_line(repl, line, dest):
                break
        except OSError as exc:
            print(f"Error: {exc}", file=sys.stderr)


if __name__ == "__main__":
    main()
