"""Document types produced by the scene reader and the settings store."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SceneHeader:
    format: int = 3
    load_steps: int = 1
    uid: str | None = None


@dataclass
class ExtResource:
    type: str
    path: str
    id: str
    uid: str | None = None


@dataclass
class SubResource:
    type: str
    id: str
    properties: dict[str, str] = field(default_factory=dict)


@dataclass
class SceneNode:
    name: str
    type: str | None = None
    parent: str | None = None  # None = root, "." = child of root, "A/B" = nested
    instance: str | None = None  # raw ExtResource("id") text
    properties: dict[str, str] = field(default_factory=dict)
    groups: list[str] = field(default_factory=list)


@dataclass
class Connection:
    signal: str
    from_: str
    to: str
    method: str
    flags: int | None = None


@dataclass
class SceneDocument:
    """One parsed ``.tscn`` text.  Property values stay as raw expressions."""

    header: SceneHeader = field(default_factory=SceneHeader)
    ext_resources: list[ExtResource] = field(default_factory=list)
    sub_resources: list[SubResource] = field(default_factory=list)
    nodes: list[SceneNode] = field(default_factory=list)
    connections: list[Connection] = field(default_factory=list)
    raw: str = ""

    # -- Convenience accessors ------------------------------------------

    @property
    def root(self) -> SceneNode | None:
        """The first node declared without a parent attribute."""
        for node in self.nodes:
            if node.parent is None:
                return node
        return None

    def ext_resource(self, id_: str) -> ExtResource | None:
        for res in self.ext_resources:
            if res.id == id_:
                return res
        return None

    def sub_resource(self, id_: str) -> SubResource | None:
        for res in self.sub_resources:
            if res.id == id_:
                return res
        return None


@dataclass
class SettingsDocument:
    """One parsed ``project.godot`` text.  Section ``""`` holds pre-header keys."""

    sections: dict[str, dict[str, str]] = field(default_factory=lambda: {"": {}})
    raw: str = ""
