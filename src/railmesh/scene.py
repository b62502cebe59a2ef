from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

import numpy as np

from railmesh.mesh import Mesh
from railmesh.modeling._color import DEFAULT_COLOR, RGBA, normalize_color
from railmesh.modeling.paths import DEFAULT_ARC_SPAN


def _normalize_axis(axis: Sequence[float]) -> np.ndarray:
    vec = np.asarray(axis, dtype=float).reshape(3)
    norm = np.linalg.norm(vec)
    if norm == 0:
        raise ValueError("Rotation axis must be non-zero.")
    return vec / norm


def _translation_matrix(offset: Sequence[float]) -> np.ndarray:
    dx, dy, dz = np.asarray(offset, dtype=float).reshape(3)
    mat = np.eye(4)
    mat[:3, 3] = [dx, dy, dz]
    return mat


def _rotation_matrix(axis: Sequence[float], angle_deg: float) -> np.ndarray:
    x, y, z = _normalize_axis(axis)
    angle_rad = np.deg2rad(angle_deg)
    c = np.cos(angle_rad)
    s = np.sin(angle_rad)
    C = 1.0 - c
    return np.array(
        [
            [x * x * C + c, x * y * C - z * s, x * z * C + y * s, 0.0],
            [y * x * C + z * s, y * y * C + c, y * z * C - x * s, 0.0],
            [z * x * C - y * s, z * y * C + x * s, z * z * C + c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=float,
    )


class MeshRegistry:
    """Named meshes shared by every scene that is handed this registry."""

    def __init__(self) -> None:
        self._meshes: Dict[str, Mesh] = {}

    def add(self, name: str, mesh: Mesh, replace: bool = False) -> Mesh:
        if not name:
            raise ValueError("Mesh name must be non-empty.")
        if name in self._meshes and not replace:
            raise ValueError(f"A mesh named {name!r} is already registered.")
        self._meshes[name] = mesh
        return mesh

    def get(self, name: str) -> Mesh:
        try:
            return self._meshes[name]
        except KeyError:
            raise KeyError(f"No mesh named {name!r} is registered.") from None

    def names(self) -> list[str]:
        return list(self._meshes)

    def __contains__(self, name: object) -> bool:
        return name in self._meshes

    def __len__(self) -> int:
        return len(self._meshes)


@dataclass
class SceneNode:
    """One placed instance of a registered mesh."""

    mesh_name: str
    matrix: np.ndarray = field(default_factory=lambda: np.eye(4))
    color: RGBA = DEFAULT_COLOR

    def rotate(self, axis: Sequence[float], angle_deg: float) -> "SceneNode":
        """Rotate about ``axis`` through the world origin, after existing transforms."""
        self.matrix = _rotation_matrix(axis, angle_deg) @ self.matrix
        return self

    def translate(self, offset: Sequence[float]) -> "SceneNode":
        self.matrix = _translation_matrix(offset) @ self.matrix
        return self

    def set_color(self, color: Sequence[float] | str) -> "SceneNode":
        self.color = normalize_color(color)
        return self


class Scene:
    """Instances of registry meshes, each with its own transform and color."""

    def __init__(self, registry: MeshRegistry) -> None:
        self.registry = registry
        self.nodes: List[SceneNode] = []

    def add_geom_with_name(self, name: str) -> SceneNode:
        self.registry.get(name)
        node = SceneNode(mesh_name=name)
        self.nodes.append(node)
        return node

    def world_meshes(self) -> list[tuple[Mesh, RGBA]]:
        return [(self.registry.get(node.mesh_name).transformed(node.matrix), node.color) for node in self.nodes]


def default_layout(
    registry: MeshRegistry,
    color: Sequence[float] | str = DEFAULT_COLOR,
    arc_span: float = DEFAULT_ARC_SPAN,
    radius: float = 1.0,
    straight_length: float = 1.0,
) -> Scene:
    """Straight piece followed by two curved pieces, laid out end to end.

    Expects ``"curve"`` and ``"straight"`` meshes in ``registry``. ``arc_span``
    (radians), ``radius`` and ``straight_length`` must describe those meshes
    so that the pieces meet.
    """

    scene = Scene(registry)
    first = scene.add_geom_with_name("curve")
    straight = scene.add_geom_with_name("straight")
    second = scene.add_geom_with_name("curve")

    # The first curve turns about (straight_length, radius); the second picks
    # up where it ends, already turned by arc_span.
    joint = (
        straight_length + radius * math.sin(arc_span),
        radius * (1.0 - math.cos(arc_span)),
        0.0,
    )
    first.rotate((0.0, 0.0, 1.0), -90.0).translate((straight_length, 0.0, 0.0))
    second.rotate((0.0, 0.0, 1.0), math.degrees(arc_span) - 90.0).translate(joint)
    straight.rotate((0.0, 0.0, 1.0), -90.0)

    for node in scene.nodes:
        node.set_color(color)
    return scene
