"""Build the curve and straight pieces and show the three-piece layout."""

from __future__ import annotations

from railmesh.modeling import DEFAULT_PROFILE, make_curve, make_straight
from railmesh.preview import RailPreviewer
from railmesh.scene import MeshRegistry, default_layout


def build() -> MeshRegistry:
    registry = MeshRegistry()
    registry.add("curve", make_curve(DEFAULT_PROFILE, segments=16))
    registry.add("straight", make_straight(DEFAULT_PROFILE, segments=16))
    return registry


if __name__ == "__main__":
    RailPreviewer().show(default_layout(build()))
