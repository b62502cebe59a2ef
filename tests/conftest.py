from __future__ import annotations

import os

import pytest

from railmesh.modeling import DEFAULT_PROFILE, make_curve, make_straight
from railmesh.scene import MeshRegistry


def pytest_configure():
    os.environ.setdefault("PYVISTA_OFF_SCREEN", "true")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def profile():
    return DEFAULT_PROFILE


@pytest.fixture
def registry(profile) -> MeshRegistry:
    reg = MeshRegistry()
    reg.add("curve", make_curve(profile, segments=16))
    reg.add("straight", make_straight(profile, segments=16))
    return reg
