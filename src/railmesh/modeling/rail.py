"""Rail meshes: rectangular sections sampled along a path and stitched into a band."""

from __future__ import annotations

import numpy as np

from railmesh.mesh import Mesh, assemble_mesh
from railmesh.modeling.paths import DEFAULT_ARC_SPAN, Arc, PathKind, Straight
from railmesh.modeling.profile import DEFAULT_PROFILE, CrossSectionProfile
from railmesh.validation import ValidationError, validate_segment_count

RING_SIZE = 4
FACES_PER_SEGMENT = 8

# Ring corner order: outer top, outer bottom, inner bottom, inner top.
_OUTER_SIDE = np.array([1.0, 1.0, -1.0, -1.0])
_TOP_SIDE = np.array([1.0, -1.0, -1.0, 1.0])

# Triangles joining ring a (0..3) to ring b (4..7), wound outwards.
_SEGMENT_FACES = np.array(
    [
        [3, 0, 7],  # top
        [7, 0, 4],
        [5, 1, 6],  # bottom
        [6, 1, 2],
        [2, 3, 6],  # inner
        [6, 3, 7],
        [4, 0, 5],  # outer
        [5, 0, 1],
    ],
    dtype=np.int64,
)


def sample(path: PathKind, profile: CrossSectionProfile, segments: int) -> np.ndarray:
    """Return the ``4 * (segments + 1)`` ring corners of ``profile`` swept along ``path``.

    Row ``4 * i + k`` holds corner ``k`` of ring ``i`` where ``k`` runs outer
    top, outer bottom, inner bottom, inner top.
    """

    n = validate_segment_count(segments)
    t = np.arange(n + 1, dtype=float) / n
    z = np.broadcast_to(_TOP_SIDE * (profile.height / 2.0), (n + 1, RING_SIZE))

    if isinstance(path, Straight):
        x = np.broadcast_to(_OUTER_SIDE * (profile.width / 2.0), (n + 1, RING_SIZE))
        y = np.broadcast_to((t * path.length)[:, None], (n + 1, RING_SIZE))
    elif isinstance(path, Arc):
        if not np.isclose(path.radius_outer - path.radius_inner, profile.width):
            raise ValidationError("Arc radii must be separated by the profile width.")
        theta = path.angular_span * t
        radii = np.where(_OUTER_SIDE > 0, path.radius_outer, path.radius_inner)
        x = radii[None, :] * np.cos(theta)[:, None] - path.radius
        y = radii[None, :] * np.sin(theta)[:, None]
    else:
        raise TypeError(f"Unsupported path kind: {type(path).__name__}")

    return np.stack([x, y, z], axis=-1).reshape(-1, 3)


def stitch(segments: int) -> np.ndarray:
    """Return the ``8 * segments`` triangles joining consecutive rings."""

    n = validate_segment_count(segments)
    offsets = RING_SIZE * np.arange(n, dtype=np.int64)
    return (_SEGMENT_FACES[None, :, :] + offsets[:, None, None]).reshape(-1, 3)


def make_rail(path: PathKind, profile: CrossSectionProfile = DEFAULT_PROFILE, segments: int = 16) -> Mesh:
    return assemble_mesh(sample(path, profile, segments), stitch(segments))


def make_straight(profile: CrossSectionProfile = DEFAULT_PROFILE, segments: int = 16) -> Mesh:
    """Straight rail piece as long as the profile's nominal length."""
    return make_rail(Straight.from_profile(profile), profile, segments)


def make_curve(
    profile: CrossSectionProfile = DEFAULT_PROFILE,
    segments: int = 16,
    angular_span: float = DEFAULT_ARC_SPAN,
) -> Mesh:
    """Curved rail piece whose centerline radius is the profile's nominal length."""
    return make_rail(Arc.from_profile(profile, angular_span), profile, segments)


__all__ = ["sample", "stitch", "make_rail", "make_straight", "make_curve"]
