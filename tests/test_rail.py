from __future__ import annotations

import math

import numpy as np
import pytest

from railmesh.mesh import analyze_mesh, face_normals
from railmesh.modeling import Arc, CrossSectionProfile, Straight, make_curve, make_rail, make_straight, sample, stitch
from railmesh.modeling.rail import FACES_PER_SEGMENT, RING_SIZE
from railmesh.validation import InvalidSegmentCount, ValidationError


@pytest.mark.parametrize("segments", [1, 2, 7, 16])
def test_buffer_sizes(profile, segments):
    for path in (Straight.from_profile(profile), Arc.from_profile(profile)):
        assert sample(path, profile, segments).shape == (4 * (segments + 1), 3)
    faces = stitch(segments)
    assert faces.shape == (8 * segments, 3)
    assert faces.shape == (FACES_PER_SEGMENT * segments, 3)
    assert faces.max() < RING_SIZE * (segments + 1)
    assert faces.min() >= 0
    assert faces.max() < 4 * (segments + 1)


def test_every_segment_is_stitched():
    faces = stitch(5)
    # the last segment reaches the final ring
    assert faces.max() == 4 * 6 - 1
    assert np.array_equal(np.unique(faces), np.arange(24))


def test_sampling_and_stitching_are_repeatable(profile):
    path = Arc.from_profile(profile)
    first = sample(path, profile, 9)
    second = sample(path, profile, 9)
    assert np.array_equal(first, second)
    assert first is not second
    assert np.array_equal(stitch(9), stitch(9))


def test_straight_endpoints():
    profile = CrossSectionProfile(length=2.0, width=0.4, height=0.1)
    verts = sample(Straight(length=2.0), profile, 1)
    assert np.allclose(verts[0], [0.2, 0.0, 0.05])
    assert np.allclose(verts[1], [0.2, 0.0, -0.05])
    assert np.allclose(verts[2], [-0.2, 0.0, -0.05])
    assert np.allclose(verts[3], [-0.2, 0.0, 0.05])
    assert np.allclose(verts[6], [-0.2, 2.0, -0.05])
    assert np.allclose(verts[7], [-0.2, 2.0, 0.05])


def test_straight_rings_are_evenly_spaced(profile):
    verts = sample(Straight.from_profile(profile), profile, 4).reshape(5, 4, 3)
    assert np.allclose(verts[:, 0, 1], [0.0, 0.25, 0.5, 0.75, 1.0])
    # no twist between rings
    assert np.allclose(verts[:, :, 0], verts[0, :, 0])


def test_ring_dimensions(profile):
    for path in (Straight.from_profile(profile), Arc.from_profile(profile)):
        rings = sample(path, profile, 6).reshape(7, 4, 3)
        outer_top, outer_bottom, inner_bottom, inner_top = (rings[:, k] for k in range(4))
        assert np.allclose(np.linalg.norm(outer_top - inner_top, axis=1), profile.width)
        assert np.allclose(np.linalg.norm(outer_bottom - inner_bottom, axis=1), profile.width)
        assert np.allclose(outer_top[:, 2] - outer_bottom[:, 2], profile.height)
        assert np.allclose(inner_top[:, 2] - inner_bottom[:, 2], profile.height)


def test_arc_points_lie_on_their_circles(profile):
    arc = Arc.from_profile(profile)
    rings = sample(arc, profile, 8).reshape(9, 4, 3)
    centre = np.array([-arc.radius, 0.0])
    outer = np.linalg.norm(rings[:, :2, :2] - centre, axis=2)
    inner = np.linalg.norm(rings[:, 2:, :2] - centre, axis=2)
    assert np.allclose(outer, arc.radius_outer)
    assert np.allclose(inner, arc.radius_inner)


def test_arc_spans_configured_angle(profile):
    arc = Arc.from_profile(profile, angular_span=math.pi / 2)
    rings = sample(arc, profile, 3).reshape(4, 4, 3)
    centre_line = rings.mean(axis=1)
    assert np.allclose(centre_line[0], [0.0, 0.0, 0.0])
    assert np.allclose(centre_line[-1], [-arc.radius, arc.radius, 0.0])


def test_arc_and_straight_share_the_first_ring(profile):
    straight = sample(Straight.from_profile(profile), profile, 3)
    arc = sample(Arc.from_profile(profile), profile, 3)
    assert np.allclose(straight[:4], arc[:4])


def test_zero_span_arc_collapses_without_nan(profile):
    arc = Arc.from_profile(profile, angular_span=0.0)
    rings = sample(arc, profile, 4).reshape(5, 4, 3)
    assert np.all(np.isfinite(rings))
    assert np.allclose(rings, rings[0])
    mesh = make_rail(arc, profile, 4)
    assert mesh.n_faces == 32


def test_segment_winding_order():
    expected = [
        (3, 0, 7),
        (7, 0, 4),
        (5, 1, 6),
        (6, 1, 2),
        (2, 3, 6),
        (6, 3, 7),
        (4, 0, 5),
        (5, 0, 1),
    ]
    faces = stitch(3)
    assert [tuple(int(i) for i in tri) for tri in faces[:8]] == expected
    assert np.array_equal(faces[8:16], faces[:8] + 4)


@pytest.mark.parametrize("builder", [make_straight, make_curve])
def test_faces_point_outwards(profile, builder):
    mesh = builder(profile, segments=8)
    normals = face_normals(mesh)
    centroids = mesh.vertices[mesh.faces].mean(axis=1)
    ring_centres = mesh.vertices.reshape(-1, 4, 3).mean(axis=1)
    centres = (ring_centres[:-1] + ring_centres[1:]) / 2.0
    offsets = centroids - np.repeat(centres, 8, axis=0)
    assert np.all(np.einsum("ij,ij->i", normals, offsets) > 0)


@pytest.mark.parametrize("builder", [make_straight, make_curve])
def test_band_topology(profile, builder):
    analysis = analyze_mesh(builder(profile, segments=12))
    assert analysis.boundary_edges == 8
    assert analysis.nonmanifold_edges == 0
    assert analysis.degenerate_faces == 0
    assert not analysis.has_invalid_vertices


@pytest.mark.parametrize("segments", [0, -3, 1.5, True, None])
def test_invalid_segment_count(profile, segments):
    with pytest.raises(InvalidSegmentCount):
        sample(Straight.from_profile(profile), profile, segments)
    with pytest.raises(InvalidSegmentCount):
        sample(Arc.from_profile(profile), profile, segments)
    with pytest.raises(InvalidSegmentCount):
        stitch(segments)


def test_invalid_segment_count_is_a_value_error(profile):
    with pytest.raises(ValueError):
        make_straight(profile, segments=0)


def test_arc_must_match_profile_width(profile):
    arc = Arc(radius_outer=1.5, radius_inner=0.5)
    with pytest.raises(ValidationError):
        sample(arc, profile, 4)


def test_unknown_path_kind(profile):
    with pytest.raises(TypeError):
        sample("straight", profile, 4)
