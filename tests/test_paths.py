from __future__ import annotations

import math

import pytest

from railmesh.modeling import DEFAULT_ARC_SPAN, DEFAULT_PROFILE, Arc, CrossSectionProfile, Straight
from railmesh.validation import ValidationError


def test_default_profile_is_normalized():
    assert DEFAULT_PROFILE.length == pytest.approx(1.0)
    assert DEFAULT_PROFILE.width == pytest.approx(3.8 / 21.5)
    assert DEFAULT_PROFILE.height == pytest.approx(0.8 / 21.5)


def test_profile_from_measurements_with_scale():
    profile = CrossSectionProfile.from_measurements(20.0, 4.0, 1.0, scale=10.0)
    assert (profile.length, profile.width, profile.height) == pytest.approx((2.0, 0.4, 0.1))


@pytest.mark.parametrize("dims", [(0.0, 1.0, 1.0), (1.0, -1.0, 1.0), (1.0, 1.0, float("nan")), (1.0, 1.0, "x")])
def test_profile_rejects_invalid_dimensions(dims):
    with pytest.raises(ValidationError):
        CrossSectionProfile(*dims)


def test_profile_scaled():
    profile = CrossSectionProfile(1.0, 0.2, 0.1).scaled(2.0)
    assert (profile.length, profile.width, profile.height) == pytest.approx((2.0, 0.4, 0.2))


def test_straight_from_profile():
    assert Straight.from_profile(DEFAULT_PROFILE).length == pytest.approx(1.0)


def test_straight_rejects_zero_length():
    with pytest.raises(ValidationError):
        Straight(length=0.0)


def test_arc_from_profile():
    arc = Arc.from_profile(DEFAULT_PROFILE)
    assert arc.radius_outer - arc.radius_inner == pytest.approx(DEFAULT_PROFILE.width)
    assert arc.radius == pytest.approx(DEFAULT_PROFILE.length)
    assert arc.angular_span == pytest.approx(math.pi / 4)
    assert DEFAULT_ARC_SPAN == pytest.approx(math.pi / 4)


@pytest.mark.parametrize("span", [-0.1, 7.0, float("inf")])
def test_arc_rejects_span_out_of_range(span):
    with pytest.raises(ValidationError):
        Arc(radius_outer=1.1, radius_inner=0.9, angular_span=span)


def test_arc_rejects_swapped_radii():
    with pytest.raises(ValidationError):
        Arc(radius_outer=0.9, radius_inner=1.1)


def test_arc_requires_room_for_the_width():
    with pytest.raises(ValidationError):
        Arc.from_profile(CrossSectionProfile(length=1.0, width=2.5, height=0.1))


@pytest.mark.parametrize("span", ["wide", None])
def test_arc_rejects_non_numeric_span(span):
    with pytest.raises(ValidationError):
        Arc(radius_outer=1.1, radius_inner=0.9, angular_span=span)
