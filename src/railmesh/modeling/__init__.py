"""Modeling utilities: cross-section profiles, rail paths and the rail mesh builder."""

from __future__ import annotations

from .profile import CrossSectionProfile, DEFAULT_PROFILE
from .paths import DEFAULT_ARC_SPAN, Arc, PathKind, Straight
from .rail import make_curve, make_rail, make_straight, sample, stitch

__all__ = [
    "CrossSectionProfile",
    "DEFAULT_PROFILE",
    "DEFAULT_ARC_SPAN",
    "Arc",
    "Straight",
    "PathKind",
    "sample",
    "stitch",
    "make_rail",
    "make_straight",
    "make_curve",
]
