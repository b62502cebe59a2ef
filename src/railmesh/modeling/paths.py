from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from railmesh.modeling.profile import CrossSectionProfile
from railmesh.validation import ValidationError, validate_positive

# One eighth of a full circle per curved piece.
DEFAULT_ARC_SPAN = math.pi / 4


@dataclass(frozen=True)
class Straight:
    """Straight rail running from the origin along +y."""

    length: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "length", validate_positive(self.length, "length"))

    @classmethod
    def from_profile(cls, profile: CrossSectionProfile) -> "Straight":
        return cls(length=profile.length)


@dataclass(frozen=True)
class Arc:
    """Circular rail starting at the origin heading +y, bending towards -x.

    The centerline circle has radius ``(radius_outer + radius_inner) / 2`` and
    is centred on ``(-radius, 0, 0)``; ``angular_span`` is in radians.
    """

    radius_outer: float
    radius_inner: float
    angular_span: float = DEFAULT_ARC_SPAN

    def __post_init__(self) -> None:
        outer = validate_positive(self.radius_outer, "radius_outer")
        inner = validate_positive(self.radius_inner, "radius_inner")
        if inner >= outer:
            raise ValidationError("radius_inner must be smaller than radius_outer.")
        try:
            span = float(self.angular_span)
        except (TypeError, ValueError) as exc:
            raise ValidationError("angular_span must be a number.") from exc
        if not np.isfinite(span) or span < 0 or span > 2 * math.pi:
            raise ValidationError("angular_span must be within [0, 2*pi].")
        object.__setattr__(self, "radius_outer", outer)
        object.__setattr__(self, "radius_inner", inner)
        object.__setattr__(self, "angular_span", span)

    @classmethod
    def from_profile(cls, profile: CrossSectionProfile, angular_span: float = DEFAULT_ARC_SPAN) -> "Arc":
        half = profile.width / 2.0
        if half >= profile.length:
            raise ValidationError("Profile width must be smaller than twice its length to form an arc.")
        return cls(
            radius_outer=profile.length + half,
            radius_inner=profile.length - half,
            angular_span=angular_span,
        )

    @property
    def radius(self) -> float:
        return (self.radius_outer + self.radius_inner) / 2.0


PathKind = Straight | Arc


__all__ = ["Arc", "Straight", "PathKind", "DEFAULT_ARC_SPAN"]
