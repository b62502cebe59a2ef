from __future__ import annotations

from dataclasses import dataclass

from railmesh.validation import validate_positive

# Model-railway track section, measured in centimeters.
TRACK_LENGTH_CM = 21.5
TRACK_WIDTH_CM = 3.8
TRACK_HEIGHT_CM = 0.8


@dataclass(frozen=True)
class CrossSectionProfile:
    """Rectangular cross-section swept along a rail path.

    ``length`` is the nominal path length of a straight piece and the
    centerline radius of a curved one. ``width`` and ``height`` size the
    rectangle itself.
    """

    length: float
    width: float
    height: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "length", validate_positive(self.length, "length"))
        object.__setattr__(self, "width", validate_positive(self.width, "width"))
        object.__setattr__(self, "height", validate_positive(self.height, "height"))

    @classmethod
    def from_measurements(
        cls,
        length: float,
        width: float,
        height: float,
        scale: float | None = None,
    ) -> "CrossSectionProfile":
        """Normalize physical measurements by ``scale`` (defaults to ``length``)."""

        unit = validate_positive(length if scale is None else scale, "scale")
        return cls(length=length / unit, width=width / unit, height=height / unit)

    def scaled(self, factor: float) -> "CrossSectionProfile":
        factor = validate_positive(factor, "factor")
        return CrossSectionProfile(self.length * factor, self.width * factor, self.height * factor)


DEFAULT_PROFILE = CrossSectionProfile.from_measurements(TRACK_LENGTH_CM, TRACK_WIDTH_CM, TRACK_HEIGHT_CM)


__all__ = ["CrossSectionProfile", "DEFAULT_PROFILE"]
