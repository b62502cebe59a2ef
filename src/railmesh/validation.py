from __future__ import annotations

import numbers

import numpy as np


class ValidationError(ValueError):
    """Raised when validation constraints are violated."""


class InvalidSegmentCount(ValidationError):
    """Raised when a rail is requested with fewer than one segment."""


class GeometryInconsistency(ValidationError):
    """Raised when vertex and index buffers do not describe one mesh."""


def validate_segment_count(segments: object) -> int:
    if isinstance(segments, bool) or not isinstance(segments, numbers.Integral):
        raise InvalidSegmentCount(f"Segment count must be an integer, got {segments!r}.")
    count = int(segments)
    if count < 1:
        raise InvalidSegmentCount(f"Segment count must be >= 1, got {count}.")
    return count


def validate_positive(value: object, label: str) -> float:
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{label} must be a number.") from exc
    if not np.isfinite(number) or number <= 0:
        raise ValidationError(f"{label} must be positive.")
    return number


def validate_buffers(vertices: np.ndarray, faces: np.ndarray) -> None:
    """Check that ``faces`` only addresses rows of ``vertices``."""

    if vertices.ndim != 2 or vertices.shape[1] != 3:
        raise GeometryInconsistency("Vertices must be Nx3 points.")
    if faces.ndim != 2 or faces.shape[1] != 3:
        raise GeometryInconsistency("Faces must be Mx3 vertex indices.")
    if np.any(~np.isfinite(vertices)):
        raise GeometryInconsistency("Vertices contain invalid values.")
    if faces.size == 0:
        return
    if faces.min() < 0:
        raise GeometryInconsistency("Faces contain negative vertex indices.")
    if faces.max() >= vertices.shape[0]:
        raise GeometryInconsistency(
            f"Face index {int(faces.max())} is out of range for {vertices.shape[0]} vertices."
        )
