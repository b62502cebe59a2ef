from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from railmesh.modeling._color import DEFAULT_COLOR, RGBA, normalize_color
from railmesh.modeling.paths import Arc, Straight
from railmesh.modeling.profile import (
    TRACK_HEIGHT_CM,
    TRACK_LENGTH_CM,
    TRACK_WIDTH_CM,
    CrossSectionProfile,
)
from railmesh.validation import ValidationError, validate_positive, validate_segment_count

CONFIG_DIR = Path.home() / ".railmesh"
CONFIG_FILE = CONFIG_DIR / "railmesh.cfg"
DEFAULT_CONFIG = {
    "_comment": "Valid units: centimeters (default), millimeters, inches. Dimensions are given in these units.",
    "units": "centimeters",
    "length": TRACK_LENGTH_CM,
    "width": TRACK_WIDTH_CM,
    "height": TRACK_HEIGHT_CM,
    "segments": 16,
    "arc_span_deg": 45.0,
    "color": list(DEFAULT_COLOR[:3]),
}
_UNIT_INFO: Dict[str, Dict[str, Any]] = {
    "centimeters": {"label": "cm", "scale_to_cm": 1.0},
    "millimeters": {"label": "mm", "scale_to_cm": 0.1},
    "inches": {"label": "in", "scale_to_cm": 2.54},
}
_UNIT_ALIASES = {
    "centimeter": "centimeters",
    "centimeters": "centimeters",
    "cm": "centimeters",
    "millimeter": "millimeters",
    "millimeters": "millimeters",
    "mm": "millimeters",
    "inch": "inches",
    "inches": "inches",
    "in": "inches",
}


@dataclass(frozen=True)
class TrackSettings:
    """Resolved track configuration from railmesh.cfg."""

    units: str
    label: str
    scale_to_cm: float
    length: float
    width: float
    height: float
    segments: int
    arc_span_deg: float
    color: RGBA

    def profile(self) -> CrossSectionProfile:
        """Profile normalized so that the nominal length is 1."""
        return CrossSectionProfile.from_measurements(self.length, self.width, self.height)

    def straight(self) -> Straight:
        return Straight.from_profile(self.profile())

    def arc(self) -> Arc:
        return Arc.from_profile(self.profile(), math.radians(self.arc_span_deg))


def ensure_user_config(path: Path = CONFIG_FILE) -> None:
    """Ensure the config file exists with sane defaults."""

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    if path.exists():
        return

    try:
        path.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_config(path: Path) -> Dict[str, Any]:
    try:
        raw = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()
    if not isinstance(raw, dict):
        return DEFAULT_CONFIG.copy()
    return {**DEFAULT_CONFIG, **raw}


def _normalize_units(value: str) -> str | None:
    key = value.strip().lower()
    if key in _UNIT_INFO:
        return key
    return _UNIT_ALIASES.get(key)


def load_settings(path: Path | None = None) -> TrackSettings:
    """Return the configured track, falling back to defaults for missing keys."""

    raw_config = _load_config(CONFIG_FILE if path is None else Path(path))
    normalized = _normalize_units(str(raw_config.get("units", DEFAULT_CONFIG["units"])))
    if normalized is None:
        normalized = DEFAULT_CONFIG["units"]

    span = raw_config["arc_span_deg"]
    try:
        span = float(span)
    except (TypeError, ValueError) as exc:
        raise ValidationError("arc_span_deg must be a number.") from exc
    if not 0.0 <= span <= 360.0:
        raise ValidationError("arc_span_deg must be within [0, 360].")

    return TrackSettings(
        units=normalized,
        label=_UNIT_INFO[normalized]["label"],
        scale_to_cm=_UNIT_INFO[normalized]["scale_to_cm"],
        length=validate_positive(raw_config["length"], "length"),
        width=validate_positive(raw_config["width"], "width"),
        height=validate_positive(raw_config["height"], "height"),
        segments=validate_segment_count(raw_config["segments"]),
        arc_span_deg=span,
        color=normalize_color(raw_config["color"]),
    )
