"""
Inputs of the wing viewer.

`WingSettings` reads `WING_*` environment variables and clamps every value into the range the
controls accept, so the geometry code always receives usable input. `ViewOptions` holds display
switches that used to be page-wide toggles.
"""

import numpy as np

from dataclasses import dataclass
from string import digits as DIGITS
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mesher import SpanMorphParameters, WingState


def _clamp(value: float, lower: float | None = None, upper: float | None = None) -> float:
    if lower is not None:
        value = max(lower, value)
    if upper is not None:
        value = min(upper, value)
    return value


class WingSettings(BaseSettings):
    """Wing viewer settings."""

    model_config = SettingsConfigDict(env_prefix="WING_")

    naca: str = "2412"
    chord: float = 1.0
    points: int = 200
    depth: float = 3.0
    scale: float = 3.0
    start_percent: float = 0.5
    thickness_factor: float = 1.0
    slices: int = 40
    shift_amount: float = 0.0
    dihedral_deg: float = 0.0

    @field_validator("naca", mode="before")
    @classmethod
    def validate_naca(cls, v):
        digits = "".join(ch for ch in str(v) if ch in DIGITS)
        value = int(_clamp(int(digits or 0), 0, 99999))
        return str(value).rjust(5 if len(digits) >= 5 else 4, "0")

    @field_validator("chord", "depth")
    @classmethod
    def validate_length(cls, v):
        return _clamp(v, 0.001)

    @field_validator("points")
    @classmethod
    def validate_points(cls, v):
        return int(_clamp(v, 10, 2000))

    @field_validator("scale")
    @classmethod
    def validate_scale(cls, v):
        return _clamp(v, 0.01)

    @field_validator("start_percent")
    @classmethod
    def validate_start_percent(cls, v):
        return _clamp(v, 0.0, 1.0)

    @field_validator("thickness_factor")
    @classmethod
    def validate_thickness_factor(cls, v):
        return _clamp(v, 0.01)

    @field_validator("slices")
    @classmethod
    def validate_slices(cls, v):
        return int(_clamp(v, 2, 200))

    @field_validator("shift_amount")
    @classmethod
    def validate_shift_amount(cls, v):
        return _clamp(v, -5.0, 5.0)

    @field_validator("dihedral_deg")
    @classmethod
    def validate_dihedral(cls, v):
        # tan() blows up at 90 degrees
        return _clamp(v, -89.0, 89.0)

    @property
    def span(self) -> float:
        return self.depth * self.scale

    def morph_parameters(self) -> SpanMorphParameters:
        return SpanMorphParameters(
            start_percent=self.start_percent,
            thickness_factor=self.thickness_factor,
            slice_count=self.slices,
            shift_amount=self.shift_amount,
            dihedral_angle=float(np.radians(self.dihedral_deg)),
        )

    def build_state(self) -> WingState:
        return WingState(
            designation=self.naca,
            chord=self.chord,
            sample_count=self.points,
            depth=self.depth,
            scale=self.scale,
            params=self.morph_parameters(),
        )


@dataclass(frozen=True)
class ViewOptions:
    """Display switches of the wing view."""
    show_grid: bool = False
    show_axes: bool = True
    show_edges: bool = False
    mirror: bool = False
    color: str = "#b0c4de"
    background: str = "#203040"
    light_direction: tuple[float, float, float] = (2.0, 2.0, 1.0)
