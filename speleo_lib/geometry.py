# -*- coding: utf-8 -*-
"""Geometry primitives shared by the reconstruction engine and its consumers.

Axis convention of every position and displacement in this library:
``x`` points east, ``y`` points north and ``z`` points up.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple

# ---------------------------------------------------------------------------
# Angles
# ---------------------------------------------------------------------------


def degrees_to_rads(deg: float) -> float:
    return deg * math.pi / 180.0


def rads_to_degrees(rad: float) -> float:
    return rad * 180.0 / math.pi


# ---------------------------------------------------------------------------
# Vector3D
# ---------------------------------------------------------------------------


class Vector3D(NamedTuple):
    """An immutable 3-D vector (easting, northing, elevation) in metres."""

    x: float
    y: float
    z: float

    def __add__(self, other: Vector3D) -> Vector3D:  # type: ignore[override]
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3D) -> Vector3D:
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3D:  # type: ignore[override]
        return Vector3D(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> Vector3D:
        return self.__mul__(scalar)

    def __neg__(self) -> Vector3D:
        return Vector3D(-self.x, -self.y, -self.z)

    def dot(self, other: Vector3D) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3D) -> Vector3D:
        return Vector3D(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    @property
    def length(self) -> float:
        """Euclidean length of the vector."""
        return (self.x**2 + self.y**2 + self.z**2) ** 0.5

    def normalize(self) -> Vector3D:
        """Unit vector of the same direction (the zero vector stays zero)."""
        length = self.length
        if length == 0:
            return ZERO
        return Vector3D(self.x / length, self.y / length, self.z / length)

    def distance_to(self, other: Vector3D) -> float:
        return (self - other).length


ZERO = Vector3D(0.0, 0.0, 0.0)


def from_polar(distance: float, azimuth: float, clino: float) -> Vector3D:
    """Convert a polar measurement to a Cartesian displacement.

    Args:
        distance: Shot length in metres
        azimuth: Bearing in radians, clockwise from north
        clino: Inclination in radians, positive upwards

    Returns:
        Displacement vector; azimuth 0 points to +Y, azimuth 90° to +X.
    """
    horizontal = math.cos(clino) * distance
    return Vector3D(
        math.sin(azimuth) * horizontal,
        math.cos(azimuth) * horizontal,
        math.sin(clino) * distance,
    )


# ---------------------------------------------------------------------------
# Color
# ---------------------------------------------------------------------------


def _channel_to_byte(value: float) -> int:
    return max(0, min(255, round(value * 255)))


@dataclass(frozen=True)
class Color:
    """An RGB colour with normalized (0..1) channels.

    Channels are not clamped by arithmetic so that gradient differences
    can be negative; clamping happens when converting to hex.
    """

    r: float
    g: float
    b: float

    @classmethod
    def from_hex(cls, value: str | int) -> Color:
        """Build a colour from ``#rrggbb`` or a ``0xrrggbb`` integer."""
        if isinstance(value, str):
            if not value.startswith("#") or len(value) != 7:  # noqa: PLR2004
                raise ValueError(f"Invalid hex colour: `{value}`")
            hex_value = int(value[1:], 16)
        else:
            hex_value = int(value)

        return cls(
            r=((hex_value >> 16) & 255) / 255,
            g=((hex_value >> 8) & 255) / 255,
            b=(hex_value & 255) / 255,
        )

    def hex(self) -> int:
        return (
            (_channel_to_byte(self.r) << 16)
            + (_channel_to_byte(self.g) << 8)
            + _channel_to_byte(self.b)
        )

    def hex_string(self) -> str:
        return f"#{self.hex():06x}"

    def add(self, other: Color) -> Color:
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def sub(self, other: Color) -> Color:
        return Color(self.r - other.r, self.g - other.g, self.b - other.b)

    def mul(self, factor: float) -> Color:
        return Color(self.r * factor, self.g * factor, self.b * factor)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)
