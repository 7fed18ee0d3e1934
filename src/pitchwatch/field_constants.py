"""Field constants and coordinate system for the 3D simulation league.

This module defines the server coordinate system and provides the
field-relative helpers used throughout the estimation and event pipeline.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from .types import TeamSide


class Vec3(NamedTuple):
    """3D vector with x, y, z components."""

    x: float
    y: float
    z: float

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, scalar: float) -> Vec3:
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def planar(self) -> Vec3:
        """Project onto the ground plane (height zeroed)."""
        return Vec3(self.x, self.y, 0.0)

    def with_z(self, z: float) -> Vec3:
        return Vec3(self.x, self.y, z)


ZERO = Vec3(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class FieldGeometry:
    """Field dimensions as announced by the match rules.

    Coordinate system:
    - X-axis: -length/2 to +length/2 (goal lines; left team defends -X)
    - Y-axis: -width/2 to +width/2 (touch lines)
    - Z-axis: height above the ground
    - Origin (0,0,0) is the centre spot
    """

    length: float = 30.0
    width: float = 20.0
    goal_width: float = 2.1

    def __post_init__(self):
        if self.length <= 0 or self.width <= 0:
            raise ValueError("field dimensions must be positive")
        if self.goal_width <= 0:
            raise ValueError("goal_width must be positive")

    @property
    def half_length(self) -> float:
        return self.length / 2

    @property
    def half_width(self) -> float:
        return self.width / 2

    def is_in_bounds(self, pos: Vec3) -> bool:
        """Check if a position lies on the pitch (height ignored)."""
        return abs(pos.x) <= self.half_length and abs(pos.y) <= self.half_width

    @staticmethod
    def attacking_sign(team_side: TeamSide) -> float:
        """+1 for the side attacking toward +X (left team), -1 otherwise."""
        return 1.0 if team_side.team_number == 1 else -1.0

    def goal_line_x(self, team_side: TeamSide) -> float:
        """X coordinate of the goal line the given side attacks."""
        return self.attacking_sign(team_side) * self.half_length


# Rules of the current league edition
FIELD = FieldGeometry()
