"""Shared utility functions for event detection."""

from __future__ import annotations

import math

from ..field_constants import FieldGeometry, Vec3
from ..types import AgentState


def distance_3d(pos1: Vec3, pos2: Vec3) -> float:
    """Calculate 3D Euclidean distance between two positions."""
    return (pos1 - pos2).length()


def planar_distance(pos1: Vec3, pos2: Vec3) -> float:
    """Distance between two positions on the ground plane."""
    return math.hypot(pos1.x - pos2.x, pos1.y - pos2.y)


def rounded_speed(velocity: Vec3, decimals: int) -> float:
    """Speed rounded to a fixed number of decimals to suppress jitter."""
    return round(velocity.length(), decimals)


def is_in_attacking_region(agent: AgentState, field: FieldGeometry, fraction: float) -> bool:
    """Check if an agent is deep in the half its team attacks."""
    sign = field.attacking_sign(agent.team_side)
    return sign * agent.position.x >= field.length * fraction
