"""Shot classification from the projected ball path.

The decay model keeps the ball on a straight line from its current position
to its rest position, so a kick is a shot when that line heads for the goal
the kicker attacks. It is on target when it reaches the goal line inside
the goal mouth.
"""

from __future__ import annotations

from ..field_constants import FieldGeometry, Vec3
from ..statistics import StatisticType
from ..types import AgentState
from .constants import (
    SHOT_ATTACKING_FRACTION,
    SHOT_GOAL_LINE_MARGIN,
    SHOT_GOAL_MOUTH_MARGIN,
    SHOT_MIN_SPEED,
)
from .utils import is_in_attacking_region


def lateral_position_at_line(start: Vec3, end: Vec3, line_x: float) -> float | None:
    """Y coordinate where the segment start->end crosses x = line_x.

    Returns None if the segment does not reach the line.
    """
    dx = end.x - start.x
    if dx == 0:
        return start.y if start.x == line_x else None
    fraction = (line_x - start.x) / dx
    if fraction < 0 or fraction > 1:
        return None
    return start.y + fraction * (end.y - start.y)


def classify_shot(
    owner: AgentState,
    ball_position: Vec3,
    ball_speed: float,
    final_position: Vec3,
    field: FieldGeometry,
    *,
    min_speed: float = SHOT_MIN_SPEED,
    attacking_fraction: float = SHOT_ATTACKING_FRACTION,
    goal_line_margin: float = SHOT_GOAL_LINE_MARGIN,
    goal_mouth_margin: float = SHOT_GOAL_MOUTH_MARGIN,
) -> StatisticType | None:
    """Classify a kick as SHOT_TARGET, SHOT, or not a shot (None).

    Args:
        owner: Agent that kicked the ball
        ball_position: Ball position at the kick
        ball_speed: Ball speed after the kick
        final_position: Projected rest position of the ball
        field: Current field geometry
    """
    if ball_speed < min_speed:
        return None
    if not is_in_attacking_region(owner, field, attacking_fraction):
        return None

    sign = field.attacking_sign(owner.team_side)
    if sign * (final_position.x - ball_position.x) <= 0:
        return None

    line_x = sign * (field.half_length - goal_line_margin)
    if sign * ball_position.x >= sign * line_x:
        lateral = ball_position.y
    else:
        lateral = lateral_position_at_line(ball_position, final_position, line_x)

    if lateral is None:
        # Projected to stop before the goal
        return StatisticType.SHOT
    if abs(lateral) <= field.goal_width / 2 + goal_mouth_margin:
        return StatisticType.SHOT_TARGET
    return StatisticType.SHOT
