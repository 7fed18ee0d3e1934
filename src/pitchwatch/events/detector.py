"""Kick detection driving dribble and shot classification.

A kick is a cycle in which the rounded ball speed rises above both the
previous cycle's speed and a small trigger, while the ball is next to its
current owner. Every kick feeds the dribble tracker and, if enabled, the
shot classifier.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..estimation import BallEstimator, Horizon
from ..field_constants import FieldGeometry, Vec3
from ..listeners import ListenerHub
from ..statistics import Statistic, StatisticRegistry, StatisticType
from ..types import AgentState
from .constants import (
    DRIBBLE_MIN_DISTANCE,
    DRIBBLE_MIN_TOUCHES,
    KICK_OWNER_DISTANCE,
    KICK_SPEED_DECIMALS,
    KICK_VELOCITY_TRIGGER,
    SHOT_ATTACKING_FRACTION,
    SHOT_GOAL_LINE_MARGIN,
    SHOT_GOAL_MOUTH_MARGIN,
    SHOT_MIN_SPEED,
)
from .dribble import DribbleTracker
from .shots import classify_shot
from .types import KickEvent
from .utils import distance_3d, rounded_speed

logger = logging.getLogger(__name__)


@dataclass
class DetectionConfig:
    velocity_trigger: float = KICK_VELOCITY_TRIGGER
    speed_decimals: int = KICK_SPEED_DECIMALS
    owner_distance: float = KICK_OWNER_DISTANCE
    dribble_min_touches: int = DRIBBLE_MIN_TOUCHES
    dribble_min_distance: float = DRIBBLE_MIN_DISTANCE
    detect_shots: bool = True
    shot_min_speed: float = SHOT_MIN_SPEED
    shot_attacking_fraction: float = SHOT_ATTACKING_FRACTION
    shot_goal_line_margin: float = SHOT_GOAL_LINE_MARGIN
    shot_goal_mouth_margin: float = SHOT_GOAL_MOUTH_MARGIN


class KickDetector:
    """Per-cycle kick, dribble and shot state machine."""

    def __init__(
        self,
        estimator: BallEstimator,
        registry: StatisticRegistry,
        hub: ListenerHub,
        field: FieldGeometry,
        config: DetectionConfig | None = None,
    ):
        self.estimator = estimator
        self.registry = registry
        self.hub = hub
        self.field = field
        self.config = config or DetectionConfig()
        self.dribbles = DribbleTracker(
            min_touches=self.config.dribble_min_touches,
            min_distance=self.config.dribble_min_distance,
        )
        self.reset()

    def reset(self) -> None:
        self.previous_speed = 0.0
        self.last_time: float | None = None
        self.owner_out_of_bounds = False
        self.dribbles.reset()

    def evaluate(
        self, time: float, ball_position: Vec3, owner: AgentState | None
    ) -> KickEvent | None:
        """Run one cycle of detection.

        Args:
            time: Server time of the cycle
            ball_position: Observed ball position
            owner: Current possession owner, if any

        Returns:
            The detected kick, or None
        """
        time_advanced = self.last_time is None or time > self.last_time
        self.last_time = time

        velocity = self.estimator.estimated_velocity(Horizon.FOUR, 0.0)
        speed = rounded_speed(velocity, self.config.speed_decimals)

        if owner is not None:
            self._check_owner_bounds(owner)

        kick = None
        if (
            owner is not None
            and time_advanced
            and speed > self.previous_speed
            and speed > self.config.velocity_trigger
            and distance_3d(ball_position, owner.position) < self.config.owner_distance
        ):
            self._continue_dribble(owner, ball_position, time)
            shot = self._detect_shot(owner, ball_position, speed, time)
            kick = KickEvent(
                t=time, owner=owner, ball_position=ball_position, ball_speed=speed, shot=shot
            )

        self.previous_speed = speed
        return kick

    def _check_owner_bounds(self, owner: AgentState) -> None:
        out_of_bounds = not self.field.is_in_bounds(owner.position)
        if out_of_bounds and not self.owner_out_of_bounds:
            logger.debug(f"Owner team={owner.team_number} agent={owner.agent_id} left the field")
            self.hub.enqueue("dribble_stop_received")
        self.owner_out_of_bounds = out_of_bounds

    def _continue_dribble(self, owner: AgentState, ball_position: Vec3, time: float) -> None:
        outcome = self.dribbles.on_touch(owner, ball_position, time)
        if outcome.started:
            self.hub.enqueue("dribble_start_received", owner)
        if outcome.completed is not None:
            logger.debug(
                f"Dribble by team={outcome.completed.team_number} "
                f"agent={outcome.completed.agent_id} over {outcome.displacement:.2f}m"
            )
            self.registry.add(
                StatisticType.DRIBLE,
                outcome.completed.team_number,
                outcome.completed.agent_id,
                time,
            )

    def _detect_shot(
        self, owner: AgentState, ball_position: Vec3, speed: float, time: float
    ) -> Statistic | None:
        if not self.config.detect_shots:
            return None

        shot_type = classify_shot(
            owner,
            ball_position,
            speed,
            self.estimator.estimated_final_position(Horizon.FOUR),
            self.field,
            min_speed=self.config.shot_min_speed,
            attacking_fraction=self.config.shot_attacking_fraction,
            goal_line_margin=self.config.shot_goal_line_margin,
            goal_mouth_margin=self.config.shot_goal_mouth_margin,
        )
        if shot_type is None:
            return None
        return self.registry.add(shot_type, owner.team_number, owner.agent_id, time)
