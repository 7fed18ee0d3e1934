"""Kinematic ball estimation from buffered position samples.

Provides:
- Reference frames at 3, 4 and 5 vision cycles back, plus a sticky "away"
  reference taken while an agent is tight on the ball
- Velocity, position, time-to-travel and rest position projections under
  an exponential-decay rolling model

The model is planar: projected velocities carry no vertical component and
projected positions keep the height of the newest sample.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import IntEnum

from ..field_constants import ZERO, Vec3
from ..physics_constants import (
    AWAY_REFERENCE_DISTANCE,
    BALL_DECAY_CONSTANT,
    HORIZON_CYCLES,
    NEVER_ARRIVES_S,
    VISION_CYCLE_S,
)
from .buffer import SampleBuffer

logger = logging.getLogger(__name__)


class Horizon(IntEnum):
    """Lookback used to pick a reference sample."""

    AWAY = 0  # last sample seen with an agent tight on the ball
    THREE = 3
    FOUR = 4
    FIVE = 5


_CYCLE_HORIZONS = tuple(Horizon(cycles) for cycles in HORIZON_CYCLES)


@dataclass(frozen=True)
class KinematicModel:
    """Tuning of the decay model, passed in at construction."""

    decay_constant: float = BALL_DECAY_CONSTANT
    cycle_length: float = VISION_CYCLE_S
    away_distance: float = AWAY_REFERENCE_DISTANCE

    def __post_init__(self):
        if self.decay_constant >= 0:
            raise ValueError("decay_constant must be negative")
        if self.cycle_length <= 0:
            raise ValueError("cycle_length must be positive")

    def min_age(self, horizon: Horizon) -> float:
        """Age a sample must exceed to serve as the reference for horizon."""
        return self.cycle_length * (int(horizon) - 0.5)


@dataclass(frozen=True)
class ReferenceFrame:
    """Position and time of a sample chosen as extrapolation reference."""

    position: Vec3
    time: float


class BallEstimator:
    """Extrapolates ball motion from the last few observed samples.

    Example:
        estimator = BallEstimator()
        for t, pos in samples:
            estimator.update(pos, t)
        rest = estimator.estimated_final_position(Horizon.FOUR)
    """

    def __init__(self, model: KinematicModel | None = None):
        self.model = model or KinematicModel()
        self.buffer = SampleBuffer()
        self._current: ReferenceFrame | None = None
        self._references: dict[Horizon, ReferenceFrame | None] = dict.fromkeys(_CYCLE_HORIZONS)
        self._away: ReferenceFrame | None = None

    def reset(self) -> None:
        """Forget all history, including the away reference."""
        self.buffer.clear()
        self._current = None
        self._references = dict.fromkeys(_CYCLE_HORIZONS)
        self._away = None

    def update(
        self,
        ball_position: Vec3,
        time: float,
        minimum_distance_to_ball: float | None = None,
    ) -> None:
        """Record a new ball sample and recompute reference frames.

        Args:
            ball_position: Observed ball position
            time: Server time of the observation
            minimum_distance_to_ball: Distance of the closest agent, if known
        """
        self.buffer.push(ball_position, time)
        self._current = ReferenceFrame(ball_position, time)

        references: dict[Horizon, ReferenceFrame | None] = dict.fromkeys(_CYCLE_HORIZONS)
        for index, sample in enumerate(self.buffer):
            if index == 0:
                continue
            age = time - sample.time
            for horizon in _CYCLE_HORIZONS:
                if references[horizon] is None and age > self.model.min_age(horizon):
                    references[horizon] = ReferenceFrame(sample.position, sample.time)
        self._references = references

        if minimum_distance_to_ball is not None and minimum_distance_to_ball < self.model.away_distance:
            self._away = self._current

    @property
    def ball_position(self) -> Vec3:
        """Newest observed ball position (origin before the first sample)."""
        return self._current.position if self._current else ZERO

    def reference(self, horizon: Horizon | int) -> ReferenceFrame | None:
        """Reference frame for horizon, or None if not available yet."""
        horizon = Horizon(horizon)
        if horizon is Horizon.AWAY:
            return self._away
        return self._references[horizon]

    def estimated_velocity(self, horizon: Horizon | int, relative_time: float = 0.0) -> Vec3:
        """Planar ball velocity projected relative_time seconds ahead.

        Returns the zero vector when the reference is missing or no time has
        elapsed since it was taken.
        """
        reference = self.reference(horizon)
        if reference is None or self._current is None:
            return ZERO

        dt = self._current.time - reference.time
        if dt <= 0:
            return ZERO

        k = self.model.decay_constant
        # Rescale the window's average velocity to the instantaneous
        # velocity at the newest sample.
        correction = -k / (math.exp(-k * dt) - 1) * dt
        velocity = (self._current.position - reference.position) / dt * correction
        return velocity.planar() * math.exp(k * relative_time)

    def estimated_position(self, horizon: Horizon | int, relative_time: float) -> Vec3:
        """Ball position relative_time seconds ahead of the newest sample."""
        origin = self.ball_position
        velocity = self.estimated_velocity(horizon, 0.0)
        k = self.model.decay_constant
        drift = velocity / k
        position = origin + drift * math.exp(k * relative_time) - drift
        return position.with_z(origin.z)

    def estimated_time_to_travel(self, horizon: Horizon | int, distance: float) -> float:
        """Seconds until the ball has rolled distance, or NEVER_ARRIVES_S."""
        if distance <= 0:
            return 0.0
        speed = self.estimated_velocity(horizon, 0.0).length()
        if speed == 0:
            return NEVER_ARRIVES_S

        k = self.model.decay_constant
        aux = distance / (speed / k) + 1
        if aux <= 0:
            return NEVER_ARRIVES_S
        return math.log(aux) / k

    def estimated_final_position(self, horizon: Horizon | int) -> Vec3:
        """Position where the decay model brings the ball to rest."""
        origin = self.ball_position
        velocity = self.estimated_velocity(horizon, 0.0)
        rest = origin - velocity / self.model.decay_constant
        return rest.with_z(origin.z)
