"""Event type definitions for kick, dribble and shot detection."""

from __future__ import annotations

from dataclasses import dataclass

from ..field_constants import Vec3
from ..statistics import Statistic
from ..types import AgentState


@dataclass(frozen=True)
class KickEvent:
    """A velocity increase of the ball close to its owner."""

    t: float
    owner: AgentState
    ball_position: Vec3
    ball_speed: float  # rounded, m/s
    shot: Statistic | None = None


@dataclass
class DribbleRun:
    """Consecutive touches by the same agent."""

    dribbler: AgentState
    start_position: Vec3
    touches: int = 0


@dataclass(frozen=True)
class DribbleOutcome:
    """Result of feeding one touch into the dribble tracker.

    started: the run just reached its second touch
    completed: dribbler of a finished run that met the thresholds
    """

    started: bool = False
    completed: AgentState | None = None
    displacement: float = 0.0
