"""Dribble run tracking.

A run is a sequence of kicks by the same agent. It starts when the owner
makes a second consecutive touch and ends when another agent touches the
ball; a finished run counts as a dribble if it had enough touches and moved
the ball far enough.
"""

from __future__ import annotations

import logging

from ..field_constants import Vec3
from ..types import AgentState
from .constants import DRIBBLE_MIN_DISTANCE, DRIBBLE_MIN_TOUCHES
from .types import DribbleOutcome, DribbleRun
from .utils import planar_distance

logger = logging.getLogger(__name__)


class DribbleTracker:
    """Follows the current dribble run across kicks."""

    def __init__(
        self,
        min_touches: int = DRIBBLE_MIN_TOUCHES,
        min_distance: float = DRIBBLE_MIN_DISTANCE,
    ):
        self.min_touches = min_touches
        self.min_distance = min_distance
        self.run: DribbleRun | None = None

    def reset(self) -> None:
        self.run = None

    @property
    def dribbler(self) -> AgentState | None:
        return self.run.dribbler if self.run else None

    def on_touch(self, owner: AgentState, ball_position: Vec3, time: float) -> DribbleOutcome:
        """Feed a kick by owner at ball_position."""
        run = self.run
        if run is None:
            self.run = DribbleRun(dribbler=owner, start_position=ball_position)
            return DribbleOutcome()

        if owner.same_agent(run.dribbler):
            run.touches += 1
            if run.touches == 1:
                logger.debug(
                    f"Dribble start team={owner.team_number} agent={owner.agent_id} t={time:.2f}"
                )
                return DribbleOutcome(started=True)
            return DribbleOutcome()

        displacement = planar_distance(ball_position, run.start_position)
        completed = None
        if run.touches >= self.min_touches and displacement >= self.min_distance:
            completed = run.dribbler

        self.run = DribbleRun(dribbler=owner, start_position=ball_position)
        return DribbleOutcome(completed=completed, displacement=displacement)
