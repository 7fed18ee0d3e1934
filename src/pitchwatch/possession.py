"""Ball possession tracking.

The owner of the ball is the agent closest to it. Ownership is re-evaluated
at a fixed simulation-time interval and every evaluation is recorded as a
POSSESSION statistic; a coarser interval samples the cumulative left-team
share of those statistics into a possession-over-time series.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .events.constants import POSSESSION_GRAPH_GAP_S, POSSESSION_STORE_GAP_S
from .field_constants import Vec3
from .statistics import PossessionSample, PossessionSeries, StatisticRegistry, StatisticType
from .types import AgentState, Snapshot, TeamSide

logger = logging.getLogger(__name__)


@dataclass
class PossessionConfig:
    store_gap: float = POSSESSION_STORE_GAP_S
    graph_gap: float = POSSESSION_GRAPH_GAP_S


def find_closest_agent(
    ball_position: Vec3, agents: list[AgentState]
) -> tuple[AgentState | None, float]:
    """Return the agent closest to the ball and its squared distance.

    Agents are scanned in the given order and the first one wins ties.
    """
    closest: AgentState | None = None
    best = math.inf
    for agent in agents:
        distance_sq = (agent.position - ball_position).length_squared()
        if distance_sq < best:
            best = distance_sq
            closest = agent
    return closest, best


def left_possession_share(registry: StatisticRegistry) -> float | None:
    """Share of all POSSESSION statistics credited to the left team."""
    possessions = registry.get(StatisticType.POSSESSION)
    if not possessions:
        return None
    left = sum(1 for s in possessions if s.team == TeamSide.LEFT.team_number)
    return left / len(possessions)


class PossessionTracker:
    """Rate-limited owner evaluation plus the possession-over-time series."""

    def __init__(
        self,
        registry: StatisticRegistry,
        series: PossessionSeries,
        config: PossessionConfig | None = None,
    ):
        self.registry = registry
        self.series = series
        self.config = config or PossessionConfig()
        self.reset()

    def reset(self) -> None:
        self.owner: AgentState | None = None
        self.minimum_distance_to_ball = math.inf
        # The first cycle evaluates immediately.
        self._store_delta = self.config.store_gap
        self._graph_delta = 0.0

    def evaluate(self, snapshot: Snapshot) -> AgentState | None:
        """Re-evaluate the owner if the store interval has elapsed.

        Left agents are scanned before right agents, each in roster order.
        Between evaluations the owner keeps its identity but its state is
        refreshed from snapshot.

        Returns:
            The owner's state in this snapshot, or None if the owner is
            unknown or missing from the snapshot
        """
        if self._store_delta < self.config.store_gap:
            return self._refresh_owner(snapshot)

        agents = snapshot.left_agents() + snapshot.right_agents()
        owner, distance_sq = find_closest_agent(snapshot.ball_position, agents)
        self._store_delta = 0.0
        if owner is None:
            return self._refresh_owner(snapshot)

        self.owner = owner
        self.minimum_distance_to_ball = math.sqrt(distance_sq)
        self.registry.add(
            StatisticType.POSSESSION,
            owner.team_number,
            owner.agent_id,
            snapshot.time,
        )
        return owner

    def _refresh_owner(self, snapshot: Snapshot) -> AgentState | None:
        current = snapshot.find_agent(self.owner)
        if current is not None:
            self.owner = current
        return current

    def sample_share(self, time: float) -> PossessionSample | None:
        """Append a possession-over-time sample if the graph interval elapsed."""
        if self._graph_delta < self.config.graph_gap:
            return None

        self._graph_delta = 0.0
        share = left_possession_share(self.registry)
        if share is None:
            return None
        logger.debug(f"Left possession {share:.0%} at t={time:.2f}")
        return self.series.append(time, share)

    def advance(self, cycle_time: float) -> None:
        """Accumulate elapsed simulation time toward the next evaluations."""
        self._store_delta += cycle_time
        self._graph_delta += cycle_time
