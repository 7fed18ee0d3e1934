"""Per-match statistics pipeline.

MatchStatistics consumes one Snapshot per simulation cycle and keeps every
derived quantity current: the ball estimator, possession, kicks, dribbles,
shots, referee statistics and the position heat map. Queued listener
events are delivered at the end of each processing turn.
"""

from __future__ import annotations

import logging
import math

from .config import PitchwatchConfig
from .errors import ReentrantProcessingError
from .estimation import BallEstimator, Horizon
from .events import KickDetector, KickEvent, PlayModeRecorder
from .field_constants import FieldGeometry, Vec3
from .heatmap import PositionHeatmap
from .listeners import ListenerHub, StatisticsListener
from .possession import PossessionTracker
from .statistics import (
    PossessionSample,
    PossessionSeries,
    Statistic,
    StatisticRegistry,
    StatisticType,
)
from .types import AgentState, Snapshot

logger = logging.getLogger(__name__)


class MatchStatistics:
    """Statistics for one match, fed snapshot by snapshot.

    Example:
        match = MatchStatistics()
        for snapshot in read_snapshots(path):
            match.process(snapshot)
        goals = match.statistics(StatisticType.GOAL)
    """

    def __init__(self, config: PitchwatchConfig | None = None):
        self.config = config or PitchwatchConfig()
        self.field = self.config.field

        self.registry = StatisticRegistry(self.config.dedup)
        self.series = PossessionSeries()
        self.hub = ListenerHub()
        self.estimator = BallEstimator(self.config.estimator)
        self.possession = PossessionTracker(self.registry, self.series, self.config.possession)
        self.detector = KickDetector(
            self.estimator, self.registry, self.hub, self.field, self.config.detection
        )
        self.play_modes = PlayModeRecorder(self.registry, self.hub)
        self.heatmap = PositionHeatmap(self.field, self.config.heatmap)

        self.last_time: float | None = None
        self.last_kick: KickEvent | None = None
        self.cycles = 0
        self._in_flight: float | None = None

    def add_listener(self, listener: StatisticsListener) -> None:
        self.hub.add(listener)

    def remove_listener(self, listener: StatisticsListener) -> None:
        self.hub.remove(listener)

    def reset(self) -> None:
        """Forget all match state; listeners stay registered."""
        self.registry.clear()
        self.series.clear()
        self.hub.clear()
        self.estimator.reset()
        self.possession.reset()
        self.detector.reset()
        self.play_modes.reset()
        self.heatmap.resize(self.field)
        self.last_time = None
        self.last_kick = None
        self.cycles = 0
        logger.info("Match statistics reset")

    def update_field_geometry(self, field: FieldGeometry) -> None:
        """Adopt new field dimensions; the heat map restarts empty."""
        if field == self.field:
            return
        logger.info(f"Field geometry changed to {field.length}x{field.width}")
        self.field = field
        self.detector.field = field
        self.heatmap.resize(field)

    def process(self, snapshot: Snapshot) -> KickEvent | None:
        """Run one processing turn for snapshot.

        Returns:
            The kick detected in this cycle, or None

        Raises:
            ReentrantProcessingError: If called while another snapshot is
                still being processed (for example from a listener)
        """
        if self._in_flight is not None:
            raise ReentrantProcessingError(self._in_flight, snapshot.time)

        self._in_flight = snapshot.time
        try:
            kick = self._process(snapshot)
            # Listeners run while the turn is still in flight
            self.hub.dispatch()
            return kick
        finally:
            self._in_flight = None

    def _process(self, snapshot: Snapshot) -> KickEvent | None:
        time = snapshot.time
        if self.last_time is not None and time < self.last_time:
            logger.info(f"Server time went back from {self.last_time:.2f} to {time:.2f}")
            self.reset()

        self.play_modes.record_play_mode(snapshot.play_mode, time, snapshot.play_mode_index)
        if snapshot.foul is not None:
            self.play_modes.record_foul(snapshot.foul, time)

        if self.last_time is not None and time <= self.last_time:
            return None
        cycle_time = 0.0 if self.last_time is None else time - self.last_time
        self.last_time = time
        self.cycles += 1

        distance = self.possession.minimum_distance_to_ball
        self.estimator.update(
            snapshot.ball_position, time, distance if math.isfinite(distance) else None
        )

        if not snapshot.left_agents() or not snapshot.right_agents():
            # Nothing to attribute until both teams are on the field
            return None

        # Live state of the owner, so the kick test uses this cycle's position
        owner = self.possession.evaluate(snapshot)
        kick = self.detector.evaluate(time, snapshot.ball_position, owner)
        if kick is not None:
            self.last_kick = kick

        self.heatmap.store(snapshot)
        self.possession.sample_share(time)
        self._advance(cycle_time)
        return kick

    def _advance(self, cycle_time: float) -> None:
        self.possession.advance(cycle_time)
        self.heatmap.advance(cycle_time)

    @property
    def owner(self) -> AgentState | None:
        return self.possession.owner

    @property
    def minimum_distance_to_ball(self) -> float:
        return self.possession.minimum_distance_to_ball

    @property
    def ball_position(self) -> Vec3:
        return self.estimator.ball_position

    def ball_velocity(self, horizon: Horizon | int = Horizon.FOUR, relative_time: float = 0.0) -> Vec3:
        return self.estimator.estimated_velocity(horizon, relative_time)

    def ball_position_estimate(self, horizon: Horizon | int, relative_time: float) -> Vec3:
        return self.estimator.estimated_position(horizon, relative_time)

    def ball_final_position(self, horizon: Horizon | int = Horizon.FOUR) -> Vec3:
        return self.estimator.estimated_final_position(horizon)

    def ball_time_to_travel(self, horizon: Horizon | int, distance: float) -> float:
        return self.estimator.estimated_time_to_travel(horizon, distance)

    def statistics(self, statistic_type: StatisticType | None = None) -> tuple[Statistic, ...]:
        """Recorded statistics of one type, or all of them."""
        if statistic_type is None:
            return self.registry.all()
        return self.registry.get(statistic_type)

    def possession_over_time(self) -> tuple[PossessionSample, ...]:
        return self.series.samples()
