"""Deduplicating store of discrete match statistics.

The registry has a single writer (the match pipeline) and any number of
concurrent readers (overlays, reports). Each statistic type is kept in an
immutable tuple that is replaced on write, so readers always iterate a
consistent snapshot while the pipeline keeps appending.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

logger = logging.getLogger(__name__)


class StatisticType(Enum):
    """Kinds of discrete events recorded during a match."""

    OFFSIDE = "offside"
    FOUL = "foul"
    FREE_KICK = "free_kick"
    CORNER = "corner"
    KICK_IN = "kick_in"
    GOAL_KICK = "goal_kick"
    PASS = "pass"
    DRIBLE = "drible"
    POSSESSION = "possession"
    SHOT = "shot"
    SHOT_TARGET = "shot_target"
    GOAL = "goal"


@dataclass(frozen=True)
class Statistic:
    """A recorded match event."""

    time: float  # server time
    type: StatisticType
    team: int  # 1 = left, 2 = right
    agent_id: int = 0  # 0 when the event has no agent
    index: int | None = None  # play mode / foul index from the server
    received_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc), compare=False
    )


@dataclass(frozen=True)
class PossessionSample:
    """Cumulative left-team share of possession at a point in time."""

    time: float
    left_possession: float  # 0..1


DEFAULT_DEDUP_WINDOW_S = 2.0

# Possession is sampled every second; its window stays below that gap so
# a continuous possession keeps one entry per sample.
DEFAULT_DEDUP_WINDOWS: dict[StatisticType, float] = {
    StatisticType.POSSESSION: 0.5,
}


@dataclass(frozen=True)
class DedupPolicy:
    """Per-type time window inside which repeated statistics are dropped."""

    default_window: float = DEFAULT_DEDUP_WINDOW_S
    windows: Mapping[StatisticType, float] = field(
        default_factory=lambda: dict(DEFAULT_DEDUP_WINDOWS)
    )

    def window_for(self, statistic_type: StatisticType) -> float:
        return self.windows.get(statistic_type, self.default_window)


class StatisticRegistry:
    """Append-only, deduplicated statistic store keyed by type."""

    def __init__(self, policy: DedupPolicy | None = None):
        self.policy = policy or DedupPolicy()
        self._lock = threading.Lock()
        self._buckets: dict[StatisticType, tuple[Statistic, ...]] = {
            statistic_type: () for statistic_type in StatisticType
        }
        self._all: tuple[Statistic, ...] = ()

    def add(
        self,
        statistic_type: StatisticType,
        team: int,
        agent_id: int,
        time: float,
        index: int | None = None,
    ) -> Statistic | None:
        """Record a statistic unless a near-identical one already exists.

        A statistic is a duplicate when an entry with the same type, team and
        agent lies strictly closer in time than the type's window.

        Returns:
            The stored Statistic, or None if it was discarded as a duplicate
        """
        window = self.policy.window_for(statistic_type)
        with self._lock:
            bucket = self._buckets[statistic_type]
            for existing in bucket:
                if (
                    existing.team == team
                    and existing.agent_id == agent_id
                    and abs(time - existing.time) < window
                ):
                    return None

            statistic = Statistic(
                time=time,
                type=statistic_type,
                team=team,
                agent_id=agent_id,
                index=index,
            )
            self._buckets[statistic_type] = bucket + (statistic,)
            self._all = self._all + (statistic,)

        logger.debug(
            f"Recorded {statistic_type.value} team={team} agent={agent_id} t={time:.2f}"
        )
        return statistic

    def get(self, statistic_type: StatisticType) -> tuple[Statistic, ...]:
        """All statistics of one type in insertion order."""
        return self._buckets[statistic_type]

    def all(self) -> tuple[Statistic, ...]:
        """Every statistic in insertion order."""
        return self._all

    def count(self, statistic_type: StatisticType, team: int | None = None) -> int:
        bucket = self._buckets[statistic_type]
        if team is None:
            return len(bucket)
        return sum(1 for s in bucket if s.team == team)

    def counts(self) -> dict[StatisticType, int]:
        return {t: len(bucket) for t, bucket in self._buckets.items()}

    def __len__(self) -> int:
        return len(self._all)

    def clear(self) -> None:
        with self._lock:
            self._buckets = {statistic_type: () for statistic_type in StatisticType}
            self._all = ()


class PossessionSeries:
    """Append-only possession-over-time series, safe to read while written."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._samples: tuple[PossessionSample, ...] = ()

    def append(self, time: float, left_possession: float) -> PossessionSample:
        sample = PossessionSample(time, left_possession)
        with self._lock:
            self._samples = self._samples + (sample,)
        return sample

    def samples(self) -> tuple[PossessionSample, ...]:
        return self._samples

    def latest(self) -> PossessionSample | None:
        samples = self._samples
        return samples[-1] if samples else None

    def __len__(self) -> int:
        return len(self._samples)

    def clear(self) -> None:
        with self._lock:
            self._samples = ()
