"""Statistics driven by referee decisions (play modes and fouls)."""

from __future__ import annotations

import logging

from ..listeners import ListenerHub
from ..statistics import Statistic, StatisticRegistry, StatisticType
from ..types import FoulDescriptor, PlayMode, TeamSide

logger = logging.getLogger(__name__)

# play mode -> (statistic, credited side, listener callback)
PLAY_MODE_STATISTICS: dict[PlayMode, tuple[StatisticType, TeamSide, str]] = {
    PlayMode.OFFSIDE_LEFT: (StatisticType.OFFSIDE, TeamSide.LEFT, "offside_received"),
    PlayMode.OFFSIDE_RIGHT: (StatisticType.OFFSIDE, TeamSide.RIGHT, "offside_received"),
    PlayMode.KICK_IN_LEFT: (StatisticType.KICK_IN, TeamSide.LEFT, "kick_in_received"),
    PlayMode.KICK_IN_RIGHT: (StatisticType.KICK_IN, TeamSide.RIGHT, "kick_in_received"),
    PlayMode.GOAL_KICK_LEFT: (StatisticType.GOAL_KICK, TeamSide.LEFT, "goal_kick_received"),
    PlayMode.GOAL_KICK_RIGHT: (StatisticType.GOAL_KICK, TeamSide.RIGHT, "goal_kick_received"),
    PlayMode.FREE_KICK_LEFT: (StatisticType.FREE_KICK, TeamSide.LEFT, "free_kick_received"),
    PlayMode.FREE_KICK_RIGHT: (StatisticType.FREE_KICK, TeamSide.RIGHT, "free_kick_received"),
    PlayMode.DIRECT_FREE_KICK_LEFT: (StatisticType.FREE_KICK, TeamSide.LEFT, "free_kick_received"),
    PlayMode.DIRECT_FREE_KICK_RIGHT: (
        StatisticType.FREE_KICK,
        TeamSide.RIGHT,
        "free_kick_received",
    ),
    PlayMode.CORNER_KICK_LEFT: (StatisticType.CORNER, TeamSide.LEFT, "corner_kick_received"),
    PlayMode.CORNER_KICK_RIGHT: (StatisticType.CORNER, TeamSide.RIGHT, "corner_kick_received"),
    PlayMode.GOAL_LEFT: (StatisticType.GOAL, TeamSide.LEFT, "goal_received"),
    PlayMode.GOAL_RIGHT: (StatisticType.GOAL, TeamSide.RIGHT, "goal_received"),
}


class PlayModeRecorder:
    """Turns announced play modes and fouls into statistics and callbacks."""

    def __init__(self, registry: StatisticRegistry, hub: ListenerHub):
        self.registry = registry
        self.hub = hub
        self.current: PlayMode | None = None

    def reset(self) -> None:
        self.current = None

    def record_play_mode(
        self, name: str | None, time: float, index: int | None = None
    ) -> Statistic | None:
        """Record the statistic for a play mode announcement.

        Repeated announcements inside the dedup window record nothing and
        notify nobody; play on is announced on transition only.
        """
        mode = PlayMode.from_name(name)
        if mode is None:
            if name:
                logger.debug(f"Ignoring unknown play mode '{name}'")
            return None

        previous, self.current = self.current, mode
        if mode is PlayMode.PLAY_ON:
            if previous is not PlayMode.PLAY_ON:
                self.hub.enqueue("play_on_received")
            return None

        entry = PLAY_MODE_STATISTICS.get(mode)
        if entry is None:
            return None

        statistic_type, side, callback = entry
        statistic = self.registry.add(statistic_type, side.team_number, 0, time, index=index)
        if statistic is not None:
            logger.info(f"{statistic_type.value} for team {side.team_number} at t={time:.2f}")
            self.hub.enqueue(callback, statistic)
        return statistic

    def record_foul(self, foul: FoulDescriptor, time: float) -> Statistic | None:
        statistic = self.registry.add(
            StatisticType.FOUL, foul.team, foul.agent_id, time, index=foul.index
        )
        if statistic is not None:
            logger.info(f"Foul by team {foul.team} agent {foul.agent_id} at t={time:.2f}")
            self.hub.enqueue("foul_received", statistic)
        return statistic
