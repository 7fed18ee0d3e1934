"""Tests for referee play mode and foul statistics."""

from __future__ import annotations

import pytest

from pitchwatch.events import PLAY_MODE_STATISTICS, PlayModeRecorder
from pitchwatch.listeners import ListenerHub
from pitchwatch.statistics import StatisticRegistry, StatisticType
from pitchwatch.types import FoulDescriptor, PlayMode


@pytest.fixture
def recorder():
    registry = StatisticRegistry()
    hub = ListenerHub()
    return PlayModeRecorder(registry, hub), registry, hub


class TestPlayModeLookup:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Goal_Left", PlayMode.GOAL_LEFT),
            ("goal_left", PlayMode.GOAL_LEFT),
            ("KickIn_Right", PlayMode.KICK_IN_RIGHT),
            ("kick_in_right", PlayMode.KICK_IN_RIGHT),
            ("PlayOn", PlayMode.PLAY_ON),
            ("corner_kick_left", PlayMode.CORNER_KICK_LEFT),
        ],
    )
    def test_from_name(self, name, expected) -> None:
        assert PlayMode.from_name(name) is expected

    def test_unknown(self) -> None:
        assert PlayMode.from_name("Penalty_Shootout") is None
        assert PlayMode.from_name(None) is None

    def test_every_statistic_mode_has_a_callback(self) -> None:
        for mode, (_, _, callback) in PLAY_MODE_STATISTICS.items():
            assert callback.endswith("_received"), mode


class TestRecordPlayMode:
    def test_goal_recorded_for_team(self, recorder) -> None:
        rec, registry, hub = recorder
        stat = rec.record_play_mode("Goal_Right", 42.0, index=8)

        assert stat.type is StatisticType.GOAL
        assert stat.team == 2
        assert stat.agent_id == 0
        assert stat.index == 8
        assert hub.pending == 1

    def test_repeated_announcement_is_deduplicated(self, recorder) -> None:
        rec, registry, hub = recorder
        rec.record_play_mode("corner_kick_left", 10.0)
        assert rec.record_play_mode("corner_kick_left", 10.5) is None

        assert registry.count(StatisticType.CORNER) == 1
        assert hub.pending == 1

    def test_direct_free_kick_counts_as_free_kick(self, recorder) -> None:
        rec, registry, _ = recorder
        rec.record_play_mode("direct_free_kick_right", 10.0)
        assert registry.count(StatisticType.FREE_KICK, team=2) == 1

    def test_play_on_only_on_transition(self, recorder) -> None:
        rec, registry, hub = recorder
        rec.record_play_mode("PlayOn", 1.0)
        rec.record_play_mode("PlayOn", 1.06)
        assert hub.pending == 1

        rec.record_play_mode("KickIn_Left", 5.0)
        rec.record_play_mode("PlayOn", 9.0)
        assert hub.pending == 3
        assert len(registry) == 1

    def test_modes_without_statistic(self, recorder) -> None:
        rec, registry, hub = recorder
        assert rec.record_play_mode("BeforeKickOff", 0.0) is None
        assert rec.record_play_mode("GameOver", 600.0) is None
        assert len(registry) == 0
        assert hub.pending == 0

    def test_unknown_mode_is_ignored(self, recorder) -> None:
        rec, registry, _ = recorder
        assert rec.record_play_mode("not_a_mode", 1.0) is None
        assert rec.record_play_mode(None, 1.0) is None
        assert len(registry) == 0


class TestRecordFoul:
    def test_foul_credited_to_offender(self, recorder) -> None:
        rec, registry, hub = recorder
        stat = rec.record_foul(FoulDescriptor(index=3, team=2, agent_id=7), 12.0)

        assert stat.type is StatisticType.FOUL
        assert (stat.team, stat.agent_id, stat.index) == (2, 7, 3)
        assert hub.pending == 1

    def test_repeated_foul_is_deduplicated(self, recorder) -> None:
        rec, registry, hub = recorder
        foul = FoulDescriptor(index=3, team=2, agent_id=7)
        rec.record_foul(foul, 12.0)
        rec.record_foul(foul, 12.06)

        assert registry.count(StatisticType.FOUL) == 1
        assert hub.pending == 1
