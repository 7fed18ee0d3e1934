"""End-to-end tests for the per-match statistics pipeline."""

from __future__ import annotations

import pytest

from pitchwatch.errors import ReentrantProcessingError
from pitchwatch.estimation import Horizon
from pitchwatch.field_constants import FieldGeometry, Vec3
from pitchwatch.listeners import BaseStatisticsListener
from pitchwatch.match import MatchStatistics
from pitchwatch.statistics import StatisticType
from pitchwatch.types import FoulDescriptor, TeamSide
from tests.fixtures import create_test_agent, create_test_snapshot, rolling_ball_positions


class RecordingListener(BaseStatisticsListener):
    def __init__(self) -> None:
        self.events: list[str] = []

    def goal_received(self, statistic) -> None:
        self.events.append(f"goal:{statistic.team}")

    def foul_received(self, statistic) -> None:
        self.events.append(f"foul:{statistic.agent_id}")

    def play_on_received(self) -> None:
        self.events.append("play_on")

    def dribble_stop_received(self) -> None:
        self.events.append("dribble_stop")


class TestProcess:
    def test_rolling_ball_velocity(self) -> None:
        """Ten snapshots of a ball rolling at 5 m/s along +x."""
        match = MatchStatistics()
        for t, pos in rolling_ball_positions(Vec3(0.0, 0.0, 0.04), Vec3(5.0, 0.0, 0.0), 10):
            match.process(create_test_snapshot(t, ball=pos))

        velocity = match.ball_velocity(Horizon.FOUR)
        assert velocity.x > 0
        assert velocity.y == pytest.approx(0.0)
        assert match.ball_final_position().x > match.ball_position.x
        assert match.cycles == 10

    def test_first_possession_recorded_immediately(self) -> None:
        match = MatchStatistics()
        match.process(create_test_snapshot(0.0))

        possessions = match.statistics(StatisticType.POSSESSION)
        assert len(possessions) == 1
        assert match.owner is not None
        assert match.owner.team_side is TeamSide.LEFT

    def test_possession_over_time(self) -> None:
        match = MatchStatistics()
        for t in range(7):
            match.process(create_test_snapshot(float(t)))

        samples = match.possession_over_time()
        assert len(samples) == 1
        assert samples[0].time == 6.0
        assert samples[0].left_possession == pytest.approx(1.0)

    def test_duplicate_cycle_is_skipped(self) -> None:
        match = MatchStatistics()
        match.process(create_test_snapshot(1.0))
        match.process(create_test_snapshot(1.0))
        assert match.cycles == 1

    def test_missing_team_is_ignored(self) -> None:
        match = MatchStatistics()
        only_left = [create_test_agent(TeamSide.LEFT, 2, x=-1.0)]
        match.process(create_test_snapshot(0.0, agents=only_left))

        assert match.statistics(StatisticType.POSSESSION) == ()
        assert match.owner is None

    def test_play_modes_recorded_without_agents(self) -> None:
        match = MatchStatistics()
        match.process(create_test_snapshot(3.0, agents=[], play_mode="Goal_Left"))
        assert len(match.statistics(StatisticType.GOAL)) == 1

    def test_time_going_back_resets(self) -> None:
        match = MatchStatistics()
        match.process(create_test_snapshot(50.0, play_mode="Goal_Left"))
        match.process(create_test_snapshot(1.0))

        assert match.statistics(StatisticType.GOAL) == ()
        assert match.cycles == 1

    def test_kick_detected_next_to_owner(self) -> None:
        match = MatchStatistics()
        kicker = create_test_agent(TeamSide.LEFT, 6, x=0.0, z=0.4)
        agents = [kicker, create_test_agent(TeamSide.RIGHT, 2, x=10.0)]

        kicks = []
        for i in range(10):
            x = 0.0 if i < 6 else 4.0 * (i - 5) * 0.06
            kick = match.process(
                create_test_snapshot(i * 0.06, ball=(x, 0.0, 0.04), agents=agents)
            )
            if kick is not None:
                kicks.append(kick)

        assert kicks
        assert kicks[0].owner.same_agent(kicker)
        assert match.last_kick is kicks[-1]

    def test_kick_uses_owner_position_of_current_cycle(self) -> None:
        """The owner walks up to the ball after possession was evaluated."""
        match = MatchStatistics()
        rival = create_test_agent(TeamSide.RIGHT, 2, x=10.0)
        approaching = create_test_agent(TeamSide.LEFT, 6, x=-3.0, z=0.4)
        arrived = create_test_agent(TeamSide.LEFT, 6, x=0.0, z=0.4)

        kicks = []
        for i in range(10):
            kicker = approaching if i == 0 else arrived
            x = 0.0 if i < 6 else 4.0 * (i - 5) * 0.06
            kick = match.process(
                create_test_snapshot(i * 0.06, ball=(x, 0.0, 0.04), agents=[kicker, rival])
            )
            if kick is not None:
                kicks.append(kick)

        assert len(match.statistics(StatisticType.POSSESSION)) == 1
        assert kicks
        assert kicks[0].owner.position == Vec3(0.0, 0.0, 0.4)
        assert match.owner.position == Vec3(0.0, 0.0, 0.4)

    def test_owner_leaving_field_stops_dribble_between_evaluations(self) -> None:
        match = MatchStatistics()
        listener = RecordingListener()
        match.add_listener(listener)
        rival = create_test_agent(TeamSide.RIGHT, 2, x=10.0)
        inside = create_test_agent(TeamSide.LEFT, 6, x=14.5)
        outside = create_test_agent(TeamSide.LEFT, 6, x=16.0)

        match.process(create_test_snapshot(0.0, ball=(14.5, 0.0, 0.04), agents=[inside, rival]))
        assert listener.events == []

        match.process(create_test_snapshot(0.06, ball=(14.5, 0.0, 0.04), agents=[outside, rival]))
        assert listener.events == ["dribble_stop"]
        assert len(match.statistics(StatisticType.POSSESSION)) == 1

    def test_owner_missing_from_snapshot(self) -> None:
        match = MatchStatistics()
        owner = create_test_agent(TeamSide.LEFT, 6, x=0.0)
        others = [
            create_test_agent(TeamSide.LEFT, 3, x=-8.0),
            create_test_agent(TeamSide.RIGHT, 2, x=10.0),
        ]
        match.process(create_test_snapshot(0.0, agents=[owner, *others]))

        assert match.possession.evaluate(create_test_snapshot(0.06, agents=others)) is None
        assert match.owner.same_agent(owner)

    def test_estimator_runs_while_a_team_is_missing(self) -> None:
        match = MatchStatistics()
        only_left = [create_test_agent(TeamSide.LEFT, 2, x=-10.0)]
        for t, pos in rolling_ball_positions(Vec3(0.0, 0.0, 0.04), Vec3(5.0, 0.0, 0.0), 10):
            match.process(create_test_snapshot(t, ball=pos, agents=only_left))

        assert match.ball_velocity(Horizon.THREE).x > 0
        assert match.ball_position.x == pytest.approx(2.7)
        assert match.owner is None
        assert match.statistics(StatisticType.POSSESSION) == ()
        assert match.cycles == 10

    def test_single_agent_rolling_ball_scenario(self) -> None:
        """Ball rolls at 5 m/s in +x away from a stationary left agent."""
        match = MatchStatistics()
        agent = create_test_agent(TeamSide.LEFT, 4, x=0.0, z=0.04)
        agents = [agent, create_test_agent(TeamSide.RIGHT, 2, x=14.0)]
        samples = rolling_ball_positions(Vec3(0.0, 0.0, 0.04), Vec3(5.0, 0.0, 0.0), 10)

        for i, (t, pos) in enumerate(samples):
            match.process(create_test_snapshot(t, ball=pos, agents=agents))
            assert match.owner.same_agent(agent)

            if i == 4:
                velocity = match.ball_velocity(Horizon.THREE, 0.0)
                direction = velocity / velocity.length()
                assert direction.x == pytest.approx(1.0, rel=0.05)
                assert abs(direction.y) < 0.05

        possessions = match.statistics(StatisticType.POSSESSION)
        assert possessions
        assert all(s.team == 1 and s.agent_id == 4 for s in possessions)
        direction = match.ball_velocity(Horizon.THREE) / match.ball_velocity(Horizon.THREE).length()
        assert direction.x == pytest.approx(1.0, rel=0.05)


class TestListeners:
    def test_events_delivered_after_processing(self) -> None:
        match = MatchStatistics()
        listener = RecordingListener()
        match.add_listener(listener)

        foul = FoulDescriptor(index=1, team=2, agent_id=7)
        match.process(create_test_snapshot(10.0, play_mode="Goal_Right", foul=foul))

        assert listener.events == ["goal:2", "foul:7"]

    def test_removed_listener_hears_nothing(self) -> None:
        match = MatchStatistics()
        listener = RecordingListener()
        match.add_listener(listener)
        match.remove_listener(listener)

        match.process(create_test_snapshot(1.0, play_mode="PlayOn"))
        assert listener.events == []

    def test_reentrant_process_rejected(self) -> None:
        match = MatchStatistics()
        errors = []

        class Reentrant(BaseStatisticsListener):
            def play_on_received(self) -> None:
                try:
                    match.process(create_test_snapshot(2.0))
                except ReentrantProcessingError as e:
                    errors.append(e)

        match.add_listener(Reentrant())
        match.process(create_test_snapshot(1.0, play_mode="PlayOn"))

        assert len(errors) == 1
        assert errors[0].details["in_flight_time"] == 1.0
        assert match.cycles == 1

        # The guard is released once the turn completes
        match.process(create_test_snapshot(2.0))
        assert match.cycles == 2


class TestFieldGeometry:
    def test_update_resizes_heatmap(self) -> None:
        match = MatchStatistics()
        match.update_field_geometry(FieldGeometry(length=40.0, width=26.0))

        assert match.field.length == 40.0
        assert match.detector.field is match.field
        assert match.heatmap.ball.cols == 40
        assert match.heatmap.ball.rows == 26

    def test_same_geometry_keeps_heatmap(self) -> None:
        match = MatchStatistics()
        heatmap_grid = match.heatmap.ball
        match.update_field_geometry(FieldGeometry())
        assert match.heatmap.ball is heatmap_grid


def test_reset_keeps_listeners() -> None:
    match = MatchStatistics()
    listener = RecordingListener()
    match.add_listener(listener)
    match.process(create_test_snapshot(5.0, play_mode="Goal_Left"))
    match.reset()

    assert len(match.statistics()) == 0
    assert match.last_time is None
    match.process(create_test_snapshot(6.0, play_mode="Goal_Left"))
    assert listener.events == ["goal:1", "goal:1"]
