"""Shared test fixtures and builders for pitchwatch tests."""

from .builders import (
    create_feed_record,
    create_test_agent,
    create_test_snapshot,
    default_agents,
    rolling_ball_positions,
)

__all__ = [
    "create_feed_record",
    "create_test_agent",
    "create_test_snapshot",
    "default_agents",
    "rolling_ball_positions",
]
