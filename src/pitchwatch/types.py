"""Core data types for inbound monitor snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .field_constants import Vec3


class TeamSide(Enum):
    """Side of the pitch a team starts on."""

    LEFT = "left"
    RIGHT = "right"

    @property
    def team_number(self) -> int:
        """Team number used in statistics (1 = left, 2 = right)."""
        return 1 if self is TeamSide.LEFT else 2

    @classmethod
    def from_team_number(cls, team: int) -> TeamSide:
        if team == 1:
            return cls.LEFT
        if team == 2:
            return cls.RIGHT
        raise ValueError(f"team number must be 1 or 2, got {team}")


class PlayMode(Enum):
    """Play modes announced by the simulation server."""

    BEFORE_KICK_OFF = "BeforeKickOff"
    KICK_OFF_LEFT = "KickOff_Left"
    KICK_OFF_RIGHT = "KickOff_Right"
    PLAY_ON = "PlayOn"
    KICK_IN_LEFT = "KickIn_Left"
    KICK_IN_RIGHT = "KickIn_Right"
    CORNER_KICK_LEFT = "corner_kick_left"
    CORNER_KICK_RIGHT = "corner_kick_right"
    GOAL_KICK_LEFT = "goal_kick_left"
    GOAL_KICK_RIGHT = "goal_kick_right"
    OFFSIDE_LEFT = "offside_left"
    OFFSIDE_RIGHT = "offside_right"
    GAME_OVER = "GameOver"
    GOAL_LEFT = "Goal_Left"
    GOAL_RIGHT = "Goal_Right"
    FREE_KICK_LEFT = "free_kick_left"
    FREE_KICK_RIGHT = "free_kick_right"
    DIRECT_FREE_KICK_LEFT = "direct_free_kick_left"
    DIRECT_FREE_KICK_RIGHT = "direct_free_kick_right"

    @classmethod
    def from_name(cls, name: str | None) -> PlayMode | None:
        """Resolve a server play mode name (case-insensitive), or None."""
        if not name:
            return None
        return _PLAY_MODES_BY_KEY.get(_play_mode_key(name))


def _play_mode_key(name: str) -> str:
    return name.replace("_", "").lower()


_PLAY_MODES_BY_KEY: dict[str, PlayMode] = {_play_mode_key(m.value): m for m in PlayMode}


@dataclass(frozen=True)
class AgentState:
    """Observed state of one agent in a snapshot."""

    team_side: TeamSide
    agent_id: int
    position: Vec3

    def same_agent(self, other: AgentState | None) -> bool:
        """True if other refers to the same team side and agent id."""
        if other is None:
            return False
        return self.team_side is other.team_side and self.agent_id == other.agent_id

    @property
    def team_number(self) -> int:
        return self.team_side.team_number


@dataclass(frozen=True)
class FoulDescriptor:
    """Foul announced by the server."""

    index: int
    team: int  # 1 or 2
    agent_id: int


@dataclass(frozen=True)
class Snapshot:
    """One simulation step as delivered by the monitor feed."""

    time: float  # server time, seconds
    ball_position: Vec3
    agents: tuple[AgentState, ...] = field(default_factory=tuple)
    play_mode: str | None = None
    play_mode_index: int | None = None
    foul: FoulDescriptor | None = None

    def left_agents(self) -> list[AgentState]:
        """Left team agents in roster order."""
        return [a for a in self.agents if a.team_side is TeamSide.LEFT]

    def right_agents(self) -> list[AgentState]:
        """Right team agents in roster order."""
        return [a for a in self.agents if a.team_side is TeamSide.RIGHT]

    def find_agent(self, agent: AgentState | None) -> AgentState | None:
        """This snapshot's state of the agent with the same side and id."""
        for candidate in self.agents:
            if candidate.same_agent(agent):
                return candidate
        return None
