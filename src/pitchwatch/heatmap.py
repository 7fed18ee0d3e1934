"""Position occupancy heat maps for the ball and both teams."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .events.constants import GOALKEEPER_ID, HEATMAP_CELL_SIZE, POSITION_STORE_GAP_S
from .field_constants import FieldGeometry, Vec3
from .types import Snapshot, TeamSide


@dataclass
class HeatmapConfig:
    store_gap: float = POSITION_STORE_GAP_S
    track_teams: bool = True


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _clamp(index: int, low: int, high: int) -> int:
    return max(low, min(high, index))


class OccupancyGrid:
    """Count grid over the pitch with one cell per HEATMAP_CELL_SIZE metres.

    Rows run along the width and columns along the length, both indexed from
    the +X / +Y corner as the overlay draws them.
    """

    def __init__(self, field: FieldGeometry):
        self.field = field
        self.cols = max(1, math.ceil(field.length / HEATMAP_CELL_SIZE))
        self.rows = max(1, math.ceil(field.width / HEATMAP_CELL_SIZE))
        self.values = [[0 for _ in range(self.cols)] for _ in range(self.rows)]
        self.total = 0

    def cell_for(self, pos: Vec3) -> tuple[int, int]:
        """(row, col) for a position; off-pitch positions clamp to the edge."""
        col = _round_half_up((self.field.half_length - pos.x) / HEATMAP_CELL_SIZE) - 1
        row = _round_half_up((self.field.half_width - pos.y) / HEATMAP_CELL_SIZE) - 1
        return _clamp(row, 0, self.rows - 1), _clamp(col, 0, self.cols - 1)

    def add(self, pos: Vec3) -> None:
        row, col = self.cell_for(pos)
        self.values[row][col] += 1
        self.total += 1

    def normalized(self) -> list[list[float]]:
        """Cell counts scaled to [0, 1] by the busiest cell."""
        peak = max((max(row) for row in self.values), default=0)
        if peak == 0:
            return [[0.0 for _ in row] for row in self.values]
        return [[value / peak for value in row] for row in self.values]

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows": self.rows,
            "cols": self.cols,
            "cell_size": HEATMAP_CELL_SIZE,
            "samples": self.total,
            "values": [list(row) for row in self.values],
        }


class PositionHeatmap:
    """Samples ball (and optionally team) positions once per store interval."""

    def __init__(self, field: FieldGeometry, config: HeatmapConfig | None = None):
        self.config = config or HeatmapConfig()
        self.resize(field)

    def resize(self, field: FieldGeometry) -> None:
        """Start empty grids for a (possibly new) field geometry."""
        self.field = field
        self.ball = OccupancyGrid(field)
        self.teams = {side: OccupancyGrid(field) for side in TeamSide}
        self.positions_count = 0
        self._delta = 0.0

    def store(self, snapshot: Snapshot) -> bool:
        """Record positions if the store interval has elapsed."""
        if self._delta < self.config.store_gap:
            return False

        self.ball.add(snapshot.ball_position)
        if self.config.track_teams:
            for agent in snapshot.agents:
                if agent.agent_id != GOALKEEPER_ID:
                    self.teams[agent.team_side].add(agent.position)

        self._delta = 0.0
        self.positions_count += 1
        return True

    def advance(self, cycle_time: float) -> None:
        self._delta += cycle_time

    @property
    def count(self) -> int:
        return self.positions_count

    def grid(self) -> list[list[int]]:
        """Copy of the ball grid counts."""
        return [list(row) for row in self.ball.values]

    def normalized(self) -> list[list[float]]:
        return self.ball.normalized()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"ball": self.ball.to_dict()}
        if self.config.track_teams:
            data["teams"] = {side.value: grid.to_dict() for side, grid in self.teams.items()}
        return data
