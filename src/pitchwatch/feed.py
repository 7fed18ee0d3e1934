"""JSON-lines snapshot feed.

Each line of a feed file holds one already-tokenized monitor snapshot:

    {"time": 12.34, "ball": [0.1, -2.0, 0.04],
     "agents": [{"team": "left", "id": 3, "position": [1.0, 2.0, 0.5]}],
     "play_mode": "PlayOn", "play_mode_index": 2,
     "foul": {"index": 1, "team": 2, "agent_id": 7}}

Only "time" and "ball" are required. Teams may be given as "left"/"right"
or as team numbers 1/2. Blank lines are skipped.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from .errors import FeedFileNotFoundError, SnapshotDecodeError
from .field_constants import Vec3
from .types import AgentState, FoulDescriptor, Snapshot, TeamSide

logger = logging.getLogger(__name__)


def _decode_vec3(value: Any, name: str, line_number: int | None) -> Vec3:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise SnapshotDecodeError(f"'{name}' must be a list of 3 numbers", line_number)
    try:
        vec = Vec3(float(value[0]), float(value[1]), float(value[2]))
    except (TypeError, ValueError) as e:
        raise SnapshotDecodeError(f"'{name}' must be a list of 3 numbers", line_number) from e
    if not all(math.isfinite(c) for c in vec):
        raise SnapshotDecodeError(f"'{name}' contains a non-finite value", line_number)
    return vec


def _decode_team(value: Any, line_number: int | None) -> TeamSide:
    if isinstance(value, str):
        try:
            return TeamSide(value.lower())
        except ValueError:
            pass
    elif isinstance(value, int) and not isinstance(value, bool):
        try:
            return TeamSide.from_team_number(value)
        except ValueError:
            pass
    raise SnapshotDecodeError(f"Unknown team {value!r}", line_number)


def _decode_agent(data: Any, line_number: int | None) -> AgentState:
    if not isinstance(data, dict):
        raise SnapshotDecodeError("Each agent must be an object", line_number)
    for key in ("team", "id", "position"):
        if key not in data:
            raise SnapshotDecodeError(f"Agent is missing '{key}'", line_number)
    agent_id = data["id"]
    if not isinstance(agent_id, int) or isinstance(agent_id, bool):
        raise SnapshotDecodeError(f"Agent id must be an integer, got {agent_id!r}", line_number)
    return AgentState(
        team_side=_decode_team(data["team"], line_number),
        agent_id=agent_id,
        position=_decode_vec3(data["position"], "position", line_number),
    )


def _decode_foul(data: Any, line_number: int | None) -> FoulDescriptor:
    if not isinstance(data, dict):
        raise SnapshotDecodeError("'foul' must be an object", line_number)
    try:
        return FoulDescriptor(
            index=int(data["index"]),
            team=_decode_team(data["team"], line_number).team_number,
            agent_id=int(data["agent_id"]),
        )
    except KeyError as e:
        raise SnapshotDecodeError(f"Foul is missing {e}", line_number) from e
    except (TypeError, ValueError) as e:
        raise SnapshotDecodeError(f"Invalid foul: {e}", line_number) from e


def decode_snapshot(data: Any, line_number: int | None = None) -> Snapshot:
    """Build a Snapshot from one decoded feed record.

    Raises:
        SnapshotDecodeError: If the record is malformed
    """
    if not isinstance(data, dict):
        raise SnapshotDecodeError("Record must be a JSON object", line_number)
    if "time" not in data:
        raise SnapshotDecodeError("Missing 'time'", line_number)
    if "ball" not in data:
        raise SnapshotDecodeError("Missing 'ball'", line_number)

    try:
        time = float(data["time"])
    except (TypeError, ValueError) as e:
        raise SnapshotDecodeError(f"'time' must be a number, got {data['time']!r}", line_number) from e
    if not math.isfinite(time):
        raise SnapshotDecodeError("'time' must be finite", line_number)

    agents = data.get("agents") or []
    if not isinstance(agents, list):
        raise SnapshotDecodeError("'agents' must be a list", line_number)

    play_mode = data.get("play_mode")
    if play_mode is not None and not isinstance(play_mode, str):
        raise SnapshotDecodeError("'play_mode' must be a string", line_number)

    play_mode_index = data.get("play_mode_index")
    if play_mode_index is not None and (
        not isinstance(play_mode_index, int) or isinstance(play_mode_index, bool)
    ):
        raise SnapshotDecodeError("'play_mode_index' must be an integer", line_number)

    foul = data.get("foul")
    return Snapshot(
        time=time,
        ball_position=_decode_vec3(data["ball"], "ball", line_number),
        agents=tuple(_decode_agent(a, line_number) for a in agents),
        play_mode=play_mode,
        play_mode_index=play_mode_index,
        foul=_decode_foul(foul, line_number) if foul is not None else None,
    )


def read_snapshots(path: Path) -> Iterator[Snapshot]:
    """Yield snapshots from a JSON-lines feed file in file order.

    Raises:
        FeedFileNotFoundError: If path does not exist
        SnapshotDecodeError: On the first malformed line
    """
    path = Path(path)
    if not path.is_file():
        raise FeedFileNotFoundError(str(path))

    count = 0
    with open(path, encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                data = json.loads(line)
            except json.JSONDecodeError as e:
                raise SnapshotDecodeError(
                    f"Invalid JSON: {e.msg}", line_number, str(path)
                ) from e
            try:
                snapshot = decode_snapshot(data, line_number)
            except SnapshotDecodeError as e:
                e.details["path"] = str(path)
                raise
            count += 1
            yield snapshot

    logger.debug(f"Read {count} snapshots from {path}")
