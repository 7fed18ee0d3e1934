"""Match statistics report generation.

Builds a schema-conformant JSON report from a MatchStatistics instance and
provides a replay helper that runs a whole feed file through the pipeline.
"""

from __future__ import annotations

import datetime as _dt
import json
import logging
import os
from pathlib import Path
from typing import Any

from .config import PitchwatchConfig
from .feed import read_snapshots
from .match import MatchStatistics
from .possession import left_possession_share
from .statistics import Statistic, StatisticType
from .types import TeamSide
from .version import get_schema_version

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return (
        _dt.datetime.now(_dt.timezone.utc)
        .replace(microsecond=0)
        .isoformat()
        .replace("+00:00", "Z")
    )


def _statistic_to_dict(statistic: Statistic) -> dict[str, Any]:
    return {
        "time": round(statistic.time, 3),
        "type": statistic.type.value,
        "team": statistic.team,
        "agent_id": statistic.agent_id,
        "index": statistic.index,
    }


def _team_counts(match: MatchStatistics, side: TeamSide) -> dict[str, int]:
    return {
        statistic_type.value: match.registry.count(statistic_type, side.team_number)
        for statistic_type in StatisticType
    }


def build_report(match: MatchStatistics, source: str | None = None) -> dict[str, Any]:
    """Serialize the current state of match into a report dictionary."""
    field = match.field
    share = left_possession_share(match.registry)
    return {
        "schema_version": get_schema_version(),
        "generated_at": _utc_now_iso(),
        "source": source,
        "field": {
            "length": field.length,
            "width": field.width,
            "goal_width": field.goal_width,
        },
        "cycles": match.cycles,
        "duration": max(0.0, match.last_time or 0.0),
        "statistics": [_statistic_to_dict(s) for s in match.statistics()],
        "counts": {
            "left": _team_counts(match, TeamSide.LEFT),
            "right": _team_counts(match, TeamSide.RIGHT),
        },
        "possession": {
            "left_share": share,
            "series": [
                {"time": round(s.time, 3), "left_possession": s.left_possession}
                for s in match.possession_over_time()
            ],
        },
        "heatmap": match.heatmap.to_dict(),
    }


def replay_feed(feed_path: Path, config: PitchwatchConfig | None = None) -> MatchStatistics:
    """Run every snapshot of a feed file through a fresh MatchStatistics."""
    match = MatchStatistics(config)
    for snapshot in read_snapshots(feed_path):
        match.process(snapshot)
    logger.info(
        f"Replayed {match.cycles} cycles from {feed_path}: "
        f"{len(match.registry)} statistics recorded"
    )
    return match


def write_report_atomically(
    report: dict[str, Any], out_path: Path, pretty: bool = False
) -> None:
    """Write JSON file atomically to avoid partial writes."""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = out_path.with_suffix(out_path.suffix + ".tmp")
    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2 if pretty else None)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, out_path)
        logger.info(f"Report written to {out_path}")
    finally:
        if temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                pass
