# src/pitchwatch/config.py
"""Configuration management for pitchwatch."""

from __future__ import annotations

import math
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from pathlib import Path

import tomllib

from .estimation.ball_estimator import KinematicModel
from .events.detector import DetectionConfig
from .field_constants import FieldGeometry
from .heatmap import HeatmapConfig
from .possession import PossessionConfig
from .statistics import DEFAULT_DEDUP_WINDOW_S, DEFAULT_DEDUP_WINDOWS, DedupPolicy, StatisticType


class ConfigError(Exception):
    """Configuration error."""

    pass


@dataclass
class PitchwatchConfig:
    field: FieldGeometry = dataclass_field(default_factory=FieldGeometry)
    estimator: KinematicModel = dataclass_field(default_factory=KinematicModel)
    possession: PossessionConfig = dataclass_field(default_factory=PossessionConfig)
    detection: DetectionConfig = dataclass_field(default_factory=DetectionConfig)
    heatmap: HeatmapConfig = dataclass_field(default_factory=HeatmapConfig)
    dedup: DedupPolicy = dataclass_field(default_factory=DedupPolicy)

    def validate(self) -> None:
        """Validate configuration, raising ConfigError if invalid."""
        for name, gap in (
            ("possession.store_gap", self.possession.store_gap),
            ("possession.graph_gap", self.possession.graph_gap),
            ("heatmap.store_gap", self.heatmap.store_gap),
        ):
            if gap < 0 or not math.isfinite(gap):
                raise ConfigError(f"Invalid {name} {gap}. Must be a finite value >= 0")

        # A possession window as wide as the sampling gap would merge
        # consecutive samples of the same owner.
        possession_window = self.dedup.window_for(StatisticType.POSSESSION)
        if self.possession.store_gap > 0 and possession_window >= self.possession.store_gap:
            raise ConfigError(
                f"Possession dedup window ({possession_window}) must be smaller than "
                f"possession.store_gap ({self.possession.store_gap})"
            )

        for statistic_type, window in self.dedup.windows.items():
            if window < 0:
                raise ConfigError(
                    f"Invalid dedup window for '{statistic_type.value}': {window}"
                )

        if self.detection.dribble_min_touches < 1:
            raise ConfigError(
                f"Invalid dribble_min_touches {self.detection.dribble_min_touches}. "
                "Must be at least 1"
            )

        if not 0 < self.detection.shot_attacking_fraction < 0.5:
            raise ConfigError(
                f"Invalid shot_attacking_fraction {self.detection.shot_attacking_fraction}. "
                "Must be between 0 and 0.5"
            )


def _parse_dedup(data: dict) -> DedupPolicy:
    windows = dict(DEFAULT_DEDUP_WINDOWS)
    for key, value in data.get("dedup_windows", {}).items():
        try:
            statistic_type = StatisticType(key.lower())
        except ValueError as e:
            valid = ", ".join(t.value for t in StatisticType)
            raise ConfigError(
                f"Unknown statistic type '{key}' in [statistics.dedup_windows]. "
                f"Must be one of: {valid}"
            ) from e
        windows[statistic_type] = float(value)

    return DedupPolicy(
        default_window=float(data.get("default_window", DEFAULT_DEDUP_WINDOW_S)),
        windows=windows,
    )


def load_config(config_path: Path) -> PitchwatchConfig:
    """Load configuration from TOML file."""
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    try:
        field_geometry = FieldGeometry(**data.get("field", {}))
        estimator = KinematicModel(**data.get("estimator", {}))
        possession = PossessionConfig(**data.get("possession", {}))
        detection = DetectionConfig(**data.get("detection", {}))
        heatmap = HeatmapConfig(**data.get("heatmap", {}))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    config = PitchwatchConfig(
        field=field_geometry,
        estimator=estimator,
        possession=possession,
        detection=detection,
        heatmap=heatmap,
        dedup=_parse_dedup(data.get("statistics", {})),
    )
    config.validate()
    return config


def get_default_config_path() -> Path:
    """Get the default config file path."""
    return Path.home() / ".pitchwatch" / "config.toml"
