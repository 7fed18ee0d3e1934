# tests/test_config.py
import pytest

from pitchwatch.config import (
    ConfigError,
    PitchwatchConfig,
    get_default_config_path,
    load_config,
)
from pitchwatch.heatmap import HeatmapConfig
from pitchwatch.possession import PossessionConfig
from pitchwatch.statistics import DedupPolicy, StatisticType


def test_load_config_from_valid_toml(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text('''
[field]
length = 40.0
width = 26.0
goal_width = 2.4

[estimator]
decay_constant = -1.1

[possession]
store_gap = 2.0
graph_gap = 10.0

[detection]
dribble_min_touches = 3
detect_shots = false

[heatmap]
track_teams = false

[statistics]
default_window = 1.5

[statistics.dedup_windows]
goal = 3.0
''')

    config = load_config(config_file)

    assert config.field.length == 40.0
    assert config.field.goal_width == 2.4
    assert config.estimator.decay_constant == -1.1
    assert config.possession.store_gap == 2.0
    assert config.detection.dribble_min_touches == 3
    assert config.detection.detect_shots is False
    assert config.heatmap.track_teams is False
    assert config.dedup.window_for(StatisticType.GOAL) == 3.0
    assert config.dedup.window_for(StatisticType.FOUL) == 1.5
    assert config.dedup.window_for(StatisticType.POSSESSION) == 0.5


def test_empty_file_gives_defaults(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("")

    config = load_config(config_file)

    assert config == PitchwatchConfig()


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "nope.toml")


def test_unknown_key_rejected(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("[field]\nlenght = 30.0\n")

    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(config_file)


def test_invalid_field_dimensions(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("[field]\nwidth = -5.0\n")

    with pytest.raises(ConfigError):
        load_config(config_file)


def test_positive_decay_rejected(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("[estimator]\ndecay_constant = 0.5\n")

    with pytest.raises(ConfigError):
        load_config(config_file)


def test_unknown_statistic_type(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("[statistics.dedup_windows]\npenalty = 1.0\n")

    with pytest.raises(ConfigError, match="Unknown statistic type 'penalty'"):
        load_config(config_file)


def test_validate_possession_window_below_store_gap():
    """A window as wide as the sampling gap would swallow possession samples."""
    config = PitchwatchConfig(
        possession=PossessionConfig(store_gap=1.0),
        dedup=DedupPolicy(windows={StatisticType.POSSESSION: 1.0}),
    )

    with pytest.raises(ConfigError, match="must be smaller"):
        config.validate()


def test_validate_negative_gap():
    config = PitchwatchConfig(heatmap=HeatmapConfig(store_gap=-1.0))

    with pytest.raises(ConfigError, match="heatmap.store_gap"):
        config.validate()


def test_validate_attacking_fraction():
    config = PitchwatchConfig()
    config.detection.shot_attacking_fraction = 0.6

    with pytest.raises(ConfigError, match="shot_attacking_fraction"):
        config.validate()


def test_default_config_validates():
    PitchwatchConfig().validate()


def test_default_config_path():
    path = get_default_config_path()
    assert path.name == "config.toml"
    assert path.parent.name == ".pitchwatch"
