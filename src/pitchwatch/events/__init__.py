"""Event detection for 3D simulation matches.

This package identifies discrete game events from the snapshot stream:
- Kicks: Ball speed increases next to its owner
- Dribbles: Runs of consecutive kicks by the same agent
- Shots: Kicks projected toward the attacked goal, on or off target
- Referee decisions: Goals, fouls, offsides, corners, kick-ins, free kicks

All detection uses deterministic thresholds and graceful degradation.

Example:
    from pitchwatch.events import KickDetector, PlayModeRecorder

    detector = KickDetector(estimator, registry, hub, FIELD)
    kick = detector.evaluate(snapshot.time, snapshot.ball_position, owner)
"""

from .constants import (
    DRIBBLE_MIN_DISTANCE,
    DRIBBLE_MIN_TOUCHES,
    KICK_OWNER_DISTANCE,
    KICK_VELOCITY_TRIGGER,
    POSSESSION_GRAPH_GAP_S,
    POSSESSION_STORE_GAP_S,
    SHOT_MIN_SPEED,
)
from .detector import DetectionConfig, KickDetector
from .dribble import DribbleTracker
from .playmode import PLAY_MODE_STATISTICS, PlayModeRecorder
from .shots import classify_shot, lateral_position_at_line
from .types import DribbleOutcome, DribbleRun, KickEvent

__all__ = [
    # Event types
    "KickEvent",
    "DribbleRun",
    "DribbleOutcome",
    # Detectors
    "DetectionConfig",
    "KickDetector",
    "DribbleTracker",
    "PlayModeRecorder",
    "PLAY_MODE_STATISTICS",
    "classify_shot",
    "lateral_position_at_line",
    # Constants (commonly used externally)
    "DRIBBLE_MIN_DISTANCE",
    "DRIBBLE_MIN_TOUCHES",
    "KICK_OWNER_DISTANCE",
    "KICK_VELOCITY_TRIGGER",
    "POSSESSION_GRAPH_GAP_S",
    "POSSESSION_STORE_GAP_S",
    "SHOT_MIN_SPEED",
]
