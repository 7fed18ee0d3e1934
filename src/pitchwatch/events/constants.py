"""Detection thresholds and constants for event detection.

All numeric constants used by the possession tracker and the event
detectors are centralized here for easy tuning and documentation.
"""

from __future__ import annotations

# =============================================================================
# Possession
# =============================================================================
POSSESSION_STORE_GAP_S = 1.0  # Owner re-evaluated this often (sim seconds)
POSSESSION_GRAPH_GAP_S = 5.0  # Possession-over-time sample interval

# =============================================================================
# Kick Detection
# =============================================================================
KICK_VELOCITY_TRIGGER = 0.01  # Minimum rounded ball speed for a kick (m/s)
KICK_SPEED_DECIMALS = 3  # Speeds are compared after rounding
KICK_OWNER_DISTANCE = 1.0  # Ball must be this close to the owner (m)

# =============================================================================
# Dribble Detection
# =============================================================================
DRIBBLE_MIN_TOUCHES = 2
DRIBBLE_MIN_DISTANCE = 1.0  # Ball displacement over the run (m)

# =============================================================================
# Shot Detection
# =============================================================================
SHOT_MIN_SPEED = 3.0  # m/s at the moment of the kick
SHOT_ATTACKING_FRACTION = 0.25  # Owner must be beyond L * fraction toward goal
SHOT_GOAL_LINE_MARGIN = 0.5  # Ball must be projected to reach L/2 - margin
SHOT_GOAL_MOUTH_MARGIN = 0.1  # Added to the half goal width

# =============================================================================
# Position Heat Map
# =============================================================================
POSITION_STORE_GAP_S = 1.0
HEATMAP_CELL_SIZE = 1.0  # m
GOALKEEPER_ID = 1
