"""Motion model constants for ball estimation.

This module centralizes the empirical values used by the kinematic
estimator. All distances are in metres and times in simulation seconds.
"""

from __future__ import annotations

# =============================================================================
# Sampling
# =============================================================================

# Nominal period of the monitor's vision updates
VISION_CYCLE_S: float = 0.06

# Lookback horizons, in vision cycles
HORIZON_CYCLES: tuple[int, ...] = (3, 4, 5)


# =============================================================================
# Ball Motion Model
# =============================================================================

# Exponential decay of rolling ball speed: v(t) = v0 * exp(k * t).
# Must be negative so projections converge to a rest position.
BALL_DECAY_CONSTANT: float = -1.05719

# Returned by time-to-travel when the ball will never cover the distance
NEVER_ARRIVES_S: float = 1e5

# Closest-agent distance under which the ball history is taken as a clean
# "away" reference for the next free-rolling phase
AWAY_REFERENCE_DISTANCE: float = 0.3
