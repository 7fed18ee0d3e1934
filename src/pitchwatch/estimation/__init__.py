"""Ball sample buffering and kinematic estimation.

Example:
    from pitchwatch.estimation import BallEstimator, Horizon

    estimator = BallEstimator()
    estimator.update(Vec3(0.0, 0.0, 0.04), 12.34)
    velocity = estimator.estimated_velocity(Horizon.FOUR)
"""

from .ball_estimator import BallEstimator, Horizon, KinematicModel, ReferenceFrame
from .buffer import BUFFER_CAPACITY, Sample, SampleBuffer

__all__ = [
    "BallEstimator",
    "Horizon",
    "KinematicModel",
    "ReferenceFrame",
    "Sample",
    "SampleBuffer",
    "BUFFER_CAPACITY",
]
