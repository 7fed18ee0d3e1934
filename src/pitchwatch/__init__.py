"""pitchwatch: Ball estimation and match statistics for 3D simulated soccer."""

from .match import MatchStatistics
from .schema import validate_report, validate_report_file
from .statistics import Statistic, StatisticType
from .version import get_package_version

__version__ = get_package_version()
__author__ = "pitchwatch contributors"
__description__ = "Ball estimation and match statistics for 3D simulated soccer"

__all__ = [
    "MatchStatistics",
    "Statistic",
    "StatisticType",
    "validate_report",
    "validate_report_file",
]
