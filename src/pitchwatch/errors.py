"""Custom exceptions for pitchwatch with structured error information."""


class PitchwatchError(Exception):
    """Base exception for all pitchwatch errors.

    Provides structured error information with actionable messages.
    """

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.details = details or {}


class FeedFileNotFoundError(PitchwatchError):
    """Raised when a snapshot feed file cannot be found."""

    def __init__(self, path: str):
        message = f"Snapshot feed not found: {path}"
        details = {
            "path": path,
            "suggested_action": "Verify the file path exists and is accessible",
        }
        super().__init__(message, details)


class SnapshotDecodeError(PitchwatchError):
    """Raised when a feed record cannot be turned into a Snapshot."""

    def __init__(self, reason: str, line_number: int | None = None, path: str = None):
        if line_number is not None:
            message = f"Invalid snapshot at line {line_number}: {reason}"
        else:
            message = f"Invalid snapshot: {reason}"

        details = {
            "reason": reason,
            "line_number": line_number,
            "path": path,
            "suggested_action": (
                "Each feed line must be a JSON object with 'time', 'ball' and 'agents'"
            ),
        }
        super().__init__(message, details)


class ReentrantProcessingError(PitchwatchError):
    """Raised when a snapshot is submitted while another is being processed."""

    def __init__(self, in_flight_time: float, submitted_time: float):
        message = (
            f"Snapshot at t={submitted_time:.2f} submitted while t={in_flight_time:.2f} "
            "is still being processed"
        )
        details = {
            "in_flight_time": in_flight_time,
            "submitted_time": submitted_time,
            "suggested_action": (
                "Do not call MatchStatistics.process from listener callbacks; "
                "hand work off to a queue instead"
            ),
        }
        super().__init__(message, details)
