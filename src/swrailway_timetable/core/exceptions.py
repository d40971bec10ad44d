"""Custom exceptions for the railway timetable client."""


class TimetableError(Exception):
    """Base exception for timetable errors."""

    pass


class NetworkError(TimetableError):
    """Raised when there's a network-related error."""

    pass


class UpstreamStatusError(TimetableError):
    """Raised when the upstream site answers with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(TimetableError):
    """Raised when a JSON payload cannot be decoded into models."""

    pass


class ScrapingError(TimetableError):
    """Raised when a schedule document cannot be parsed structurally."""

    pass


class ValidationError(TimetableError):
    """Raised when input validation fails."""

    pass


class ScheduleFormatError(ValidationError):
    """Raised when a schedule record carries a malformed departure time."""

    pass
