"""Core timetable lookup functionality."""

from .client import LEGACY_ENDPOINT, MODERN_ENDPOINT, Endpoint, SwRailwayClient
from .exceptions import (
    DecodeError,
    NetworkError,
    ScheduleFormatError,
    ScrapingError,
    TimetableError,
    UpstreamStatusError,
    ValidationError,
)
from .extractor import ScheduleExtractor, extract_schedule, parse_document
from .layouts import JSON_LAYOUT, LEGACY_LAYOUT, TableLayout, get_layout
from .models import ScheduleRecord, ScheduleRequest, Station, StationRequest
from .result import Failure, FailureKind, FetchResult
from .time_filter import REFERENCE_TIMEZONE, filter_remaining

__all__ = [
    "Endpoint",
    "MODERN_ENDPOINT",
    "LEGACY_ENDPOINT",
    "SwRailwayClient",
    "ScheduleExtractor",
    "extract_schedule",
    "parse_document",
    "TableLayout",
    "JSON_LAYOUT",
    "LEGACY_LAYOUT",
    "get_layout",
    "ScheduleRecord",
    "ScheduleRequest",
    "Station",
    "StationRequest",
    "Failure",
    "FailureKind",
    "FetchResult",
    "REFERENCE_TIMEZONE",
    "filter_remaining",
    "TimetableError",
    "NetworkError",
    "UpstreamStatusError",
    "DecodeError",
    "ScrapingError",
    "ValidationError",
    "ScheduleFormatError",
]
