"""South-Western Railway Timetable Package

A Python package for looking up stations and suburban train schedules on
the South-Western Railway timetable site, with CLI and MCP server
front ends.
"""

__version__ = "0.1.0"

from .core.client import SwRailwayClient
from .core.extractor import extract_schedule
from .core.models import ScheduleRecord, Station
from .core.time_filter import filter_remaining

__all__ = [
    "ScheduleRecord",
    "Station",
    "SwRailwayClient",
    "extract_schedule",
    "filter_remaining",
]
