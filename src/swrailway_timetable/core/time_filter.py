"""Same-day "remaining trips" filtering for schedule records."""

from collections.abc import Iterable
from datetime import date, datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

if TYPE_CHECKING:
    from .models import ScheduleRecord

# Wall-clock reference for "later today" comparisons. "Europe/Kiev" is the
# backward-compatible alias of Europe/Kyiv; unlike the new name it also
# resolves against zone databases older than 2022b.
REFERENCE_TIMEZONE = ZoneInfo("Europe/Kiev")


def reference_now() -> datetime:
    """Current time in the reference timezone."""
    return datetime.now(REFERENCE_TIMEZONE)


def reference_today() -> date:
    """Current date in the reference timezone."""
    return reference_now().date()


def current_time_tokens(now: datetime | None = None) -> tuple[str, str]:
    """Return zero-padded ``(HH, MM)`` strings for ``now`` in the reference timezone.

    A naive ``now`` is taken as reference-timezone wall-clock time.
    """
    if now is None:
        now = reference_now()
    elif now.tzinfo is not None:
        now = now.astimezone(REFERENCE_TIMEZONE)
    return now.strftime("%H"), now.strftime("%M")


def is_remaining(record: "ScheduleRecord", hour: str, minute: str) -> bool:
    """Check whether a record departs strictly after ``hour:minute``.

    Tokens are compared as strings; two-digit zero-padded values order the
    same way numerically.
    """
    record_hour, record_minute = record.departure_tokens()
    return hour < record_hour or (hour == record_hour and minute < record_minute)


def filter_remaining(
    records: Iterable["ScheduleRecord"], now: datetime | None = None
) -> list["ScheduleRecord"]:
    """Keep the records that still depart later today, in their original order.

    Args:
        records: Extracted schedule records
        now: Optional current time, defaults to the reference clock

    Returns:
        Subsequence of ``records`` departing after ``now``

    Raises:
        ScheduleFormatError: If any record has a malformed departure time
    """
    hour, minute = current_time_tokens(now)
    return [record for record in records if is_remaining(record, hour, minute)]
