"""Data models for railway timetable lookups."""

from datetime import date as date_type

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .exceptions import ScheduleFormatError
from .time_filter import reference_today


class Station(BaseModel):
    """Represents a station as returned by the upstream JSON lookup."""

    model_config = ConfigDict(frozen=True)

    id: str = Field("", description="Upstream station identifier")
    info: str = Field("", description="Free-text station description")
    label: str = Field("", description="Display name")

    @field_validator("id", "info", "label", mode="before")
    @classmethod
    def _coerce_to_str(cls, value: object) -> object:
        # Upstream sends numeric ids for some stations
        if value is None:
            return ""
        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return value

    def __str__(self) -> str:
        return self.label or self.id


class ScheduleRecord(BaseModel):
    """One row of the upstream timetable table."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field("", description="Train/trip identifier")
    period: str = Field("", description="Days the trip runs")
    route: str = Field("", description="Route endpoints")

    arrival_from: str = Field("", alias="arrivalFrom")
    arrival_station_from: str = Field("", alias="arrivalStationFrom")
    departure_from: str = Field("", alias="departureFrom")

    arrival_to: str = Field("", alias="arrivalTo")
    arrival_station_to: str = Field("", alias="arrivalStationTo")
    departure_to: str = Field("", alias="departureTo")

    time_in_trip: str = Field("", alias="timeInTrip")
    distance: str = Field("", description="Textual distance value")
    active_from: str = Field("", alias="activeFrom")
    active_to: str = Field("", alias="activeTo")

    def departure_tokens(self) -> tuple[str, str]:
        """Split the origin departure time into hour and minute tokens.

        Raises:
            ScheduleFormatError: If the value is not of the form ``HH:MM``
        """
        parts = self.departure_from.split(":")
        if len(parts) != 2:
            raise ScheduleFormatError(
                f"Train {self.id!r} has malformed departure time {self.departure_from!r}"
            )
        return parts[0], parts[1]

    def __str__(self) -> str:
        return f"{self.id} {self.departure_from} → {self.arrival_to} ({self.route})"


class StationRequest(BaseModel):
    """Request model for the JSON station lookup."""

    lang: str = Field("", description="Upstream language value")
    id: str | None = Field(None, description="Exact station id")
    term: str | None = Field(None, description="Search term")

    @model_validator(mode="after")
    def _exactly_one_key(self) -> "StationRequest":
        if (self.id is None) == (self.term is None):
            raise ValueError("Exactly one of id or term must be given")
        return self

    def to_query_params(self) -> dict[str, str]:
        """Convert to upstream query parameters."""
        params = {"JSON": "station", "lng": self.lang}
        if self.id is not None:
            params["id"] = self.id
        else:
            params["term"] = self.term or ""
        return params


class ScheduleRequest(BaseModel):
    """Request model for a schedule query between two stations."""

    from_id: str = Field(..., description="Departure station id")
    to_id: str = Field(..., description="Destination station id")
    date: date_type = Field(
        default_factory=reference_today, description="Travel date"
    )
    lang: str = Field("", description="Upstream language value")
    only_remaining: bool = Field(
        False, description="Only trips departing later today"
    )

    @field_validator("from_id", "to_id", mode="before")
    @classmethod
    def _station_id_to_str(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return value

    def to_query_params(self) -> dict[str, str]:
        """Convert to upstream query parameters."""
        return {
            "sid1": self.from_id,
            "sid2": self.to_id,
            "startPicker2": self.date.strftime("%Y-%m-%d"),
            # 0 - all days, 1 - today
            "dateR": "1" if self.only_remaining else "0",
            "lng": self.lang,
        }
