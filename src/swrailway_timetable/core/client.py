"""Station and schedule client for the regional railway timetable site."""

import json
import logging
import warnings
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date as date_type
from datetime import datetime
from typing import Any

import pydantic
import requests
from urllib3.exceptions import InsecureRequestWarning

from .exceptions import (
    DecodeError,
    NetworkError,
    ScheduleFormatError,
    ScrapingError,
    TimetableError,
    UpstreamStatusError,
    ValidationError,
)
from .extractor import extract_schedule, parse_document
from .layouts import TableLayout, get_layout
from .models import ScheduleRecord, ScheduleRequest, Station, StationRequest
from .result import FailureKind, FetchResult
from .time_filter import filter_remaining, reference_now

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30

# Upstream language suffixes; the Ukrainian one is the site default
LANGUAGE_SUFFIXES = {
    "ua": "_ua",
    "uk": "_ua",
    "ru": "_ru",
    "en": "_en",
}
UKRAINIAN = "_ua"


@dataclass(frozen=True)
class Endpoint:
    """One of the known upstream endpoints."""

    name: str
    base_url: str
    layout: str
    verify_tls: bool = True
    headers: dict[str, str] = field(default_factory=dict)


MODERN_ENDPOINT = Endpoint(
    name="modern",
    base_url="https://swrailway.gov.ua/timetable/eltrain/",
    layout="json",
    # The site's certificate chain does not validate
    verify_tls=False,
    headers={
        "Upgrade-Insecure-Requests": "1",
        "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/106.0.0.0 Safari/537.36",
    },
)

LEGACY_ENDPOINT = Endpoint(
    name="legacy",
    base_url="http://swrailway.gov.ua/timetable/eltrain/",
    layout="legacy",
    headers={
        "Referer": "http://swrailway.gov.ua/timetable/eltrain/",
        "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
    },
)

ENDPOINTS = {e.name: e for e in (MODERN_ENDPOINT, LEGACY_ENDPOINT)}


def to_upstream_language(lang: str) -> str:
    """Map a bare language code onto the upstream suffix.

    Suffixes and unknown values pass through unchanged.
    """
    return LANGUAGE_SUFFIXES.get(lang.lower(), lang)


def station_language(lang: str) -> str:
    """Language value for station lookups.

    The station endpoint rejects the Ukrainian suffix and expects an empty
    value instead.
    """
    lang = to_upstream_language(lang)
    if lang == UKRAINIAN:
        return ""
    return lang


def build_query_string(params: Mapping[str, Any]) -> str:
    """Join parameters as ``?key=value&...`` without percent-encoding."""
    if not params:
        return ""
    return "?" + "&".join(f"{key}={value}" for key, value in params.items())


class SwRailwayClient:
    """Client for station lookups and schedule queries."""

    def __init__(
        self,
        timeout: int = DEFAULT_TIMEOUT,
        endpoint: Endpoint | str = MODERN_ENDPOINT,
        layout: str | TableLayout | None = None,
        session: requests.Session | None = None,
        clock: Callable[[], datetime] = reference_now,
    ):
        """Initialize the client.

        Args:
            timeout: Request timeout in seconds
            endpoint: Endpoint descriptor or its name ("modern", "legacy")
            layout: Table layout override, defaults to the endpoint's layout
            session: Optional preconfigured requests session
            clock: Source of the current time for "remaining only" filtering
        """
        if isinstance(endpoint, str):
            try:
                endpoint = ENDPOINTS[endpoint]
            except KeyError:
                raise ValidationError(f"Unknown endpoint {endpoint!r}") from None
        self.timeout = timeout
        self.endpoint = endpoint
        self.layout = get_layout(layout if layout is not None else endpoint.layout)
        self.clock = clock
        if session is None:
            session = requests.Session()
            session.headers.update(endpoint.headers)
        self.session = session

    def build_url(self, params: Mapping[str, Any]) -> str:
        """Full request URL for the given query parameters."""
        return self.endpoint.base_url + build_query_string(params)

    def _request(self, params: Mapping[str, Any]) -> bytes:
        """Perform one GET round trip and return the raw body.

        Raises:
            NetworkError: If the request fails in transport
            UpstreamStatusError: If the response status is not a success
        """
        url = self.build_url(params)
        logger.debug(f"GET {url}")
        try:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore", InsecureRequestWarning)
                response = self.session.get(
                    url,
                    headers=self.endpoint.headers,
                    timeout=self.timeout,
                    verify=self.endpoint.verify_tls,
                )
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Failed to fetch {url}: {str(e)}") from e

        if response.status_code >= 300:
            logger.debug(f"Error body from {url}: {response.text[:500]}")
            raise UpstreamStatusError(
                f"Upstream answered {response.status_code} for {url}",
                status_code=response.status_code,
            )
        return response.content

    def _decode_json(self, body: bytes) -> Any:
        try:
            return json.loads(body)
        except ValueError as e:
            raise DecodeError(f"Invalid JSON from station lookup: {str(e)}") from e

    def fetch_station(
        self, station_id: str, lang: str = ""
    ) -> FetchResult[Station | None]:
        """Look up a single station by id.

        The result holds ``None`` when the upstream knows no such station.
        """
        request = StationRequest(lang=station_language(lang), id=str(station_id))
        try:
            payload = self._decode_json(self._request(request.to_query_params()))
            if isinstance(payload, list):
                payload = payload[0] if payload else None
            if payload is None:
                return FetchResult.success(None)
            if not isinstance(payload, dict):
                raise DecodeError(
                    f"Expected a station object, got {type(payload).__name__}"
                )
            return FetchResult.success(Station.model_validate(payload))
        except pydantic.ValidationError as e:
            return FetchResult.failed(DecodeError(f"Invalid station data: {str(e)}"))
        except TimetableError as e:
            return FetchResult.failed(e)

    def fetch_stations(self, name: str, lang: str = "") -> FetchResult[list[Station]]:
        """Search stations whose name matches ``name``."""
        request = StationRequest(lang=station_language(lang), term=name)
        try:
            payload = self._decode_json(self._request(request.to_query_params()))
            if payload is None:
                return FetchResult.success([])
            if not isinstance(payload, list):
                raise DecodeError(
                    f"Expected a list of stations, got {type(payload).__name__}"
                )
            return FetchResult.success([Station.model_validate(s) for s in payload])
        except pydantic.ValidationError as e:
            return FetchResult.failed(DecodeError(f"Invalid station data: {str(e)}"))
        except TimetableError as e:
            return FetchResult.failed(e)

    def fetch_schedule(
        self,
        date: date_type | str | None,
        lang: str,
        from_id: str,
        to_id: str,
        only_remaining: bool = False,
        save_html_path: str | None = None,
    ) -> FetchResult[list[ScheduleRecord]]:
        """Query the trips between two stations.

        Args:
            date: Travel date (``YYYY-MM-DD``), today when omitted
            lang: Language code or upstream suffix
            from_id: Departure station id
            to_id: Destination station id
            only_remaining: Keep only trips departing later today
            save_html_path: Optional path to save raw HTML for debugging

        Returns:
            Records in table order, or the failure that prevented the lookup.
            A malformed departure time met while keeping only remaining
            trips fails the whole result with kind ``format``.

        Raises:
            ValidationError: If the query parameters are invalid
        """
        request = self._schedule_request(date, lang, from_id, to_id, only_remaining)
        try:
            body = self._request(request.to_query_params())
        except TimetableError as e:
            return FetchResult.failed(e)

        if save_html_path:
            with open(save_html_path, "wb") as f:
                f.write(body)

        try:
            records = extract_schedule(parse_document(body), self.layout)
        except ScrapingError as e:
            return FetchResult.failed(e)

        # The upstream dateR flag narrows by day only; trips already gone
        # today are dropped here.
        if request.only_remaining:
            try:
                records = filter_remaining(records, self.clock())
            except ScheduleFormatError as e:
                return FetchResult.failed(e)
        return FetchResult.success(records)

    def _schedule_request(
        self,
        date: date_type | str | None,
        lang: str,
        from_id: str,
        to_id: str,
        only_remaining: bool,
    ) -> ScheduleRequest:
        if not from_id or not str(from_id).strip():
            raise ValidationError("Departure station id cannot be empty")
        if not to_id or not str(to_id).strip():
            raise ValidationError("Destination station id cannot be empty")

        values: dict[str, Any] = {
            "from_id": from_id,
            "to_id": to_id,
            "lang": to_upstream_language(lang),
            "only_remaining": only_remaining,
        }
        if date is not None:
            values["date"] = date
        try:
            return ScheduleRequest(**values)
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid schedule query: {str(e)}") from e

    def get_station(self, station_id: str, lang: str = "") -> Station | None:
        """Best-effort station lookup; ``None`` if nothing could be fetched."""
        result = self.fetch_station(station_id, lang)
        if not result.ok:
            logger.warning(
                f"Station lookup for id {station_id} failed: {result.failure}"
            )
        return result.unwrap_or(None)

    def get_stations(self, name: str, lang: str = "") -> list[Station]:
        """Best-effort station search; empty if nothing could be fetched."""
        result = self.fetch_stations(name, lang)
        if not result.ok:
            logger.warning(f"Station search for {name!r} failed: {result.failure}")
        return result.unwrap_or([])

    def get_schedule(
        self,
        date: date_type | str | None,
        lang: str,
        from_id: str,
        to_id: str,
        only_remaining: bool = False,
    ) -> list[ScheduleRecord]:
        """Best-effort schedule query.

        Transport and status failures are logged and yield an empty list. A
        page that cannot be parsed is raised, since positional extraction
        can no longer be trusted.

        Raises:
            ScrapingError: If the schedule page cannot be parsed
        """
        result = self.fetch_schedule(date, lang, from_id, to_id, only_remaining)
        if result.failure is not None:
            if result.failure.kind is FailureKind.STRUCTURE:
                logger.error(f"Schedule page could not be parsed: {result.failure}")
                raise result.failure.to_exception()
            logger.warning(
                f"Schedule lookup {from_id} → {to_id} failed: {result.failure}"
            )
        return result.unwrap_or([])
