"""Explicit success/failure results for upstream lookups."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from .exceptions import (
    DecodeError,
    NetworkError,
    ScheduleFormatError,
    ScrapingError,
    TimetableError,
    UpstreamStatusError,
)

T = TypeVar("T")


class FailureKind(str, Enum):
    """Why an upstream lookup produced no data."""

    NETWORK = "network"
    STATUS = "status"
    DECODE = "decode"
    STRUCTURE = "structure"
    FORMAT = "format"


_KIND_BY_EXCEPTION: list[tuple[type[TimetableError], FailureKind]] = [
    (NetworkError, FailureKind.NETWORK),
    (UpstreamStatusError, FailureKind.STATUS),
    (DecodeError, FailureKind.DECODE),
    (ScrapingError, FailureKind.STRUCTURE),
    (ScheduleFormatError, FailureKind.FORMAT),
]


@dataclass(frozen=True)
class Failure:
    """A typed lookup failure."""

    kind: FailureKind
    message: str
    status_code: int | None = None

    @classmethod
    def from_exception(cls, error: TimetableError) -> "Failure":
        """Classify a client exception."""
        for exc_type, kind in _KIND_BY_EXCEPTION:
            if isinstance(error, exc_type):
                return cls(
                    kind=kind,
                    message=str(error),
                    status_code=getattr(error, "status_code", None),
                )
        raise TypeError(f"Unclassified error: {error!r}")

    def to_exception(self) -> TimetableError:
        """Rebuild the exception this failure stands for."""
        if self.kind is FailureKind.STATUS:
            return UpstreamStatusError(self.message, status_code=self.status_code)
        for exc_type, kind in _KIND_BY_EXCEPTION:
            if kind is self.kind:
                return exc_type(self.message)
        return TimetableError(self.message)

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Either the data of a lookup or the reason it failed."""

    data: T | None = None
    failure: Failure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, data: T) -> "FetchResult[T]":
        return cls(data=data)

    @classmethod
    def failed(cls, error: TimetableError) -> "FetchResult[T]":
        return cls(failure=Failure.from_exception(error))

    def unwrap(self) -> T | None:
        """Return the data or raise the exception behind the failure."""
        if self.failure is not None:
            raise self.failure.to_exception()
        return self.data

    def unwrap_or(self, default: T) -> T:
        """Return the data, or ``default`` if the lookup failed."""
        if self.failure is not None or self.data is None:
            return default
        return self.data
