from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

T = TypeVar('T')


class WeatherError(Exception):
    """Base class for failures talking to the weather service."""


class TransportFailure(WeatherError):
    """Network unreachable, DNS failure, timeout or other transport error."""


class HttpStatusFailure(WeatherError):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class DecodeFailure(WeatherError):
    """Response body was not JSON or did not have the expected shape."""


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    reason: str
    error: Optional[WeatherError] = None

    @property
    def status_code(self) -> Optional[int]:
        return getattr(self.error, 'status_code', None)


FetchOutcome = Union[Success[T], Failure]
