"""
Explicit success/failure values for fallible collaborator calls.

Fetch functions return Ok(value) or Err(FetchError) instead of raising,
so callers inspect failures as data and dispatch on FetchError.kind.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


Result = Union[Ok[T], Err[E]]


class FetchErrorKind(str, Enum):
    """Closed set of weather/location fetch failures."""
    NETWORK = "NETWORK"  # Connection problems, timeouts
    API_KEY = "API_KEY"  # Invalid or not yet activated API key (HTTP 401)
    PARAM = "PARAM"  # Unknown ZIP/country code or location (HTTP 404)
    UNKNOWN_RESPONSE = "UNKNOWN_RESPONSE"  # Unexpected status or payload


@dataclass(frozen=True)
class FetchError:
    kind: FetchErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"
