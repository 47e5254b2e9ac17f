"""Core domain models for newtwitch."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from ..utils import wire_string_to_date
from .encoding import WireValue, encode_parameters
from .errors import (
   AuthorizationError,
   DecodeError,
   HTTPStatusError,
   NewTwitchError,
   TransportError,
)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class AnalyticsType(str, Enum):
   """Report flavours offered by the analytics endpoints."""

   OVERVIEW_V1 = "overview_v1"
   OVERVIEW_V2 = "overview_v2"

   @classmethod
   def from_wire(cls, value: Any) -> Optional[AnalyticsType]:
      """Return the matching member, or None for unknown strings."""
      for member in cls:
         if member.value == value:
            return member
      return None


class Period(str, Enum):
   """Aggregation period of the bits leaderboard."""

   ALL = "all"
   DAY = "day"
   WEEK = "week"
   MONTH = "month"
   YEAR = "year"

   @classmethod
   def from_wire(cls, value: Any) -> Optional[Period]:
      """Return the matching member, or None for unknown strings."""
      for member in cls:
         if member.value == value:
            return member
      return None


# ---------------------------------------------------------------------------
# Call parameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExtensionAnalyticsParams:
   """Parameters of `Get Extension Analytics`."""

   after: Optional[str] = None
   started_at: Optional[datetime] = None
   ended_at: Optional[datetime] = None
   extension_id: Optional[str] = None
   first: Optional[int] = None
   type: Optional[AnalyticsType] = None

   def encode(self) -> Dict[str, WireValue]:
      return encode_parameters(
         [
            ("after", self.after),
            ("started_at", self.started_at),
            ("ended_at", self.ended_at),
            ("extension_id", self.extension_id),
            ("first", self.first),
            ("type", self.type),
         ]
      )


@dataclass(frozen=True)
class GameAnalyticsParams:
   """Parameters of `Get Game Analytics`."""

   after: Optional[str] = None
   started_at: Optional[datetime] = None
   ended_at: Optional[datetime] = None
   game_id: Optional[str] = None
   first: Optional[int] = None
   type: Optional[AnalyticsType] = None

   def encode(self) -> Dict[str, WireValue]:
      return encode_parameters(
         [
            ("after", self.after),
            ("started_at", self.started_at),
            ("ended_at", self.ended_at),
            ("game_id", self.game_id),
            ("first", self.first),
            ("type", self.type),
         ]
      )


@dataclass(frozen=True)
class BitsLeaderboardParams:
   """Parameters of `Get Bits Leaderboard`."""

   count: Optional[int] = None
   period: Optional[Period] = None
   started_at: Optional[datetime] = None
   user_id: Optional[str] = None

   def encode(self) -> Dict[str, WireValue]:
      return encode_parameters(
         [
            ("count", self.count),
            ("period", self.period),
            ("started_at", self.started_at),
            ("user_id", self.user_id),
         ]
      )


# ---------------------------------------------------------------------------
# Response records
# ---------------------------------------------------------------------------


def _require_object(payload: Any, name: str) -> Dict[str, Any]:
   if not isinstance(payload, dict):
      raise DecodeError(f"{name} must be a JSON object, got {type(payload).__name__}")
   return payload


def _require_str(payload: Dict[str, Any], key: str) -> str:
   value = payload.get(key)
   if not isinstance(value, str):
      raise DecodeError(f"Field '{key}' must be a string")
   return value


def _require_int(payload: Dict[str, Any], key: str) -> int:
   value = payload.get(key)
   if isinstance(value, bool) or not isinstance(value, int):
      raise DecodeError(f"Field '{key}' must be an integer")
   return value


def _optional_str(payload: Dict[str, Any], key: str) -> Optional[str]:
   value = payload.get(key)
   if value is None:
      return None
   if not isinstance(value, str):
      raise DecodeError(f"Field '{key}' must be a string")
   return value


@dataclass(frozen=True)
class DateRange:
   """Start and end of the window a report or leaderboard covers."""

   started_at: Optional[datetime] = None
   ended_at: Optional[datetime] = None

   @classmethod
   def from_dict(cls, data: Any) -> DateRange:
      payload = _require_object(data, "date_range")
      return cls(
         started_at=wire_string_to_date(_optional_str(payload, "started_at") or ""),
         ended_at=wire_string_to_date(_optional_str(payload, "ended_at") or ""),
      )


def _optional_date_range(payload: Dict[str, Any]) -> Optional[DateRange]:
   if payload.get("date_range") is None:
      return None
   return DateRange.from_dict(payload["date_range"])


@dataclass(frozen=True)
class ExtensionAnalytics:
   """
   One downloadable extension analytics report.

   `type` is None when Helix reports a flavour this client does not know;
   the raw string is kept in `raw_type`.
   """

   extension_id: str
   url: str
   type: Optional[AnalyticsType] = None
   raw_type: Optional[str] = None
   date_range: Optional[DateRange] = None

   @classmethod
   def from_dict(cls, data: Any) -> ExtensionAnalytics:
      payload = _require_object(data, "extension analytics record")
      raw_type = _optional_str(payload, "type")
      return cls(
         extension_id=_require_str(payload, "extension_id"),
         url=_require_str(payload, "URL"),
         type=AnalyticsType.from_wire(raw_type),
         raw_type=raw_type,
         date_range=_optional_date_range(payload),
      )


@dataclass(frozen=True)
class GameAnalytics:
   """One downloadable game analytics report."""

   game_id: str
   url: str
   type: Optional[AnalyticsType] = None
   raw_type: Optional[str] = None
   date_range: Optional[DateRange] = None

   @classmethod
   def from_dict(cls, data: Any) -> GameAnalytics:
      payload = _require_object(data, "game analytics record")
      raw_type = _optional_str(payload, "type")
      return cls(
         game_id=_require_str(payload, "game_id"),
         url=_require_str(payload, "URL"),
         type=AnalyticsType.from_wire(raw_type),
         raw_type=raw_type,
         date_range=_optional_date_range(payload),
      )


@dataclass(frozen=True)
class BitsLeaderboardRecord:
   """A ranked bits cheerer."""

   user_id: str
   rank: int
   score: int
   user_login: Optional[str] = None
   user_name: Optional[str] = None

   @classmethod
   def from_dict(cls, data: Any) -> BitsLeaderboardRecord:
      payload = _require_object(data, "bits leaderboard record")
      return cls(
         user_id=_require_str(payload, "user_id"),
         rank=_require_int(payload, "rank"),
         score=_require_int(payload, "score"),
         user_login=_optional_str(payload, "user_login"),
         user_name=_optional_str(payload, "user_name"),
      )


# ---------------------------------------------------------------------------
# Call results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Success(Generic[T]):
   """A decoded Helix payload."""

   value: T

   @property
   def ok(self) -> bool:
      return True


@dataclass(frozen=True)
class Failure:
   """
   Whatever raw artifacts were available when a call failed.

   Any of `body`, `response` and `error` may be None. An authorization
   failure carries only the error; a bad status carries body and response
   with no error.
   """

   body: Optional[bytes] = None
   response: Optional[Any] = None
   error: Optional[BaseException] = None

   @property
   def ok(self) -> bool:
      return False

   @property
   def status_code(self) -> Optional[int]:
      status = getattr(self.response, "status_code", None)
      return status if isinstance(status, int) else None

   @property
   def kind(self) -> str:
      """One of "authorization", "decode", "transport" or "status"."""
      if isinstance(self.error, AuthorizationError):
         return "authorization"
      if isinstance(self.error, DecodeError):
         return "decode"
      if self.error is not None:
         return "transport"
      if self.status_code is not None and self.status_code != 200:
         return "status"
      return "transport"

   def raise_for_failure(self):
      """Raise the exception matching this failure."""
      if isinstance(self.error, NewTwitchError):
         raise self.error
      if self.kind == "status":
         raise HTTPStatusError(
            f"Helix returned HTTP {self.status_code}", status_code=self.status_code
         )
      if self.error is not None:
         raise TransportError(str(self.error)) from self.error
      raise TransportError("No response received")


Result = Union[Success[T], Failure]

ExtensionAnalyticsResult = Union[Success[List[ExtensionAnalytics]], Failure]
GameAnalyticsResult = Union[Success[List[GameAnalytics]], Failure]
BitsLeaderboardResult = Union[Success[BitsLeaderboardRecord], Failure]
