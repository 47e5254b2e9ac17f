"""Helix endpoint descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from ..constants import HELIX_BASE_URL
from .models import BitsLeaderboardRecord, ExtensionAnalytics, GameAnalytics


@dataclass(frozen=True)
class Endpoint:
   """
   One fixed (verb, URL) pair of the Helix API and how to decode its answer.

   `decoder` turns one JSON value of the result field into a record; when
   `many` is set, the field holds a list and each element is decoded.
   """

   name: str
   method: str
   path: str
   scope: str
   decoder: Callable[[Any], Any]
   many: bool = False
   result_field: str = "data"

   @property
   def url(self) -> str:
      return f"{HELIX_BASE_URL}{self.path}"


EXTENSION_ANALYTICS = Endpoint(
   name="Get Extension Analytics",
   method="GET",
   path="/analytics/extensions",
   scope="analytics:read:extensions",
   decoder=ExtensionAnalytics.from_dict,
   many=True,
)

GAME_ANALYTICS = Endpoint(
   name="Get Game Analytics",
   method="GET",
   path="/analytics/games",
   scope="analytics:read:games",
   decoder=GameAnalytics.from_dict,
   many=True,
)

BITS_LEADERBOARD = Endpoint(
   name="Get Bits Leaderboard",
   method="GET",
   path="/bits/leaderboard",
   scope="bits:read",
   decoder=BitsLeaderboardRecord.from_dict,
)
