"""Bits leaderboard call."""

from __future__ import annotations

from concurrent.futures import Future
from datetime import datetime
from typing import Any, Callable, Optional

from ..core.endpoints import BITS_LEADERBOARD
from ..core.models import BitsLeaderboardParams, BitsLeaderboardResult, Period
from ..infrastructure.api import HelixAPI


class BitsService:
   """Bits leaderboard for the authenticated broadcaster."""

   def __init__(self, api: HelixAPI):
      self.api = api

   def get_leaderboard(
      self,
      count: Optional[int] = None,
      period: Optional[Period] = None,
      started_at: Optional[datetime] = None,
      user_id: Optional[str] = None,
      completion: Optional[Callable[[BitsLeaderboardResult], Any]] = None,
   ) -> Future:
      """
      Run `Get Bits Leaderboard` (scope `bits:read`).

      Values are sent as given; Helix validates count and the
      period/started_at combination.
      """
      params = BitsLeaderboardParams(count=count, period=period, started_at=started_at, user_id=user_id)
      return self.api.call(BITS_LEADERBOARD, params.encode(), completion)
