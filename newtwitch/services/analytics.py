"""Extension and game analytics calls."""

from __future__ import annotations

from concurrent.futures import Future
from datetime import datetime
from typing import Any, Callable, Optional

from ..core.endpoints import EXTENSION_ANALYTICS, GAME_ANALYTICS
from ..core.models import (
   AnalyticsType,
   ExtensionAnalyticsParams,
   ExtensionAnalyticsResult,
   GameAnalyticsParams,
   GameAnalyticsResult,
)
from ..infrastructure.api import HelixAPI


class AnalyticsService:
   """
   Insight reports for the authenticated user's extensions and games.

   Reports are downloadable through the URL each record carries.
   """

   def __init__(self, api: HelixAPI):
      self.api = api

   def get_extension_analytics(
      self,
      after: Optional[str] = None,
      started_at: Optional[datetime] = None,
      ended_at: Optional[datetime] = None,
      extension_id: Optional[str] = None,
      first: Optional[int] = None,
      type: Optional[AnalyticsType] = None,
      completion: Optional[Callable[[ExtensionAnalyticsResult], Any]] = None,
   ) -> Future:
      """
      Run `Get Extension Analytics` (scope `analytics:read:extensions`).

      Args:
         after: Pagination cursor. Ignored by Helix when extension_id is set.
         started_at: Start of the report window; ended_at must also be given.
         ended_at: End of the report window; started_at must also be given.
         extension_id: Limit the reports to one extension.
         first: Maximum number of reports to return.
         type: Report flavour.
         completion: Called once with the result, on the transport thread.

      Returns:
         Future resolved with Success(list of ExtensionAnalytics) or Failure
      """
      params = ExtensionAnalyticsParams(
         after=after,
         started_at=started_at,
         ended_at=ended_at,
         extension_id=extension_id,
         first=first,
         type=type,
      )
      return self.api.call(EXTENSION_ANALYTICS, params.encode(), completion)

   def get_game_analytics(
      self,
      after: Optional[str] = None,
      started_at: Optional[datetime] = None,
      ended_at: Optional[datetime] = None,
      game_id: Optional[str] = None,
      first: Optional[int] = None,
      type: Optional[AnalyticsType] = None,
      completion: Optional[Callable[[GameAnalyticsResult], Any]] = None,
   ) -> Future:
      """Run `Get Game Analytics` (scope `analytics:read:games`)."""
      params = GameAnalyticsParams(
         after=after,
         started_at=started_at,
         ended_at=ended_at,
         game_id=game_id,
         first=first,
         type=type,
      )
      return self.api.call(GAME_ANALYTICS, params.encode(), completion)
