"""Typed client for the Twitch Helix analytics and bits endpoints."""

from .core.errors import (
    AuthorizationError,
    DecodeError,
    HTTPStatusError,
    InvalidCredentials,
    NewTwitchError,
    TransportError,
)
from .core.models import (
    AnalyticsType,
    BitsLeaderboardRecord,
    DateRange,
    ExtensionAnalytics,
    Failure,
    GameAnalytics,
    Period,
    Success,
)
from .data.credential_store import StaticTokenManager, TokenManager
from .infrastructure.api import HelixAPI
from .infrastructure.factory import ServiceFactory
from .infrastructure.transport import Transport

__version__ = "0.1.0"
