"""Service factory for dependency injection."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional

from ..constants import CREDENTIALS_PATH
from ..data.credential_store import StaticTokenManager, TokenManager
from ..services.analytics import AnalyticsService
from ..services.bits import BitsService
from .api import HelixAPI, TokenProvider
from .transport import Transport


class ServiceFactory:
    """Factory for creating service instances with dependencies."""

    def __init__(
        self,
        credentials_path: Path = CREDENTIALS_PATH,
        token: Optional[str] = None,
        token_manager: Optional[TokenProvider] = None,
        transport: Optional[Transport] = None,
        base_headers: Optional[Mapping[str, str]] = None,
        params_in_query: bool = False,
        debug: bool = False,
    ):
        self.credentials_path = credentials_path
        self.token = token
        self.base_headers = base_headers
        self.params_in_query = params_in_query
        self.debug = debug
        self._token_manager = token_manager
        self._transport = transport
        self._api: Optional[HelixAPI] = None

    def get_token_manager(self) -> TokenProvider:
        """Get or create the token manager; an explicit token bypasses the credentials file."""
        if self._token_manager is None:
            if self.token is not None:
                self._token_manager = StaticTokenManager(self.token)
            else:
                self._token_manager = TokenManager(self.credentials_path)
        return self._token_manager

    def get_transport(self) -> Transport:
        """Get or create Transport instance."""
        if self._transport is None:
            self._transport = Transport()
        return self._transport

    def get_api(self) -> HelixAPI:
        """Get or create HelixAPI instance."""
        if self._api is None:
            self._api = HelixAPI(
                transport=self.get_transport(),
                token_manager=self.get_token_manager(),
                base_headers=self.base_headers,
                params_in_query=self.params_in_query,
                debug=self.debug,
            )
        return self._api

    def get_analytics_service(self) -> AnalyticsService:
        """Create an AnalyticsService over the shared API."""
        return AnalyticsService(api=self.get_api())

    def get_bits_service(self) -> BitsService:
        """Create a BitsService over the shared API."""
        return BitsService(api=self.get_api())

    def close(self):
        """Close all resources."""
        if self._transport:
            self._transport.close()

    def __enter__(self) -> ServiceFactory:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
