"""Shared fixtures for newtwitch tests."""

from __future__ import annotations

import pytest

from newtwitch.data.credential_store import StaticTokenManager
from newtwitch.infrastructure.api import HelixAPI


@pytest.fixture
def make_api():
    """Build a HelixAPI around a transport with a fixed token and no configured headers."""

    def _make(transport, token_manager=None, **kwargs) -> HelixAPI:
        kwargs.setdefault("base_headers", {})
        return HelixAPI(
            transport=transport,
            token_manager=token_manager or StaticTokenManager("test-token"),
            **kwargs,
        )

    return _make
