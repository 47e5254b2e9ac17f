"""Shared constants for the newtwitch package."""

from pathlib import Path

from .presentation.console import console

# Paths
NEWTWITCH_DIR = Path.home() / ".newtwitch"
CREDENTIALS_PATH = NEWTWITCH_DIR / "credentials.json"
HEADERS_PATH = NEWTWITCH_DIR / "headers.json"

# Endpoints
HELIX_BASE_URL = "https://api.twitch.tv/helix"
OAUTH_TOKEN_URL = "https://id.twitch.tv/oauth2/token"

# Transport tuning
DEFAULT_TIMEOUT = (5, 20)  # (connect, read) seconds
DEFAULT_MAX_WORKERS = 4

# Wire format for all dates sent to or read from Helix
ZULU_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
ZULU_DATE_FORMAT_NO_MILLIS = "%Y-%m-%dT%H:%M:%SZ"

# Token manager
TOKEN_REFRESH_BUFFER_MS = 600_000  # 10 minutes
