"""Token refresh and credentials persistence."""

from __future__ import annotations

import copy
import json
import threading
import time
from pathlib import Path
from typing import Dict, Optional

import requests

from ..constants import CREDENTIALS_PATH, OAUTH_TOKEN_URL, TOKEN_REFRESH_BUFFER_MS, console
from ..core.errors import AuthorizationError, InvalidCredentials
from ..utils import atomic_write_json

OAUTH_KEY = 'twitchOauth'


class TokenManager:
    """
    Supplies the current bearer token from a credentials file.

    Responsibilities:
    - Refresh user access tokens via the Twitch OAuth endpoint
    - Write refreshed credentials back to ~/.newtwitch/credentials.json
    - Raise AuthorizationError whenever no usable token exists

    The file holds::

        {"twitchOauth": {"accessToken": "...", "refreshToken": "...",
                         "expiresAt": <ms epoch>, "clientId": "...",
                         "clientSecret": "...", "scopes": [...]}}
    """

    OAUTH_ENDPOINT = OAUTH_TOKEN_URL
    REFRESH_BUFFER_MS = TOKEN_REFRESH_BUFFER_MS

    def __init__(self, credentials_path: Path = CREDENTIALS_PATH):
        self.credentials_path = credentials_path
        self._lock = threading.Lock()

    def parse_credentials(self, credentials_json: str) -> Dict:
        """Parse credentials JSON with validation."""
        try:
            creds = json.loads(credentials_json)
        except json.JSONDecodeError as exc:
            raise InvalidCredentials(f'Invalid JSON: {exc}')

        if not isinstance(creds, dict):
            raise InvalidCredentials('Credentials must be a JSON object')
        if not isinstance(creds.get(OAUTH_KEY), dict):
            raise InvalidCredentials(f'Missing {OAUTH_KEY} field')

        expires_at = creds[OAUTH_KEY].get('expiresAt')
        if expires_at is not None and (not isinstance(expires_at, int) or isinstance(expires_at, bool)):
            raise InvalidCredentials('expiresAt must be a millisecond epoch integer')
        return creds

    def is_token_fresh(self, credentials: Dict, force: bool = False) -> bool:
        """Check if access token is still valid. Tokens without an expiry are taken as valid."""
        if force:
            return False

        expires_at = credentials.get(OAUTH_KEY, {}).get('expiresAt')
        if expires_at is None:
            return True
        now_ms = int(time.time() * 1000)
        return expires_at - self.REFRESH_BUFFER_MS > now_ms

    def refresh_access_token(self, credentials: Dict, force: bool = False) -> Dict:
        """
        Refresh the OAuth access token when it is close to expiry.

        Returns updated credentials dict with new access token.
        Raises AuthorizationError if refresh fails.
        """
        oauth = credentials.get(OAUTH_KEY, {})
        if oauth.get('accessToken') and self.is_token_fresh(credentials, force):
            return credentials

        refresh_token = oauth.get('refreshToken')
        client_id = oauth.get('clientId')
        client_secret = oauth.get('clientSecret')

        if not refresh_token:
            raise AuthorizationError('Access token expired and no refresh token available')
        if not client_id or not client_secret:
            raise AuthorizationError('Refreshing requires clientId and clientSecret')

        console.print('[yellow]Refreshing token...[/yellow]')

        try:
            response = requests.post(
                self.OAUTH_ENDPOINT,
                data={
                    'grant_type': 'refresh_token',
                    'refresh_token': refresh_token,
                    'client_id': client_id,
                    'client_secret': client_secret,
                },
                timeout=10,
            )
        except requests.RequestException as exc:
            raise AuthorizationError(f'OAuth request failed: {exc}')

        if response.status_code != 200:
            raise AuthorizationError(f'OAuth endpoint returned {response.status_code}')

        try:
            token_data = response.json()
            access_token = token_data['access_token']
            expires_in = int(token_data.get('expires_in', 3600))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise AuthorizationError(f'Unexpected OAuth response: {exc}')

        new_creds = copy.deepcopy(credentials)
        new_oauth = new_creds[OAUTH_KEY]
        new_oauth['accessToken'] = access_token
        new_oauth['refreshToken'] = token_data.get('refresh_token', refresh_token)
        new_oauth['expiresAt'] = int(time.time() * 1000) + (expires_in * 1000)
        if token_data.get('scope'):
            new_oauth['scopes'] = token_data['scope']

        console.print('[green]Token refreshed successfully[/green]')
        return new_creds

    def load_credentials(self) -> Dict:
        """Read and validate the credentials file."""
        if not self.credentials_path.exists():
            raise AuthorizationError(f'{self.credentials_path} not found')
        try:
            with open(self.credentials_path, 'r', encoding='utf-8') as handle:
                credentials_json = handle.read()
        except OSError as exc:
            raise AuthorizationError(f'Cannot read {self.credentials_path}: {exc}')
        return self.parse_credentials(credentials_json)

    def write_credentials(self, credentials: Dict):
        """Write credentials to the credentials file with 0600 permissions."""
        atomic_write_json(self.credentials_path, credentials, preserve_permissions=False)

    def import_credentials(self, credentials_json: str) -> Dict:
        """Validate credentials JSON and store it as the current credentials."""
        creds = self.parse_credentials(credentials_json)
        if not creds[OAUTH_KEY].get('accessToken') and not creds[OAUTH_KEY].get('refreshToken'):
            raise InvalidCredentials('Credentials need an accessToken or a refreshToken')
        self.write_credentials(creds)
        return creds

    def refresh_and_persist(self, force: bool = False, dry_run: bool = False) -> Dict:
        """
        Refresh token and write to disk.

        Args:
           force: Force refresh even if token is fresh
           dry_run: Skip writing to disk (for testing)

        Returns:
           Updated credentials dict
        """
        with self._lock:
            creds = self.load_credentials()
            refreshed = self.refresh_access_token(creds, force=force)

            if refreshed is not creds and not dry_run:
                try:
                    self.write_credentials(refreshed)
                except OSError as exc:
                    console.print(f'[yellow]Could not save refreshed credentials: {exc}[/yellow]')

        return refreshed

    def get_token(self, force: bool = False) -> str:
        """
        Return the access token, refreshing if necessary.

        Raises:
           AuthorizationError: If token cannot be obtained
        """
        refreshed = self.refresh_and_persist(force=force)
        token = refreshed.get(OAUTH_KEY, {}).get('accessToken')

        if not token:
            raise AuthorizationError('No access token in credentials')

        return token


class StaticTokenManager:
    """Serves a token the caller already holds."""

    def __init__(self, token: Optional[str]):
        self.token = token

    def get_token(self) -> str:
        if not self.token:
            raise AuthorizationError('No access token configured')
        return self.token
