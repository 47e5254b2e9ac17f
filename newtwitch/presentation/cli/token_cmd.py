"""Credential management commands."""

from __future__ import annotations

import sys
from typing import Optional

import click
from rich.panel import Panel

from ...constants import CREDENTIALS_PATH, console
from ...core.errors import AuthorizationError, InvalidCredentials
from ...data.credential_store import OAUTH_KEY, TokenManager
from ...utils import format_expiry


@click.group()
def token():
    """Manage the stored Twitch credentials."""


@token.command(name='import')
@click.option('--creds-file', '-f', type=click.Path(exists=True, dir_okay=False), required=True, help='Path to credentials JSON file')
def import_cmd(creds_file: str):
    """Store credentials from a JSON file."""
    manager = TokenManager(CREDENTIALS_PATH)

    with open(creds_file, 'r', encoding='utf-8') as handle:
        credentials_json = handle.read()

    try:
        creds = manager.import_credentials(credentials_json)
    except InvalidCredentials as exc:
        console.print(f'[red]Error: {exc}[/red]')
        sys.exit(1)

    oauth = creds[OAUTH_KEY]
    console.print(
        Panel(
            f"[green]✓[/green] Credentials saved to [yellow]{CREDENTIALS_PATH}[/yellow]\n\n"
            f"Scopes: {', '.join(oauth.get('scopes') or []) or '[dim]unknown[/dim]'}\n"
            f"Expires in: {format_expiry(oauth.get('expiresAt'))}",
            title='Credentials Imported',
            border_style='green',
        )
    )


@token.command(name='refresh')
def refresh_cmd():
    """Force a token refresh and save the result."""
    manager = TokenManager(CREDENTIALS_PATH)

    try:
        creds = manager.refresh_and_persist(force=True)
    except AuthorizationError as exc:
        console.print(f'[red]Error: {exc}[/red]')
        sys.exit(1)

    console.print(f"Expires in: {format_expiry(creds[OAUTH_KEY].get('expiresAt'))}")


@token.command(name='status')
def status_cmd():
    """Show the stored token's scopes and expiry."""
    manager = TokenManager(CREDENTIALS_PATH)

    try:
        creds = manager.load_credentials()
    except AuthorizationError as exc:
        console.print(f'[red]Error: {exc}[/red]')
        sys.exit(1)

    oauth = creds[OAUTH_KEY]
    scopes: Optional[list] = oauth.get('scopes')
    console.print(f"Access token: {'[green]present[/green]' if oauth.get('accessToken') else '[red]missing[/red]'}")
    console.print(f"Refresh token: {'[green]present[/green]' if oauth.get('refreshToken') else '[dim]none[/dim]'}")
    console.print(f"Scopes: {', '.join(scopes) if scopes else '[dim]unknown[/dim]'}")
    console.print(f"Expires in: {format_expiry(oauth.get('expiresAt'))}")
