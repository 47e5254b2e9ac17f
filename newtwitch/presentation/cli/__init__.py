"""Command-line interface for newtwitch."""

from typing import Optional

import click

from .analytics import extensions, games
from .bits import bits
from .token_cmd import token


@click.group()
@click.option("--token", "access_token", envvar="NEWTWITCH_TOKEN", help="Use this access token instead of the credentials file")
@click.option("--query-params", is_flag=True, help="Send parameters as a query string instead of a JSON body")
@click.option("--debug", is_flag=True, help="Print one line per request")
@click.pass_context
def cli(ctx, access_token: Optional[str], query_params: bool, debug: bool):
    """Twitch Helix analytics and bits leaderboard client."""
    ctx.ensure_object(dict)
    ctx.obj["token"] = access_token
    ctx.obj["params_in_query"] = query_params
    ctx.obj["debug"] = debug


# Register commands
cli.add_command(extensions)
cli.add_command(games)
cli.add_command(bits)
cli.add_command(token)


__all__ = ['cli']
