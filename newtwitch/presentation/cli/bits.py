"""Bits leaderboard command."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import click

from ...core.models import Period
from ..renderers import render_leaderboard_panel
from .common import DATE_FORMATS, make_factory, report_result


@click.command()
@click.option("--count", type=int, help="Number of leaders to return")
@click.option("--period", type=click.Choice([member.value for member in Period]), help="Aggregation period")
@click.option("--started-at", type=click.DateTime(DATE_FORMATS), help="Period start (UTC)")
@click.option("--user-id", help="Center the leaderboard on this user")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_context
def bits(
   ctx,
   count: Optional[int],
   period: Optional[str],
   started_at: Optional[datetime],
   user_id: Optional[str],
   output_json: bool,
):
   """Show the bits leaderboard."""
   with make_factory(ctx) as factory:
      future = factory.get_bits_service().get_leaderboard(
         count=count,
         period=Period(period) if period else None,
         started_at=started_at,
         user_id=user_id,
      )
      result = future.result()

   report_result(result, output_json, render_leaderboard_panel)
