"""Analytics commands."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import click

from ...core.models import AnalyticsType
from ..renderers import render_extension_analytics_table, render_game_analytics_table
from .common import DATE_FORMATS, make_factory, report_result

ANALYTICS_TYPES = [member.value for member in AnalyticsType]


def _analytics_options(func):
   func = click.option("--json", "output_json", is_flag=True, help="Output as JSON")(func)
   func = click.option("--type", "report_type", type=click.Choice(ANALYTICS_TYPES), help="Report type")(func)
   func = click.option("--first", type=int, help="Maximum number of reports")(func)
   func = click.option("--ended-at", type=click.DateTime(DATE_FORMATS), help="Report window end (UTC)")(func)
   func = click.option("--started-at", type=click.DateTime(DATE_FORMATS), help="Report window start (UTC)")(func)
   func = click.option("--after", help="Pagination cursor")(func)
   return func


@click.command()
@click.option("--extension-id", help="Only this extension")
@_analytics_options
@click.pass_context
def extensions(
   ctx,
   extension_id: Optional[str],
   after: Optional[str],
   started_at: Optional[datetime],
   ended_at: Optional[datetime],
   first: Optional[int],
   report_type: Optional[str],
   output_json: bool,
):
   """List extension analytics reports."""
   with make_factory(ctx) as factory:
      future = factory.get_analytics_service().get_extension_analytics(
         after=after,
         started_at=started_at,
         ended_at=ended_at,
         extension_id=extension_id,
         first=first,
         type=AnalyticsType(report_type) if report_type else None,
      )
      result = future.result()

   report_result(result, output_json, render_extension_analytics_table)


@click.command()
@click.option("--game-id", help="Only this game")
@_analytics_options
@click.pass_context
def games(
   ctx,
   game_id: Optional[str],
   after: Optional[str],
   started_at: Optional[datetime],
   ended_at: Optional[datetime],
   first: Optional[int],
   report_type: Optional[str],
   output_json: bool,
):
   """List game analytics reports."""
   with make_factory(ctx) as factory:
      future = factory.get_analytics_service().get_game_analytics(
         after=after,
         started_at=started_at,
         ended_at=ended_at,
         game_id=game_id,
         first=first,
         type=AnalyticsType(report_type) if report_type else None,
      )
      result = future.result()

   report_result(result, output_json, render_game_analytics_table)
