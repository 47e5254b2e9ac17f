"""Rich formatting helpers for newtwitch presentation layer."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from rich import box
from rich.panel import Panel
from rich.table import Table

from ..core.models import (
   BitsLeaderboardRecord,
   DateRange,
   ExtensionAnalytics,
   Failure,
   GameAnalytics,
)
from ..utils import date_to_wire_string


def to_jsonable(value: Any) -> Any:
   """Convert records (and lists of them) to plain JSON-ready values."""
   if is_dataclass(value) and not isinstance(value, type):
      return to_jsonable(asdict(value))
   if isinstance(value, dict):
      return {key: to_jsonable(item) for key, item in value.items()}
   if isinstance(value, list):
      return [to_jsonable(item) for item in value]
   if isinstance(value, datetime):
      return date_to_wire_string(value)
   if isinstance(value, Enum):
      return value.value
   return value


def format_date_range(date_range: Optional[DateRange]) -> str:
   """Format a report window as 'YYYY-MM-DD → YYYY-MM-DD'."""
   if date_range is None:
      return "[dim]--[/dim]"
   start = date_range.started_at.strftime("%Y-%m-%d") if date_range.started_at else "?"
   end = date_range.ended_at.strftime("%Y-%m-%d") if date_range.ended_at else "?"
   return f"{start} → {end}"


def _format_type(record_type, raw_type: Optional[str]) -> str:
   if record_type is not None:
      return record_type.value
   if raw_type:
      return f"[yellow]{raw_type}[/yellow]"
   return "[dim]--[/dim]"


def render_extension_analytics_table(records: List[ExtensionAnalytics]) -> Table:
   """Render extension analytics reports as Rich table."""
   table = Table(title="Extension Analytics", box=box.ROUNDED)
   table.add_column("Extension", style="cyan")
   table.add_column("Type", style="magenta", justify="center")
   table.add_column("Window", style="green", no_wrap=True)
   table.add_column("Report URL", style="blue", overflow="fold")

   for record in records:
      table.add_row(
         record.extension_id,
         _format_type(record.type, record.raw_type),
         format_date_range(record.date_range),
         record.url,
      )

   return table


def render_game_analytics_table(records: List[GameAnalytics]) -> Table:
   """Render game analytics reports as Rich table."""
   table = Table(title="Game Analytics", box=box.ROUNDED)
   table.add_column("Game", style="cyan")
   table.add_column("Type", style="magenta", justify="center")
   table.add_column("Window", style="green", no_wrap=True)
   table.add_column("Report URL", style="blue", overflow="fold")

   for record in records:
      table.add_row(
         record.game_id,
         _format_type(record.type, record.raw_type),
         format_date_range(record.date_range),
         record.url,
      )

   return table


def render_leaderboard_panel(record: BitsLeaderboardRecord) -> Panel:
   """Render one bits leaderboard entry as a Rich panel."""
   name = record.user_name or record.user_login or record.user_id
   return Panel(
      f"Rank: [bold]{record.rank}[/bold]\n"
      f"User: [green]{name}[/green] [dim]({record.user_id})[/dim]\n"
      f"Score: [yellow]{record.score}[/yellow] bits",
      title="Bits Leaderboard",
      border_style="green",
   )


def describe_failure(failure: Failure) -> str:
   """One-line console description of a failed call."""
   if failure.kind == "authorization":
      return f"[red]Not authorized: {failure.error}[/red]"
   if failure.kind == "status":
      detail = ""
      if failure.body:
         detail = " " + failure.body.decode("utf-8", errors="replace")[:200]
      return f"[red]Helix returned HTTP {failure.status_code}[/red][dim]{detail}[/dim]"
   if failure.kind == "decode":
      return f"[red]Unexpected response: {failure.error}[/red]"
   return f"[red]Request failed: {failure.error or 'no response'}[/red]"
