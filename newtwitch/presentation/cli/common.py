"""Helpers shared by the call commands."""

from __future__ import annotations

import json
import sys

import click

from ...constants import console
from ...core.models import Failure, Result
from ...infrastructure.factory import ServiceFactory
from ..renderers import describe_failure, to_jsonable

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M:%S.%fZ"]


def make_factory(ctx: click.Context) -> ServiceFactory:
   """Build a ServiceFactory from the group options."""
   options = ctx.obj or {}
   return ServiceFactory(
      token=options.get("token"),
      params_in_query=options.get("params_in_query", False),
      debug=options.get("debug", False),
   )


def report_result(result: Result, output_json: bool, render) -> None:
   """Print a result, exiting with status 1 on failure."""
   if isinstance(result, Failure):
      if output_json:
         print(json.dumps({"error": result.kind, "status": result.status_code, "detail": str(result.error or "")}))
      else:
         console.print(describe_failure(result))
      sys.exit(1)

   if output_json:
      print(json.dumps(to_jsonable(result.value), indent=2))
      return
   console.print(render(result.value))
