"""Encode typed call parameters into Helix wire parameters."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, Tuple, Union

from ..utils import date_to_wire_string

WireValue = Union[str, int]


def to_wire_value(value: Any) -> WireValue:
   """Transform one parameter value to its wire primitive."""
   if isinstance(value, datetime):
      return date_to_wire_string(value)
   if isinstance(value, Enum):
      return value.value
   return value


def encode_parameters(fields: Iterable[Tuple[str, Any]]) -> Dict[str, WireValue]:
   """
   Build the ordered wire parameter map for a call.

   Fields whose value is None are left out entirely. Values are never
   validated here; Helix is the authority on ranges and combinations.
   """
   encoded: Dict[str, WireValue] = {}
   for key, value in fields:
      if value is None:
         continue
      encoded[key] = to_wire_value(value)
   return encoded
