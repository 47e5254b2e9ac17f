"""Shared console instance for newtwitch output.

This module provides a single Rich Console instance configured to write to stderr.
Using stderr keeps diagnostics out of the JSON printed on stdout.
"""

from rich.console import Console

console = Console(stderr=True)
