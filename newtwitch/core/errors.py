"""Domain-specific exceptions for newtwitch."""

from __future__ import annotations

from typing import Optional


class NewTwitchError(Exception):
   """Base exception for all newtwitch errors."""
   pass


class AuthorizationError(NewTwitchError):
   """The token manager could not supply a usable bearer token."""
   pass


class InvalidCredentials(AuthorizationError):
   """Credentials JSON is malformed or missing required fields."""
   pass


class TransportError(NewTwitchError):
   """The request never produced a usable HTTP response."""
   pass


class HTTPStatusError(NewTwitchError):
   """Helix answered with a status other than 200."""

   def __init__(self, message: str, status_code: Optional[int] = None):
      super().__init__(message)
      self.status_code = status_code


class DecodeError(NewTwitchError):
   """A 200 response whose body lacks the expected field or has the wrong shape."""
   pass
