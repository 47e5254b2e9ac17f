"""HTTP client core for the Helix API."""

from __future__ import annotations

import json
from concurrent.futures import Future
from typing import Any, Callable, Dict, Mapping, Optional, Protocol

import requests
from requests.structures import CaseInsensitiveDict

from ..config import load_headers_config
from ..constants import console
from ..core.encoding import WireValue
from ..core.endpoints import Endpoint
from ..core.errors import AuthorizationError, DecodeError
from ..core.models import Failure, Result, Success
from .transport import Transport


class TokenProvider(Protocol):
    def get_token(self) -> str:
        ...


def error_occurred(data: Optional[bytes], response: Optional[Any], error: Optional[BaseException]) -> bool:
    """
    Decide whether a completed request failed.

    Errors are said to occur when:
    1. The response is missing
    2. The data is missing, or an error was reported
    3. The response status code is not 200
    """
    if response is None:
        return True
    if data is None or error is not None:
        return True
    status = getattr(response, "status_code", None)
    if isinstance(status, int) and status != 200:
        return True
    return False


def _extract_result(endpoint: Endpoint, payload: Any) -> Any:
    if not isinstance(payload, dict):
        raise DecodeError("Response body is not a JSON object")
    if endpoint.result_field not in payload:
        raise DecodeError(f"Response body has no '{endpoint.result_field}' field")

    field = payload[endpoint.result_field]
    if endpoint.many:
        if not isinstance(field, list):
            raise DecodeError(f"'{endpoint.result_field}' must be a list")
        return [endpoint.decoder(item) for item in field]
    return endpoint.decoder(field)


def decode_outcome(
    endpoint: Endpoint,
    data: Optional[bytes],
    response: Optional[Any],
    error: Optional[BaseException],
) -> Result:
    """Turn a raw (data, response, error) triple into a Success or Failure."""
    if error_occurred(data, response, error):
        return Failure(body=data, response=response, error=error)

    try:
        payload = json.loads(data)
    except (ValueError, RecursionError) as exc:
        return Failure(body=data, response=response, error=DecodeError(f"Invalid JSON body: {exc}"))

    try:
        value = _extract_result(endpoint, payload)
    except DecodeError as exc:
        return Failure(body=data, response=response, error=exc)
    return Success(value)


class HelixAPI:
    """
    Builds, sends and decodes Helix calls.

    Every call runs asynchronously on the transport. `call` returns a future
    resolved with exactly one Success or Failure; the optional completion
    callback receives the same result once, on the transport's worker thread.
    Calls cannot be cancelled.
    """

    def __init__(
        self,
        transport: Transport,
        token_manager: TokenProvider,
        base_headers: Optional[Mapping[str, str]] = None,
        params_in_query: bool = False,
        debug: bool = False,
    ):
        self.transport = transport
        self.token_manager = token_manager
        self.base_headers = base_headers
        # Parameters travel in the JSON body, even for GET, unless this is set.
        self.params_in_query = params_in_query
        self.debug = debug

    def _get_headers(self, token: str) -> CaseInsensitiveDict:
        if self.base_headers is None:
            # Read the headers file once, on first use
            self.base_headers = load_headers_config()
        headers = CaseInsensitiveDict(self.base_headers)
        headers["Content-Type"] = "application/json"
        headers["Authorization"] = f"Bearer {token}"
        return headers

    def build_request(self, endpoint: Endpoint, params: Dict[str, WireValue]) -> requests.PreparedRequest:
        """
        Build the authenticated request for one call.

        Raises:
           AuthorizationError: If the token manager has no usable token
        """
        token = self.token_manager.get_token()
        headers = self._get_headers(token)

        if self.params_in_query:
            request = requests.Request(endpoint.method, endpoint.url, headers=headers, params=params)
        else:
            request = requests.Request(endpoint.method, endpoint.url, headers=headers, json=params)
        return request.prepare()

    def call(
        self,
        endpoint: Endpoint,
        params: Dict[str, WireValue],
        completion: Optional[Callable[[Result], Any]] = None,
    ) -> Future:
        """Start one call and return a future for its result."""
        result_future: Future = Future()
        result_future.set_running_or_notify_cancel()

        def finish(result: Result):
            if self.debug and isinstance(result, Failure):
                console.print(f"[dim]{endpoint.name} failed ({result.kind}): {result.error or result.status_code}[/dim]")
            result_future.set_result(result)
            if completion is not None:
                completion(result)

        try:
            request = self.build_request(endpoint, params)
        except AuthorizationError as exc:
            finish(Failure(error=exc))
            return result_future

        def on_complete(data, response, error):
            if self.debug:
                status = getattr(response, "status_code", None)
                console.print(f"[dim]{endpoint.method} {request.url} -> {status}[/dim]")
            try:
                result = decode_outcome(endpoint, data, response, error)
            except Exception as exc:
                result = Failure(body=data, response=response, error=DecodeError(f"Cannot decode response: {exc!r}"))
            finish(result)

        try:
            self.transport.send(request, on_complete)
        except RuntimeError as exc:
            # Executor already shut down
            finish(Failure(error=exc))
        return result_future

    def call_sync(self, endpoint: Endpoint, params: Dict[str, WireValue], timeout: Optional[float] = None) -> Result:
        """Block until the call finishes."""
        return self.call(endpoint, params).result(timeout=timeout)
