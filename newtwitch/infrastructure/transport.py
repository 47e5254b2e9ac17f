"""Thread-pool backed HTTP transport shared by every Helix call."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, Tuple

import requests

from ..constants import DEFAULT_MAX_WORKERS, DEFAULT_TIMEOUT

# (data, response, error)
Completion = Callable[[Optional[bytes], Optional[requests.Response], Optional[BaseException]], Any]


class Transport:
    """
    Sends prepared requests on worker threads.

    One `requests.Session` and one executor are shared by all calls; both are
    safe for concurrent use. Exactly one completion fires per send, on the
    worker thread. Nothing is retried.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        timeout: Tuple[float, float] = DEFAULT_TIMEOUT,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="newtwitch")

    def send(self, request: requests.PreparedRequest, completion: Completion) -> Future:
        """Submit the request and return immediately."""
        return self._executor.submit(self._perform, request, completion)

    def _perform(self, request: requests.PreparedRequest, completion: Completion):
        try:
            response = self.session.send(request, timeout=self.timeout)
        except requests.RequestException as exc:
            completion(None, exc.response, exc)
            return
        except Exception as exc:
            completion(None, None, exc)
            return

        completion(response.content, response, None)

    def close(self):
        """Wait for in-flight sends, then release the session."""
        self._executor.shutdown(wait=True)
        self.session.close()

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
