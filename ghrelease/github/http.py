"""HTTP transport for the GitHub REST API.

This module provides:
- HttpClient: Protocol for JSON/text requests (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Scripted implementation that records every call
"""

from __future__ import annotations

import http.client
import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from ghrelease import __version__
from ghrelease.core.result import Err, Ok, Result
from ghrelease.core.structured import as_str_dict, get_str
from ghrelease.github.timeouts import GITHUB_TIMEOUT_SECONDS

__all__ = [
    "HttpCall",
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations against the API."""

    def request_json(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        body: dict[str, object] | None = None,
    ) -> Result[object, HttpError]:
        """Send a request with an optional JSON body and parse the JSON reply.

        Returns:
            Ok with the decoded JSON document, or Err with HttpError
        """
        ...

    def get_text(self, url: str, *, headers: dict[str, str]) -> Result[str, HttpError]:
        """GET ``url`` and decode the reply as UTF-8 text."""
        ...


def _api_message(raw: bytes) -> str | None:
    """Extract ``message`` from a GitHub error document, if there is one."""
    try:
        obj: object = json.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    data = as_str_dict(obj)
    if data is None:
        return None
    return get_str(data, "message")


def _error_detail(error: urllib.error.HTTPError) -> str | None:
    try:
        raw = error.read()
    except (OSError, http.client.HTTPException):
        return None
    return _api_message(raw)


class RealHttpClient:
    """HTTP client using urllib with the system certificates."""

    def __init__(
        self,
        timeout: float = GITHUB_TIMEOUT_SECONDS,
        user_agent: str = f"ghrelease/{__version__}",
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        data: bytes | None,
    ) -> Result[bytes, HttpError]:
        all_headers = {"User-Agent": self.user_agent, **headers}
        if data is not None:
            all_headers["Content-Type"] = "application/json"
        try:
            req = urllib.request.Request(url, data=data, headers=all_headers, method=method)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            detail = _error_detail(e)
            message = f"{e.reason}: {detail}" if detail else str(e.reason)
            return Err(HttpError(url=url, status=e.code, message=message))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except http.client.HTTPException as e:
            # Malformed reply: bad status line, truncated body, oversized header.
            message = f"Invalid HTTP response: {type(e).__name__}: {e}"
            return Err(HttpError(url=url, status=0, message=message))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

    def request_json(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        body: dict[str, object] | None = None,
    ) -> Result[object, HttpError]:
        data = json.dumps(body).encode("utf-8") if body is not None else None
        result = self._send(method, url, headers, data)
        if isinstance(result, Err):
            return result

        try:
            return Ok(json.loads(result.value.decode("utf-8")))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))

    def get_text(self, url: str, *, headers: dict[str, str]) -> Result[str, HttpError]:
        result = self._send("GET", url, headers, None)
        if isinstance(result, Err):
            return result

        try:
            return Ok(result.value.decode("utf-8"))
        except UnicodeDecodeError as e:
            return Err(HttpError(url=url, status=0, message=f"Decode error: {e}"))


@dataclass(frozen=True, slots=True)
class HttpCall:
    """A request seen by MockHttpClient."""

    method: str
    url: str
    headers: dict[str, str]
    body: dict[str, object] | None


def _empty_calls() -> list[HttpCall]:
    return []


def _empty_responses() -> dict[tuple[str, str], object]:
    return {}


@dataclass
class MockHttpClient:
    """Mock HTTP client for testing.

    Responses are keyed by ``(method, url)``; unknown requests get a 404.

    Usage:
        http = MockHttpClient()
        http.respond("GET", "https://api.github.com/repos/o/r", {"name": "r"})
        http.fail("POST", "https://api.github.com/repos/o/r/releases", 422, "Validation Failed")
    """

    calls: list[HttpCall] = field(default_factory=_empty_calls)
    _responses: dict[tuple[str, str], object] = field(default_factory=_empty_responses)

    def respond(self, method: str, url: str, response: object) -> None:
        """Set the JSON document (or raw text for GET text) returned for a request."""
        self._responses[(method, url)] = response

    def fail(self, method: str, url: str, status: int, message: str) -> None:
        self._responses[(method, url)] = HttpError(url=url, status=status, message=message)

    def _lookup(self, method: str, url: str) -> Result[object, HttpError]:
        key = (method, url)
        if key not in self._responses:
            return Err(HttpError(url=url, status=404, message="Not Found (mock)"))
        response = self._responses[key]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def request_json(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        body: dict[str, object] | None = None,
    ) -> Result[object, HttpError]:
        self.calls.append(HttpCall(method=method, url=url, headers=dict(headers), body=body))
        return self._lookup(method, url)

    def get_text(self, url: str, *, headers: dict[str, str]) -> Result[str, HttpError]:
        self.calls.append(HttpCall(method="GET", url=url, headers=dict(headers), body=None))
        result = self._lookup("GET", url)
        if isinstance(result, Err):
            return result
        if not isinstance(result.value, str):
            return Err(HttpError(url=url, status=0, message="Expected text (mock)"))
        return Ok(result.value)

    # Test helpers

    def calls_to(self, method: str, url: str) -> list[HttpCall]:
        """Calls matching ``method`` whose URL equals ``url`` ignoring the query string."""
        return [c for c in self.calls if c.method == method and c.url.split("?", 1)[0] == url]

    def count(self, method: str, url: str) -> int:
        return len(self.calls_to(method, url))
