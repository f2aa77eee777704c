"""HTTP client abstraction for the GitHub REST API.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from zd import __version__
from zd.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpRequest",
    "MockHttpClient",
    "RealHttpClient",
]

_API_VERSION = "2022-11-28"


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
    """Protocol for JSON requests against an authenticated API."""

    def request(
        self,
        method: str,
        url: str,
        body: dict[str, object] | None = None,
    ) -> Result[object, HttpError]:
        """Send a request and decode the JSON response.

        Returns:
            Ok with the decoded body (None for an empty response such as
            204 No Content), or Err with HttpError
        """
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    Handles:
    - Bearer token authentication
    - HTTPS with system certificates
    - JSON encoding and decoding
    - Timeout handling
    """

    def __init__(
        self,
        token: str,
        *,
        timeout: float = 30.0,
        user_agent: str = f"zenodraft-sync/{__version__}",
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._token = token
        self._ssl_context = ssl.create_default_context()

    def request(
        self,
        method: str,
        url: str,
        body: dict[str, object] | None = None,
    ) -> Result[object, HttpError]:
        data = json.dumps(body).encode("utf-8") if body is not None else None
        req = urllib.request.Request(
            url,
            data=data,
            method=method,
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {self._token}",
                "User-Agent": self.user_agent,
                "X-GitHub-Api-Version": _API_VERSION,
                **({"Content-Type": "application/json"} if data is not None else {}),
            },
        )
        try:
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                raw: bytes = response.read()
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=_error_message(e)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        if not raw.strip():
            return Ok(None)
        try:
            return Ok(json.loads(raw.decode("utf-8")))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))


def _error_message(e: urllib.error.HTTPError) -> str:
    # GitHub puts the useful part ("Validation Failed", "Not Found") in the body.
    try:
        payload: object = json.loads(e.read().decode("utf-8"))
    except (OSError, ValueError):
        return str(e.reason)
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return str(payload["message"])
    return str(e.reason)


@dataclass(frozen=True, slots=True)
class HttpRequest:
    """A request recorded by MockHttpClient."""

    method: str
    url: str
    body: dict[str, object] | None


def _empty_requests() -> list[HttpRequest]:
    return []


def _empty_responses() -> dict[tuple[str, str], Result[object, HttpError]]:
    return {}


@dataclass
class MockHttpClient:
    """Mock HTTP client for testing.

    Responses are keyed by ``(method, url)``; unknown requests succeed with
    an empty body.

    Example:
        client = MockHttpClient()
        client.set_response("DELETE", url, Err(HttpError(url, 404, "Not Found")))
    """

    requests: list[HttpRequest] = field(default_factory=_empty_requests)
    responses: dict[tuple[str, str], Result[object, HttpError]] = field(
        default_factory=_empty_responses
    )

    def set_response(self, method: str, url: str, response: Result[object, HttpError]) -> None:
        self.responses[(method, url)] = response

    def request(
        self,
        method: str,
        url: str,
        body: dict[str, object] | None = None,
    ) -> Result[object, HttpError]:
        self.requests.append(HttpRequest(method=method, url=url, body=body))
        return self.responses.get((method, url), Ok(None))
