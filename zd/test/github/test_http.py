from __future__ import annotations

import io
import json
import urllib.error
import urllib.request
from email.message import Message
from typing import Any

import pytest

from zd.core.result import Err, Ok
from zd.github.http import HttpError, RealHttpClient

URL = "https://api.github.com/repos/octo/project/releases"


class FakeResponse:
    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc: object) -> None:
        return None


class Capture:
    def __init__(self) -> None:
        self.requests: list[urllib.request.Request] = []
        self.timeouts: list[float] = []


def _install(monkeypatch: pytest.MonkeyPatch, outcome: Any) -> Capture:
    capture = Capture()

    def fake_urlopen(req: urllib.request.Request, *, timeout: float, context: object) -> Any:
        capture.requests.append(req)
        capture.timeouts.append(timeout)
        if isinstance(outcome, BaseException):
            raise outcome
        return FakeResponse(outcome)

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    return capture


def _http_error(code: int, body: bytes) -> urllib.error.HTTPError:
    return urllib.error.HTTPError(URL, code, "Unprocessable Entity", Message(), io.BytesIO(body))


def test_post_sends_json_and_auth_headers(monkeypatch: pytest.MonkeyPatch) -> None:
    capture = _install(monkeypatch, b'{"id": 5}')
    client = RealHttpClient("tok", timeout=12.5)

    result = client.request("POST", URL, {"tag_name": "v1"})

    assert result == Ok({"id": 5})
    req = capture.requests[0]
    assert req.get_method() == "POST"
    assert req.data is not None and json.loads(req.data) == {"tag_name": "v1"}
    assert req.get_header("Authorization") == "Bearer tok"
    assert req.get_header("Accept") == "application/vnd.github+json"
    assert req.get_header("Content-type") == "application/json"
    assert capture.timeouts == [12.5]


def test_empty_body_is_none(monkeypatch: pytest.MonkeyPatch) -> None:
    capture = _install(monkeypatch, b"")

    result = RealHttpClient("tok").request("DELETE", f"{URL}/1")

    assert result == Ok(None)
    assert capture.requests[0].data is None
    assert capture.requests[0].get_header("Content-type") is None


def test_http_error_uses_github_message(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _http_error(422, b'{"message": "Validation Failed"}'))

    result = RealHttpClient("tok").request("POST", URL, {})

    assert result == Err(HttpError(url=URL, status=422, message="Validation Failed"))


def test_http_error_without_json_body_uses_reason(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, _http_error(502, b"<html>bad gateway</html>"))

    result = RealHttpClient("tok").request("POST", URL, {})

    assert isinstance(result, Err)
    assert result.error.status == 502
    assert result.error.message == "Unprocessable Entity"


def test_network_error_has_status_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, urllib.error.URLError("connection refused"))

    result = RealHttpClient("tok").request("GET", URL)

    assert result == Err(HttpError(url=URL, status=0, message="connection refused"))


def test_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, TimeoutError())

    result = RealHttpClient("tok").request("GET", URL)

    assert isinstance(result, Err)
    assert result.error.message == "Request timed out"


def test_invalid_json(monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, b"{nope")

    result = RealHttpClient("tok").request("GET", URL)

    assert isinstance(result, Err)
    assert result.error.message.startswith("JSON parse error")
