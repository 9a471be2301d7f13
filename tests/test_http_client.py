from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from requests import Response
from requests.exceptions import ConnectionError as RequestsConnectionError

from xrates_bank.providers.http_client import HTTPClient, HTTPClientConfig, HTTPClientError


def make_response(status_code: int, text: str = "") -> Response:
    resp = MagicMock(spec=Response)
    resp.status_code = status_code
    resp.text = text
    return resp


def test_http_client_success():
    session = MagicMock()
    config = HTTPClientConfig(base_url="https://example.com", max_retries=1, timeout=3)
    client = HTTPClient(config=config, session=session)
    session.get.return_value = make_response(200, "<html>ok</html>")

    body = client.get("/calculator", params={"from": "USD"})

    assert body == "<html>ok</html>"
    session.get.assert_called_once_with(
        "https://example.com/calculator", params={"from": "USD"}, timeout=3
    )


def test_http_client_makes_single_attempt_by_default():
    session = MagicMock()
    client = HTTPClient(config=HTTPClientConfig(base_url="https://example.com"), session=session)
    session.get.return_value = make_response(500)

    with pytest.raises(HTTPClientError) as exc_info:
        client.get("/calculator")

    assert session.get.call_count == 1
    assert exc_info.value.status_code == 500


def test_http_client_retries_then_succeeds(monkeypatch):
    session = MagicMock()
    config = HTTPClientConfig(base_url="https://example.com", max_retries=2, backoff_seconds=0)
    client = HTTPClient(config=config, session=session)

    session.get.side_effect = [make_response(500), make_response(200, "value")]

    monkeypatch.setattr("time.sleep", lambda *_: None)
    monkeypatch.setattr("random.uniform", lambda *_: 0)

    body = client.get("/data")

    assert body == "value"
    assert session.get.call_count == 2


def test_http_client_raises_after_retries_exhausted(monkeypatch):
    session = MagicMock()
    config = HTTPClientConfig(base_url="https://example.com", max_retries=2, backoff_seconds=0)
    client = HTTPClient(config=config, session=session)
    session.get.side_effect = RequestsConnectionError("refused")

    monkeypatch.setattr("time.sleep", lambda *_: None)

    with pytest.raises(HTTPClientError) as exc_info:
        client.get("/data")

    assert "Failed to fetch" in str(exc_info.value)
    assert exc_info.value.status_code is None
    assert session.get.call_count == 2


def test_http_client_treats_client_errors_as_failures():
    session = MagicMock()
    client = HTTPClient(config=HTTPClientConfig(base_url="https://example.com"), session=session)
    session.get.return_value = make_response(404, "missing")

    with pytest.raises(HTTPClientError) as exc_info:
        client.get("/calculator")

    assert exc_info.value.status_code == 404


def test_build_url_joins_base_and_path():
    client = HTTPClient(config=HTTPClientConfig(base_url="https://x-rates.com/"), session=MagicMock())

    assert client.build_url("/calculator") == "https://x-rates.com/calculator"
