"""Tests for the shared HTTP helpers."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from common.http_client import get_json, robust_get


def _response(status_code=200, text="", headers=None):
    res = MagicMock()
    res.status_code = status_code
    res.text = text
    res.headers = headers or {}
    return res


@pytest.fixture(autouse=True)
def no_sleep():
    """Skip retry delays."""
    with patch('common.http_client.time.sleep') as mock_sleep:
        yield mock_sleep


class TestRobustGet:
    """Test GET retries and error reporting."""

    def test_returns_status_headers_and_text(self):
        session = MagicMock()
        session.get.return_value = _response(200, "ok", {"X-Test": "1"})

        status, headers, text = robust_get("https://example.test/a", session=session)

        assert (status, headers, text) == (200, {"X-Test": "1"}, "ok")
        assert session.get.call_count == 1

    def test_non_200_is_not_retried(self):
        session = MagicMock()
        session.get.return_value = _response(404, "missing")

        status, _, _ = robust_get("https://example.test/a", session=session)

        assert status == 404
        assert session.get.call_count == 1

    @patch('common.http_client.Constants.HTTP_RETRY_MAX', 3)
    def test_retries_then_succeeds(self, no_sleep):
        session = MagicMock()
        session.get.side_effect = [
            requests.Timeout("slow"),
            requests.ConnectionError("reset"),
            _response(200, "[]"),
        ]

        status, _, text = robust_get("https://example.test/a", session=session)

        assert status == 200
        assert text == "[]"
        assert session.get.call_count == 3
        assert no_sleep.call_count == 2

    @patch('common.http_client.Constants.HTTP_RETRY_MAX', 2)
    def test_all_attempts_fail(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("down")

        status, headers, text = robust_get("https://example.test/a", session=session)

        assert status == 0
        assert headers == {}
        assert "2 attempts" in text

    @patch('common.http_client.requests.get')
    def test_uses_module_get_without_session(self, mock_get):
        mock_get.return_value = _response(200, "x")

        status, _, _ = robust_get("https://example.test/a", headers={"A": "b"})

        assert status == 200
        assert mock_get.call_args[1]["headers"] == {"A": "b"}


class TestGetJson:
    """Test JSON decoding."""

    def test_parses_json(self):
        session = MagicMock()
        session.get.return_value = _response(200, '[{"tag_name": "v1.0.0"}]')

        status, _, data = get_json("https://example.test/a", session=session)

        assert status == 200
        assert data == [{"tag_name": "v1.0.0"}]

    def test_invalid_json_returns_none(self):
        session = MagicMock()
        session.get.return_value = _response(200, "<html>")

        status, _, data = get_json("https://example.test/a", session=session)

        assert status == 200
        assert data is None

    def test_error_status_returns_none(self):
        session = MagicMock()
        session.get.return_value = _response(500, '{"message": "boom"}')

        status, _, data = get_json("https://example.test/a", session=session)

        assert status == 500
        assert data is None
