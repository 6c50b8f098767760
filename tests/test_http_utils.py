"""Tests for HTTP utilities module."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from jt.exceptions import APIError, FetchError, NotFoundError, ParseError, UnauthorizedError
from jt.http_utils import RETRY_STATUS_CODES, fetch_json_with_retries


def _response(status_code: int, payload: object = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json = MagicMock(return_value=payload)
    response.text = "" if payload is None else str(payload)
    return response


def _patched_client(mock_client_class: MagicMock, get: AsyncMock) -> AsyncMock:
    mock_client = AsyncMock()
    mock_client.get = get
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=None)
    mock_client_class.return_value = mock_client
    return mock_client


class TestRetryStatusCodes:
    """Tests for RETRY_STATUS_CODES constant."""

    def test_contains_expected_codes(self) -> None:
        assert RETRY_STATUS_CODES == frozenset({429, 500, 502, 503, 504})


class TestFetchJsonWithRetries:
    """Tests for fetch_json_with_retries function."""

    @pytest.mark.asyncio
    async def test_returns_decoded_json(self) -> None:
        with patch("jt.http_utils.httpx.AsyncClient") as mock_client_class:
            _patched_client(mock_client_class, AsyncMock(return_value=_response(200, {"key": "A-1"})))

            result = await fetch_json_with_retries("https://example.com")

        assert result == {"key": "A-1"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403])
    async def test_raises_unauthorized(self, status: int) -> None:
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(return_value=_response(status))

        with pytest.raises(UnauthorizedError, match="unauthorized"):
            await fetch_json_with_retries("https://example.com", client=mock_client)

        mock_client.get.assert_called_once()

    @pytest.mark.asyncio
    async def test_raises_not_found_with_default_message(self) -> None:
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(return_value=_response(404))

        with pytest.raises(NotFoundError, match="Resource not found"):
            await fetch_json_with_retries("https://example.com/missing", client=mock_client)

    @pytest.mark.asyncio
    async def test_raises_custom_exception_on_404(self) -> None:
        class CustomError(Exception):
            pass

        mock_client = AsyncMock()
        mock_client.get = AsyncMock(return_value=_response(404))

        with pytest.raises(CustomError, match="gone"):
            await fetch_json_with_retries(
                "https://example.com", client=mock_client, on_404=CustomError, on_404_message="gone"
            )

    @pytest.mark.asyncio
    async def test_raises_api_error_without_retry(self) -> None:
        error_response = _response(400)
        error_response.text = "bad request"
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(return_value=error_response)

        with pytest.raises(APIError) as exc_info:
            await fetch_json_with_retries("https://example.com", client=mock_client)

        assert exc_info.value.status_code == 400
        assert "bad request" in str(exc_info.value)
        mock_client.get.assert_called_once()

    @pytest.mark.asyncio
    async def test_raises_parse_error_on_invalid_json(self) -> None:
        response = _response(200)
        response.json = MagicMock(side_effect=ValueError("Expecting value"))
        mock_client = AsyncMock()
        mock_client.get = AsyncMock(return_value=response)

        with pytest.raises(ParseError, match="Invalid JSON"):
            await fetch_json_with_retries("https://example.com", client=mock_client)

    @pytest.mark.asyncio
    async def test_retries_on_503(self) -> None:
        with (
            patch("jt.http_utils.JT_FETCH_MAX_RETRIES", 2),
            patch("jt.http_utils.JT_FETCH_BACKOFF_S", 0.01),
            patch("jt.http_utils.httpx.AsyncClient") as mock_client_class,
        ):
            mock_client = _patched_client(
                mock_client_class,
                AsyncMock(side_effect=[_response(503), _response(200, {"ok": True})]),
            )

            result = await fetch_json_with_retries("https://example.com")

        assert result == {"ok": True}
        assert mock_client.get.call_count == 2

    @pytest.mark.asyncio
    async def test_raises_after_max_retries(self) -> None:
        with (
            patch("jt.http_utils.JT_FETCH_MAX_RETRIES", 2),
            patch("jt.http_utils.JT_FETCH_BACKOFF_S", 0.01),
            patch("jt.http_utils.httpx.AsyncClient") as mock_client_class,
        ):
            mock_client = _patched_client(mock_client_class, AsyncMock(return_value=_response(503)))

            with pytest.raises(FetchError, match="Failed to fetch"):
                await fetch_json_with_retries("https://example.com")

            # Initial attempt + 2 retries = 3 total
            assert mock_client.get.call_count == 3

    @pytest.mark.asyncio
    async def test_retries_on_request_error(self) -> None:
        with (
            patch("jt.http_utils.JT_FETCH_MAX_RETRIES", 2),
            patch("jt.http_utils.JT_FETCH_BACKOFF_S", 0.01),
            patch("jt.http_utils.httpx.AsyncClient") as mock_client_class,
        ):
            _patched_client(
                mock_client_class,
                AsyncMock(
                    side_effect=[httpx.RequestError("Connection failed"), _response(200, [])]
                ),
            )

            result = await fetch_json_with_retries("https://example.com")

        assert result == []

    @pytest.mark.asyncio
    async def test_client_has_correct_settings(self) -> None:
        auth = httpx.BasicAuth("dev@example.com", "token")
        with patch("jt.http_utils.httpx.AsyncClient") as mock_client_class:
            _patched_client(mock_client_class, AsyncMock(return_value=_response(200, {})))

            await fetch_json_with_retries("https://example.com", auth=auth)

            call_kwargs = mock_client_class.call_args[1]
            assert call_kwargs["follow_redirects"] is True
            assert call_kwargs["max_redirects"] == 5
            assert call_kwargs["auth"] is auth
            assert call_kwargs["headers"]["Accept"] == "application/json"
