from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from tsdextractor.config import FetchConfig
from tsdextractor.fetcher.http_client import AsyncHTTPClient, fetch_url


def no_wait(attempts):
    return FetchConfig(retry_attempts=attempts, retry_min_wait=0, retry_max_wait=0)


def make_response(text="<html><body><p>ok</p></body></html>"):
    response = MagicMock()
    response.text = text
    response.status_code = 200
    response.raise_for_status = MagicMock()
    return response


def test_client_uses_fetch_config():
    with patch('httpx.AsyncClient') as mock_client_class:
        client = AsyncHTTPClient(FetchConfig(user_agent="test-agent", timeout_seconds=5))

    assert client.headers["User-Agent"] == "test-agent"
    kwargs = mock_client_class.call_args.kwargs
    assert kwargs["timeout"] == 5
    assert kwargs["follow_redirects"] is True


def test_default_user_agent():
    with patch('httpx.AsyncClient'):
        client = AsyncHTTPClient()
    assert client.headers["User-Agent"].startswith("tsdextractor/")


@pytest.mark.asyncio
async def test_fetch_url_returns_text():
    with patch('httpx.AsyncClient') as mock_client_class:
        mock_client = mock_client_class.return_value
        mock_client.get = AsyncMock(return_value=make_response("<p>page</p>"))
        mock_client.aclose = AsyncMock()

        text = await fetch_url("https://example.com")

    assert text == "<p>page</p>"
    mock_client.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_retries_transport_errors():
    with patch('httpx.AsyncClient') as mock_client_class:
        mock_client = mock_client_class.return_value
        mock_client.get = AsyncMock(side_effect=[
            httpx.ConnectError("refused"),
            make_response(),
        ])
        mock_client.aclose = AsyncMock()

        async with AsyncHTTPClient(no_wait(3)) as client:
            response = await client.get("https://example.com")

    assert response.text.startswith("<html>")
    assert mock_client.get.await_count == 2


@pytest.mark.asyncio
async def test_get_gives_up_after_max_attempts():
    with patch('httpx.AsyncClient') as mock_client_class:
        mock_client = mock_client_class.return_value
        mock_client.get = AsyncMock(side_effect=httpx.ConnectError("refused"))
        mock_client.aclose = AsyncMock()

        async with AsyncHTTPClient(no_wait(2)) as client:
            with pytest.raises(httpx.ConnectError):
                await client.get("https://example.com")

    assert mock_client.get.await_count == 2


@pytest.mark.asyncio
async def test_get_without_retry_raises_status_errors():
    request = httpx.Request("GET", "https://example.com")
    error_response = httpx.Response(404, request=request)

    with patch('httpx.AsyncClient') as mock_client_class:
        mock_client = mock_client_class.return_value
        mock_client.get = AsyncMock(return_value=error_response)
        mock_client.aclose = AsyncMock()

        async with AsyncHTTPClient() as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.get("https://example.com", with_retry=False)

    mock_client.get.assert_awaited_once()
