"""
Page fetching for the TSD extractor.

Only the command line entry point and ``extract_url`` touch the network.
Transient failures (timeouts, transport errors, error statuses) are retried
here with exponential backoff; extraction itself never retries.
"""
import time
from typing import Dict, Optional

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from tsdextractor import __version__
from tsdextractor.config import FetchConfig

# Set up structured logger
logger = structlog.get_logger()

DEFAULT_USER_AGENT = f"tsdextractor/{__version__}"

TRANSIENT_ERRORS = (
    httpx.TimeoutException,
    httpx.TransportError,
    httpx.HTTPStatusError,
)


def _log_retry(retry_state: RetryCallState) -> None:
    """tenacity ``before_sleep`` hook."""
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Page fetch failed, retrying",
        url=retry_state.args[0] if retry_state.args else None,
        error=str(error),
        attempt=retry_state.attempt_number,
    )


class AsyncHTTPClient:
    """
    Thin httpx wrapper used to download pages for extraction.

    Use it as an async context manager so the underlying connection pool is
    closed when the fetch is done.
    """

    def __init__(self, config: Optional[FetchConfig] = None, headers: Optional[Dict[str, str]] = None):
        self.config = config or FetchConfig()
        self.headers = {"User-Agent": self.config.user_agent or DEFAULT_USER_AGENT}
        self.headers.update(headers or {})

        self.client = httpx.AsyncClient(
            timeout=self.config.timeout_seconds,
            follow_redirects=True,
            headers=self.headers,
        )

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def _get_once(self, url: str) -> httpx.Response:
        start_time = time.time()
        response = await self.client.get(url)
        response.raise_for_status()
        logger.debug(
            "Page fetched",
            url=url,
            status_code=response.status_code,
            elapsed_seconds=time.time() - start_time,
        )
        return response

    async def get(self, url: str, with_retry: bool = True) -> httpx.Response:
        """
        GET a page, retrying transient failures.

        Args:
            url: URL to fetch
            with_retry: Make a single attempt when False

        Returns:
            httpx.Response: The successful response

        Raises:
            httpx.HTTPError: The last error once all attempts are used up
        """
        if not with_retry:
            return await self._get_once(url)

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.config.retry_attempts),
            wait=wait_exponential(
                multiplier=self.config.retry_multiplier,
                min=self.config.retry_min_wait,
                max=self.config.retry_max_wait,
            ),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            before_sleep=_log_retry,
            reraise=True,
        )
        try:
            return await retrying(self._get_once, url)
        except TRANSIENT_ERRORS as e:
            logger.error(
                "Page fetch failed",
                url=url,
                error=str(e),
                attempts=self.config.retry_attempts,
            )
            raise


async def fetch_url(url: str, config: Optional[FetchConfig] = None) -> str:
    """
    Fetch a page and return its decoded body.

    Raises:
        httpx.HTTPError: If the page cannot be fetched
    """
    async with AsyncHTTPClient(config) as client:
        response = await client.get(url)
        return response.text
