"""
Fetcher package for the TSD extractor.

This package fetches pages over HTTP for the command line entry point and
``extract_url``. It handles timeouts and retries so the extraction core
never has to.
"""
from tsdextractor.fetcher.http_client import AsyncHTTPClient, fetch_url

__all__ = [
    "AsyncHTTPClient",
    "fetch_url",
]
