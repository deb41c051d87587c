"""
Article parser module for the TSD extractor.

This module orchestrates one extraction: it parses the page, normalizes the
body, then runs the publish-time, author and content extractors side by side
on a small thread pool and assembles the resulting Article.
"""
import asyncio
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Optional, Union

import structlog
from bs4 import BeautifulSoup, Tag

from tsdextractor.config import ExtractorConfig, Settings
from tsdextractor.errors import MissingBodyError
from tsdextractor.extractor.density import content_extract
from tsdextractor.extractor.metadata import (
    extract_author,
    extract_publish_time,
    extract_title,
    head_text_extract,
)
from tsdextractor.extractor.normalizer import normalize
from tsdextractor.fetcher.http_client import fetch_url
from tsdextractor.models.article import Article
from tsdextractor.models.head_entry import HeadEntry
from tsdextractor.parser.html_parser import find_body, inner_html, parse_html

# Set up structured logger
logger = structlog.get_logger()

# Publish time, author, content
EXTRACTION_TASKS = 3


def extract(source: Union[str, bytes], config: Optional[ExtractorConfig] = None) -> Article:
    """
    Extract the main article from an HTML page.

    Normalization runs first and alone; afterwards the tree is only read.
    Publish time, author and content (with title and images, which depend on
    the content node) are extracted concurrently and joined before the
    Article is built. Metadata failures degrade to empty fields; content
    failures propagate.

    Args:
        source: HTML content as string or bytes
        config: Extractor configuration

    Returns:
        Article: The extracted article

    Raises:
        ParseError: If the source cannot be parsed
        MissingBodyError: If the document has no <body>
        NoCandidateError: If the body has no scorable content
    """
    config = config or ExtractorConfig()
    start_time = time.time()

    document = parse_html(source, parser=config.parser)
    body = find_body(document)
    if body is None:
        raise MissingBodyError()

    normalize(body, config)
    head_entries = head_text_extract(document)

    with ThreadPoolExecutor(
        max_workers=EXTRACTION_TASKS,
        thread_name_prefix="tsdextractor-worker",
    ) as pool:
        time_future = pool.submit(
            _degrade_to_empty, "publish_time", extract_publish_time, head_entries, body
        )
        author_future = pool.submit(
            _degrade_to_empty, "author", extract_author, head_entries, body
        )
        content_future = pool.submit(
            _extract_content, document, body, head_entries, config
        )

    # Leaving the executor joined all three tasks
    fields = content_future.result()
    article = Article(
        publish_time=time_future.result(),
        author=author_future.result(),
        **fields,
    )

    elapsed = time.time() - start_time
    logger.debug(
        "Article extracted",
        title=article.title,
        content_length=len(article.content),
        images=len(article.images),
        elapsed_seconds=elapsed,
    )
    return article


def _degrade_to_empty(field: str, extractor: Callable[..., str], *args: Any) -> str:
    """Run a metadata extractor, turning any failure into an empty field."""
    try:
        return extractor(*args) or ""
    except Exception as e:
        logger.warning("Metadata extraction failed", field=field, error=str(e))
        return ""


def _extract_content(
    document: BeautifulSoup,
    body: Tag,
    head_entries: List[HeadEntry],
    config: ExtractorConfig,
) -> dict:
    """Select the content node, then derive text, HTML, images and title from it."""
    best = content_extract(body, config)
    node = best.node

    title = _degrade_to_empty("title", extract_title, head_entries, document, node)

    return {
        "title": title,
        "content": best.density.ti_text,
        "content_html": inner_html(node),
        "images": extract_image_urls(node),
    }


def extract_image_urls(node) -> List[str]:
    """
    Collect ``src`` of every <img> under the content node.

    Document order is kept and duplicates are not removed.
    """
    if not isinstance(node, Tag):
        return []
    return [img["src"] for img in node.find_all("img") if img.get("src") is not None]


async def extract_article(
    source: Union[str, bytes],
    config: Optional[ExtractorConfig] = None,
    thread_pool: Optional[ThreadPoolExecutor] = None,
) -> Article:
    """
    Extract an article without blocking the event loop.

    Extraction is CPU-bound, so it runs in ``thread_pool`` (or the loop's
    default executor).
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(thread_pool, lambda: extract(source, config))


async def extract_url(
    url: str,
    settings: Optional[Settings] = None,
    thread_pool: Optional[ThreadPoolExecutor] = None,
) -> Article:
    """
    Fetch a page and extract its article.

    Args:
        url: URL of the page
        settings: Application settings (fetch and extractor sections are used)
        thread_pool: Thread pool for the CPU-bound extraction

    Returns:
        Article: The extracted article

    Raises:
        httpx.HTTPError: If the page cannot be fetched
        ExtractionError: If the page cannot be extracted
    """
    settings = settings or Settings()
    logger.debug("Extracting article", url=url)

    html_content = await fetch_url(url, settings.fetch)
    return await extract_article(html_content, settings.extractor, thread_pool)
