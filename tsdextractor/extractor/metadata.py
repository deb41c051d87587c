"""
Metadata extraction module for the TSD extractor.

This module collects normalized ``<meta>`` entries from the document head and
derives the title, author and publication time from them, falling back to
structural patterns in the body when the head has nothing useful.
"""
import re
from typing import List, Optional

import structlog
from bs4 import BeautifulSoup, Tag
from dateutil import parser as date_parser

from tsdextractor.models.head_entry import HeadEntry
from tsdextractor.parser.html_parser import collapse_whitespace, get_text

# Set up structured logger
logger = structlog.get_logger()

# Meta attributes that never describe the page
META_SKIP_ATTRS = {"charset", "http-equiv"}

HEAD_VALUE_MIN_LENGTH = 2
HEAD_VALUE_MAX_LENGTH = 50

# Checked in this order against every entry's key
TITLE_KEY_PATTERNS = [
    "articletitle",
    ":title",
    "title",
]

# Site names are usually appended after one of these
TITLE_SEPARATOR_RE = re.compile(r'_|\|')

HEADING_TAGS = ["h1", "h2", "h3", "h4"]

AUTHOR_META_KEYS = [
    "article:author",
    "og:author",
    "dc.creator",
    "author",
    "byl",
    "twitter:creator",
]

AUTHOR_SELECTORS = ['[rel="author"]', '.author', '.byline', '.meta-author']

# Common patterns for author extraction
AUTHOR_PATTERNS = [
    re.compile(r'作者[:：]\s*([^\s<>|]{1,20})'),
    re.compile(r'\bwritten by[:\s]+([^\n<>|]{2,50})', re.IGNORECASE),
    re.compile(r'\bauthor\s*[:：]\s*([^\n<>|]{2,50})', re.IGNORECASE),
    re.compile(r'\bBy[:\s]+([A-Z][^\n<>|,]{1,49})'),
]

AUTHOR_MAX_LENGTH = 50

PUBLISH_TIME_META_KEYS = [
    "article:published_time",
    "og:published_time",
    "og:release_date",
    "publishdate",
    "publish_date",
    "pubdate",
    "datepublished",
    "dc.date",
    "date",
    "ptime",
]

DATE_SELECTORS = [
    '.publish-time', '.pubtime', '.date', '.published', '.post-date',
    '.entry-date', '.meta-date', '.time',
]

# Common patterns for date extraction
CJK_DATE_PATTERN = re.compile(
    r'(\d{4}\s*年\s*\d{1,2}\s*月\s*\d{1,2}\s*日(?:\s*\d{1,2}[:：]\d{1,2}(?:[:：]\d{1,2})?)?)'
)

DATE_PATTERNS = [
    re.compile(r'(\d{4}[-/.]\d{1,2}[-/.]\d{1,2}(?:[T\s]+\d{1,2}:\d{2}(?::\d{2})?)?)'),  # YYYY-MM-DD [HH:MM[:SS]]
    re.compile(r'(\d{1,2}[-/]\d{1,2}[-/]\d{4})'),  # DD-MM-YYYY or DD/MM/YYYY
    re.compile(r'([A-Z][a-z]+ \d{1,2}, \d{4})'),  # Month DD, YYYY
    re.compile(r'(\d{1,2} [A-Z][a-z]+ \d{4})'),  # DD Month YYYY
]


def head_text_extract(document: BeautifulSoup) -> List[HeadEntry]:
    """
    Collect ``(key, value)`` pairs from the <meta> tags of the document head.

    Entries with a ``charset`` or ``http-equiv`` attribute are skipped, and
    only values of 2 to 50 characters are kept. The result is ordered by
    descending key length so the most specific key matches first.

    Args:
        document: Parsed document

    Returns:
        List[HeadEntry]: Head entries, longest key first
    """
    head = document.find("head")
    if not isinstance(head, Tag):
        return []

    entries: List[HeadEntry] = []
    for meta in head.find_all("meta"):
        key = ""
        value = ""
        for attr, attr_value in meta.attrs.items():
            attr = attr.lower()
            if attr in META_SKIP_ATTRS:
                key = ""
                break
            if isinstance(attr_value, list):
                attr_value = " ".join(attr_value)
            if attr in ("name", "property"):
                key = attr_value.lower()
            elif attr == "content":
                value = attr_value

        if not key or not value:
            continue

        length = len(value.strip())
        if HEAD_VALUE_MIN_LENGTH <= length <= HEAD_VALUE_MAX_LENGTH:
            entries.append(HeadEntry(key=key, value=value))

    # sorted() is stable: equal-length keys keep document order
    return sorted(entries, key=lambda entry: len(entry.key), reverse=True)


def _strip_site_name(text: str) -> str:
    """Keep only the part before the first ``_`` or ``|``."""
    return TITLE_SEPARATOR_RE.split(text, maxsplit=1)[0].strip()


def extract_title(
    head_entries: List[HeadEntry],
    document: BeautifulSoup,
    content_node=None,
) -> str:
    """
    Extract the article title.

    Priority: a title-like meta entry, then the <title> tag, then the nearest
    heading above the content node.

    Args:
        head_entries: Entries from ``head_text_extract``
        document: Parsed document
        content_node: The selected content root, if any

    Returns:
        str: Title, or an empty string
    """
    for entry in head_entries:
        for pattern in TITLE_KEY_PATTERNS:
            if pattern in entry.key:
                title = _strip_site_name(entry.value)
                if title:
                    return title

    title_tag = document.find("title")
    if title_tag is not None:
        title = _strip_site_name(get_text(title_tag))
        if title:
            return title

    if content_node is None:
        return ""
    title = find_heading(content_node)
    logger.debug("Title taken from heading", title=title)
    return title


def find_heading(content_node) -> str:
    """
    Find the first h1-h4 above the content node.

    Walks up one ancestor at a time and searches that ancestor's whole
    subtree, so headings that are siblings of the content are found before
    headings further out. Stops at the document root.
    """
    parent = content_node.parent
    while parent is not None:
        heading = parent.find(HEADING_TAGS)
        if heading is not None:
            return collapse_whitespace(get_text(heading))
        parent = parent.parent
    return ""


def _lookup_meta(head_entries: List[HeadEntry], keys: List[str]) -> Optional[str]:
    """Return the first entry value whose key equals one of ``keys``, in key priority."""
    for key in keys:
        for entry in head_entries:
            if entry.key == key and entry.value.strip():
                return entry.value.strip()
    return None


def _clean_author(text: str) -> Optional[str]:
    """Trim an author candidate and reject implausible ones."""
    text = collapse_whitespace(text)
    if not text or len(text) > AUTHOR_MAX_LENGTH:
        return None
    return text


def extract_author(head_entries: List[HeadEntry], body: Tag) -> str:
    """
    Extract author information.

    Args:
        head_entries: Entries from ``head_text_extract``
        body: The normalized <body> element

    Returns:
        str: Author name, or an empty string
    """
    # Try meta tags first
    author = _lookup_meta(head_entries, AUTHOR_META_KEYS)
    if author:
        return author

    # Try schema.org markup
    author_elem = body.find(attrs={"itemprop": "author"})
    if author_elem is not None:
        name_elem = author_elem.find(attrs={"itemprop": "name"})
        if name_elem is not None:
            author = _clean_author(get_text(name_elem))
        else:
            author = _clean_author(author_elem.get("content") or get_text(author_elem))
        if author:
            return author

    # Try common author classes
    for selector in AUTHOR_SELECTORS:
        author_elem = body.select_one(selector)
        if author_elem is not None:
            author = _clean_author(get_text(author_elem))
            if author:
                return author

    # Try byline patterns in the visible text
    text = body.get_text("\n")
    for pattern in AUTHOR_PATTERNS:
        match = pattern.search(text)
        if match:
            author = _clean_author(match.group(1))
            if author:
                return author

    return ""


def _is_date(text: str) -> bool:
    """Check whether dateutil understands ``text`` as a date."""
    try:
        date_parser.parse(text)
        return True
    except (ValueError, OverflowError):
        return False


def extract_publish_time(head_entries: List[HeadEntry], body: Tag) -> str:
    """
    Extract the publication time as written on the page.

    Args:
        head_entries: Entries from ``head_text_extract``
        body: The normalized <body> element

    Returns:
        str: Publication time string, or an empty string
    """
    # Try meta tags first
    publish_time = _lookup_meta(head_entries, PUBLISH_TIME_META_KEYS)
    if publish_time:
        return publish_time

    # Try schema.org markup
    date_elem = body.find(attrs={"itemprop": "datePublished"})
    if date_elem is not None:
        for candidate in (date_elem.get("datetime"), date_elem.get("content"), get_text(date_elem)):
            candidate = collapse_whitespace(candidate or "")
            if candidate and _is_date(candidate):
                return candidate

    # Try time elements
    time_elem = body.find("time", attrs={"datetime": True})
    if time_elem is not None:
        candidate = collapse_whitespace(time_elem["datetime"])
        if candidate and _is_date(candidate):
            return candidate

    # Try common date classes
    for selector in DATE_SELECTORS:
        date_elem = body.select_one(selector)
        if date_elem is None:
            continue
        candidate = find_date_in_text(get_text(date_elem))
        if candidate:
            return candidate

    # Try date patterns in the visible text
    return find_date_in_text(body.get_text("\n")) or ""


def find_date_in_text(text: str) -> Optional[str]:
    """Return the first date-looking substring of ``text``."""
    match = CJK_DATE_PATTERN.search(text)
    if match:
        return collapse_whitespace(match.group(1))

    for pattern in DATE_PATTERNS:
        for match in pattern.finditer(text):
            candidate = match.group(1)
            if _is_date(candidate):
                return candidate
    return None
