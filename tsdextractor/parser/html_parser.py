"""
HTML parsing abstraction layer using BeautifulSoup.

This module is the only place that knows how the DOM is represented. The
normalizer, the density analyzer and the metadata extractors work through
these helpers:

- parsing raw markup into a mutable tree
- depth-first enumeration of every node (elements and text alike)
- node classification (element, text, comment)
- text and markup accessors
"""
import re
from typing import Iterator, List, Optional, Union

import structlog
from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from bs4.element import PageElement, PreformattedString

from tsdextractor.errors import ParseError

# Set up structured logger
logger = structlog.get_logger()

WHITESPACE_RE = re.compile(r'\s+')

TEXT_NODE_NAME = "#text"
COMMENT_NODE_NAME = "#comment"


def parse_html(content: Union[str, bytes], parser: str = "html.parser") -> BeautifulSoup:
    """
    Parse HTML content and return the document tree.

    This is the main entry point for HTML parsing. Bytes are handed to
    BeautifulSoup untouched so its encoding detection can run.

    Args:
        content: HTML content as string or bytes
        parser: BeautifulSoup tree builder name

    Returns:
        BeautifulSoup: The parsed document

    Raises:
        ParseError: If the content is not markup or the parser rejects it
    """
    if not isinstance(content, (str, bytes)):
        raise ParseError(f"unsupported input type {type(content).__name__}")

    try:
        return BeautifulSoup(content, parser)
    except Exception as e:
        logger.warning("Error parsing HTML", parser=parser, error=str(e))
        raise ParseError(str(e)) from e


def find_body(document: BeautifulSoup) -> Optional[Tag]:
    """Return the <body> element, if the document has one."""
    body = document.find("body")
    return body if isinstance(body, Tag) else None


def is_comment(node: PageElement) -> bool:
    """Check whether a node is an HTML comment."""
    return isinstance(node, Comment)


def is_text_node(node: PageElement) -> bool:
    """Check whether a node is a plain text node (not a comment, doctype or CDATA)."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def node_name(node: PageElement) -> str:
    """Get the lowercased tag name, or ``#text`` / ``#comment`` for string nodes."""
    if isinstance(node, Tag):
        return (node.name or "").lower()
    if is_comment(node):
        return COMMENT_NODE_NAME
    return TEXT_NODE_NAME


def iter_nodes(root: PageElement) -> Iterator[PageElement]:
    """
    Enumerate ``root`` and all of its descendants depth-first.

    Text and comment nodes are included. The caller gets a live iterator;
    take a ``list()`` snapshot before mutating the tree.
    """
    yield root
    if isinstance(root, Tag):
        yield from root.descendants


def descendant_elements(node: PageElement, name: Optional[Union[str, List[str]]] = None) -> List[Tag]:
    """Return descendant elements (excluding ``node``), optionally filtered by tag name."""
    if not isinstance(node, Tag):
        return []
    if name is None:
        return node.find_all(True)
    return node.find_all(name)


def child_elements(node: PageElement) -> List[Tag]:
    """Return the element children of a node."""
    if not isinstance(node, Tag):
        return []
    return [child for child in node.children if isinstance(child, Tag)]


def get_text(node: PageElement) -> str:
    """Get all text content of a node, whitespace as in the source."""
    if isinstance(node, Tag):
        return node.get_text()
    return str(node)


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim."""
    return WHITESPACE_RE.sub(' ', text).strip()


def class_string(node: PageElement) -> Optional[str]:
    """
    Get the ``class`` attribute as written in the source.

    BeautifulSoup splits multi-valued attributes into lists; join them back
    so substring matching behaves as it would on the raw attribute.
    """
    if not isinstance(node, Tag):
        return None
    value = node.get("class")
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


def inner_html(node: PageElement) -> str:
    """Serialize the children of a node."""
    if isinstance(node, Tag):
        return node.decode_contents()
    return str(node)


def outer_html(node: PageElement) -> str:
    """Serialize a node including its own tag."""
    if isinstance(node, Tag):
        return node.decode()
    return str(node)
