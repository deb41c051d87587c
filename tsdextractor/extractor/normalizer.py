"""
Boilerplate pruning applied to the <body> subtree before scoring.

The density formulas are sensitive to spurious tag counts, so navigation
chrome, share widgets, comments and empty structural tags are removed here
first. Normalization is the only phase that mutates the tree.
"""
from typing import Iterable, Optional

import structlog
from bs4 import Tag

from tsdextractor.config import ExtractorConfig
from tsdextractor.parser.html_parser import (
    child_elements,
    class_string,
    get_text,
    is_comment,
    iter_nodes,
    node_name,
)

# Set up structured logger
logger = structlog.get_logger()

# Inline emphasis inside paragraphs is flattened into the paragraph text
INLINE_EMPHASIS_TAGS = ["span", "strong", "em", "b"]


def normalize(body: Tag, config: Optional[ExtractorConfig] = None) -> None:
    """
    Prune boilerplate from ``body`` in place.

    Running it again on an already-normalized tree changes nothing except,
    possibly, removing ancestors that became empty.

    Args:
        body: The <body> element (never removed itself)
        config: Extractor configuration holding the blocklists
    """
    config = config or ExtractorConfig()
    removed = 0

    for tag_name in config.ignore_tags:
        for node in body.find_all(tag_name):
            node.extract()
            removed += 1

    removable_if_empty = set(config.removable_if_empty)

    for node in list(iter_nodes(body))[1:]:
        if is_comment(node):
            node.extract()
            removed += 1
            continue

        if not isinstance(node, Tag):
            continue

        if can_be_removed(node, removable_if_empty):
            node.extract()
            removed += 1
            continue

        if has_ignored_class(node, config.ignore_classes):
            node.extract()
            removed += 1
            continue

        if node_name(node) == "p":
            unwrap_inline_emphasis(node)
            if is_empty_element(node):
                node.extract()
                removed += 1

    logger.debug("Normalized body", removed_nodes=removed)


def is_empty_element(node: Tag) -> bool:
    """True when a node has no element children and only whitespace text."""
    return not child_elements(node) and get_text(node).strip() == ""


def can_be_removed(node: Tag, removable_if_empty: Iterable[str]) -> bool:
    """Check whether a structural tag is empty and safe to drop."""
    return node_name(node) in removable_if_empty and is_empty_element(node)


def has_ignored_class(node: Tag, ignore_classes: Iterable[str]) -> bool:
    """Check the raw class attribute against the boilerplate blocklist."""
    classes = class_string(node)
    if not classes:
        return False
    return any(pattern in classes for pattern in ignore_classes)


def unwrap_inline_emphasis(paragraph: Tag) -> None:
    """Replace span/strong/em/b inside a paragraph with their inner HTML."""
    unwrapped = False
    for child in paragraph.find_all(INLINE_EMPHASIS_TAGS):
        child.unwrap()
        unwrapped = True
    if unwrapped:
        # Merge the text nodes left side by side
        paragraph.smooth()
