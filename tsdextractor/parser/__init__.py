"""
Parser package for the TSD extractor.

Thin adapter over BeautifulSoup exposing the tree operations the extractor
needs.
"""
from tsdextractor.parser.html_parser import (
    child_elements,
    class_string,
    collapse_whitespace,
    descendant_elements,
    find_body,
    get_text,
    inner_html,
    is_comment,
    is_text_node,
    iter_nodes,
    node_name,
    outer_html,
    parse_html,
)

__all__ = [
    "child_elements",
    "class_string",
    "collapse_whitespace",
    "descendant_elements",
    "find_body",
    "get_text",
    "inner_html",
    "is_comment",
    "is_text_node",
    "iter_nodes",
    "node_name",
    "outer_html",
    "parse_html",
]
