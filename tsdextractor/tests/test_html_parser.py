import pytest
from bs4 import BeautifulSoup, Comment

from tsdextractor.errors import ParseError
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

SAMPLE_HTML = """
<html>
<head><title>Sample</title></head>
<body><div class="post  main"><!-- note --><p>One <b>two</b></p><a href="#">x</a></div></body>
</html>
"""


def test_parse_html_accepts_str_and_bytes():
    assert parse_html(SAMPLE_HTML).title.string == "Sample"
    assert parse_html(
        '<meta charset="utf-8"><p>héllo</p>'.encode("utf-8")
    ).p.get_text() == "héllo"


def test_parse_html_rejects_non_markup():
    with pytest.raises(ParseError) as exc_info:
        parse_html(12345)
    assert isinstance(exc_info.value, ValueError)
    assert "Failed to parse HTML" in str(exc_info.value)


def test_parse_html_wraps_parser_errors():
    with pytest.raises(ParseError):
        parse_html("<p>x</p>", parser="no-such-parser")


def test_find_body():
    assert find_body(parse_html(SAMPLE_HTML)).name == "body"
    assert find_body(parse_html("<html><head></head></html>")) is None


def test_iter_nodes_includes_root_text_and_comments():
    div = parse_html(SAMPLE_HTML).div

    names = [node_name(node) for node in iter_nodes(div)]

    assert names == ["div", "#comment", "p", "#text", "b", "#text", "a", "#text"]


def test_iter_nodes_on_text_node_yields_only_itself():
    text = parse_html("<p>hi</p>").p.contents[0]
    assert list(iter_nodes(text)) == [text]


def test_node_classification():
    div = parse_html(SAMPLE_HTML).div
    comment = div.contents[0]
    text = div.p.contents[0]

    assert is_comment(comment)
    assert isinstance(comment, Comment)
    assert not is_text_node(comment)
    assert is_text_node(text)
    assert not is_text_node(div)
    assert node_name(comment) == "#comment"
    assert node_name(text) == "#text"


def test_node_name_is_lowercase():
    soup = BeautifulSoup("<DIV><P>x</P></DIV>", "html.parser")
    assert node_name(soup.find("div")) == "div"


def test_element_helpers():
    div = parse_html(SAMPLE_HTML).div

    assert [node_name(child) for child in child_elements(div)] == ["p", "a"]
    assert [node_name(e) for e in descendant_elements(div)] == ["p", "b", "a"]
    assert len(descendant_elements(div, "a")) == 1
    assert descendant_elements(div.p.contents[0]) == []


def test_text_helpers():
    div = parse_html(SAMPLE_HTML).div

    assert get_text(div.p) == "One two"
    assert collapse_whitespace("  a \n\t b  ") == "a b"
    assert collapse_whitespace(" \n ") == ""


def test_class_string_joins_class_list():
    div = parse_html(SAMPLE_HTML).div
    assert class_string(div) == "post main"
    assert class_string(div.p) is None


def test_markup_serialization():
    p = parse_html(SAMPLE_HTML).p
    assert inner_html(p) == "One <b>two</b>"
    assert outer_html(p) == "<p>One <b>two</b></p>"
