"""
Extractor package for the TSD extractor.

The main components are:
- Normalizer for pruning boilerplate from the body before scoring
- Density analyzer for choosing the content node
- Metadata extractor for title, author and publication time
- Article parser orchestrating one extraction
"""
from tsdextractor.extractor.article_parser import (
    extract,
    extract_article,
    extract_image_urls,
    extract_url,
)
from tsdextractor.extractor.density import (
    calc_sbdi,
    calc_text_density,
    content_extract,
)
from tsdextractor.extractor.metadata import (
    extract_author,
    extract_publish_time,
    extract_title,
    head_text_extract,
)
from tsdextractor.extractor.normalizer import normalize

__all__ = [
    "extract",
    "extract_article",
    "extract_image_urls",
    "extract_url",
    "calc_sbdi",
    "calc_text_density",
    "content_extract",
    "extract_author",
    "extract_publish_time",
    "extract_title",
    "head_text_extract",
    "normalize",
]
