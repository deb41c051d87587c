"""
TSD Extractor

Extracts the main article (title, author, publish time, text, HTML and images)
from an arbitrary HTML page using text density and symbol density statistics.
"""

__version__ = "0.1.0"
__author__ = "TSD Extractor Team"
__description__ = "Main-content extraction based on text and symbol density"
__license__ = "MIT"

# Version info tuple
VERSION_INFO = tuple(map(int, __version__.split('.')))

from tsdextractor.errors import (  # noqa: E402
    ExtractionError,
    MissingBodyError,
    NoCandidateError,
    ParseError,
)
from tsdextractor.extractor.article_parser import (  # noqa: E402
    extract,
    extract_article,
    extract_url,
)
from tsdextractor.models.article import Article  # noqa: E402

__all__ = [
    "Article",
    "ExtractionError",
    "MissingBodyError",
    "NoCandidateError",
    "ParseError",
    "extract",
    "extract_article",
    "extract_url",
]
