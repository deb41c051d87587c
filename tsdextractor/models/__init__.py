"""
Central re-exports for the TSD extractor data models.

This module exposes the canonical models from their dedicated modules to
provide stable import paths as "tsdextractor.models" without redefining types.
"""
from .article import Article
from .density import NodeInfo, TextDensity
from .head_entry import HeadEntry

__all__ = [
    "Article",
    "HeadEntry",
    "NodeInfo",
    "TextDensity",
]
