"""
Article model for representing the result of an extraction.

This module defines the Article model returned by the orchestrator together
with the serialization helpers used by the command line entry point.
"""
import json
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class Article(BaseModel):
    """
    Represents the main article extracted from a page.

    Every field may be empty; empty fields are omitted when the article is
    serialized. Instances are immutable once built.
    """
    title: str = ""
    images: List[str] = Field(default_factory=list)  # Every <img src> as written, empty values included
    author: str = ""
    publish_time: str = ""
    content: str = ""  # Plain text of the content root
    content_html: str = ""  # Inner HTML of the content root

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the article to a dictionary, omitting empty fields."""
        return {key: value for key, value in self.model_dump(mode='json').items() if value}

    def to_json(self, indent: int = 4) -> str:
        """Serialize the article to JSON, keeping non-ASCII text readable."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)
