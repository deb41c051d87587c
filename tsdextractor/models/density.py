"""
Per-node statistics produced by the density analyzer.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict


class TextDensity(BaseModel):
    """
    Text statistics of one node's subtree.

    ``ti`` is the visible character count with link characters already
    subtracted; ``lti`` is the link character count. ``tgi``, ``ltgi`` and
    ``pi`` count descendant tags, anchors and paragraphs respectively.
    """
    density: float = 0.0
    ti_text: str = ""
    ti: int = 0
    lti: int = 0
    tgi: int = 0
    ltgi: int = 0
    pi: int = 0

    model_config = ConfigDict(frozen=True)


class NodeInfo(BaseModel):
    """A scored candidate node."""
    density: TextDensity
    node: Any  # bs4 Tag or NavigableString
    sbdi: float = 1.0
    paragraph_tag_count: int = 0
    score: float = 0.0
