"""
HeadEntry model for normalized <meta> tag data.
"""
from pydantic import BaseModel, ConfigDict


class HeadEntry(BaseModel):
    """A ``(key, value)`` pair taken from a ``<head><meta>`` tag."""
    key: str  # Lowercased name/property
    value: str  # Raw content attribute

    model_config = ConfigDict(frozen=True)
