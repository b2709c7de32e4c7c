"""Listing composer working state."""

from typing import Literal
from pydantic import BaseModel, ConfigDict, Field
from rentlink.models.property import PropertyType


DEFAULT_HIGHLIGHTS = "Modern, spacious, good view"


class ListingDraft(BaseModel):
    """In-progress listing held by the composer.

    Numeric fields stay raw text until advance/publish parses them.
    """
    model_config = ConfigDict(validate_assignment=True)

    draft_id: str = Field(..., description="Identity used to target async results")
    step: Literal[1, 2] = Field(default=1, description="1 = basic info, 2 = details & media")
    title: str = ""
    type: str = Field(default=PropertyType.APARTMENT.value, description="Raw type selection")
    price: str = Field(default="", description="Raw price text")
    location: str = ""
    bedrooms: str = Field(default="", description="Raw bedrooms text")
    description: str = ""
    highlights: str = Field(default="", description="Keywords fed to description generation")
    is_generating: bool = Field(default=False, description="Description generation in flight")


class DescriptionFeatures(BaseModel):
    """Input of the description generation capability."""
    type: str = Field(..., description="Property type label")
    location: str = Field(..., description="Property location")
    bedrooms: int = Field(default=1, ge=0)
    highlights: str = Field(default=DEFAULT_HIGHLIGHTS)
