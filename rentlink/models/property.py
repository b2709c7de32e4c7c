"""Rental property model."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class PropertyType(str, Enum):
    """Property categories."""
    APARTMENT = "Apartment"
    HOUSE = "House"
    OFFICE = "Office"
    SHOP = "Shop"


class RentPeriod(str, Enum):
    """Billing period of the listed price."""
    MONTH = "month"
    YEAR = "year"


class Property(BaseModel):
    """Rental listing shown in the catalog."""
    id: str = Field(..., min_length=1, description="Stable unique ID")
    title: str = Field(..., description="Listing title")
    price: float = Field(..., gt=0, description="Rent amount per period")
    period: RentPeriod = Field(default=RentPeriod.MONTH, description="month or year")
    location: str = Field(..., description="Free-text location")
    type: PropertyType = Field(..., description="Apartment, House, Office or Shop")
    bedrooms: int = Field(default=0, ge=0)
    bathrooms: int = Field(default=0, ge=0)
    area: float = Field(..., gt=0, description="Area in sqft")
    description: str = Field(default="", description="May stay empty until generated")
    amenities: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list, description="Image URLs, may be empty")
    owner_id: str = Field(..., description="Owner user ID")
    owner_name: str = Field(..., description="Owner display name")
    rating: Optional[float] = Field(None, ge=0.0, le=5.0, description="Average score, None while unrated")
    reviews_count: int = Field(default=0, ge=0)
    is_verified: bool = False
    latitude: float = 0.0
    longitude: float = 0.0
    views: Optional[int] = Field(None, ge=0, description="View counter, absent when untracked")

    @property
    def is_rated(self) -> bool:
        """Unrated (None) is distinct from a rating of 0."""
        return self.rating is not None

    @property
    def rating_label(self) -> str:
        return f"{self.rating:g}" if self.is_rated else "New"

    @property
    def cover_image(self) -> Optional[str]:
        return self.images[0] if self.images else None
