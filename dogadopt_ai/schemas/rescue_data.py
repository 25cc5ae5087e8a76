"""
Rescue organisation and location data models.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator


class RescueType(str, Enum):
    """Rescue organisation types."""
    FULL = "Full"
    FOSTER = "Foster"
    SANCTUARY = "Sanctuary"


class Rescue(BaseModel):
    """Read-only projection of a rescue organisation."""

    id: str = Field(..., description="Unique rescue identifier")
    name: str = Field(..., description="Organisation name")
    type: RescueType = Field(default=RescueType.FULL, description="Rescue type")
    region: str = Field(default="", description="UK region")

    # Contact information
    website: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    email: Optional[str] = Field(default=None)
    address: Optional[str] = Field(default=None)
    postcode: Optional[str] = Field(default=None)
    charity_number: Optional[str] = Field(default=None)
    contact_notes: Optional[str] = Field(default=None)

    # Coordinates
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    # Derived
    dog_count: Optional[int] = Field(default=None, ge=0, description="Available dogs at this rescue")
    distance: Optional[float] = Field(
        default=None,
        description="Kilometres from the user; None when not computable"
    )

    @model_validator(mode="after")
    def _check_coordinates(self) -> "Rescue":
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be provided together")
        return self

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class UserLocation(BaseModel):
    """Ephemeral user position from the geolocation source."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
