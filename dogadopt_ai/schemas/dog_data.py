"""
Dog data models and schemas.
"""

from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field, model_validator


class DogSize(str, Enum):
    """Dog size categories."""
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"


class DogAge(str, Enum):
    """Dog age categories."""
    PUPPY = "Puppy"
    YOUNG = "Young"
    ADULT = "Adult"
    SENIOR = "Senior"


class Gender(str, Enum):
    """Dog gender."""
    MALE = "Male"
    FEMALE = "Female"


class DogStatus(str, Enum):
    """Dog adoption status."""
    AVAILABLE = "available"
    RESERVED = "reserved"
    ADOPTED = "adopted"
    ON_HOLD = "on_hold"
    FOSTERED = "fostered"
    WITHDRAWN = "withdrawn"


STATUS_LABELS = {
    DogStatus.AVAILABLE: "Available",
    DogStatus.RESERVED: "Reserved",
    DogStatus.ADOPTED: "Adopted",
    DogStatus.ON_HOLD: "On Hold",
    DogStatus.FOSTERED: "Fostered",
    DogStatus.WITHDRAWN: "Withdrawn",
}


class Dog(BaseModel):
    """Read-only projection of a dog listing with its rescue denormalised."""

    # Identifiers
    id: str = Field(..., description="Unique dog identifier")

    # Descriptive
    name: str = Field(..., description="Dog name")
    breed: str = Field(default="", description="Display breed string")
    breeds: List[str] = Field(
        default_factory=list,
        description="Ordered breed list, source of truth for the display string"
    )
    description: str = Field(default="", description="Detailed description")

    # Categorical
    age: DogAge = Field(default=DogAge.ADULT, description="Manually recorded age category")
    computed_age: Optional[DogAge] = Field(
        default=None,
        description="Age category derived from the birth date"
    )
    size: DogSize = Field(..., description="Size category")
    gender: Gender = Field(..., description="Gender")
    status: DogStatus = Field(default=DogStatus.AVAILABLE, description="Adoption status")

    # Birth date (partial dates allowed)
    birth_year: Optional[int] = Field(default=None, ge=1900)
    birth_month: Optional[int] = Field(default=None, ge=1, le=12)
    birth_day: Optional[int] = Field(default=None, ge=1, le=31)

    # Rescue information
    rescue: str = Field(default="", description="Owning rescue display name")
    rescue_website: Optional[str] = Field(default=None)
    rescue_region: Optional[str] = Field(default=None)
    location: str = Field(default="", description="Display region string")
    rescue_latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    rescue_longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    # Compatibility
    good_with_kids: bool = Field(default=False)
    good_with_dogs: bool = Field(default=False)
    good_with_cats: bool = Field(default=False)

    # Media
    image: Optional[str] = Field(default=None)
    profile_url: Optional[str] = Field(default=None)

    # Derived at query time
    distance: Optional[float] = Field(
        default=None,
        description="Kilometres from the user; None when not computable"
    )

    @model_validator(mode="after")
    def _sync_breeds(self) -> "Dog":
        if self.breeds:
            self.breed = ", ".join(self.breeds)
        elif self.breed:
            self.breeds = [self.breed]
        return self

    @property
    def display_age(self) -> DogAge:
        """Age category used everywhere age is read."""
        return self.computed_age or self.age

    @property
    def status_label(self) -> str:
        return STATUS_LABELS.get(self.status, self.status.value)

    @property
    def has_coordinates(self) -> bool:
        return self.rescue_latitude is not None and self.rescue_longitude is not None

    class Config:
        json_schema_extra = {
            "example": {
                "id": "6f1c0a52-6b8e-4c55-9d0b-1f4f6e8b2a11",
                "name": "Buddy",
                "breeds": ["Labrador Retriever", "Collie"],
                "age": "Adult",
                "size": "Large",
                "gender": "Male",
                "status": "available",
                "rescue": "Dogs Trust Cardiff",
                "location": "Wales",
                "good_with_kids": True,
                "description": "Buddy is a friendly and energetic dog..."
            }
        }
