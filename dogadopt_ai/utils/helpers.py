"""
Helper utilities for DogAdopt AI.
"""

import math
from datetime import date
from enum import Enum
from typing import Optional, Dict, Any, List, Type, TypeVar
from dateutil.relativedelta import relativedelta
from loguru import logger

from ..schemas.dog_data import Dog, DogAge, DogSize, Gender, DogStatus
from ..schemas.rescue_data import Rescue, RescueType

EARTH_RADIUS_KM = 6371.0

E = TypeVar("E", bound=Enum)


def calculate_distance(
    lat1: float, lon1: float, lat2: float, lon2: float
) -> float:
    """
    Calculate distance between two coordinates using Haversine formula.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in kilometres
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    # Rounding can push a just past 1 for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def age_category_from_months(months: int) -> DogAge:
    """Map an age in whole months to its category."""
    if months <= 6:
        return DogAge.PUPPY
    if months <= 24:
        return DogAge.YOUNG
    if months <= 96:
        return DogAge.ADULT
    return DogAge.SENIOR


def compute_age_category(
    birth_year: Optional[int],
    birth_month: Optional[int] = None,
    birth_day: Optional[int] = None,
    today: Optional[date] = None,
) -> Optional[DogAge]:
    """
    Derive the age category from a (possibly partial) birth date.

    Missing month defaults to January and missing day to the 1st.

    Returns:
        Age category, or None if no birth year is recorded
    """
    if not birth_year:
        return None

    today = today or date.today()
    try:
        born = date(birth_year, birth_month or 1, birth_day or 1)
    except ValueError:
        logger.warning(f"Ignoring invalid birth date {birth_year}-{birth_month}-{birth_day}")
        return None

    elapsed = relativedelta(today, born)
    return age_category_from_months(elapsed.years * 12 + elapsed.months)


def _coerce_enum(enum_cls: Type[E], value: Any, default: E) -> E:
    """Case-insensitive enum lookup by value."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower().replace(" ", "_")
        for member in enum_cls:
            if member.value.lower() == normalized:
                return member
    return default


def _first(row: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = row.get(key)
        if value not in (None, ""):
            return value
    return None


def parse_dog_record(row: Dict[str, Any], today: Optional[date] = None) -> Dog:
    """
    Normalise one record-source row into a Dog.

    Accepts the snake_case columns returned by the API functions, with the
    owning rescue denormalised into ``rescue_*`` columns.
    """
    breeds = row.get("breeds") or []
    if isinstance(breeds, str):
        breeds = [b.strip() for b in breeds.split(",") if b.strip()]

    birth_year = row.get("birth_year")
    birth_month = row.get("birth_month")
    birth_day = row.get("birth_day")

    computed_age = row.get("computed_age")
    if computed_age:
        computed_age = _coerce_enum(DogAge, computed_age, None)
    else:
        computed_age = compute_age_category(birth_year, birth_month, birth_day, today)

    return Dog(
        id=str(row["id"]),
        name=row.get("name") or "Unknown",
        breed=row.get("breed") or "",
        breeds=list(breeds),
        description=row.get("description") or "",
        age=_coerce_enum(DogAge, row.get("age"), DogAge.ADULT),
        computed_age=computed_age,
        size=_coerce_enum(DogSize, row.get("size"), DogSize.MEDIUM),
        gender=_coerce_enum(Gender, row.get("gender"), Gender.MALE),
        status=_coerce_enum(DogStatus, row.get("status"), DogStatus.AVAILABLE),
        birth_year=birth_year,
        birth_month=birth_month,
        birth_day=birth_day,
        rescue=_first(row, "rescue_name", "rescue") or "",
        rescue_website=_first(row, "rescue_website"),
        rescue_region=_first(row, "rescue_region"),
        location=_first(row, "location", "location_name", "rescue_region") or "",
        rescue_latitude=_first(row, "rescue_latitude", "latitude"),
        rescue_longitude=_first(row, "rescue_longitude", "longitude"),
        good_with_kids=bool(row.get("good_with_kids")),
        good_with_dogs=bool(row.get("good_with_dogs")),
        good_with_cats=bool(row.get("good_with_cats")),
        image=row.get("image"),
        profile_url=row.get("profile_url"),
    )


def parse_rescue_record(row: Dict[str, Any]) -> Rescue:
    """Normalise one record-source row into a Rescue."""
    latitude = row.get("latitude")
    longitude = row.get("longitude")
    if latitude is None or longitude is None:
        latitude = longitude = None

    return Rescue(
        id=str(row["id"]),
        name=row.get("name") or "Unknown Rescue",
        type=_coerce_enum(RescueType, row.get("type"), RescueType.FULL),
        region=row.get("region") or "",
        website=row.get("website"),
        phone=row.get("phone"),
        email=row.get("email"),
        address=row.get("address"),
        postcode=row.get("postcode"),
        charity_number=row.get("charity_number"),
        contact_notes=row.get("contact_notes"),
        latitude=latitude,
        longitude=longitude,
        dog_count=row.get("dog_count"),
    )


def parse_dog_records(rows: List[Dict[str, Any]], today: Optional[date] = None) -> List[Dog]:
    """Parse a list of rows, skipping any that fail validation."""
    dogs = []
    for row in rows:
        try:
            dogs.append(parse_dog_record(row, today))
        except Exception as e:
            logger.warning(f"Error parsing dog record {row.get('id')}: {e}")
            continue
    return dogs


def parse_rescue_records(rows: List[Dict[str, Any]]) -> List[Rescue]:
    """Parse a list of rows, skipping any that fail validation."""
    rescues = []
    for row in rows:
        try:
            rescues.append(parse_rescue_record(row))
        except Exception as e:
            logger.warning(f"Error parsing rescue record {row.get('id')}: {e}")
            continue
    return rescues
