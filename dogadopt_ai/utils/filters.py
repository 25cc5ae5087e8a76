"""
Record enrichment, filtering, sorting and pagination.

All functions are pure: they return new lists (and copies of records when
a distance is attached) and never mutate the snapshot they are given.
"""

import math
from typing import Generic, List, Literal, Optional, Sequence, TypeVar, Union
from pydantic import BaseModel, Field

from ..schemas.dog_data import Dog, DogSize, DogAge, DogStatus
from ..schemas.rescue_data import Rescue, UserLocation
from .helpers import calculate_distance

ALL = "All"

T = TypeVar("T")
Record = TypeVar("Record", Dog, Rescue)


class DogFilters(BaseModel):
    """Filter values for dog listings. ``"All"`` bypasses a predicate."""

    size: Union[DogSize, Literal["All"]] = ALL
    age: Union[DogAge, Literal["All"]] = ALL
    status: Union[DogStatus, Literal["All"]] = DogStatus.AVAILABLE
    search: str = ""


class Page(BaseModel, Generic[T]):
    """One page of a filtered listing."""

    items: List[T] = Field(default_factory=list)
    page: int = 1
    page_size: int
    total_items: int = 0
    total_pages: int = 0


def _coordinates(record: Union[Dog, Rescue]) -> tuple:
    if isinstance(record, Dog):
        return record.rescue_latitude, record.rescue_longitude
    return record.latitude, record.longitude


def add_distance_if_available(record: Record, user_location: Optional[UserLocation]) -> Record:
    """
    Attach the distance from the user to a record.

    The record is returned unchanged unless both the user location and the
    record's (or its rescue's) coordinates are present.
    """
    if user_location is None:
        return record

    latitude, longitude = _coordinates(record)
    if latitude is None or longitude is None:
        return record

    distance = calculate_distance(
        user_location.latitude,
        user_location.longitude,
        latitude,
        longitude,
    )
    return record.model_copy(update={"distance": distance})


def enrich_with_distance(records: Sequence[Record], user_location: Optional[UserLocation]) -> List[Record]:
    """Apply add_distance_if_available to every record."""
    return [add_distance_if_available(record, user_location) for record in records]


def matches_size(dog: Dog, size: Union[DogSize, str]) -> bool:
    return size == ALL or dog.size == size


def matches_age(dog: Dog, age: Union[DogAge, str]) -> bool:
    return age == ALL or dog.display_age == age


def matches_status(dog: Dog, status: Union[DogStatus, str]) -> bool:
    return status == ALL or dog.status == status


def matches_search(dog: Dog, query: str) -> bool:
    """Case-insensitive substring match on name, breed, location and rescue."""
    if not query:
        return True
    query = query.lower()
    return (
        query in dog.name.lower()
        or query in dog.breed.lower()
        or query in dog.location.lower()
        or query in dog.rescue.lower()
    )


def filter_dogs(dogs: Sequence[Dog], filters: DogFilters) -> List[Dog]:
    """Apply every dog predicate (AND-combined), preserving input order."""
    return [
        dog for dog in dogs
        if matches_size(dog, filters.size)
        and matches_age(dog, filters.age)
        and matches_status(dog, filters.status)
        and matches_search(dog, filters.search)
    ]


def filter_rescues(
    rescues: Sequence[Rescue],
    search: str = "",
    radius_km: Optional[float] = None,
) -> List[Rescue]:
    """
    Filter rescues by name/region substring and, optionally, by radius.

    When a radius is given, rescues without a computed distance are
    excluded as well as those further away than the radius.
    """
    query = search.lower()
    result = []
    for rescue in rescues:
        if query and query not in rescue.name.lower() and query not in rescue.region.lower():
            continue
        if radius_km is not None and (rescue.distance is None or rescue.distance > radius_km):
            continue
        result.append(rescue)
    return result


def sort_by_distance(records: Sequence[Record]) -> List[Record]:
    """
    Sort ascending by distance; records without a distance go last.

    The sort is stable, so ties keep their upstream order.
    """
    return sorted(records, key=lambda r: (r.distance is None, r.distance or 0.0))


def count_pages(total_items: int, page_size: int) -> int:
    return math.ceil(total_items / page_size) if total_items else 0


def paginate(items: Sequence[T], page: int, page_size: int) -> Page:
    """Slice ``[(page-1)*page_size, page*page_size)`` out of a listing."""
    start = (page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        page=page,
        page_size=page_size,
        total_items=len(items),
        total_pages=count_pages(len(items), page_size),
    )


class BrowseState(BaseModel):
    """Current filters and page of a listing view."""

    filters: DogFilters = Field(default_factory=DogFilters)
    page: int = Field(default=1, ge=1)

    def update_filters(self, **changes) -> None:
        """Apply filter changes; any actual change returns to page 1."""
        updated = self.filters.model_copy(update=changes)
        if updated != self.filters:
            self.filters = DogFilters.model_validate(updated.model_dump())
            self.page = 1

    def go_to_page(self, page: int, total_pages: int) -> None:
        self.page = max(1, min(page, max(total_pages, 1)))
