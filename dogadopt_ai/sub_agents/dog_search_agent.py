"""
Dog Search Agent - Data Retrieval Specialist
Loads the dog and rescue snapshots and runs the listing pipeline:
distance enrichment, filtering, distance sort and pagination.
"""

from typing import List, Optional
from loguru import logger

from ..config import settings
from ..schemas.dog_data import Dog
from ..schemas.rescue_data import Rescue, UserLocation
from ..utils.api_clients import supabase_client
from ..utils.filters import (
    DogFilters,
    Page,
    enrich_with_distance,
    filter_dogs,
    filter_rescues,
    sort_by_distance,
    paginate,
)
from ..utils.helpers import parse_dog_records, parse_rescue_records
from ..utils.validators import validate_positive


class DogSearchAgent:
    """
    Specialized agent for retrieving dog and rescue listings from the record source.
    """

    def __init__(self, client=None):
        """Initialize the dog search agent."""
        self.client = client or supabase_client
        self.cache = {}  # Simple in-memory cache

    async def get_dogs(self) -> List[Dog]:
        """
        Get the current dog snapshot.

        Returns:
            List of Dog objects in record source order

        Raises:
            RecordSourceError: If the record source cannot be reached
        """
        if "dogs" in self.cache:
            logger.debug("Returning cached dog snapshot")
            return self.cache["dogs"]

        if settings.mock_apis:
            dogs = self._get_mock_dogs()
        else:
            rows = await self.client.get_dogs()
            dogs = parse_dog_records(rows)

        self.cache["dogs"] = dogs
        logger.info(f"Loaded {len(dogs)} dogs")
        return dogs

    async def get_rescues(self) -> List[Rescue]:
        """
        Get the current rescue snapshot.

        Raises:
            RecordSourceError: If the record source cannot be reached
        """
        if "rescues" in self.cache:
            logger.debug("Returning cached rescue snapshot")
            return self.cache["rescues"]

        if settings.mock_apis:
            rescues = self._get_mock_rescues()
        else:
            rows = await self.client.get_rescues()
            rescues = parse_rescue_records(rows)

        self.cache["rescues"] = rescues
        logger.info(f"Loaded {len(rescues)} rescues")
        return rescues

    async def browse_dogs(
        self,
        filters: Optional[DogFilters] = None,
        user_location: Optional[UserLocation] = None,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> Page:
        """
        Produce one page of the dog listing.

        Args:
            filters: Size, age, status and search filters
            user_location: Optional user position for distance sorting
            page: 1-based page number
            page_size: Dogs per page (defaults to settings)

        Returns:
            Page of Dog objects
        """
        validate_positive(page, "page")
        page_size = validate_positive(page_size or settings.dog_page_size, "page_size")
        filters = filters or DogFilters()

        dogs = await self.get_dogs()
        enriched = enrich_with_distance(dogs, user_location)
        matches = sort_by_distance(filter_dogs(enriched, filters))

        logger.debug(f"Dog listing: {len(matches)} of {len(dogs)} dogs match {filters}")
        return paginate(matches, page, page_size)

    async def browse_rescues(
        self,
        search: str = "",
        user_location: Optional[UserLocation] = None,
        page: int = 1,
        page_size: Optional[int] = None,
        radius_km: Optional[float] = None,
    ) -> Page:
        """
        Produce one page of the rescue listing.

        Args:
            search: Name or region substring
            user_location: Optional user position for distance sorting
            page: 1-based page number
            page_size: Rescues per page (defaults to settings)
            radius_km: Optional maximum distance; needs user_location

        Returns:
            Page of Rescue objects
        """
        validate_positive(page, "page")
        page_size = validate_positive(page_size or settings.rescue_page_size, "page_size")

        rescues = await self.get_rescues()
        enriched = enrich_with_distance(rescues, user_location)
        matches = sort_by_distance(filter_rescues(enriched, search, radius_km))

        return paginate(matches, page, page_size)

    def _get_mock_dogs(self) -> List[Dog]:
        """Get mock dog data for testing."""
        from ..schemas.dog_data import DogSize, DogAge, Gender, DogStatus

        return [
            Dog(
                id="mock_001",
                name="Bella",
                breeds=["Labrador Retriever"],
                age=DogAge.ADULT,
                size=DogSize.LARGE,
                gender=Gender.FEMALE,
                status=DogStatus.AVAILABLE,
                description="Bella is a gentle soul who loves long walks and cuddles on the sofa.",
                rescue="Dogs Trust London",
                rescue_region="London",
                location="London",
                rescue_latitude=51.5074,
                rescue_longitude=-0.1278,
                rescue_website="https://www.dogstrust.org.uk",
                good_with_kids=True,
                good_with_dogs=True,
                good_with_cats=False,
            ),
            Dog(
                id="mock_002",
                name="Pip",
                breeds=["Jack Russell Terrier"],
                age=DogAge.PUPPY,
                size=DogSize.SMALL,
                gender=Gender.MALE,
                status=DogStatus.AVAILABLE,
                description="Pip is a bouncy puppy who is learning his manners.",
                rescue="Valleys Rescue",
                rescue_region="Wales",
                location="Cardiff",
                rescue_latitude=51.4816,
                rescue_longitude=-3.1791,
                good_with_kids=True,
                good_with_dogs=True,
                good_with_cats=True,
            ),
            Dog(
                id="mock_003",
                name="Rex",
                breeds=["German Shepherd"],
                age=DogAge.SENIOR,
                size=DogSize.LARGE,
                gender=Gender.MALE,
                status=DogStatus.RESERVED,
                description="Rex is a loyal older boy looking for a quiet home.",
                rescue="Northern Paws",
                rescue_region="North West",
                location="Manchester",
                rescue_latitude=53.4808,
                rescue_longitude=-2.2426,
                good_with_kids=False,
                good_with_dogs=True,
                good_with_cats=False,
            ),
        ]

    def _get_mock_rescues(self) -> List[Rescue]:
        """Get mock rescue data for testing."""
        from ..schemas.rescue_data import RescueType

        return [
            Rescue(
                id="rescue_001",
                name="Dogs Trust London",
                type=RescueType.FULL,
                region="London",
                website="https://www.dogstrust.org.uk",
                latitude=51.5074,
                longitude=-0.1278,
                dog_count=1,
            ),
            Rescue(
                id="rescue_002",
                name="Valleys Rescue",
                type=RescueType.FOSTER,
                region="Wales",
                latitude=51.4816,
                longitude=-3.1791,
                dog_count=1,
            ),
            Rescue(
                id="rescue_003",
                name="Northern Paws",
                type=RescueType.SANCTUARY,
                region="North West",
                latitude=53.4808,
                longitude=-2.2426,
                dog_count=1,
            ),
        ]

    def clear_cache(self):
        """Clear the snapshot cache."""
        self.cache.clear()
        logger.info("Snapshot cache cleared")
