"""
Rescue Lookup Agent - Rescue Directory Queries
Lists rescues, finds rescues near a position and renders rescue details.
"""

from typing import List, Optional
from loguru import logger

from ..config import settings
from ..schemas.rescue_data import Rescue
from ..utils.filters import add_distance_if_available, sort_by_distance
from ..utils.helpers import parse_rescue_records
from ..utils.validators import require_coordinates, validate_positive
from .dog_search_agent import DogSearchAgent


class RescueLookupAgent:
    """
    Specialized agent for answering rescue directory questions.
    """

    def __init__(self, search_agent: Optional[DogSearchAgent] = None):
        """Initialize the rescue lookup agent."""
        self.search_agent = search_agent or DogSearchAgent()

    async def list_rescues(self, limit: Optional[int] = None) -> List[Rescue]:
        """
        Get the first rescues in record source order.

        Args:
            limit: Maximum number of rescues (defaults to settings)

        Returns:
            List of Rescue objects
        """
        limit = validate_positive(limit or settings.list_rescues_default_limit, "limit")
        rescues = await self.search_agent.get_rescues()
        return rescues[:limit]

    async def find_rescues_near(
        self,
        latitude: Optional[float],
        longitude: Optional[float],
        radius_km: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> List[Rescue]:
        """
        Find rescues within a radius of a position, nearest first.

        Args:
            latitude: Latitude of the search centre
            longitude: Longitude of the search centre
            radius_km: Search radius in kilometres (defaults to settings)
            limit: Maximum number of rescues (defaults to settings)

        Returns:
            Rescues with distance attached, sorted ascending by distance

        Raises:
            ValueError: If a coordinate is missing or out of range
        """
        location = require_coordinates(latitude, longitude)
        radius_km = validate_positive(radius_km or settings.default_search_radius_km, "radius_km")
        limit = validate_positive(limit or settings.lookup_default_limit, "limit")

        rescues = await self.search_agent.get_rescues()
        nearby = [
            rescue for rescue in (
                add_distance_if_available(r, location) for r in rescues if r.has_coordinates
            )
            if rescue.distance <= radius_km
        ]

        logger.info(
            f"Found {len(nearby)} rescues within {radius_km} km of "
            f"({location.latitude}, {location.longitude})"
        )
        return sort_by_distance(nearby)[:limit]

    async def get_rescue_details(self, rescue_id: str) -> Optional[Rescue]:
        """
        Retrieve a specific rescue by ID.

        Args:
            rescue_id: Rescue identifier

        Returns:
            Rescue object or None if not found
        """
        if not rescue_id:
            raise ValueError("rescue_id is required")

        if settings.mock_apis:
            for rescue in await self.search_agent.get_rescues():
                if rescue.id == rescue_id:
                    return rescue
            return None

        rows = await self.search_agent.client.get_rescue(rescue_id)
        rescues = parse_rescue_records(rows)
        return rescues[0] if rescues else None


def format_rescue(rescue: Rescue) -> str:
    """Render a rescue as a bold name followed by its present fields."""
    parts = [
        f"**{rescue.name}**",
        f"- Type: {rescue.type.value}",
        f"- Region: {rescue.region}",
    ]

    if rescue.distance is not None:
        parts.append(f"- Distance: {rescue.distance:.1f} km")
    if rescue.dog_count is not None:
        parts.append(f"- Available Dogs: {rescue.dog_count}")
    if rescue.address:
        parts.append(f"- Address: {rescue.address}")
    if rescue.postcode:
        parts.append(f"- Postcode: {rescue.postcode}")
    if rescue.phone:
        parts.append(f"- Phone: {rescue.phone}")
    if rescue.email:
        parts.append(f"- Email: {rescue.email}")
    if rescue.website:
        parts.append(f"- Website: {rescue.website}")
    if rescue.charity_number:
        parts.append(f"- Charity Number: {rescue.charity_number}")
    if rescue.contact_notes:
        parts.append(f"- Notes: {rescue.contact_notes}")

    return "\n".join(parts)


def format_rescue_results(
    rescues: List[Rescue],
    radius_km: Optional[float] = None,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
) -> str:
    """
    Render a rescue listing.

    With a radius the text describes a nearby search, including the
    empty-result message naming the search centre.
    """
    formatted = "\n\n".join(format_rescue(rescue) for rescue in rescues)

    if radius_km is None:
        return f"Found {len(rescues)} rescue organizations:\n\n{formatted}"

    if not rescues:
        return (
            f"No rescues found within {radius_km:g} km of the specified location "
            f"({latitude}, {longitude})."
        )
    return f"Found {len(rescues)} rescue(s) within {radius_km:g} km:\n\n{formatted}"
