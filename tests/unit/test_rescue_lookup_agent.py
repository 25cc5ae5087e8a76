"""
Unit tests for Rescue Lookup Agent.
"""

import pytest
from unittest.mock import AsyncMock, Mock

from dogadopt_ai.schemas.rescue_data import Rescue, RescueType
from dogadopt_ai.sub_agents.dog_search_agent import DogSearchAgent
from dogadopt_ai.sub_agents.rescue_lookup_agent import (
    RescueLookupAgent,
    format_rescue,
    format_rescue_results,
)

LONDON = (51.5074, -0.1278)


def make_rescues():
    """50 rescues: 20 near London, 20 in Scotland and 10 without coordinates."""
    near = [
        Rescue(id=f"near_{i}", name=f"Near {i}", region="London",
               latitude=LONDON[0] + (19 - i) * 0.01, longitude=LONDON[1])
        for i in range(20)
    ]
    far = [
        Rescue(id=f"far_{i}", name=f"Far {i}", region="Scotland",
               latitude=56.0 + i * 0.01, longitude=-4.0)
        for i in range(20)
    ]
    unlocated = [Rescue(id=f"none_{i}", name=f"Unlocated {i}", region="Wales") for i in range(10)]
    return near + far + unlocated


class TestRescueLookupAgent:
    """Unit tests for RescueLookupAgent class."""

    @pytest.fixture
    def client(self):
        client = Mock()
        client.get_rescues = AsyncMock(return_value=[])
        client.get_rescue = AsyncMock(return_value=[])
        return client

    @pytest.fixture
    def lookup_agent(self, client):
        search_agent = DogSearchAgent(client=client)
        search_agent.cache["rescues"] = make_rescues()
        return RescueLookupAgent(search_agent)

    @pytest.mark.asyncio
    async def test_find_rescues_near(self, lookup_agent):
        """Test radius, limit and ordering of a nearby lookup."""
        rescues = await lookup_agent.find_rescues_near(*LONDON, radius_km=50, limit=10)

        assert len(rescues) == 10
        assert all(r.distance <= 50 for r in rescues)
        distances = [r.distance for r in rescues]
        assert distances == sorted(distances)
        assert rescues[0].name == "Near 19"

    @pytest.mark.asyncio
    async def test_find_rescues_near_defaults(self, lookup_agent):
        """Test the default radius and limit."""
        rescues = await lookup_agent.find_rescues_near(*LONDON)
        assert len(rescues) == 10

    @pytest.mark.asyncio
    async def test_small_radius(self, lookup_agent):
        """Test a small radius."""
        rescues = await lookup_agent.find_rescues_near(*LONDON, radius_km=5, limit=50)
        assert 0 < len(rescues) < 20
        assert all(r.region == "London" for r in rescues)

    @pytest.mark.asyncio
    async def test_missing_coordinate_raises(self, lookup_agent):
        """Test that a missing coordinate is rejected."""
        with pytest.raises(ValueError):
            await lookup_agent.find_rescues_near(None, LONDON[1])

    @pytest.mark.asyncio
    async def test_zero_coordinates_are_valid(self, lookup_agent):
        """Test that zero coordinates are a real position."""
        rescues = await lookup_agent.find_rescues_near(0.0, 0.0, radius_km=50)
        assert rescues == []

    @pytest.mark.asyncio
    async def test_list_rescues(self, lookup_agent):
        """Test the rescue directory and its limit."""
        assert len(await lookup_agent.list_rescues()) == 50
        rescues = await lookup_agent.list_rescues(limit=3)
        assert [r.name for r in rescues] == ["Near 0", "Near 1", "Near 2"]

    @pytest.mark.asyncio
    async def test_get_rescue_details(self, lookup_agent, client):
        """Test fetching one rescue from the record source."""
        client.get_rescue = AsyncMock(return_value=[
            {"id": "r1", "name": "Dogs Trust Cardiff", "type": "Full", "region": "Wales"}
        ])

        rescue = await lookup_agent.get_rescue_details("r1")

        client.get_rescue.assert_awaited_once_with("r1")
        assert rescue.name == "Dogs Trust Cardiff"

    @pytest.mark.asyncio
    async def test_get_rescue_details_not_found(self, lookup_agent):
        """Test an unknown rescue ID."""
        assert await lookup_agent.get_rescue_details("missing") is None


class TestFormatting:

    def test_format_rescue_includes_present_fields_only(self):
        """Test that empty rescue fields are left out."""
        rescue = Rescue(
            id="r1",
            name="Valleys Rescue",
            type=RescueType.FOSTER,
            region="Wales",
            phone="029 2000 0000",
            charity_number="1234567",
            dog_count=3,
            distance=12.345,
        )

        text = format_rescue(rescue)

        assert text.splitlines()[0] == "**Valleys Rescue**"
        assert "- Type: Foster" in text
        assert "- Distance: 12.3 km" in text
        assert "- Available Dogs: 3" in text
        assert "- Charity Number: 1234567" in text
        assert "Email" not in text
        assert "Website" not in text

    def test_format_results(self):
        """Test the listing headers."""
        rescue = Rescue(id="r1", name="Northern Paws", region="North West")
        assert format_rescue_results([rescue]).startswith("Found 1 rescue organizations:")
        assert format_rescue_results([rescue], radius_km=50).startswith("Found 1 rescue(s) within 50 km:")

    def test_format_no_results(self):
        """Test the empty nearby result message."""
        text = format_rescue_results([], radius_km=25, latitude=51.5, longitude=-0.12)
        assert text == "No rescues found within 25 km of the specified location (51.5, -0.12)."
