"""
Unit tests for the listing pipeline: enrichment, filtering, sorting and pagination.
"""

import pytest

from dogadopt_ai.schemas.dog_data import DogSize, DogAge, DogStatus
from dogadopt_ai.schemas.rescue_data import UserLocation
from dogadopt_ai.utils.filters import (
    ALL,
    BrowseState,
    DogFilters,
    add_distance_if_available,
    enrich_with_distance,
    filter_dogs,
    filter_rescues,
    sort_by_distance,
    count_pages,
    paginate,
)

LONDON = UserLocation(latitude=51.5074, longitude=-0.1278)


class TestDistanceEnrichment:

    def test_no_user_location_leaves_record_unchanged(self, sample_dogs):
        """Test that no position means no distance."""
        dog = sample_dogs[0]
        assert add_distance_if_available(dog, None) is dog
        assert dog.distance is None

    def test_record_without_coordinates_has_no_distance(self, sample_dogs):
        """Test that a record without coordinates gets no distance."""
        poppy = sample_dogs[5]
        assert add_distance_if_available(poppy, LONDON).distance is None

    def test_zero_distance_is_not_missing(self, sample_dogs):
        """Test that a zero distance is kept."""
        buddy = add_distance_if_available(sample_dogs[0], LONDON)
        assert buddy.distance == pytest.approx(0.0)
        assert buddy.distance is not None

    def test_snapshot_is_not_mutated(self, sample_dogs):
        """Test that enrichment returns copies."""
        enriched = enrich_with_distance(sample_dogs, LONDON)
        assert all(dog.distance is None for dog in sample_dogs)
        assert enriched[2].distance == pytest.approx(262, abs=2)


class TestFilterDogs:

    def test_default_filters_keep_available_dogs(self, sample_dogs):
        """Test the default status filter."""
        dogs = filter_dogs(sample_dogs, DogFilters())
        assert len(dogs) == 6
        assert all(dog.status == DogStatus.AVAILABLE for dog in dogs)

    def test_all_status_includes_reserved(self, sample_dogs):
        """Test that "All" bypasses the status filter."""
        assert len(filter_dogs(sample_dogs, DogFilters(status=ALL))) == 7

    def test_size_filter(self, sample_dogs):
        """Test filtering by size."""
        dogs = filter_dogs(sample_dogs, DogFilters(size=DogSize.SMALL))
        assert [d.name for d in dogs] == ["Daisy", "Luna"]

    def test_age_filter_uses_computed_age(self, sample_dogs):
        """Test that the age filter prefers the computed age."""
        dogs = filter_dogs(sample_dogs, DogFilters(age=DogAge.PUPPY))
        assert [d.name for d in dogs] == ["Daisy", "Milo"]

    def test_search_matches_name_breed_location_and_rescue(self, sample_dogs):
        """Test the free-text search fields."""
        assert [d.name for d in filter_dogs(sample_dogs, DogFilters(search="bud"))] == ["Buddy"]
        assert [d.name for d in filter_dogs(sample_dogs, DogFilters(search="SPANIEL"))] == ["Luna", "Milo"]
        assert [d.name for d in filter_dogs(sample_dogs, DogFilters(search="scotland"))] == ["Poppy"]
        assert [d.name for d in filter_dogs(sample_dogs, DogFilters(search="northern paws"))] == ["Max"]

    def test_filters_combine_with_and(self, sample_dogs):
        """Test that filters combine with AND."""
        filters = DogFilters(size=DogSize.MEDIUM, age=DogAge.ADULT, search="beagle")
        assert [d.name for d in filter_dogs(sample_dogs, filters)] == ["Poppy"]

    def test_string_values_are_accepted(self, sample_dogs):
        """Test filters given as plain strings."""
        filters = DogFilters(size="Large", age="All", status="available")
        assert [d.name for d in filter_dogs(sample_dogs, filters)] == ["Buddy", "Max"]

    def test_unknown_size_is_rejected(self):
        """Test that an unknown size is rejected."""
        with pytest.raises(ValueError):
            DogFilters(size="Huge")


class TestFilterRescues:

    def test_search_matches_name_or_region(self, sample_rescues):
        """Test the rescue search fields."""
        assert [r.name for r in filter_rescues(sample_rescues, "valleys")] == ["Valleys Rescue"]
        assert [r.name for r in filter_rescues(sample_rescues, "north west")] == ["Northern Paws"]

    def test_radius_excludes_far_and_unlocated(self, sample_rescues):
        """Test the rescue radius filter."""
        enriched = enrich_with_distance(sample_rescues, LONDON)
        assert [r.name for r in filter_rescues(enriched, radius_km=50)] == ["Dogs Trust London"]


class TestSortByDistance:

    def test_nearest_first_and_missing_last(self, sample_rescues):
        """Test distance ordering with missing distances last."""
        enriched = enrich_with_distance(list(reversed(sample_rescues)), LONDON)
        ordered = sort_by_distance(enriched)
        assert [r.name for r in ordered] == [
            "Dogs Trust London", "Valleys Rescue", "Northern Paws", "Highland Hounds"
        ]

    def test_sort_is_stable(self, sample_dogs):
        """Test that equal distances keep their order."""
        enriched = enrich_with_distance(sample_dogs, LONDON)
        ordered = sort_by_distance(enriched)
        # Buddy and Luna share a rescue and keep their upstream order
        assert [d.name for d in ordered[:2]] == ["Buddy", "Luna"]
        assert ordered[-1].name == "Poppy"

    def test_without_location_order_is_unchanged(self, sample_dogs):
        """Test that no distances means no reordering."""
        assert sort_by_distance(sample_dogs) == sample_dogs


class TestPagination:

    @pytest.mark.parametrize("count,size,expected", [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 12, 3)])
    def test_count_pages(self, count, size, expected):
        """Test the page count."""
        assert count_pages(count, size) == expected

    def test_pages_partition_the_listing(self):
        """Test that pages cover the listing exactly once."""
        items = list(range(25))
        pages = [paginate(items, n, 10) for n in (1, 2, 3)]

        assert [len(p.items) for p in pages] == [10, 10, 5]
        assert sum((p.items for p in pages), []) == items
        assert all(p.total_pages == 3 and p.total_items == 25 for p in pages)

    def test_page_beyond_end_is_empty(self):
        """Test a page past the end."""
        page = paginate(list(range(5)), 4, 10)
        assert page.items == []
        assert page.total_pages == 1


class TestBrowseState:

    def test_filter_change_resets_page(self):
        """Test that changing a filter returns to page one."""
        state = BrowseState(page=3)
        state.update_filters(size=DogSize.SMALL)
        assert state.page == 1
        assert state.filters.size == DogSize.SMALL

    def test_unchanged_filters_keep_page(self):
        """Test that re-applying the same filters keeps the page."""
        state = BrowseState(filters=DogFilters(search="bud"), page=2)
        state.update_filters(search="bud")
        assert state.page == 2

    def test_go_to_page_is_clamped(self):
        """Test that page navigation stays in range."""
        state = BrowseState()
        state.go_to_page(9, total_pages=3)
        assert state.page == 3
        state.go_to_page(0, total_pages=3)
        assert state.page == 1
