"""
Unit tests for helper utilities.
"""

import pytest
from datetime import date

from dogadopt_ai.schemas.dog_data import DogAge, DogSize, DogStatus, Gender
from dogadopt_ai.schemas.rescue_data import RescueType
from dogadopt_ai.utils.helpers import (
    calculate_distance,
    age_category_from_months,
    compute_age_category,
    parse_dog_record,
    parse_dog_records,
    parse_rescue_record,
    parse_rescue_records,
)


class TestCalculateDistance:
    """Tests for the Haversine distance."""

    def test_identical_points_are_zero(self):
        """Test that a point is zero km from itself."""
        assert calculate_distance(51.5074, -0.1278, 51.5074, -0.1278) == 0

    @pytest.mark.parametrize("start,end", [
        ((51.5074, -0.1278), (53.4808, -2.2426)),
        ((51.4816, -3.1791), (57.4778, -4.2247)),
        ((0.0, 0.0), (-33.8688, 151.2093)),
        ((89.9, 10.0), (-89.9, -170.0)),
        ((-45.0, 179.5), (45.0, -179.5)),
    ])
    def test_is_symmetric(self, start, end):
        """Test that swapping the endpoints gives the same distance."""
        forward = calculate_distance(*start, *end)
        backward = calculate_distance(*end, *start)
        assert forward == pytest.approx(backward, abs=1e-9)

    def test_london_to_manchester(self):
        """Test a known UK distance."""
        distance = calculate_distance(51.5074, -0.1278, 53.4808, -2.2426)
        assert distance == pytest.approx(262, abs=2)

    def test_one_degree_of_latitude(self):
        """Test that one degree of latitude is about 111 km."""
        assert calculate_distance(0, 0, 1, 0) == pytest.approx(111.19, abs=0.1)

    def test_antipodal_points(self):
        """Test that opposite points on the equator are half the circumference apart."""
        assert calculate_distance(0, 0, 0, 180) == pytest.approx(20015.1, abs=1)

    def test_antipodal_sweep(self):
        """Test that antipodal pairs across the globe never raise a math domain error."""
        latitudes = [-90.0, -64.3, -45.0, -12.5, -0.1, 0.0, 0.1, 33.3, 51.5074, 89.9, 90.0]
        for lat in latitudes:
            for lon in [x * 0.7 for x in range(-257, 257, 13)]:
                opposite_lon = lon + 180 if lon < 0 else lon - 180
                distance = calculate_distance(lat, lon, -lat, opposite_lon)
                assert distance == pytest.approx(20015.1, abs=1)


class TestAgeCategory:
    """Tests for age category derivation."""

    @pytest.mark.parametrize("months,expected", [
        (0, DogAge.PUPPY),
        (6, DogAge.PUPPY),
        (7, DogAge.YOUNG),
        (24, DogAge.YOUNG),
        (25, DogAge.ADULT),
        (96, DogAge.ADULT),
        (97, DogAge.SENIOR),
    ])
    def test_boundaries(self, months, expected):
        """Test the month boundaries between age categories."""
        assert age_category_from_months(months) == expected

    def test_no_birth_year(self):
        """Test that no birth year gives no category."""
        assert compute_age_category(None) is None

    def test_missing_month_and_day_default_to_first_of_january(self):
        """Test a birth year on its own."""
        today = date(2024, 7, 1)
        # Born 2024-01-01: six whole months
        assert compute_age_category(2024, today=today) == DogAge.PUPPY
        # Born 2023-01-01: eighteen months
        assert compute_age_category(2023, today=today) == DogAge.YOUNG

    def test_full_birth_date(self):
        """Test a full birth date."""
        today = date(2024, 6, 15)
        assert compute_age_category(2014, 6, 15, today=today) == DogAge.SENIOR

    def test_invalid_date_is_ignored(self):
        """Test that an impossible date gives no category."""
        assert compute_age_category(2023, 2, 30, today=date(2024, 1, 1)) is None


class TestParseRecords:
    """Tests for record source row parsing."""

    def test_parse_dog_record(self):
        """Test parsing a full dog row."""
        row = {
            "id": 42,
            "name": "Bella",
            "breeds": ["Labrador Retriever", "Collie"],
            "age": "adult",
            "size": "large",
            "gender": "female",
            "status": "on hold",
            "rescue_name": "Dogs Trust Cardiff",
            "rescue_region": "Wales",
            "rescue_latitude": 51.48,
            "rescue_longitude": -3.18,
            "good_with_kids": True,
        }

        dog = parse_dog_record(row)

        assert dog.id == "42"
        assert dog.breed == "Labrador Retriever, Collie"
        assert dog.size == DogSize.LARGE
        assert dog.gender == Gender.FEMALE
        assert dog.status == DogStatus.ON_HOLD
        assert dog.rescue == "Dogs Trust Cardiff"
        assert dog.location == "Wales"
        assert dog.has_coordinates
        assert dog.good_with_kids is True
        assert dog.good_with_cats is False

    def test_computed_age_takes_precedence(self):
        """Test that the computed age wins over the stored age."""
        row = {"id": "1", "name": "Pip", "age": "Adult", "size": "Small", "gender": "Male",
               "birth_year": 2024, "birth_month": 3}

        dog = parse_dog_record(row, today=date(2024, 6, 1))

        assert dog.age == DogAge.ADULT
        assert dog.computed_age == DogAge.PUPPY
        assert dog.display_age == DogAge.PUPPY

    def test_breed_string_is_split(self):
        """Test a comma-separated breed string."""
        dog = parse_dog_record({"id": "1", "name": "Rex", "breeds": "Beagle, Pug",
                                "size": "Small", "gender": "Male"})
        assert dog.breeds == ["Beagle", "Pug"]

    def test_zero_coordinates_are_kept(self):
        """Test that zero coordinates survive parsing."""
        rescue = parse_rescue_record({"id": "r1", "name": "Null Island", "latitude": 0.0, "longitude": 0.0})
        assert rescue.latitude == 0.0
        assert rescue.has_coordinates

    def test_half_coordinates_are_dropped(self):
        """Test that a single coordinate is dropped."""
        rescue = parse_rescue_record({"id": "r1", "name": "Somewhere", "type": "foster", "latitude": 52.0})
        assert rescue.type == RescueType.FOSTER
        assert rescue.latitude is None
        assert rescue.longitude is None

    def test_invalid_rows_are_skipped(self):
        """Test that invalid rows are skipped."""
        dogs = parse_dog_records([
            {"id": "1", "name": "Good", "size": "Small", "gender": "Male"},
            {"name": "No id"},
        ])
        rescues = parse_rescue_records([{"id": "r1", "name": "Ok"}, {}])

        assert [d.name for d in dogs] == ["Good"]
        assert [r.name for r in rescues] == ["Ok"]
