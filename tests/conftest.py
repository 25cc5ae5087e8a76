"""
Shared fixtures for DogAdopt AI tests.
"""

import pytest

from dogadopt_ai.config import settings
from dogadopt_ai.schemas.dog_data import Dog, DogSize, DogAge, Gender, DogStatus
from dogadopt_ai.schemas.rescue_data import Rescue, RescueType

LONDON = (51.5074, -0.1278)
CARDIFF = (51.4816, -3.1791)
MANCHESTER = (53.4808, -2.2426)


@pytest.fixture(autouse=True)
def reset_settings():
    """Run every test against the record source rather than mock data."""
    settings.mock_apis = False
    settings.testing_mode = True
    yield
    settings.mock_apis = False


@pytest.fixture
def sample_dogs():
    """Seven dogs, six of them available."""
    return [
        Dog(
            id="dog_001",
            name="Buddy",
            breeds=["Labrador Retriever"],
            age=DogAge.ADULT,
            size=DogSize.LARGE,
            gender=Gender.MALE,
            description="Buddy is a friendly and energetic dog.",
            rescue="Dogs Trust London",
            rescue_website="https://www.dogstrust.org.uk",
            location="London",
            rescue_latitude=LONDON[0],
            rescue_longitude=LONDON[1],
            good_with_kids=True,
            good_with_dogs=True,
        ),
        Dog(
            id="dog_002",
            name="Daisy",
            breeds=["Jack Russell Terrier"],
            age=DogAge.PUPPY,
            size=DogSize.SMALL,
            gender=Gender.FEMALE,
            description="Daisy is a bouncy little puppy.",
            rescue="Valleys Rescue",
            location="Wales",
            rescue_latitude=CARDIFF[0],
            rescue_longitude=CARDIFF[1],
            good_with_kids=True,
            good_with_dogs=True,
            good_with_cats=True,
        ),
        Dog(
            id="dog_003",
            name="Max",
            breeds=["German Shepherd"],
            age=DogAge.SENIOR,
            size=DogSize.LARGE,
            gender=Gender.MALE,
            description="Max is a loyal older gentleman.",
            rescue="Northern Paws",
            location="Manchester",
            rescue_latitude=MANCHESTER[0],
            rescue_longitude=MANCHESTER[1],
            good_with_dogs=True,
        ),
        Dog(
            id="dog_004",
            name="Luna",
            breeds=["Cavalier King Charles Spaniel"],
            age=DogAge.YOUNG,
            size=DogSize.SMALL,
            gender=Gender.FEMALE,
            description="Luna prefers a quiet home with a cat for company.",
            rescue="Dogs Trust London",
            location="London",
            rescue_latitude=LONDON[0],
            rescue_longitude=LONDON[1],
            good_with_cats=True,
        ),
        Dog(
            id="dog_005",
            name="Rocky",
            breeds=["Staffordshire Bull Terrier"],
            age=DogAge.ADULT,
            size=DogSize.MEDIUM,
            gender=Gender.MALE,
            status=DogStatus.RESERVED,
            description="Rocky has found a home, pending paperwork.",
            rescue="Northern Paws",
            location="Manchester",
            rescue_latitude=MANCHESTER[0],
            rescue_longitude=MANCHESTER[1],
            good_with_kids=True,
        ),
        Dog(
            id="dog_006",
            name="Poppy",
            breeds=["Beagle"],
            age=DogAge.ADULT,
            size=DogSize.MEDIUM,
            gender=Gender.FEMALE,
            description="Poppy follows her nose everywhere.",
            rescue="Highland Hounds",
            location="Scotland",
            good_with_kids=True,
            good_with_dogs=True,
        ),
        Dog(
            id="dog_007",
            name="Milo",
            breeds=["Border Collie", "Springer Spaniel"],
            age=DogAge.YOUNG,
            computed_age=DogAge.PUPPY,
            size=DogSize.MEDIUM,
            gender=Gender.MALE,
            description="Milo needs an active home.",
            rescue="Valleys Rescue",
            location="Wales",
            rescue_latitude=CARDIFF[0],
            rescue_longitude=CARDIFF[1],
            good_with_dogs=True,
        ),
    ]


@pytest.fixture
def sample_rescues():
    return [
        Rescue(
            id="rescue_001",
            name="Dogs Trust London",
            type=RescueType.FULL,
            region="London",
            website="https://www.dogstrust.org.uk",
            latitude=LONDON[0],
            longitude=LONDON[1],
            dog_count=2,
        ),
        Rescue(
            id="rescue_002",
            name="Valleys Rescue",
            type=RescueType.FOSTER,
            region="Wales",
            phone="029 2000 0000",
            latitude=CARDIFF[0],
            longitude=CARDIFF[1],
        ),
        Rescue(
            id="rescue_003",
            name="Northern Paws",
            type=RescueType.SANCTUARY,
            region="North West",
            latitude=MANCHESTER[0],
            longitude=MANCHESTER[1],
        ),
        Rescue(
            id="rescue_004",
            name="Highland Hounds",
            type=RescueType.FULL,
            region="Scotland",
        ),
    ]
