"""
Pattern matching helpers for the chat assistant.

Every predicate takes the lower-cased, stripped user message. None of them
raise: a message that matches nothing simply returns False/None.
"""

import re
from typing import Iterable, Optional, Set

from ..schemas.dog_data import Dog, DogSize, DogAge
from ..schemas.conversation import ConversationState

# UK places recognised in location questions, longest names first so that
# "north east" wins over "east".
UK_GAZETTEER = sorted(
    [
        "England", "Scotland", "Wales", "Northern Ireland",
        "London", "Manchester", "Birmingham", "Liverpool", "Leeds",
        "Sheffield", "Bristol", "Newcastle", "Nottingham", "Leicester",
        "Brighton", "Oxford", "Cambridge", "York", "Yorkshire",
        "Cardiff", "Swansea", "Edinburgh", "Glasgow", "Aberdeen",
        "Dundee", "Belfast", "Kent", "Essex", "Surrey", "Sussex",
        "Devon", "Cornwall", "Somerset", "Dorset", "Norfolk", "Suffolk",
        "Lancashire", "Cumbria", "Midlands", "East Anglia",
        "North East", "North West", "South East", "South West",
    ],
    key=len,
    reverse=True,
)

_GAZETTEER_PATTERNS = [
    (re.compile(rf"\b{re.escape(place.lower())}\b"), place) for place in UK_GAZETTEER
]

_SIZE_PATTERNS = [
    (re.compile(r"\bsmall\b"), DogSize.SMALL),
    (re.compile(r"\bmedium\b"), DogSize.MEDIUM),
    (re.compile(r"\blarge\b"), DogSize.LARGE),
]

_AGE_PATTERNS = [
    (re.compile(r"\bpupp(y|ies)\b"), DogAge.PUPPY),
    (re.compile(r"\byoung\b"), DogAge.YOUNG),
    (re.compile(r"\b(senior|older|elderly)\b"), DogAge.SENIOR),
    (re.compile(r"\badults?\b"), DogAge.ADULT),
]

_KID_WORDS = re.compile(r"\b(kid|kids|child|children|family|families)\b")
_CAT_WORDS = re.compile(r"\bcats?\b")
_DOG_WORDS = re.compile(r"\bdogs?\b")
_FRIENDLY_DOG_WORDS = re.compile(r"\b(other dogs?|dog[- ]friendly|friendly (with|to) (other )?dogs?)\b")


# Basic conversational patterns

def is_greeting(message: str) -> bool:
    return bool(re.match(r"^(hi|hello|hey|good morning|good afternoon|good evening)[\s!?]*$", message))


def is_help_request(message: str) -> bool:
    return "help" in message or "what can you" in message or "how do" in message


def is_thank_you(message: str) -> bool:
    return bool(re.match(r"^(thanks|thank you|ty|cheers)[\s!.]*$", message))


def is_reset_request(message: str) -> bool:
    return "reset" in message or "start over" in message or "clear" in message


def is_stats_request(message: str) -> bool:
    return "how many" in message or "stats" in message or "summary" in message


def is_rescue_info_request(message: str) -> bool:
    mentions_rescue = (
        "rescue" in message
        or "shelter" in message
        or "organisation" in message
        or "organization" in message
    )
    return mentions_rescue and "dog" not in message and "show" not in message


def is_show_more_request(message: str) -> bool:
    return "more" in message or "another" in message or "other" in message


def is_listing_request(message: str) -> bool:
    """'What dogs are available', 'show me dogs', 'list the dogs'."""
    return (
        "what dogs" in message
        or "which dogs" in message
        or ("show" in message and "dog" in message)
        or ("list" in message and "dog" in message)
    )


def is_breed_list_request(message: str) -> bool:
    return "breed" in message


def is_detail_request(message: str) -> bool:
    return "about" in message


# Keyword detection

def detect_size(message: str) -> Optional[DogSize]:
    for pattern, size in _SIZE_PATTERNS:
        if pattern.search(message):
            return size
    return None


def detect_age(message: str) -> Optional[DogAge]:
    for pattern, age in _AGE_PATTERNS:
        if pattern.search(message):
            return age
    return None


def has_trait_phrase(message: str) -> bool:
    """A compatibility phrase with a recognised target noun."""
    return bool(detect_traits(message))


def detect_traits(message: str) -> Set[str]:
    """
    Find compatibility requirements: any of "kids", "dogs", "cats".

    Only text after "good with" counts as a target. Without "good with",
    "friendly" must be attached to the noun ("kid friendly", "friendly
    with other dogs") so that "kid friendly dogs" does not ask for
    dog-friendly dogs.
    """
    traits: Set[str] = set()

    if "good with" in message:
        segment = message.split("good with", 1)[1]
        if _KID_WORDS.search(segment):
            traits.add("kids")
        if _DOG_WORDS.search(segment):
            traits.add("dogs")
        if _CAT_WORDS.search(segment):
            traits.add("cats")
    elif "friendly" in message:
        if _KID_WORDS.search(message):
            traits.add("kids")
        if _FRIENDLY_DOG_WORDS.search(message):
            traits.add("dogs")
        if _CAT_WORDS.search(message):
            traits.add("cats")

    return traits


def detect_location(message: str) -> Optional[str]:
    """Return the gazetteer place named in the message, if any."""
    for pattern, place in _GAZETTEER_PATTERNS:
        if pattern.search(message):
            return place
    return None


def is_location_request(message: str) -> bool:
    return (
        detect_location(message) is not None
        or bool(re.search(r"\b(where|near|nearby)\b", message))
        or ("rescue" in message and " in " in f" {message} ")
    )


def known_breeds(dogs: Iterable[Dog]) -> Set[str]:
    """Lower-cased breed names present in the corpus."""
    return {breed.lower() for dog in dogs for breed in dog.breeds if breed}


def find_breed_mention(message: str, dogs: Iterable[Dog]) -> Optional[str]:
    """
    Return the lower-cased breed contained in the message.

    Plain substring containment, longest breed name first.
    """
    for breed in sorted(known_breeds(dogs), key=len, reverse=True):
        if breed in message:
            return breed
    return None


def find_named_dog(message: str, dogs: Iterable[Dog]) -> Optional[Dog]:
    """Find a dog whose name equals one of the message tokens."""
    dogs = list(dogs)
    for token in re.findall(r"[a-z0-9']+", message):
        for dog in dogs:
            if dog.name.lower() == token:
                return dog
    return None


def extract_preferences(message: str, state: ConversationState) -> None:
    """
    Record any size, age, compatibility or location preference in the state.

    Existing values are overwritten by new matches and kept otherwise.
    """
    size = detect_size(message)
    if size:
        state.preferred_size = size

    age = detect_age(message)
    if age:
        state.preferred_age = age

    traits = detect_traits(message)
    if "kids" in traits:
        state.needs_kid_friendly = True
    if "dogs" in traits:
        state.needs_dog_friendly = True
    if "cats" in traits:
        state.needs_cat_friendly = True

    location = detect_location(message)
    if location:
        state.preferred_location = location
