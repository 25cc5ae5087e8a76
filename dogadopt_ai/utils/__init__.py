"""Utility modules for DogAdopt AI."""

from .api_clients import SupabaseClient, OpenAIClient, RecordSourceError, RemoteChatError
from .helpers import calculate_distance, compute_age_category, parse_dog_records, parse_rescue_records
from .filters import DogFilters, Page, filter_dogs, filter_rescues, sort_by_distance, paginate
from .validators import sanitize_string, parse_user_location, require_coordinates

__all__ = [
    "SupabaseClient",
    "OpenAIClient",
    "RecordSourceError",
    "RemoteChatError",
    "calculate_distance",
    "compute_age_category",
    "parse_dog_records",
    "parse_rescue_records",
    "DogFilters",
    "Page",
    "filter_dogs",
    "filter_rescues",
    "sort_by_distance",
    "paginate",
    "sanitize_string",
    "parse_user_location",
    "require_coordinates",
]
