"""Data schemas and models for DogAdopt AI."""

from .dog_data import Dog, DogSize, DogAge, Gender, DogStatus
from .rescue_data import Rescue, RescueType, UserLocation
from .conversation import ConversationState, ChatMessage, ChatResponse, MessageRole

__all__ = [
    "Dog",
    "DogSize",
    "DogAge",
    "Gender",
    "DogStatus",
    "Rescue",
    "RescueType",
    "UserLocation",
    "ConversationState",
    "ChatMessage",
    "ChatResponse",
    "MessageRole",
]
