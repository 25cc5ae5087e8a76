"""
Conversation state and chat message models.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field

from .dog_data import DogSize, DogAge


class ConversationState(BaseModel):
    """
    Preferences accumulated across the turns of one chat session.

    Every field is optional. Once set by a matching utterance a preference
    persists until the session is reset, and all set preferences are
    combined with AND when filtering.
    """

    preferred_size: Optional[DogSize] = None
    preferred_age: Optional[DogAge] = None
    needs_kid_friendly: Optional[bool] = None
    needs_dog_friendly: Optional[bool] = None
    needs_cat_friendly: Optional[bool] = None
    preferred_location: Optional[str] = None
    last_query: Optional[str] = None

    def has_preferences(self) -> bool:
        """Check if any filtering preference has been set."""
        return any([
            self.preferred_size,
            self.preferred_age,
            self.needs_kid_friendly,
            self.needs_dog_friendly,
            self.needs_cat_friendly,
            self.preferred_location,
        ])

    def reset(self) -> None:
        """Clear every field."""
        for name in type(self).model_fields:
            setattr(self, name, None)

    def describe(self) -> List[str]:
        """Human-readable list of the active preferences."""
        parts = []
        if self.preferred_size:
            parts.append(f"{self.preferred_size.value.lower()} size")
        if self.preferred_age:
            parts.append(self.preferred_age.value.lower())
        if self.needs_kid_friendly:
            parts.append("good with kids")
        if self.needs_dog_friendly:
            parts.append("good with dogs")
        if self.needs_cat_friendly:
            parts.append("good with cats")
        if self.preferred_location:
            parts.append(f"in {self.preferred_location}")
        return parts


class MessageRole(str, Enum):
    """Chat message author."""
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """A single message in a chat transcript."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    role: MessageRole
    content: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    suggested_questions: Optional[List[str]] = None


class ChatResponse(BaseModel):
    """Result of one chat turn."""

    content: str = Field(..., description="Markdown-like response text")
    suggested_questions: List[str] = Field(
        default_factory=list,
        description="Up to three follow-up prompts"
    )
    intent: str = Field(default="fallback", description="Handler that produced the response")
    model: str = Field(default="pattern", description="pattern or openai")


GREETING_MESSAGE = (
    "Hello! 👋 I'm here to help you find information about dogs available for "
    "adoption and rescue organizations in the UK. What would you like to know?"
)

RESET_MESSAGE = "Conversation reset! 🔄 Let's start fresh. What kind of dog are you looking for?"

ERROR_MESSAGE = "I'm sorry, I encountered an error processing your message. Please try again."
