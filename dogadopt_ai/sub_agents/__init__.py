"""Sub-agents for DogAdopt AI system."""

from .dog_search_agent import DogSearchAgent
from .rescue_lookup_agent import RescueLookupAgent
from .conversation_agent import ConversationAgent

__all__ = [
    "DogSearchAgent",
    "RescueLookupAgent",
    "ConversationAgent",
]
