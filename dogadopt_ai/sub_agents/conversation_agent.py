"""
Conversation Agent - Dog Adoption Chat Assistant
Answers free-text questions about available dogs and rescues.

Each turn first records any preferences found in the message, then runs an
ordered cascade of handlers where the first one to match produces the reply.
If an OpenAI key is configured the turn is delegated to the remote model
instead, with the local cascade as a silent fallback.
"""

from typing import Callable, Dict, List, NamedTuple, Optional, Sequence

from loguru import logger

from ..config import get_settings
from ..schemas.conversation import (
    ConversationState,
    ChatMessage,
    ChatResponse,
    MessageRole,
    ERROR_MESSAGE,
)
from ..schemas.dog_data import Dog, DogSize, DogAge, DogStatus
from ..schemas.rescue_data import Rescue
from ..utils.api_clients import OpenAIClient
from ..utils.validators import sanitize_string
from . import chat_patterns as patterns
from . import chat_responses as responses


class HandlerResult(NamedTuple):
    """Reply produced by a cascade handler."""
    intent: str
    content: str
    # Dogs the reply is about; None when the reply is not a dog listing.
    dogs: Optional[List[Dog]] = None


def available_dogs(dogs: Sequence[Dog]) -> List[Dog]:
    return [dog for dog in dogs if dog.status == DogStatus.AVAILABLE]


class TurnContext:
    """Everything a handler may read (and the state it may update) in one turn."""

    def __init__(
        self,
        message: str,
        state: ConversationState,
        dogs: Sequence[Dog],
        rescues: Sequence[Rescue],
        preview_size: int = 5,
        rescue_list_size: int = 8,
    ):
        self.message = message
        self.state = state
        self.dogs = list(dogs)
        self.available = available_dogs(dogs)
        self.rescues = list(rescues)
        self.preview_size = preview_size
        self.rescue_list_size = rescue_list_size


Handler = Callable[[TurnContext], Optional[HandlerResult]]


def apply_state_filters(dogs: Sequence[Dog], state: ConversationState) -> List[Dog]:
    """Keep the dogs satisfying every preference in the state."""
    location = state.preferred_location.lower() if state.preferred_location else None
    result = []
    for dog in dogs:
        if state.preferred_size and dog.size != state.preferred_size:
            continue
        if state.preferred_age and dog.display_age != state.preferred_age:
            continue
        if state.needs_kid_friendly and not dog.good_with_kids:
            continue
        if state.needs_dog_friendly and not dog.good_with_dogs:
            continue
        if state.needs_cat_friendly and not dog.good_with_cats:
            continue
        if location and not (
            location in dog.location.lower()
            or location in dog.rescue.lower()
            or location in (dog.rescue_region or "").lower()
        ):
            continue
        result.append(dog)
    return result


def _listing(intent: str, ctx: TurnContext, intro: str, dogs: List[Dog], empty: str) -> HandlerResult:
    if not dogs:
        return HandlerResult(intent, responses.build_no_dogs_response(empty), [])
    return HandlerResult(intent, responses.build_listing_response(intro, dogs, ctx.preview_size), dogs)


def _state_listing(intent: str, ctx: TurnContext, intro: str) -> HandlerResult:
    """List the available dogs matching the accumulated preferences."""
    ctx.state.last_query = ctx.message
    matches = apply_state_filters(ctx.available, ctx.state)
    wanted = responses.describe_preferences(ctx.state)
    return _listing(intent, ctx, intro.format(wanted=wanted), matches, f"dogs matching {wanted}")


# Handlers, in priority order

def handle_basic(ctx: TurnContext) -> Optional[HandlerResult]:
    message = ctx.message
    if patterns.is_greeting(message):
        return HandlerResult(
            "greeting",
            responses.build_greeting_response(len(ctx.available), len(ctx.rescues)),
        )
    if patterns.is_help_request(message):
        return HandlerResult("help", responses.build_help_response())
    if patterns.is_thank_you(message):
        return HandlerResult("thanks", responses.build_thank_you_response())
    if patterns.is_reset_request(message):
        ctx.state.reset()
        return HandlerResult("reset", responses.build_reset_response())
    if patterns.is_stats_request(message):
        return HandlerResult("stats", responses.build_stats_response(ctx.available, ctx.rescues))
    return None


def handle_compound(ctx: TurnContext) -> Optional[HandlerResult]:
    size = patterns.detect_size(ctx.message)
    if not size or not patterns.has_trait_phrase(ctx.message):
        return None

    ctx.state.last_query = ctx.message
    wanted = responses.describe_preferences(ctx.state)
    matches = apply_state_filters(ctx.available, ctx.state)
    if matches:
        return HandlerResult(
            "compound",
            responses.build_listing_response(
                f"Here are dogs matching all your preferences ({wanted}):", matches, ctx.preview_size
            ),
            matches,
        )

    size_only = [dog for dog in ctx.available if dog.size == size]
    label = size.value.lower()
    if not size_only:
        return HandlerResult("compound", responses.build_no_dogs_response(f"{label} dogs"), [])

    intro = (
        f"I couldn't find any dogs matching all your preferences ({wanted}), "
        f"so I've narrowed it down by size only. Here are the {label} dogs available:"
    )
    return HandlerResult(
        "compound",
        responses.build_listing_response(intro, size_only, ctx.preview_size),
        size_only,
    )


def handle_listing(ctx: TurnContext) -> Optional[HandlerResult]:
    if not patterns.is_listing_request(ctx.message):
        return None

    if ctx.state.has_preferences():
        return _state_listing("list_dogs", ctx, "Here are dogs matching your preferences ({wanted}):")

    ctx.state.last_query = ctx.message
    if not ctx.available:
        return HandlerResult(
            "list_dogs", "I'm sorry, there are currently no dogs available for adoption.", []
        )
    return HandlerResult(
        "list_dogs",
        responses.build_listing_response(
            "Here are some dogs available for adoption:", ctx.available, ctx.preview_size
        ),
        ctx.available,
    )


def handle_traits(ctx: TurnContext) -> Optional[HandlerResult]:
    if not patterns.has_trait_phrase(ctx.message):
        return None
    return _state_listing("traits", ctx, "Here are the dogs matching your preferences ({wanted}):")


def handle_breed(ctx: TurnContext) -> Optional[HandlerResult]:
    if patterns.is_breed_list_request(ctx.message):
        breeds: List[str] = []
        for dog in ctx.available:
            for breed in dog.breeds:
                if breed and breed not in breeds:
                    breeds.append(breed)
        if not breeds:
            return HandlerResult("breeds", "I don't have any breed information for our current dogs.", [])
        return HandlerResult("breeds", responses.build_breed_list_response(breeds))

    breed = patterns.find_breed_mention(ctx.message, ctx.dogs)
    if not breed:
        return None

    matches = [
        dog for dog in ctx.available
        if breed in (b.lower() for b in dog.breeds)
    ]
    label = breed.title()
    return _listing("breed", ctx, f"Here are the {label} dogs available:", matches, f"{label} dogs")


def handle_size_or_age(ctx: TurnContext) -> Optional[HandlerResult]:
    size = patterns.detect_size(ctx.message)
    age = patterns.detect_age(ctx.message)
    if size is None and age is None:
        return None
    return _state_listing("size" if size else "age", ctx, "Here are the dogs that match {wanted}:")


def handle_location(ctx: TurnContext) -> Optional[HandlerResult]:
    place = patterns.detect_location(ctx.message)
    if place:
        ctx.state.last_query = ctx.message
        matches = apply_state_filters(ctx.available, ctx.state)
        if matches:
            return HandlerResult(
                "location",
                responses.build_listing_response(
                    f"Here are dogs available in {place}:", matches, ctx.preview_size
                ),
                matches,
            )

        needle = place.lower()
        nearby = [
            rescue for rescue in ctx.rescues
            if needle in rescue.region.lower() or needle in rescue.name.lower()
        ]
        content = responses.build_no_dogs_response(
            f"dogs matching {responses.describe_preferences(ctx.state)}"
        )
        if nearby:
            names = ", ".join(rescue.name for rescue in nearby[:5])
            content += f"\n\nThese rescues are in {place} though: {names}."
        return HandlerResult("location", content, [])

    if patterns.is_location_request(ctx.message):
        regions: List[str] = []
        for rescue in ctx.rescues:
            if rescue.region and rescue.region not in regions:
                regions.append(rescue.region)
        return HandlerResult("regions", responses.build_location_list_response(regions))

    return None


def handle_named_dog(ctx: TurnContext) -> Optional[HandlerResult]:
    if not patterns.is_detail_request(ctx.message) or not ctx.dogs:
        return None
    dog = patterns.find_named_dog(ctx.message, ctx.dogs)
    if dog is None:
        return None
    return HandlerResult("dog_details", responses.format_dog_details(dog))


def handle_show_more(ctx: TurnContext) -> Optional[HandlerResult]:
    if not patterns.is_show_more_request(ctx.message) or not ctx.state.last_query:
        return None
    matches = apply_state_filters(ctx.available, ctx.state)
    if len(matches) <= ctx.preview_size:
        return None
    return HandlerResult(
        "show_more",
        responses.build_show_more_response(matches, ctx.preview_size),
        matches,
    )


def handle_rescue_info(ctx: TurnContext) -> Optional[HandlerResult]:
    if not patterns.is_rescue_info_request(ctx.message):
        return None
    return HandlerResult(
        "rescues",
        responses.build_rescue_list_response(ctx.rescues, ctx.rescue_list_size),
    )


def handle_fallback(ctx: TurnContext) -> HandlerResult:
    return HandlerResult("fallback", responses.build_fallback_response(ctx.state))


HANDLER_CASCADE: List[Handler] = [
    handle_basic,
    handle_compound,
    handle_listing,
    handle_traits,
    handle_breed,
    handle_size_or_age,
    handle_location,
    handle_named_dog,
    handle_show_more,
    handle_rescue_info,
]


def get_starter_questions(dogs: Sequence[Dog]) -> List[str]:
    """Example opening questions based on the dogs currently available."""
    dogs = available_dogs(dogs)
    questions = ["What dogs are available?"]

    if any(d.good_with_kids for d in dogs):
        questions.append("Show me dogs good with children")

    if any(d.size == DogSize.SMALL for d in dogs):
        questions.append("Do you have any small dogs?")

    if any(d.display_age == DogAge.PUPPY for d in dogs):
        questions.append("Tell me about puppies")

    questions.append("What rescues are available?")

    return questions


def generate_suggestions(
    result: HandlerResult,
    state: ConversationState,
    dogs: Sequence[Dog],
    preview_size: int = 5,
) -> List[str]:
    """
    Propose up to three follow-up prompts for a handler result.

    Large result sets get refinement prompts for preferences not yet set,
    one to three results get detail prompts, and an empty result gets
    prompts that widen the search.
    """
    if result.dogs is None:
        return get_starter_questions(dogs)[:3]

    count = len(result.dogs)
    if count == 0:
        return ["Start over", "What rescues are available?", "How many dogs do you have?"]

    if count <= 3:
        return [f"Tell me about {dog.name}" for dog in result.dogs[:3]]

    if count <= preview_size:
        return []

    suggestions = []
    if result.intent != "show_more":
        suggestions.append("Show me more")
    if not state.preferred_size:
        suggestions.append("Show me small dogs")
    if not state.preferred_age:
        suggestions.append("Show me puppies")
    if not state.needs_kid_friendly:
        suggestions.append("Which are good with kids?")
    if not state.needs_cat_friendly:
        suggestions.append("Which are good with cats?")
    return suggestions[:3]


def build_context(dogs: Sequence[Dog], rescues: Sequence[Rescue]) -> str:
    """Serialize the available dogs and all rescues as plain text for the remote model."""
    lines = ["Available Dogs:"]
    for dog in available_dogs(dogs):
        line = (
            f"- {dog.name}: {dog.breed}, {dog.display_age.value}, {dog.size.value}, "
            f"{dog.gender.value}, Located at {dog.rescue} in {dog.location}"
        )
        if dog.good_with_kids:
            line += ", Good with kids"
        if dog.good_with_dogs:
            line += ", Good with dogs"
        if dog.good_with_cats:
            line += ", Good with cats"
        lines.append(line)
        lines.append(f"  Description: {dog.description}")

    lines.append("")
    lines.append("Rescue Organizations:")
    for rescue in rescues:
        line = f"- {rescue.name} ({rescue.type.value}) in {rescue.region}"
        if rescue.website:
            line += f" - {rescue.website}"
        lines.append(line)

    return "\n".join(lines) + "\n"


def build_system_prompt(dogs: Sequence[Dog], rescues: Sequence[Rescue]) -> str:
    return (
        "You are a helpful assistant for a dog adoption website.\n"
        "You have access to information about available dogs and rescue organizations in the UK.\n"
        "Use the following data to answer questions accurately and helpfully.\n"
        "Be friendly, encouraging, and help users find their perfect dog match.\n\n"
        f"{build_context(dogs, rescues)}"
    )


class ConversationAgent:
    """
    Specialized agent for chat sessions about adoptable dogs and rescues.
    Keeps one ConversationState per session.
    """

    def __init__(self, remote_client: Optional[OpenAIClient] = None):
        """Initialize the conversation agent."""
        self.settings = get_settings()
        self.remote_client = remote_client or OpenAIClient()
        self.sessions: Dict[str, ConversationState] = {}
        self.conversation_history: Dict[str, List[ChatMessage]] = {}

    @property
    def use_remote(self) -> bool:
        return bool(self.remote_client.api_key)

    def get_state(self, session_id: str) -> ConversationState:
        """Get or create the conversation state for a session."""
        if session_id not in self.sessions:
            self.sessions[session_id] = ConversationState()
        return self.sessions[session_id]

    def resolve_turn(
        self,
        message: str,
        state: ConversationState,
        dogs: Sequence[Dog],
        rescues: Sequence[Rescue],
    ) -> ChatResponse:
        """
        Answer one message with the local pattern-matching cascade.

        Args:
            message: Raw user message
            state: Session state, updated in place
            dogs: Dog snapshot
            rescues: Rescue snapshot

        Returns:
            ChatResponse with the handler's reply and follow-up suggestions
        """
        lowered = message.lower().strip()
        patterns.extract_preferences(lowered, state)
        return self._run_cascade(lowered, state, dogs, rescues)

    def _run_cascade(
        self,
        lowered: str,
        state: ConversationState,
        dogs: Sequence[Dog],
        rescues: Sequence[Rescue],
    ) -> ChatResponse:
        ctx = TurnContext(
            lowered,
            state,
            dogs,
            rescues,
            preview_size=self.settings.chat_preview_size,
            rescue_list_size=self.settings.chat_rescue_list_size,
        )

        result = None
        for handler in HANDLER_CASCADE:
            result = handler(ctx)
            if result is not None:
                break
        if result is None:
            result = handle_fallback(ctx)

        logger.debug(f"Chat turn handled by '{result.intent}'")

        return ChatResponse(
            content=result.content,
            suggested_questions=generate_suggestions(result, state, dogs, ctx.preview_size),
            intent=result.intent,
            model="pattern",
        )

    async def _respond(
        self,
        message: str,
        state: ConversationState,
        dogs: Sequence[Dog],
        rescues: Sequence[Rescue],
    ) -> ChatResponse:
        lowered = message.lower().strip()
        patterns.extract_preferences(lowered, state)

        # Reset always clears the local state, even when the turn would be delegated.
        if self.use_remote and not patterns.is_reset_request(lowered):
            try:
                content = await self.remote_client.complete(build_system_prompt(dogs, rescues), message)
                return ChatResponse(
                    content=content,
                    suggested_questions=get_starter_questions(dogs)[:3],
                    intent="remote",
                    model="openai",
                )
            except Exception as e:
                logger.warning(f"Remote chat failed, falling back to pattern matching: {e}")

        return self._run_cascade(lowered, state, dogs, rescues)

    async def respond(
        self,
        session_id: str,
        message: str,
        dogs: Sequence[Dog],
        rescues: Sequence[Rescue],
    ) -> ChatResponse:
        """
        Process one user message for a session.

        Args:
            session_id: Conversation identifier
            message: User message
            dogs: Dog snapshot
            rescues: Rescue snapshot

        Returns:
            ChatResponse; never raises
        """
        try:
            message = sanitize_string(message)
            history = self.conversation_history.setdefault(session_id, [])
            history.append(ChatMessage(role=MessageRole.USER, content=message))

            response = await self._respond(message, self.get_state(session_id), dogs, rescues)

            history.append(ChatMessage(
                role=MessageRole.ASSISTANT,
                content=response.content,
                suggested_questions=response.suggested_questions,
            ))
            return response

        except Exception as e:
            logger.error(f"Error processing chat message: {e}")
            return ChatResponse(content=ERROR_MESSAGE, intent="error", model="error")

    def reset_conversation(self, session_id: str) -> None:
        """Clear the accumulated preferences for a session."""
        if session_id in self.sessions:
            self.sessions[session_id].reset()
            logger.info(f"Reset conversation state for session {session_id}")

    def get_conversation_history(self, session_id: str) -> List[ChatMessage]:
        """Get conversation history for a session."""
        return self.conversation_history.get(session_id, [])

    def clear_conversation_history(self, session_id: str) -> None:
        """Clear conversation history for a session."""
        if session_id in self.conversation_history:
            del self.conversation_history[session_id]
