"""
Response builders for the chat assistant.

Responses use a small markdown-like vocabulary: ``**bold**``, ``_italic_``
and bullet lines starting with ``•``.
"""

from typing import List, Sequence

from ..schemas.dog_data import Dog, DogSize
from ..schemas.rescue_data import Rescue
from ..schemas.conversation import ConversationState


def format_dog_line(dog: Dog) -> str:
    return (
        f"• **{dog.name}**: {dog.breed}, {dog.display_age.value}, "
        f"{dog.size.value} {dog.gender.value.lower()} at {dog.rescue}"
    )


def format_dog_list(dogs: Sequence[Dog], start: int = 0, count: int = 5) -> str:
    return "\n".join(format_dog_line(dog) for dog in dogs[start:start + count])


def build_listing_response(intro: str, dogs: Sequence[Dog], preview: int = 5) -> str:
    """Intro line, the first ``preview`` dogs and an overflow hint."""
    text = f"{intro}\n\n{format_dog_list(dogs, 0, preview)}"
    if len(dogs) > preview:
        text += f"\n\n_...and {len(dogs) - preview} more! Say \"show more\" to see the next few._"
    return text


def build_show_more_response(dogs: Sequence[Dog], preview: int = 5) -> str:
    shown = format_dog_list(dogs, preview, preview)
    remaining = len(dogs) - 2 * preview
    text = f"Here are more dogs matching your preferences:\n\n{shown}"
    if remaining > 0:
        text += f"\n\n_...plus {remaining} more on our listings page._"
    return text


def build_no_dogs_response(description: str) -> str:
    return (
        f"I'm sorry, there are currently no {description} available. "
        "Try broadening your search or say \"start over\" to clear your preferences."
    )


def build_greeting_response(dog_count: int, rescue_count: int) -> str:
    return (
        f"Hello! 👋 I'm here to help you find your perfect dog match from {dog_count} "
        f"available dogs across {rescue_count} rescues in the UK.\n\n"
        "What kind of dog are you looking for?"
    )


def build_help_response() -> str:
    return (
        "I can help you find the perfect dog! Here are some things you can ask me:\n\n"
        "• \"What dogs are available?\"\n"
        "• \"Show me small dogs good with children\"\n"
        "• \"Are there any puppies in Wales?\"\n"
        "• \"Tell me about [dog name]\"\n"
        "• \"Which dogs are good with cats?\"\n"
        "• \"Show me dogs at [rescue name]\"\n\n"
        "You can combine criteria like size, age, temperament, and location!"
    )


def build_thank_you_response() -> str:
    return (
        "You're welcome! 🐾 Feel free to ask me anything else about available dogs or "
        "rescues. Good luck finding your perfect companion!"
    )


def build_reset_response() -> str:
    return "Okay, I've cleared your preferences! 🔄 Let's start fresh. What kind of dog are you looking for?"


def build_stats_response(dogs: Sequence[Dog], rescues: Sequence[Rescue]) -> str:
    kid_friendly = sum(1 for d in dogs if d.good_with_kids)
    dog_friendly = sum(1 for d in dogs if d.good_with_dogs)
    cat_friendly = sum(1 for d in dogs if d.good_with_cats)
    small = sum(1 for d in dogs if d.size == DogSize.SMALL)
    medium = sum(1 for d in dogs if d.size == DogSize.MEDIUM)
    large = sum(1 for d in dogs if d.size == DogSize.LARGE)

    return (
        "📊 **Current Statistics:**\n\n"
        f"**Total Dogs:** {len(dogs)}\n"
        f"**Rescues:** {len(rescues)}\n\n"
        f"**By Size:**\n• Small: {small}\n• Medium: {medium}\n• Large: {large}\n\n"
        f"**Temperament:**\n• Good with kids: {kid_friendly}\n"
        f"• Good with dogs: {dog_friendly}\n• Good with cats: {cat_friendly}\n\n"
        "What would you like to explore?"
    )


def build_rescue_list_response(rescues: Sequence[Rescue], limit: int = 8) -> str:
    lines = []
    for rescue in rescues[:limit]:
        line = f"• **{rescue.name}** ({rescue.type.value}) - {rescue.region}"
        if rescue.website:
            line += f"\n  🌐 {rescue.website}"
        lines.append(line)

    more = f"\n\n_...and {len(rescues) - limit} more rescues!_" if len(rescues) > limit else ""
    return (
        f"We work with {len(rescues)} amazing rescue organizations across the UK:\n\n"
        + "\n\n".join(lines)
        + more
        + "\n\nVisit our Rescues page to see them all!"
    )


def build_location_list_response(regions: Sequence[str]) -> str:
    return (
        "We work with rescues across the UK in these regions:\n\n"
        f"{', '.join(regions[:12])}\n\n"
        "Would you like to see dogs from a specific area?"
    )


def build_breed_list_response(breeds: Sequence[str]) -> str:
    return (
        f"We have dogs of various breeds available including: {', '.join(breeds[:10])}. "
        "Would you like to know more about a specific breed?"
    )


def format_dog_details(dog: Dog) -> str:
    """Full profile used for 'tell me about <name>'."""
    info = f"🐕 **{dog.name}**\n\n"
    info += f"**Breed:** {dog.breed}\n"
    info += f"**Age:** {dog.display_age.value}\n"
    info += f"**Size:** {dog.size.value}\n"
    info += f"**Gender:** {dog.gender.value}\n"
    info += f"**Status:** {dog.status_label}\n"
    info += f"**Location:** {dog.rescue}, {dog.location}\n\n"
    info += f"**About {dog.name}:**\n{dog.description}\n\n"

    traits = []
    if dog.good_with_kids:
        traits.append("✓ Good with kids")
    if dog.good_with_dogs:
        traits.append("✓ Good with dogs")
    if dog.good_with_cats:
        traits.append("✓ Good with cats")

    if traits:
        info += "**Temperament:**\n" + "\n".join(traits) + "\n\n"

    if dog.rescue_website:
        info += f"For more info, visit: {dog.rescue_website}"

    return info.rstrip()


def build_fallback_response(state: ConversationState) -> str:
    text = (
        "I can help you find information about available dogs and rescues! "
        "Here are some things you can ask me:\n\n"
        "• \"What dogs are available?\"\n"
        "• \"Show me dogs good with children\"\n"
        "• \"Do you have any small dogs?\"\n"
        "• \"Tell me about puppies\"\n"
        "• \"What rescues are in Wales?\""
    )
    preferences = state.describe()
    if preferences:
        text += (
            f"\n\nSo far you've told me you're looking for: {', '.join(preferences)}. "
            "Say \"show me these dogs\" to see matches, or \"start over\" to clear them."
        )
    else:
        text += "\n\nFeel free to ask me anything about our available dogs!"
    return text


def describe_preferences(state: ConversationState) -> str:
    parts: List[str] = state.describe()
    return ", ".join(parts) if parts else "no particular preferences"
