"""
DogAdopt Main Agent - Orchestrator
Coordinates the listing, rescue lookup and chat sub-agents over one
dog/rescue snapshot.
"""

import asyncio
from typing import Optional, List
from loguru import logger

from .config import settings
from .schemas.conversation import ChatResponse
from .schemas.rescue_data import Rescue, UserLocation
from .sub_agents.conversation_agent import ConversationAgent, get_starter_questions
from .sub_agents.dog_search_agent import DogSearchAgent
from .sub_agents.rescue_lookup_agent import RescueLookupAgent, format_rescue_results
from .utils.filters import DogFilters, Page


class DogAdoptMainAgent:
    """
    Main orchestrator agent that owns the snapshot cache and the per-session
    chat state.
    """

    def __init__(
        self,
        search_agent: Optional[DogSearchAgent] = None,
        conversation_agent: Optional[ConversationAgent] = None,
    ):
        """Initialize the main agent and all sub-systems."""
        logger.info("Initializing DogAdopt Main Agent")
        self.search_agent = search_agent or DogSearchAgent()
        self.rescue_agent = RescueLookupAgent(self.search_agent)
        self.conversation_agent = conversation_agent or ConversationAgent()

    async def process_user_request(self, session_id: str, message: str) -> ChatResponse:
        """
        Answer one chat message against the current snapshot.

        Args:
            session_id: Conversation identifier
            message: User message

        Returns:
            ChatResponse

        Raises:
            RecordSourceError: If the snapshot cannot be loaded
        """
        logger.info(f"Processing chat message for session {session_id}")

        dogs = await self.search_agent.get_dogs()
        rescues = await self.search_agent.get_rescues()

        return await self.conversation_agent.respond(session_id, message, dogs, rescues)

    async def get_starter_questions(self) -> List[str]:
        dogs = await self.search_agent.get_dogs()
        return get_starter_questions(dogs)

    async def browse_dogs(
        self,
        filters: Optional[DogFilters] = None,
        user_location: Optional[UserLocation] = None,
        page: int = 1,
    ) -> Page:
        return await self.search_agent.browse_dogs(filters, user_location, page)

    async def browse_rescues(
        self,
        search: str = "",
        user_location: Optional[UserLocation] = None,
        page: int = 1,
    ) -> Page:
        return await self.search_agent.browse_rescues(search, user_location, page)

    async def list_rescues(self, limit: Optional[int] = None) -> List[Rescue]:
        return await self.rescue_agent.list_rescues(limit)

    async def find_rescues_near(
        self,
        latitude: Optional[float],
        longitude: Optional[float],
        radius_km: Optional[float] = None,
        limit: Optional[int] = None,
    ) -> List[Rescue]:
        return await self.rescue_agent.find_rescues_near(latitude, longitude, radius_km, limit)

    def reset_session(self, session_id: str) -> None:
        """Clear the chat preferences for a session, keeping its history."""
        self.conversation_agent.reset_conversation(session_id)


# Main entry point for command-line usage
async def main(argv: Optional[List[str]] = None):
    """Main entry point for chatting with the agent from a terminal."""
    import argparse

    parser = argparse.ArgumentParser(description="DogAdopt AI chat assistant")
    parser.add_argument("--message", "-m", help="Ask a single question and exit")
    parser.add_argument("--session-id", default="cli", help="Conversation session identifier")
    parser.add_argument("--mock", action="store_true", help="Use mock dogs and rescues")
    parser.add_argument("--list-rescues", type=int, nargs="?", const=0, metavar="LIMIT",
                        help="Print the rescue directory and exit")
    parser.add_argument("--near", type=float, nargs=2, metavar=("LAT", "LON"),
                        help="Print rescues near a position and exit")
    parser.add_argument("--radius", type=float, help="Search radius in km for --near")

    args = parser.parse_args(argv)

    if args.mock:
        settings.mock_apis = True

    agent = DogAdoptMainAgent()

    try:
        if args.list_rescues is not None:
            rescues = await agent.list_rescues(args.list_rescues or None)
            print(format_rescue_results(rescues))
            return

        if args.near:
            latitude, longitude = args.near
            radius_km = args.radius or settings.default_search_radius_km
            rescues = await agent.find_rescues_near(latitude, longitude, radius_km)
            print(format_rescue_results(rescues, radius_km, latitude, longitude))
            return

        if args.message:
            response = await agent.process_user_request(args.session_id, args.message)
            print(response.content)
            return

        print("\n=== DogAdopt AI - Chat Assistant ===\n")
        print("Type 'quit' to exit.\n")
        for question in await agent.get_starter_questions():
            print(f"  - {question}")
        print()

        while True:
            try:
                message = input("You: ").strip()
            except EOFError:
                break
            if message.lower() in ("quit", "exit"):
                break
            if not message:
                continue

            response = await agent.process_user_request(args.session_id, message)
            print(f"\nAssistant: {response.content}\n")
            if response.suggested_questions:
                print("Try: " + " | ".join(response.suggested_questions) + "\n")

    except Exception as e:
        logger.error(f"Error in main: {e}")
        print(f"Error: {e}")


def main_cli():
    """Console script wrapper."""
    asyncio.run(main())


if __name__ == "__main__":
    main_cli()
