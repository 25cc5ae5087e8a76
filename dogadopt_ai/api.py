"""
HTTP API for DogAdopt AI.
Serves dog and rescue listings, rescue lookups and the chat assistant.
"""

import sys
from typing import List, Optional
from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, Field

from .agent import DogAdoptMainAgent
from .config import settings
from .schemas.conversation import ChatResponse, GREETING_MESSAGE, RESET_MESSAGE
from .sub_agents.rescue_lookup_agent import format_rescue_results
from .utils.api_clients import RecordSourceError
from .utils.filters import DogFilters
from .utils.validators import parse_user_location

# Configure logging
logger.remove()  # Remove default handler
logger.add(sys.stderr, level=settings.log_level.upper())

logger.info("Starting DogAdopt AI API...")


# Initialize FastAPI app
app = FastAPI(
    title="DogAdopt AI",
    description="Dog listings, rescue directory and adoption chat assistant",
    version="1.0.0"
)

_agent: Optional[DogAdoptMainAgent] = None


def get_agent() -> DogAdoptMainAgent:
    """Get or create the shared main agent."""
    global _agent
    if _agent is None:
        _agent = DogAdoptMainAgent()
    return _agent


class ChatRequest(BaseModel):
    """Chat message from the site widget."""
    session_id: str = Field(default="default", max_length=128)
    message: str = Field(..., max_length=1000)


class ResetResponse(BaseModel):
    session_id: str
    status: str = "reset"
    message: str = RESET_MESSAGE


class StarterQuestions(BaseModel):
    greeting: str = GREETING_MESSAGE
    questions: List[str]


@app.exception_handler(RecordSourceError)
async def record_source_error_handler(request: Request, exc: RecordSourceError):
    logger.error(f"Record source unavailable for {request.url.path}: {exc}")
    return JSONResponse(status_code=502, content={"detail": "Record source unavailable"})


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    logger.warning(f"Invalid request to {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.on_event("startup")
async def startup_event():
    """Log startup event."""
    logger.info("API service is starting up...")

    # Log configuration status (without exposing sensitive values)
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Testing mode: {settings.testing_mode}")
    logger.info(f"Mock APIs: {settings.mock_apis}")
    logger.info(f"Supabase configured: {'Yes' if settings.supabase_url and settings.supabase_key else 'No'}")
    logger.info(f"Remote chat enabled: {'Yes' if settings.remote_chat_enabled() else 'No (pattern matching only)'}")

    logger.info("Startup complete - ready to accept requests")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "DogAdopt AI",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "chat": "/chat",
            "dogs": "/dogs",
            "rescues": "/rescues",
            "rescues_near": "/rescues/near"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    logger.debug("Health check called")
    return {"status": "healthy", "service": "dogadopt-ai"}


@app.post("/chat", response_model=ChatResponse)
async def chat(body: ChatRequest, agent: DogAdoptMainAgent = Depends(get_agent)):
    """Answer one chat message for a session."""
    return await agent.process_user_request(body.session_id, body.message)


@app.post("/chat/{session_id}/reset", response_model=ResetResponse)
async def reset_chat(session_id: str, agent: DogAdoptMainAgent = Depends(get_agent)):
    """Clear the accumulated preferences for a session."""
    agent.reset_session(session_id)
    return ResetResponse(session_id=session_id)


@app.get("/chat/starter-questions", response_model=StarterQuestions)
async def starter_questions(agent: DogAdoptMainAgent = Depends(get_agent)):
    """Opening message and example questions for a new chat."""
    return StarterQuestions(questions=await agent.get_starter_questions())


@app.get("/dogs")
async def list_dogs(
    size: str = "All",
    age: str = "All",
    status: str = "available",
    search: str = "",
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    page: int = Query(default=1, ge=1),
    agent: DogAdoptMainAgent = Depends(get_agent),
):
    """
    One page of dogs, filtered and sorted nearest first when a position is given.

    ``size``, ``age`` and ``status`` accept their category values or ``All``.
    """
    filters = DogFilters(size=size, age=age, status=status, search=search)
    user_location = parse_user_location(latitude, longitude)
    return await agent.browse_dogs(filters, user_location, page)


@app.get("/rescues")
async def list_rescues(
    search: str = "",
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    page: int = Query(default=1, ge=1),
    agent: DogAdoptMainAgent = Depends(get_agent),
):
    """One page of rescues, sorted nearest first when a position is given."""
    user_location = parse_user_location(latitude, longitude)
    return await agent.browse_rescues(search, user_location, page)


@app.get("/rescues/all")
async def all_rescues(
    limit: Optional[int] = Query(default=None, ge=1),
    agent: DogAdoptMainAgent = Depends(get_agent),
):
    """The first ``limit`` rescues in directory order, with a text summary."""
    rescues = await agent.list_rescues(limit)
    return {"count": len(rescues), "rescues": rescues, "summary": format_rescue_results(rescues)}


@app.get("/rescues/near")
async def rescues_near(
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    radius_km: Optional[float] = Query(default=None, gt=0),
    limit: Optional[int] = Query(default=None, ge=1),
    agent: DogAdoptMainAgent = Depends(get_agent),
):
    """Rescues within ``radius_km`` of a position, nearest first."""
    radius_km = radius_km or settings.default_search_radius_km
    rescues = await agent.find_rescues_near(latitude, longitude, radius_km, limit)
    return {
        "count": len(rescues),
        "rescues": rescues,
        "summary": format_rescue_results(rescues, radius_km, latitude, longitude),
    }


@app.get("/rescues/{rescue_id}")
async def rescue_details(rescue_id: str, agent: DogAdoptMainAgent = Depends(get_agent)):
    rescue = await agent.rescue_agent.get_rescue_details(rescue_id)
    if rescue is None:
        raise HTTPException(status_code=404, detail=f"Rescue with ID {rescue_id} not found")
    return rescue


# Run with: uvicorn dogadopt_ai.api:app --reload --port 8080
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
