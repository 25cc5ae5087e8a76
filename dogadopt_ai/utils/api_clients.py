"""
External API clients for DogAdopt AI.
Handles communication with the Supabase record source and the optional
OpenAI chat completion service.
"""

import asyncio
from typing import List, Dict, Any, Optional
import aiohttp
from loguru import logger

from ..config import settings


class RecordSourceError(Exception):
    """The record source could not return a snapshot."""


class RemoteChatError(Exception):
    """The remote chat service could not produce a completion."""


class SupabaseClient:
    """Read-only client for the Supabase API functions."""

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        schema: Optional[str] = None,
    ):
        self.url = url or settings.supabase_url
        self.api_key = api_key or settings.supabase_key
        self.schema = schema or settings.supabase_api_schema

    def is_configured(self) -> bool:
        return bool(self.url and self.api_key)

    def _get_headers(self) -> Dict[str, str]:
        """Get API request headers with authentication."""
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept-Profile": self.schema,
            "Content-Profile": self.schema,
        }

    async def _rpc(self, function: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Call a remote procedure and return its rows.

        Raises:
            RecordSourceError: If the client is not configured or the call fails
        """
        if not self.is_configured():
            raise RecordSourceError("Supabase URL and key are not configured")

        api_url = f"{self.url.rstrip('/')}/rest/v1/rpc/{function}"
        logger.debug(f"Supabase RPC {function} with params: {params}")

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    api_url,
                    headers=self._get_headers(),
                    json=params or {},
                    timeout=aiohttp.ClientTimeout(total=settings.api_timeout),
                ) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error(
                            f"Supabase RPC error: {response.status}, "
                            f"function='{function}', "
                            f"response='{error_text}'"
                        )
                        raise RecordSourceError(f"{function} failed with status {response.status}")

                    result = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Supabase RPC {function} transport error: {e}")
            raise RecordSourceError(f"{function} failed: {e}") from e

        if result is None:
            return []
        if isinstance(result, dict):
            return [result]
        return result

    async def get_dogs(self) -> List[Dict[str, Any]]:
        """Fetch every dog with its rescue fields denormalised."""
        return await self._rpc("get_dogs")

    async def get_rescues(self) -> List[Dict[str, Any]]:
        """Fetch every rescue with contact and coordinate fields."""
        return await self._rpc("get_rescues")

    async def get_rescue(self, rescue_id: str) -> List[Dict[str, Any]]:
        """Fetch a single rescue by ID (empty list if unknown)."""
        return await self._rpc("get_rescue", {"p_rescue_id": rescue_id})


class OpenAIClient:
    """Client for the OpenAI chat completions endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.base_url = base_url or settings.openai_base_url
        self.model = model or settings.openai_model

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    async def complete(self, system_prompt: str, user_message: str) -> str:
        """
        Request a single chat completion.

        Args:
            system_prompt: Persona instructions plus serialized corpus
            user_message: Raw user utterance

        Returns:
            Completion text

        Raises:
            RemoteChatError: On missing credential, non-success status, transport error
                or a payload without completion content
        """
        if not self.api_key:
            raise RemoteChatError("OpenAI API key not configured")

        request_body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            "temperature": settings.openai_temperature,
            "max_tokens": settings.openai_max_tokens,
        }

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    f"{self.base_url.rstrip('/')}/chat/completions",
                    headers=self._get_headers(),
                    json=request_body,
                    timeout=aiohttp.ClientTimeout(total=settings.api_timeout),
                ) as response:
                    if response.status != 200:
                        raise RemoteChatError(f"OpenAI API error: {response.status} {response.reason}")
                    data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RemoteChatError(f"OpenAI request failed: {e}") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise RemoteChatError("OpenAI response missing completion content") from e

        if not content:
            raise RemoteChatError("OpenAI response missing completion content")
        return content


# Singleton instances
supabase_client = SupabaseClient()
