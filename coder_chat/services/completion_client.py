from __future__ import annotations

import logging
from typing import Any, Protocol

from openai import AsyncOpenAI

from coder_chat.core.errors import StartupError
from coder_chat.core.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    async def complete(
        self,
        model: str,
        messages: list[Any],
        max_tokens: int,
        temperature: float,
    ) -> dict[str, Any]:
        """Return an OpenAI-shaped ``{"choices": [{"message": {...}}, ...]}``."""
        ...


class OpenAICompletionClient:
    def __init__(self, settings: Settings | None = None):
        self._settings = settings or get_settings()

        if not self._settings.openai_api_key:
            raise StartupError("OPENAI_API_KEY is not configured")

        client_kwargs: dict[str, Any] = {
            "api_key": self._settings.openai_api_key,
            # Failed calls are reported to the caller, never retried.
            "max_retries": 0,
        }
        if self._settings.openai_base_url:
            client_kwargs["base_url"] = self._settings.openai_base_url
        if self._settings.openai_timeout is not None:
            client_kwargs["timeout"] = self._settings.openai_timeout

        self._client = AsyncOpenAI(**client_kwargs)

    async def complete(
        self,
        model: str,
        messages: list[Any],
        max_tokens: int,
        temperature: float,
    ) -> dict[str, Any]:
        logger.debug(
            "OpenAI chat completion model=%s msg_count=%d", model, len(messages)
        )
        response = await self._client.chat.completions.create(
            model=model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=temperature,
        )
        return response.model_dump()
