from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from coder_chat.core.errors import BadRequestError, UpstreamError, error_details
from coder_chat.models.chat import (
    ChatMessage,
    ChatReply,
    ChatRequest,
    ChatResponse,
    GenerateFileRequest,
    GenerateFileResult,
)
from coder_chat.services.completion_client import CompletionClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionParams:
    model: str
    max_tokens: int
    temperature: float


CHAT_PARAMS = CompletionParams(model="gpt-4", max_tokens=1000, temperature=0.2)
GENERATE_FILE_PARAMS = CompletionParams(
    model="gpt-4", max_tokens=1500, temperature=0.15
)

GENERATE_FILE_SYSTEM_PROMPT = (
    "You are a helpful assistant that returns only the content of the "
    "requested file. Do not wrap code in explanation."
)


def parse_chat_request(payload: Any) -> ChatRequest:
    if not isinstance(payload, dict) or not isinstance(payload.get("messages"), list):
        raise BadRequestError("messages array required")
    return ChatRequest(messages=payload["messages"])


def parse_generate_file_request(payload: Any) -> GenerateFileRequest:
    if not isinstance(payload, dict):
        raise BadRequestError("filename and prompt required")
    filename = payload.get("filename")
    prompt = payload.get("prompt")
    if not filename or not prompt:
        raise BadRequestError("filename and prompt required")
    return GenerateFileRequest(filename=filename, prompt=prompt)


def first_message(completion: dict[str, Any]) -> dict[str, Any] | None:
    choices = completion.get("choices") or []
    if not choices:
        return None
    # A null or non-object choice or message counts as no message.
    choice = choices[0]
    message = choice.get("message") if isinstance(choice, dict) else None
    return message if isinstance(message, dict) and message else None


def _log_upstream_failure(label: str, exc: Exception) -> None:
    # APIStatusError keeps the provider's error payload on `body`.
    body = getattr(exc, "body", None)
    if body is not None:
        logger.exception("%s: %s", label, body)
    else:
        logger.exception("%s: %s", label, error_details(exc))


class ProxyService:
    """Forwards chat and file-generation requests to the completion provider."""

    def __init__(self, client: CompletionClient) -> None:
        self._client = client

    async def _complete(
        self, params: CompletionParams, messages: list[Any]
    ) -> dict[str, Any]:
        return await self._client.complete(
            model=params.model,
            messages=messages,
            max_tokens=params.max_tokens,
            temperature=params.temperature,
        )

    async def chat(self, payload: Any) -> ChatResponse:
        request = parse_chat_request(payload)

        try:
            completion = await self._complete(CHAT_PARAMS, request.messages)
            message = first_message(completion)
            if message is None:
                reply = ChatReply()
            else:
                reply = ChatReply(
                    role=message.get("role") or "assistant",
                    content=message.get("content") or "",
                )
        except Exception as e:
            _log_upstream_failure("OpenAI error", e)
            raise UpstreamError("OpenAI request failed", details=error_details(e)) from e

        return ChatResponse(reply=reply)

    async def generate_file(self, payload: Any) -> GenerateFileResult:
        request = parse_generate_file_request(payload)

        messages = [
            ChatMessage(role="system", content=GENERATE_FILE_SYSTEM_PROMPT),
            ChatMessage(role="user", content=str(request.prompt)),
        ]

        try:
            completion = await self._complete(
                GENERATE_FILE_PARAMS,
                [m.model_dump() for m in messages],
            )
            message = first_message(completion) or {}
            content = message.get("content") or ""
        except Exception as e:
            _log_upstream_failure("generate-file error", e)
            raise UpstreamError("generate-file failed", details=error_details(e)) from e

        return GenerateFileResult(filename=request.filename, content=content)
