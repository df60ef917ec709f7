from typing import Any

from fastapi import APIRouter, Depends

from coder_chat.dependencies import get_proxy_service, read_json_body
from coder_chat.models.chat import ChatResponse, ErrorResponse
from coder_chat.services.proxy_service import ProxyService

router = APIRouter()


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat_endpoint(
    payload: Any = Depends(read_json_body),
    proxy_service: ProxyService = Depends(get_proxy_service),
) -> ChatResponse:
    """
    body: {"messages": [{"role": "user"|"system"|"assistant", "content": str}, ...]}
    returns: {"reply": {"role", "content"}}
    """
    return await proxy_service.chat(payload)
