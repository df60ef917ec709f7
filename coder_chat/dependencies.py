from __future__ import annotations

import json
from typing import Any

from fastapi import Depends, Request

from coder_chat.services.completion_client import CompletionClient
from coder_chat.services.proxy_service import ProxyService


async def read_json_body(request: Request) -> Any:
    """Decoded JSON body, or None when it is empty or not valid JSON."""
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


def get_completion_client(request: Request) -> CompletionClient:
    return request.app.state.completion_client


def get_proxy_service(
    client: CompletionClient = Depends(get_completion_client),
) -> ProxyService:
    return ProxyService(client)
