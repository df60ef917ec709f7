from typing import Any

from fastapi import APIRouter, Depends

from coder_chat.dependencies import get_proxy_service, read_json_body
from coder_chat.models.chat import ErrorResponse, GenerateFileResult
from coder_chat.services.proxy_service import ProxyService

router = APIRouter()


@router.post(
    "/generate-file",
    response_model=GenerateFileResult,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_file_endpoint(
    payload: Any = Depends(read_json_body),
    proxy_service: ProxyService = Depends(get_proxy_service),
) -> GenerateFileResult:
    # Frontend turns {filename, content} into a download.
    return await proxy_service.generate_file(payload)
