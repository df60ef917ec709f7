from __future__ import annotations

import logging
import sys

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError

from coder_chat.api import chat, generate_file, health
from coder_chat.core.errors import StartupError, register_exception_handlers
from coder_chat.core.logging import LOG_FORMAT, configure_logging, log_startup
from coder_chat.core.settings import Settings, get_settings
from coder_chat.services.completion_client import (
    CompletionClient,
    OpenAICompletionClient,
)

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    completion_client: CompletionClient | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    if not settings.openai_api_key:
        raise StartupError("Missing OPENAI_API_KEY in environment. See .env.example")

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.completion_client = completion_client or OpenAICompletionClient(
        settings=settings
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(health.router, prefix="/api")
    app.include_router(chat.router, prefix="/api")
    app.include_router(generate_file.router, prefix="/api")

    # Mounted last so /api routes win over static paths.
    static_dir = settings.static_path
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.info("Static directory %s not found, serving API only", static_dir)

    return app


def main() -> None:
    try:
        settings = get_settings()
        app = create_app(settings)
    except (StartupError, ValidationError) as e:
        logging.basicConfig(format=LOG_FORMAT)
        logger.error("%s", e)
        sys.exit(1)

    log_startup(logger, settings)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
