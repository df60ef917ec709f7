from __future__ import annotations

import logging

from coder_chat.core.settings import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Chatty client libraries; each upstream request is otherwise logged at INFO.
_QUIET_LOGGERS = ("httpx", "httpcore", "openai")


def configure_logging(settings: Settings) -> None:
    level_name = (settings.log_level or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT)

    logging.getLogger("uvicorn.error").setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(level)

    quiet_level = max(level, logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)


def log_startup(logger: logging.Logger, settings: Settings) -> None:
    static_path = settings.static_path
    logger.info(
        "%s running on http://localhost:%s (static: %s)",
        settings.app_name,
        settings.port,
        static_path if static_path.is_dir() else "disabled",
    )
