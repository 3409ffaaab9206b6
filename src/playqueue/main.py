#!/usr/bin/env python3
"""Main entry point for the play queue service."""

from __future__ import annotations

import logging
import sys

from playqueue.domain.shared.exceptions import StartupPersistenceError
from playqueue.domain.shared.messages import ErrorMessages, LogTemplates
from playqueue.utils.logging import console_handler, quiet_noisy_loggers


def setup_logging(log_level: str = "INFO") -> None:
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(level=resolved_level, handlers=[console_handler()], force=True)
    quiet_noisy_loggers()


def main() -> int:
    from playqueue.config.settings import get_settings

    settings = get_settings()
    setup_logging(settings.log_level)

    logger = logging.getLogger(__name__)
    logger.info(LogTemplates.SERVICE_STARTING, settings.environment)

    from playqueue.config.container import create_container

    container = create_container(settings)

    try:
        container.initialize()
    except StartupPersistenceError as e:
        logger.error(e.message)
        logger.error(ErrorMessages.PERSISTENCE_HINT)
        return 1

    import uvicorn

    server = settings.server
    try:
        logger.info(LogTemplates.SERVICE_LISTENING, server.host, server.port, server.prefix or "/")
        uvicorn.run(
            container.app,
            host=server.host,
            port=server.port,
            log_level=settings.log_level.lower(),
            log_config=None,
        )
        return 0
    except KeyboardInterrupt:
        logger.info(LogTemplates.SERVICE_KEYBOARD_INTERRUPT)
        return 0
    except Exception as e:
        logger.exception(LogTemplates.SERVICE_FATAL_ERROR, e)
        return 1


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
