#!/usr/bin/env python3
"""Entry point for the Discord Jukebox bot."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from discord_jukebox.domain.shared.messages import ErrorMessages, LogTemplates
from discord_jukebox.utils.logging import setup_logging

LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "logging_config.json"


def main() -> int:
    from discord_jukebox.config.settings import get_settings

    settings = get_settings()
    setup_logging(
        settings.log_level,
        LOGGING_CONFIG_PATH if LOGGING_CONFIG_PATH.exists() else None,
    )

    logger = logging.getLogger(__name__)

    token_value = settings.discord.token.get_secret_value()
    if not token_value:
        logger.error(ErrorMessages.DISCORD_TOKEN_REQUIRED)
        return 1

    logger.info(LogTemplates.BOT_STARTING.format(environment=settings.environment))

    from discord_jukebox.config.container import create_container
    from discord_jukebox.infrastructure.discord.bot import create_bot

    container = create_container(settings)
    bot = create_bot(container, settings)

    try:
        logger.info(LogTemplates.BOT_STARTING_RUN)
        bot.run_with_graceful_shutdown(token_value)
        logger.info(LogTemplates.BOT_STOPPED)
        return 0
    except KeyboardInterrupt:
        logger.info(LogTemplates.BOT_KEYBOARD_INTERRUPT)
        return 0
    except Exception as e:
        logger.exception(LogTemplates.BOT_FATAL_ERROR, e)
        return 1


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
