"""Base class for interactive Discord views with common patterns."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import discord

from discord_jukebox.domain.shared.messages import DiscordUIMessages, ErrorMessages, LogTemplates
from discord_jukebox.infrastructure.discord.guards.voice_guards import send_ephemeral
from discord_jukebox.utils.reply import summarize_error

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)


def get_container(client: discord.Client) -> Container:
    container = getattr(client, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)
    return container


class BaseInteractiveView(discord.ui.View):
    """Base view that logs failing button callbacks and tells the clicker."""

    async def on_error(
        self,
        interaction: discord.Interaction,
        error: Exception,
        item: discord.ui.Item[Any],
    ) -> None:
        custom_id = getattr(item, "custom_id", None)
        logger.error(LogTemplates.VIEW_CALLBACK_ERROR, custom_id, error, exc_info=error)
        try:
            await send_ephemeral(
                interaction, DiscordUIMessages.ERROR_OCCURRED.format(message=summarize_error(error))
            )
        except discord.HTTPException as e:
            logger.warning(LogTemplates.REPLY_SEND_FAILED, custom_id, e)
