"""Playback control buttons attached to every now-playing message."""

from __future__ import annotations

import logging

import discord

from discord_jukebox.application.commands.parsers import parse_button
from discord_jukebox.domain.shared.enums import InputSurface
from discord_jukebox.domain.shared.exceptions import InvalidArgumentError
from discord_jukebox.domain.shared.messages import DiscordUIMessages
from discord_jukebox.infrastructure.discord.guards.voice_guards import build_requester
from discord_jukebox.infrastructure.discord.views.base_view import (
    BaseInteractiveView,
    get_container,
)

logger = logging.getLogger(__name__)


class ControlPanelView(BaseInteractiveView):
    """Persistent view: fixed custom ids and no timeout, so buttons on old
    messages keep working after a restart once the view is re-registered."""

    def __init__(self) -> None:
        super().__init__(timeout=None)

    async def _dispatch(self, interaction: discord.Interaction, custom_id: str) -> None:
        if interaction.guild_id is None:
            return

        await interaction.response.defer()

        try:
            operation, args = parse_button(custom_id)
        except InvalidArgumentError as e:
            await interaction.followup.send(
                DiscordUIMessages.ERROR_PREFIX.format(message=e.message), ephemeral=True
            )
            return

        container = get_container(interaction.client)
        result = await container.command_dispatcher.submit(
            interaction.guild_id,
            operation,
            args,
            build_requester(interaction.user, interaction.channel_id),
            InputSurface.BUTTON,
        )

        reply = container.reply_builder.build(result, surface=InputSurface.BUTTON)
        if reply.is_empty:
            return
        if reply.embed is not None:
            await interaction.followup.send(embed=reply.embed, ephemeral=True)
        else:
            await interaction.followup.send(reply.content, ephemeral=True)

    @discord.ui.button(
        label=DiscordUIMessages.BUTTON_PREVIOUS,
        style=discord.ButtonStyle.secondary,
        custom_id="previous",
    )
    async def previous_button(
        self, interaction: discord.Interaction, button: discord.ui.Button[ControlPanelView]
    ) -> None:
        await self._dispatch(interaction, "previous")

    @discord.ui.button(
        label=DiscordUIMessages.BUTTON_TOGGLE_PAUSE,
        style=discord.ButtonStyle.secondary,
        custom_id="togglepause",
    )
    async def toggle_pause_button(
        self, interaction: discord.Interaction, button: discord.ui.Button[ControlPanelView]
    ) -> None:
        await self._dispatch(interaction, "togglepause")

    @discord.ui.button(
        label=DiscordUIMessages.BUTTON_STOP,
        style=discord.ButtonStyle.danger,
        custom_id="stop",
    )
    async def stop_button(
        self, interaction: discord.Interaction, button: discord.ui.Button[ControlPanelView]
    ) -> None:
        await self._dispatch(interaction, "stop")

    @discord.ui.button(
        label=DiscordUIMessages.BUTTON_SKIP,
        style=discord.ButtonStyle.secondary,
        custom_id="skip",
    )
    async def skip_button(
        self, interaction: discord.Interaction, button: discord.ui.Button[ControlPanelView]
    ) -> None:
        await self._dispatch(interaction, "skip")

    @discord.ui.button(
        label=DiscordUIMessages.BUTTON_QUEUE,
        style=discord.ButtonStyle.primary,
        custom_id="queue",
    )
    async def queue_button(
        self, interaction: discord.Interaction, button: discord.ui.Button[ControlPanelView]
    ) -> None:
        await self._dispatch(interaction, "queue")
