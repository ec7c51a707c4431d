"""Music cog: prefix commands and slash commands, both routed through the dispatcher."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import discord
from discord import app_commands
from discord.ext import commands

from discord_jukebox.application.commands.control_command import Operation
from discord_jukebox.application.commands.parsers import parse_slash_command, parse_text_command
from discord_jukebox.domain.shared.enums import InputSurface
from discord_jukebox.domain.shared.exceptions import DomainError
from discord_jukebox.domain.shared.messages import DiscordUIMessages, ErrorMessages, LogTemplates
from discord_jukebox.infrastructure.discord.guards.voice_guards import build_requester, send_ephemeral

if TYPE_CHECKING:
    from ....application.commands.control_command import CommandResult
    from ....config.container import Container
    from ..services.reply_builder import Reply

logger = logging.getLogger(__name__)


class MusicCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container
        self.prefix = container.settings.discord.command_prefix

    # ─────────────────────────────────────────────────────────────────
    # Prefix commands
    # ─────────────────────────────────────────────────────────────────

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        if message.author.bot or message.guild is None:
            return

        parsed = parse_text_command(message.content, self.prefix)
        if parsed is None:
            return
        operation, args = parsed

        status: discord.Message | None = None
        if operation is Operation.SEARCH and args:
            status = await self._reply_text(message, DiscordUIMessages.ACTION_SEARCHING)

        result = await self.container.command_dispatcher.submit(
            message.guild.id,
            operation,
            args,
            build_requester(message.author, message.channel.id),
            InputSurface.TEXT,
        )
        reply = self.container.reply_builder.build(result, query=" ".join(args))
        if reply.is_empty:
            return

        try:
            if status is not None:
                await status.edit(content=reply.content, embed=reply.embed)
            elif reply.embed is not None:
                await message.reply(embed=reply.embed, mention_author=False)
            else:
                await message.reply(reply.content, mention_author=False)
        except discord.HTTPException as e:
            logger.warning(LogTemplates.REPLY_SEND_FAILED, operation.value, e)

    async def _reply_text(self, message: discord.Message, content: str) -> discord.Message | None:
        try:
            return await message.reply(content, mention_author=False)
        except discord.HTTPException as e:
            logger.warning(LogTemplates.REPLY_SEND_FAILED, "status", e)
            return None

    # ─────────────────────────────────────────────────────────────────
    # Slash commands
    # ─────────────────────────────────────────────────────────────────

    async def _run_slash(
        self,
        interaction: discord.Interaction,
        name: str,
        **options: Any,
    ) -> None:
        if interaction.guild_id is None:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_SERVER_ONLY)
            return

        # Resolution can exceed the 3-second interaction deadline
        await interaction.response.defer()

        try:
            operation, args = parse_slash_command(name, options)
        except DomainError as e:
            await interaction.edit_original_response(
                content=DiscordUIMessages.ERROR_PREFIX.format(message=e.message)
            )
            return

        if operation is Operation.PLAY and args:
            await interaction.edit_original_response(
                content=self.container.reply_builder.loading_text(" ".join(args))
            )

        result = await self.container.command_dispatcher.submit(
            interaction.guild_id,
            operation,
            args,
            build_requester(interaction.user, interaction.channel_id),
            InputSurface.SLASH,
        )
        await self._respond(interaction, result, " ".join(args))

    async def _respond(
        self, interaction: discord.Interaction, result: CommandResult, query: str
    ) -> None:
        reply: Reply = self.container.reply_builder.build(
            result, surface=InputSurface.SLASH, query=query
        )
        if reply.is_empty:
            return
        await interaction.edit_original_response(content=reply.content, embed=reply.embed)

    @app_commands.command(name="play", description="Play a song or add to queue")
    @app_commands.describe(query="Song name or YouTube URL")
    async def play(self, interaction: discord.Interaction, query: str) -> None:
        await self._run_slash(interaction, "play", query=query)

    @app_commands.command(name="search", description="Search YouTube for songs")
    @app_commands.describe(query="Search query")
    async def search(self, interaction: discord.Interaction, query: str) -> None:
        await self._run_slash(interaction, "search", query=query)

    @app_commands.command(name="skip", description="Skip the current song")
    async def skip(self, interaction: discord.Interaction) -> None:
        await self._run_slash(interaction, "skip")

    @app_commands.command(name="previous", description="Play the previous song")
    async def previous(self, interaction: discord.Interaction) -> None:
        await self._run_slash(interaction, "previous")

    @app_commands.command(name="pause", description="Pause/resume playback")
    async def pause(self, interaction: discord.Interaction) -> None:
        await self._run_slash(interaction, "pause")

    @app_commands.command(name="stop", description="Stop and clear the queue")
    async def stop(self, interaction: discord.Interaction) -> None:
        await self._run_slash(interaction, "stop")

    @app_commands.command(name="queue", description="Show the current queue")
    async def queue(self, interaction: discord.Interaction) -> None:
        await self._run_slash(interaction, "queue")

    @app_commands.command(name="nowplaying", description="Show the current song")
    async def nowplaying(self, interaction: discord.Interaction) -> None:
        await self._run_slash(interaction, "nowplaying")

    @app_commands.command(name="loop", description="Cycle loop mode (Off → Song → Queue)")
    async def loop(self, interaction: discord.Interaction) -> None:
        await self._run_slash(interaction, "loop")

    @app_commands.command(name="shuffle", description="Shuffle the queue")
    async def shuffle(self, interaction: discord.Interaction) -> None:
        await self._run_slash(interaction, "shuffle")

    @app_commands.command(name="volume", description="Set the volume")
    @app_commands.describe(level="Volume level (0-100)")
    async def volume(
        self,
        interaction: discord.Interaction,
        level: app_commands.Range[int, 0, 100],
    ) -> None:
        await self._run_slash(interaction, "volume", level=level)

    @app_commands.command(name="help", description="Show all commands")
    async def help(self, interaction: discord.Interaction) -> None:
        await self._run_slash(interaction, "help")


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(MusicCog(bot, container))
