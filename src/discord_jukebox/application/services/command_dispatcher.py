"""Command Dispatcher - the single entry point every input surface submits to."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ...domain.music.events import Errored
from ...domain.music.value_objects import PlayTarget, parse_search_choice
from ...domain.shared.constants import LimitConstants
from ...domain.shared.enums import InputSurface
from ...domain.shared.exceptions import DomainError, EmptyQueueError, InvalidArgumentError
from ...domain.shared.messages import ErrorMessages, LogTemplates
from ...domain.shared.types import DiscordSnowflake
from ...utils.reply import summarize_error
from ..commands.control_command import CommandResult, ControlCommand, Operation, RequesterContext
from ..commands.parsers import parse_volume
from ..queries.get_current import GetNowPlayingQuery
from ..queries.get_queue import GetQueueQuery

if TYPE_CHECKING:
    from ...domain.music.repository import SearchResultCache
    from ...domain.shared.events import EventBus
    from ..queries.get_current import GetNowPlayingHandler
    from ..queries.get_queue import GetQueueHandler
    from .playback_controller import PlaybackController
    from .search_service import SearchService

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Normalizes commands and forwards them to the playback controller.

    Recoverable ``DomainError`` failures become failure results. Anything
    else is logged, published as an ``Errored`` notification and returned as
    a failure, so no surface ever sees a raw exception.
    """

    def __init__(
        self,
        *,
        controller: PlaybackController,
        search_service: SearchService,
        search_cache: SearchResultCache,
        queue_handler: GetQueueHandler,
        now_playing_handler: GetNowPlayingHandler,
        event_bus: EventBus,
        error_message_limit: int = LimitConstants.MESSAGE_SAFE_LENGTH,
    ) -> None:
        self._controller = controller
        self._search = search_service
        self._search_cache = search_cache
        self._queue_handler = queue_handler
        self._now_playing_handler = now_playing_handler
        self._bus = event_bus
        self._error_limit = error_message_limit

    async def submit(
        self,
        guild_id: DiscordSnowflake,
        operation: Operation,
        args: Sequence[str],
        requester: RequesterContext,
        surface: InputSurface = InputSurface.TEXT,
    ) -> CommandResult:
        command = ControlCommand(
            guild_id=guild_id,
            operation=operation,
            args=tuple(args),
            requester=requester,
            surface=surface,
        )
        return await self.dispatch(command)

    async def dispatch(self, command: ControlCommand) -> CommandResult:
        logger.debug(
            LogTemplates.DISPATCH_RECEIVED,
            command.operation.value,
            command.guild_id,
            command.surface.value,
            command.requester.user_id,
        )
        try:
            return await self._route(command)
        except DomainError as e:
            logger.info(LogTemplates.DISPATCH_REJECTED, command.operation.value, command.guild_id, e.message)
            return CommandResult.failure(command.operation, e)
        except Exception as e:
            logger.exception(LogTemplates.DISPATCH_UNEXPECTED, command.operation.value, command.guild_id)
            message = summarize_error(e, self._error_limit)
            await self._bus.publish(
                Errored(
                    guild_id=command.guild_id,
                    text_channel_id=command.requester.text_channel_id,
                    kind="unexpected",
                    message=message,
                )
            )
            return CommandResult.unexpected(command.operation, message)

    async def _route(self, command: ControlCommand) -> CommandResult:
        guild_id = command.guild_id
        operation = command.operation

        match operation:
            case Operation.PLAY:
                target = self._play_target(command)
                notification = await self._controller.play(guild_id, target, command.requester)
            case Operation.SEARCH:
                references = await self._search.search(command.requester.user_id, command.argument_text)
                return CommandResult.success(operation, references=references)
            case Operation.SKIP:
                notification = await self._controller.skip(guild_id)
            case Operation.PREVIOUS:
                notification = await self._controller.previous(guild_id)
            case Operation.PAUSE:
                notification = await self._controller.pause_toggle(guild_id)
            case Operation.STOP:
                notification = await self._controller.stop(guild_id)
            case Operation.VOLUME:
                notification = await self._controller.set_volume(guild_id, parse_volume(command.args))
            case Operation.LOOP:
                notification = await self._controller.cycle_loop_mode(guild_id)
            case Operation.SHUFFLE:
                notification = await self._controller.shuffle(guild_id)
            case Operation.QUEUE:
                info = await self._queue_handler.handle(GetQueueQuery(guild_id=guild_id))
                return CommandResult.success(operation, queue=info)
            case Operation.NOW_PLAYING:
                current = await self._now_playing_handler.handle(GetNowPlayingQuery(guild_id=guild_id))
                if current.track is None:
                    raise EmptyQueueError()
                return CommandResult.success(operation, now_playing=current)
            case Operation.HELP:
                return CommandResult.success(operation)
            case _:
                raise InvalidArgumentError(ErrorMessages.UNKNOWN_COMMAND.format(name=operation))

        return CommandResult.success(operation, notification=notification)

    def _play_target(self, command: ControlCommand) -> PlayTarget:
        """Apply the numeric search shortcut, then URL canonicalization."""
        if not command.args:
            raise InvalidArgumentError(ErrorMessages.MISSING_PLAY_QUERY, field="query")

        choice = parse_search_choice(command.args)
        if choice is not None:
            reference = self._search_cache.resolve_choice(command.requester.user_id, choice)
            return PlayTarget.from_raw(reference.url)

        target = PlayTarget.from_raw(command.argument_text)
        if target.was_canonicalized:
            logger.debug(LogTemplates.PLAY_TARGET_CANONICALIZED, target.raw, target.value)
        return target
