"""Uniform command model shared by the text, slash and button surfaces."""

from __future__ import annotations

from enum import Enum, StrEnum
from typing import TYPE_CHECKING, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from discord_jukebox.application.queries.get_current import NowPlayingInfo
from discord_jukebox.application.queries.get_queue import QueueInfo
from discord_jukebox.domain.music.entities import TrackReference
from discord_jukebox.domain.music.events import Notification
from discord_jukebox.domain.shared.enums import InputSurface
from discord_jukebox.domain.shared.types import DiscordSnowflake, NonEmptyStr

if TYPE_CHECKING:
    from ...domain.shared.exceptions import DomainError


class Operation(StrEnum):
    PLAY = "play"
    SEARCH = "search"
    SKIP = "skip"
    PREVIOUS = "previous"
    PAUSE = "pause"
    STOP = "stop"
    VOLUME = "volume"
    LOOP = "loop"
    SHUFFLE = "shuffle"
    QUEUE = "queue"
    NOW_PLAYING = "nowplaying"
    HELP = "help"

    @property
    def needs_voice(self) -> bool:
        """Operations that only make sense from inside a voice channel."""
        return self is Operation.PLAY


TEXT_ALIASES: Final[dict[str, Operation]] = {
    "p": Operation.PLAY,
    "s": Operation.SEARCH,
    "sk": Operation.SKIP,
    "prev": Operation.PREVIOUS,
    "q": Operation.QUEUE,
    "vol": Operation.VOLUME,
    "np": Operation.NOW_PLAYING,
}


class RequesterContext(BaseModel):
    """Who issued a command and where they were when they did."""

    model_config = ConfigDict(frozen=True, strict=True)

    user_id: DiscordSnowflake
    user_name: NonEmptyStr
    text_channel_id: DiscordSnowflake | None = None
    voice_channel_id: DiscordSnowflake | None = None


class ControlCommand(BaseModel):
    """A parsed command, independent of the surface it arrived on."""

    model_config = ConfigDict(frozen=True)

    guild_id: DiscordSnowflake
    operation: Operation
    args: tuple[str, ...] = ()
    requester: RequesterContext
    surface: InputSurface = InputSurface.TEXT

    @field_validator("args", mode="before")
    @classmethod
    def _strip_args(cls, v: object) -> object:
        if isinstance(v, (list, tuple)):
            return tuple(str(a).strip() for a in v if str(a).strip())
        return v

    @property
    def argument_text(self) -> str:
        return " ".join(self.args)


class CommandStatus(Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class CommandResult(BaseModel):
    """Outcome of ``CommandDispatcher.submit``.

    Successful mutations carry the notification that was published; reads
    carry a queue snapshot or search references.
    """

    model_config = ConfigDict(frozen=True)

    operation: Operation
    status: CommandStatus
    message: str = ""
    error_code: NonEmptyStr | None = None
    notification: Notification | None = None
    references: list[TrackReference] = Field(default_factory=list)
    queue: QueueInfo | None = None
    now_playing: NowPlayingInfo | None = None

    @property
    def is_success(self) -> bool:
        return self.status is CommandStatus.SUCCESS

    @classmethod
    def success(
        cls,
        operation: Operation,
        *,
        message: str = "",
        notification: Notification | None = None,
        references: list[TrackReference] | None = None,
        queue: QueueInfo | None = None,
        now_playing: NowPlayingInfo | None = None,
    ) -> CommandResult:
        return cls(
            operation=operation,
            status=CommandStatus.SUCCESS,
            message=message,
            notification=notification,
            references=references or [],
            queue=queue,
            now_playing=now_playing,
        )

    @classmethod
    def failure(cls, operation: Operation, error: DomainError) -> CommandResult:
        return cls(
            operation=operation,
            status=CommandStatus.FAILURE,
            message=error.message,
            error_code=error.code,
        )

    @classmethod
    def unexpected(cls, operation: Operation, message: str) -> CommandResult:
        return cls(
            operation=operation,
            status=CommandStatus.FAILURE,
            message=message,
            error_code="UNEXPECTED",
        )
