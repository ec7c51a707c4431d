"""DTOs for the playback controller."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ...domain.shared.constants import LimitConstants
from ...domain.shared.types import MaxQueueSize, NonNegativeInt, VolumePercent

if TYPE_CHECKING:
    from ...config.settings import AudioSettings


class PlaybackPolicy(BaseModel):
    """Per-process knobs the controller applies to every guild."""

    model_config = ConfigDict(frozen=True)

    default_volume: VolumePercent = LimitConstants.DEFAULT_VOLUME
    max_queue_size: MaxQueueSize = LimitConstants.MAX_QUEUE_SIZE
    history_size: NonNegativeInt = LimitConstants.HISTORY_SIZE
    leave_on_stop: bool = True
    leave_on_empty: bool = True
    leave_on_finish: bool = False
    announce_repeats: bool = False

    @classmethod
    def from_settings(cls, audio: AudioSettings) -> PlaybackPolicy:
        return cls(
            default_volume=audio.default_volume,
            max_queue_size=audio.max_queue_size,
            history_size=audio.history_size,
            leave_on_stop=audio.leave_on_stop,
            leave_on_empty=audio.leave_on_empty,
            leave_on_finish=audio.leave_on_finish,
            announce_repeats=audio.announce_repeats,
        )
