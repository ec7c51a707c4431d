"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters. These are the "ports" in
hexagonal architecture.
"""

from discord_jukebox.application.interfaces.audio_resolver import AudioResolver
from discord_jukebox.application.interfaces.voice_adapter import TrackEndCallback, VoiceAdapter

__all__ = [
    "AudioResolver",
    "VoiceAdapter",
    "TrackEndCallback",
]
