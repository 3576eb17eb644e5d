"""Voice recording package exports."""
from __future__ import annotations

from .bridge import RecordingBridge, RecordingState
from .microphone import AudioChunk, BrowserMicrophone, Microphone

__all__ = ["AudioChunk", "BrowserMicrophone", "Microphone", "RecordingBridge", "RecordingState"]
