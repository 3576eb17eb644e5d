"""Recording specific exceptions."""
from __future__ import annotations

from ..exceptions import FrontendError


class RecordingError(FrontendError):
    """Base class for voice capture failures."""


class MicrophoneUnavailableError(RecordingError):
    """Raised when microphone access is denied or unsupported."""


class EmptyRecordingError(RecordingError):
    """Raised when a recording is stopped before any audio arrived."""


__all__ = ["RecordingError", "MicrophoneUnavailableError", "EmptyRecordingError"]
