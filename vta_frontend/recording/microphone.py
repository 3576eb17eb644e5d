"""Microphone handles and PCM helpers for voice questions."""
from __future__ import annotations

import io
import logging
import wave
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from .exceptions import MicrophoneUnavailableError

LOGGER = logging.getLogger(__name__)

PCM16_WIDTH = 2


@dataclass(frozen=True, slots=True)
class AudioChunk:
    """A slice of interleaved 16-bit PCM audio."""

    pcm: bytes
    sample_rate: int
    channels: int = 1
    sample_width: int = PCM16_WIDTH

    @property
    def bytes_per_second(self) -> int:
        return self.sample_rate * self.channels * self.sample_width


class Microphone(ABC):
    """Exclusive handle on an audio input device."""

    @abstractmethod
    def open(self) -> None:
        """Acquire the device, raising :class:`MicrophoneUnavailableError` if it cannot be used."""

    @abstractmethod
    def close(self) -> None:
        """Release the device. Must be safe to call more than once."""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Whether the device is currently held."""


MicrophoneFactory = Callable[[], Microphone]


class BrowserMicrophone(Microphone):
    """Microphone captured by the browser and streamed through the Gradio audio component.

    The browser negotiates device permissions itself; this handle only
    records whether the workspace currently owns the stream.
    """

    def __init__(self, *, available: bool = True) -> None:
        self._available = available
        self._open = False

    def open(self) -> None:
        if not self._available:
            raise MicrophoneUnavailableError("Microphone access was denied or is not supported.")
        if self._open:
            raise MicrophoneUnavailableError("Microphone is already in use.")
        self._open = True
        LOGGER.debug("Browser microphone acquired")

    def close(self) -> None:
        if self._open:
            LOGGER.debug("Browser microphone released")
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open


def chunk_from_array(sample_rate: int, data: Sequence[Any] | np.ndarray) -> AudioChunk | None:
    """Convert a ``(rate, samples)`` payload from the audio component into PCM16."""

    samples = np.asarray(data)
    if samples.size == 0:
        return None
    if np.issubdtype(samples.dtype, np.floating):
        samples = np.clip(samples, -1.0, 1.0) * np.iinfo(np.int16).max
    elif samples.dtype == np.int32:
        samples = samples >> 16
    samples = samples.astype(np.int16)
    channels = 1 if samples.ndim == 1 else int(samples.shape[1])
    return AudioChunk(pcm=samples.tobytes(), sample_rate=int(sample_rate), channels=channels)


def encode_wav(pcm: bytes, *, sample_rate: int, channels: int = 1, sample_width: int = PCM16_WIDTH) -> bytes:
    """Wrap raw PCM frames in a WAV container."""

    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav_file:
        wav_file.setnchannels(channels)
        wav_file.setsampwidth(sample_width)
        wav_file.setframerate(sample_rate)
        wav_file.writeframes(pcm)
    return buffer.getvalue()


__all__ = [
    "AudioChunk",
    "BrowserMicrophone",
    "Microphone",
    "MicrophoneFactory",
    "chunk_from_array",
    "encode_wav",
]
