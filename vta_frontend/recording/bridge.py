"""Voice question capture and transcription round-trip."""
from __future__ import annotations

import logging
from enum import Enum

import pydantic

from ..chat.constants import AUDIO_PATH
from ..chat.schemas import AudioResponse, ChatMessage
from ..chat.service import ChatService
from ..config import RecordingSettings
from ..exceptions import FrontendError
from .exceptions import EmptyRecordingError, MicrophoneUnavailableError
from .microphone import AudioChunk, Microphone, MicrophoneFactory, encode_wav

LOGGER = logging.getLogger(__name__)

MICROPHONE_FAILURE = "Failed to start recording. Please check your microphone permissions."
AUDIO_FAILURE = "Failed to process audio. Please try again."


class RecordingState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"


class RecordingBridge:
    """Own the microphone for one recording at a time and ship the clip to the backend.

    The microphone is held from :meth:`start` until :meth:`stop` or
    :meth:`cancel`, and is released on every exit path. A successful upload
    splices the transcribed question and the assistant's answer into the
    active thread's history.
    """

    def __init__(
        self,
        chat: ChatService,
        microphone_factory: MicrophoneFactory,
        settings: RecordingSettings,
    ) -> None:
        self._chat = chat
        self._microphone_factory = microphone_factory
        self._settings = settings
        self._state = RecordingState.IDLE
        self._microphone: Microphone | None = None
        self._chunks: list[bytes] = []
        self._buffered = 0
        self._format: AudioChunk | None = None
        self._truncated = False

    @property
    def state(self) -> RecordingState:
        return self._state

    @property
    def is_recording(self) -> bool:
        return self._state is RecordingState.RECORDING

    @property
    def buffered_bytes(self) -> int:
        return self._buffered

    def start(self) -> bool:
        """Acquire the microphone and begin buffering. No-op while already recording."""

        if self.is_recording:
            return False
        microphone = self._microphone_factory()
        try:
            microphone.open()
        except MicrophoneUnavailableError as exc:
            LOGGER.warning("Recording could not start | error=%s", exc)
            microphone.close()
            self._chat.notifications.error("Error", MICROPHONE_FAILURE)
            return False
        self._microphone = microphone
        self._reset_buffer()
        self._state = RecordingState.RECORDING
        LOGGER.info("Recording started")
        return True

    def feed(self, chunk: AudioChunk | None) -> bool:
        """Buffer ``chunk``; audio beyond the configured duration is dropped."""

        if not self.is_recording or chunk is None or not chunk.pcm:
            return False
        if self._format is None:
            self._format = chunk
        elif (chunk.sample_rate, chunk.channels, chunk.sample_width) != (
            self._format.sample_rate,
            self._format.channels,
            self._format.sample_width,
        ):
            LOGGER.warning("Dropping audio chunk with mismatched format | rate=%d", chunk.sample_rate)
            return False

        remaining = self._limit_bytes() - self._buffered
        if remaining <= 0:
            self._truncated = True
            return False
        pcm = chunk.pcm
        if len(pcm) > remaining:
            frame = chunk.channels * chunk.sample_width
            pcm = pcm[: remaining - remaining % frame]
            self._truncated = True
            if not pcm:
                return False
        self._chunks.append(pcm)
        self._buffered += len(pcm)
        return True

    async def stop(self) -> bool:
        """Finalize the clip, release the microphone and send the clip for transcription."""

        if not self.is_recording:
            return False
        try:
            clip = self._finalize()
        except EmptyRecordingError as exc:
            LOGGER.info("Recording stopped without audio | error=%s", exc)
            return False
        finally:
            self._release()
        return await self._send(clip)

    def cancel(self) -> None:
        """Drop the buffered audio and release the microphone."""

        if self.is_recording:
            LOGGER.info("Recording cancelled | bytes=%d", self._buffered)
        self._release()

    def _finalize(self) -> bytes:
        if self._format is None or not self._buffered:
            raise EmptyRecordingError("No audio was captured.")
        if self._truncated:
            LOGGER.info("Recording truncated | max_seconds=%d", self._settings.max_seconds)
        return encode_wav(
            b"".join(self._chunks),
            sample_rate=self._format.sample_rate,
            channels=self._format.channels,
            sample_width=self._format.sample_width,
        )

    async def _send(self, clip: bytes) -> bool:
        chat = self._chat
        if not chat.session_store.is_logged_in:
            chat.prompt_login()
            return False
        if chat.history.is_awaiting_reply:
            chat.notify_reply_pending()
            return False
        session_id = await chat.ensure_active_thread()
        if session_id is None:
            return False
        if chat.history.is_awaiting_reply:
            chat.notify_reply_pending()
            return False

        ticket = chat.history.reserve()
        chat.set_loading("Transcribing your question...")
        try:
            payload = await chat.session_store.client.post_multipart(
                AUDIO_PATH,
                {"audio": (self._settings.filename, clip, self._settings.content_type)},
                data={"session_id": session_id},
                token=chat.session_store.current_token(),
            )
            reply = AudioResponse.model_validate(payload)
        except (FrontendError, pydantic.ValidationError) as exc:
            LOGGER.warning("Audio question failed | session=%s error=%s", session_id, exc)
            if chat.history.release(ticket):
                chat.notifications.error("Error", AUDIO_FAILURE)
            return False
        finally:
            if chat.history.is_current(ticket):
                chat.set_loading("")

        applied = chat.history.splice(
            ticket,
            [ChatMessage.user(reply.transcribed), ChatMessage.assistant(reply.answer, reply.source_nodes)],
        )
        LOGGER.info("Audio question answered | session=%s bytes=%d applied=%s", session_id, len(clip), applied)
        return applied

    def _limit_bytes(self) -> int:
        assert self._format is not None
        return self._settings.max_seconds * self._format.bytes_per_second

    def _release(self) -> None:
        if self._microphone is not None:
            self._microphone.close()
        self._microphone = None
        self._state = RecordingState.IDLE
        self._reset_buffer()

    def _reset_buffer(self) -> None:
        self._chunks = []
        self._buffered = 0
        self._format = None
        self._truncated = False


__all__ = ["RecordingBridge", "RecordingState", "MICROPHONE_FAILURE", "AUDIO_FAILURE"]
