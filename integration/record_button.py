"""
Record button integration for push-to-talk speech recognition.

Binds UI start/stop triggers to a SpeechSession. Any text-to-speech
playback is interrupted before the microphone opens so the agent does not
transcribe its own voice.
"""
import inspect
import logging
from typing import Any, Optional

from speech_to_text.session import SpeechSession

logger = logging.getLogger(__name__)

async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value

class RecordButtonHandler:
    """
    Start/stop entry points for a record button.

    The TTS collaborator only needs ``is_playing()`` and ``stop()``; either may
    be a coroutine function.
    """

    def __init__(self, stt: Optional[SpeechSession] = None, tts: Optional[Any] = None):
        """
        Initialize the handler.

        Args:
            stt: Recognition session driven by the button
            tts: Text-to-speech player to interrupt before recording
        """
        self.stt = stt
        self.tts = tts

    async def _stop_tts_if_playing(self) -> None:
        if self.tts is None:
            return
        if await _resolve(self.tts.is_playing()):
            logger.info("Stopping TTS playback before recording")
            await _resolve(self.tts.stop())

    async def start_record(self) -> None:
        """Interrupt TTS playback and begin recording."""
        if self.stt is None:
            return

        try:
            await self._stop_tts_if_playing()
            await self.stt.start_recording()
        except Exception as e:
            logger.error(f"Error starting recording: {e}")

    async def stop_record(self) -> None:
        """Stop recording early and transcribe what was captured."""
        if self.stt is None:
            return

        try:
            await self.stt.stop_recording()
        except Exception as e:
            logger.error(f"Error stopping recording: {e}")
