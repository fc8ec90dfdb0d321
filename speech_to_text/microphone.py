"""
Microphone capture for push-to-talk recognition.
"""
import asyncio
import logging
import threading
from typing import List, Optional

import numpy as np

from .config import config
from .exceptions import CaptureStateError, NoMicrophoneError
from .models import AudioBuffer
from .utils.audio_utils import convert_to_mono, float_to_pcm16

logger = logging.getLogger(__name__)

def _sounddevice():
    # Loaded on first use; importing sounddevice requires the PortAudio library.
    import sounddevice
    return sounddevice

class MicrophoneCapture:
    """
    Records mono float32 audio from the default input device.

    The input stream is held only between start() and stop(); stop() always
    releases it, and close() releases it without producing audio.
    """

    def __init__(
        self,
        sample_rate: Optional[int] = None,
        channels: int = 1,
        max_duration: Optional[float] = None,
        device: Optional[int] = None
    ):
        """
        Initialize the microphone capture.

        Args:
            sample_rate: Capture rate in Hz (defaults to config)
            channels: Number of input channels, downmixed to mono on stop
            max_duration: Samples beyond this many seconds are dropped
            device: Input device index (defaults to the system default)
        """
        self.sample_rate = sample_rate or config.sample_rate
        self.channels = channels
        self.max_duration = max_duration or config.record_duration
        self.device = device

        self._stream = None
        self._frames: List[np.ndarray] = []
        self._frame_count = 0
        self._lock = threading.Lock()

    @property
    def max_frames(self) -> int:
        return int(self.max_duration * self.sample_rate)

    @property
    def is_recording(self) -> bool:
        return self._stream is not None

    def check_input_device(self):
        """
        Return information about the input device.

        Raises:
            NoMicrophoneError: If no input device is available
        """
        sd = _sounddevice()
        try:
            info = sd.query_devices(self.device, kind="input")
        except (sd.PortAudioError, ValueError) as e:
            raise NoMicrophoneError(f"No microphone found: {e}") from e

        if not info or info.get("max_input_channels", 0) < 1:
            raise NoMicrophoneError("No microphone found: default device has no input channels")
        return info

    def start(self) -> None:
        """
        Open the input stream and begin capturing.

        Raises:
            CaptureStateError: If a recording is already active
            NoMicrophoneError: If no input device is available
        """
        if self.is_recording:
            raise CaptureStateError("Recording already in progress")

        info = self.check_input_device()
        sd = _sounddevice()

        with self._lock:
            self._frames = []
            self._frame_count = 0

        try:
            stream = sd.InputStream(
                samplerate=self.sample_rate,
                channels=self.channels,
                dtype="float32",
                device=self.device,
                callback=self._on_audio
            )
            stream.start()
        except sd.PortAudioError as e:
            raise NoMicrophoneError(f"Could not open microphone: {e}") from e

        self._stream = stream
        logger.info(f"Recording from {info.get('name', 'default input')} at {self.sample_rate} Hz")

    def _on_audio(self, indata, frames, time_info, status) -> None:
        """PortAudio callback, runs on the audio thread."""
        if status:
            logger.warning(f"Audio input status: {status}")

        with self._lock:
            remaining = self.max_frames - self._frame_count
            if remaining <= 0:
                return
            chunk = np.array(indata[:remaining], dtype=np.float32, copy=True)
            self._frames.append(chunk)
            self._frame_count += len(chunk)

    def stop(self) -> AudioBuffer:
        """
        Stop capturing and return the recorded audio as LINEAR16.

        Raises:
            CaptureStateError: If no recording is active or the device
                could not be stopped
        """
        if not self.is_recording:
            raise CaptureStateError("No recording to stop")

        try:
            self._release()
        finally:
            with self._lock:
                frames = self._frames
                self._frames = []
                self._frame_count = 0

        if frames:
            audio = convert_to_mono(np.concatenate(frames))
        else:
            audio = np.zeros(0, dtype=np.float32)

        buffer = AudioBuffer(pcm=float_to_pcm16(audio), sample_rate=self.sample_rate, channels=1)
        logger.info(f"Recording complete: {buffer.duration:.2f}s captured")
        return buffer

    async def record(self, duration: Optional[float] = None) -> AudioBuffer:
        """
        Record for a fixed duration.

        Args:
            duration: Seconds to record (defaults to max_duration)

        Returns:
            The recorded audio
        """
        duration = duration or self.max_duration
        if duration <= 0:
            raise ValueError("duration must be positive")

        self.max_duration = duration
        self.start()
        try:
            await asyncio.sleep(duration)
        except BaseException:
            self.close()
            raise
        return self.stop()

    def _release(self) -> None:
        stream, self._stream = self._stream, None
        if stream is None:
            return
        sd = _sounddevice()
        try:
            stream.stop()
        except sd.PortAudioError as e:
            raise CaptureStateError(f"Could not stop microphone: {e}") from e
        finally:
            stream.close()

    def close(self) -> None:
        """Release the input stream, discarding any captured audio."""
        if self.is_recording:
            logger.info("Releasing microphone without transcribing")
        try:
            self._release()
        except CaptureStateError as e:
            logger.warning(str(e))
        with self._lock:
            self._frames = []
            self._frame_count = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
