"""
Push-to-talk recognition session.

Owns the credential, the current access token, the microphone and the
auto-stop timer, and runs record -> recognize -> parse -> prompt sink.
"""
import asyncio
import logging
import time
from pathlib import Path
from typing import Callable, Optional, Union

import aiohttp

from .auth.credentials import load_credential
from .auth.jwt import sign_jwt
from .auth.token import TokenAcquirer
from .config import config
from .exceptions import STTError
from .google_rest.client import GoogleSpeechClient
from .google_rest.parser import PromptSink, TranscriptParser
from .microphone import MicrophoneCapture
from .models import AccessToken, AudioBuffer, ServiceCredential
from .utils.audio_utils import float_to_pcm16, load_audio_file

logger = logging.getLogger(__name__)

class SpeechSession:
    """
    A single-user recognition session.

    At most one recording is active at a time. Failures are logged and the
    session returns to idle; nothing raises out of the public coroutines.
    """

    def __init__(
        self,
        credential: ServiceCredential,
        prompt_sink: Optional[PromptSink] = None,
        language_code: Optional[str] = None,
        record_duration: Optional[float] = None,
        recognize_url: Optional[str] = None,
        request_timeout: Optional[float] = None,
        microphone: Optional[MicrophoneCapture] = None,
        http_session: Optional[aiohttp.ClientSession] = None,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize the session.

        Args:
            credential: Service-account credential used to sign assertions
            prompt_sink: Receives each non-empty transcript
            language_code: Recognition language (defaults to config)
            record_duration: Seconds before a recording stops on its own (defaults to config)
            recognize_url: Recognize endpoint (defaults to config)
            request_timeout: HTTP timeout in seconds (defaults to config)
            microphone: Audio capturer (a default one is created if omitted)
            http_session: Shared aiohttp session; created lazily and owned if omitted
            clock: Time source in epoch seconds
        """
        self.credential = credential
        self.language_code = language_code or config.language_code
        self.record_duration = record_duration or config.record_duration
        self.recognize_url = recognize_url or config.recognize_url
        self.request_timeout = request_timeout or config.request_timeout
        self.microphone = microphone or MicrophoneCapture(max_duration=self.record_duration)
        self.parser = TranscriptParser(prompt_sink)
        self.clock = clock

        self.access_token: Optional[AccessToken] = None
        self._http_session = http_session
        self._owns_http_session = http_session is None
        self._auto_stop_task: Optional[asyncio.Task] = None
        self._stopped: Optional[asyncio.Future] = None

    @classmethod
    def from_config(
        cls,
        prompt_sink: Optional[PromptSink] = None,
        credentials_path: Optional[Union[str, Path]] = None,
        **kwargs
    ) -> "SpeechSession":
        """
        Create a session from the configured service-account file.

        Raises:
            CredentialLoadError: If the credential cannot be loaded
        """
        credential = load_credential(credentials_path)
        return cls(credential, prompt_sink=prompt_sink, **kwargs)

    @property
    def is_recording(self) -> bool:
        return self.microphone.is_recording

    def _session(self) -> aiohttp.ClientSession:
        if self._http_session is None or self._http_session.closed:
            self._http_session = aiohttp.ClientSession()
            self._owns_http_session = True
        return self._http_session

    async def authenticate(self) -> bool:
        """
        Sign a JWT assertion and exchange it for an access token.

        Returns:
            True if a token was acquired
        """
        now = int(self.clock())
        try:
            assertion = sign_jwt(self.credential, now=now)
            acquirer = TokenAcquirer(self._session(), timeout=self.request_timeout)
            self.access_token = await acquirer.acquire(assertion, self.credential.token_uri, now=now)
        except STTError as e:
            logger.error(f"Token request failed: {e}")
            self.access_token = None
            return False
        return True

    async def ensure_token(self) -> bool:
        """Acquire a token if there is none or it is about to expire."""
        if self.access_token is not None and not self.access_token.is_expired(
            self.clock(), margin=config.token_expiry_margin
        ):
            return True
        if self.access_token is not None:
            logger.info("Access token expired, requesting a new one")
        return await self.authenticate()

    async def start_recording(self) -> bool:
        """
        Start recording and schedule the automatic stop.

        Returns:
            True if recording started
        """
        try:
            self.microphone.start()
        except STTError as e:
            logger.error(f"Could not start recording: {e}")
            return False

        self._stopped = asyncio.get_running_loop().create_future()
        self._auto_stop_task = asyncio.ensure_future(self._auto_stop(self.record_duration))
        self._auto_stop_task.add_done_callback(self._on_auto_stop_done)
        logger.info(f"Recording for up to {self.record_duration:.1f}s...")
        return True

    async def _auto_stop(self, delay: float) -> Optional[str]:
        await asyncio.sleep(delay)
        # Detach first so stop_recording does not cancel this task.
        self._auto_stop_task = None
        return await self.stop_recording()

    async def record_once(self) -> Optional[str]:
        """
        Record until the automatic or an early stop and return the transcript.
        """
        if not await self.start_recording():
            return None
        return await self._stopped

    def _on_auto_stop_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Automatic stop failed: {error}")

    def _resolve_stopped(self, stopped: Optional[asyncio.Future], transcript: Optional[str]) -> None:
        if stopped is not None and not stopped.done():
            stopped.set_result(transcript)

    def _cancel_auto_stop(self) -> None:
        task, self._auto_stop_task = self._auto_stop_task, None
        if task is not None and not task.done():
            task.cancel()

    async def stop_recording(self) -> Optional[str]:
        """
        Stop recording and transcribe the captured audio.

        Returns:
            The transcript delivered to the prompt sink, or None
        """
        self._cancel_auto_stop()
        stopped, self._stopped = self._stopped, None
        transcript = None
        try:
            try:
                audio = self.microphone.stop()
            except STTError as e:
                logger.error(str(e))
                return None
            transcript = await self.transcribe(audio)
            return transcript
        finally:
            self._resolve_stopped(stopped, transcript)

    async def transcribe(self, audio: AudioBuffer) -> Optional[str]:
        """
        Send audio for recognition and forward the transcript.

        Returns:
            The transcript, or None on failure or an empty result
        """
        if not await self.ensure_token():
            logger.error("No access token, skipping recognition")
            return None

        client = GoogleSpeechClient(
            self._session(),
            language_code=self.language_code,
            endpoint=self.recognize_url,
            timeout=self.request_timeout
        )
        try:
            body = await client.recognize(audio, self.access_token)
        except STTError as e:
            logger.error(f"STT request failed: {e}")
            return None

        return await self.parser.handle(body)

    async def transcribe_file(self, path: Union[str, Path]) -> Optional[str]:
        """Transcribe a WAV file instead of a live recording."""
        sample_rate = self.microphone.sample_rate
        try:
            samples, _ = load_audio_file(path, target_sr=sample_rate)
        except (OSError, ValueError) as e:
            logger.error(f"Could not load audio file {path}: {e}")
            return None
        return await self.transcribe(AudioBuffer(pcm=float_to_pcm16(samples), sample_rate=sample_rate))

    async def close(self) -> None:
        """Cancel the pending stop, release the microphone and close owned HTTP resources."""
        self._cancel_auto_stop()
        stopped, self._stopped = self._stopped, None
        self._resolve_stopped(stopped, None)
        self.microphone.close()
        if self._owns_http_session and self._http_session is not None:
            await self._http_session.close()
        self._http_session = None

    async def __aenter__(self) -> "SpeechSession":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
