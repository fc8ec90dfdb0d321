# speech_to_text/google_rest/client.py
"""
Google Cloud Speech-to-Text REST client for synchronous recognition.
"""
import asyncio
import logging
import time
from typing import Optional, Union

import aiohttp

from ..config import config
from ..exceptions import RecognitionRequestError
from ..models import AccessToken, AudioBuffer, RecognitionRequest

logger = logging.getLogger(__name__)

class GoogleSpeechClient:
    """
    Client for the ``speech:recognize`` REST endpoint.

    Sends one LINEAR16 clip per call and returns the raw JSON body; parsing
    is left to TranscriptParser.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        language_code: Optional[str] = None,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        """
        Initialize the recognition client.

        Args:
            session: HTTP session used for requests
            language_code: Language code for recognition (defaults to config)
            endpoint: Recognize URL (defaults to config)
            timeout: Total request timeout in seconds (defaults to config)
        """
        self.session = session
        self.language_code = language_code or config.language_code
        self.endpoint = endpoint or config.recognize_url
        self.timeout = aiohttp.ClientTimeout(total=timeout or config.request_timeout)

    def build_request(self, audio: AudioBuffer) -> dict:
        """Build the JSON body for a recognize call."""
        return RecognitionRequest.from_audio(audio, self.language_code).to_json_dict()

    async def recognize(self, audio: AudioBuffer, token: Union[AccessToken, str, None]) -> str:
        """
        Send audio to Google Cloud Speech-to-Text.

        Args:
            audio: Recorded LINEAR16 audio
            token: Bearer access token

        Returns:
            Raw JSON response body

        Raises:
            RecognitionRequestError: If there is no token or the request fails
        """
        bearer = token.token if isinstance(token, AccessToken) else token
        if not bearer:
            raise RecognitionRequestError("No access token available, not sending audio")

        headers = {
            "Authorization": f"Bearer {bearer}",
            "Content-Type": "application/json"
        }
        body = self.build_request(audio)

        logger.info(f"Sending {audio.duration:.2f}s of audio to Google STT")
        start_time = time.time()
        try:
            async with self.session.post(
                self.endpoint,
                json=body,
                headers=headers,
                timeout=self.timeout
            ) as response:
                text = await response.text()
                if response.status < 200 or response.status >= 300:
                    raise RecognitionRequestError(
                        f"STT request failed with HTTP {response.status}: {text[:200]}",
                        status=response.status
                    )
        except aiohttp.ClientError as e:
            raise RecognitionRequestError(f"STT request failed: {e}") from e
        except asyncio.TimeoutError as e:
            raise RecognitionRequestError("STT request timed out") from e

        processing_time = time.time() - start_time
        logger.info(f"STT response received in {processing_time:.2f}s")
        return text
