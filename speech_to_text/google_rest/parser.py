"""
Parsing of ``speech:recognize`` responses and transcript delivery.
"""
import inspect
import json
import logging
from typing import Any, Awaitable, Callable, Optional, Union

from pydantic import ValidationError

from ..exceptions import ParseError
from ..models import RecognitionResponse

logger = logging.getLogger(__name__)

PromptSink = Callable[[str], Union[None, Awaitable[Any]]]

def parse_recognition_response(body: Union[str, bytes]) -> RecognitionResponse:
    """
    Deserialize a recognize response body.

    Raises:
        ParseError: If the body is not JSON or does not match the response schema
    """
    try:
        data = json.loads(body) if body else {}
    except (TypeError, ValueError) as e:
        raise ParseError(f"STT response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ParseError("STT response must be a JSON object")

    try:
        return RecognitionResponse(**data)
    except ValidationError as e:
        raise ParseError(f"Unexpected STT response structure: {e}") from e

def extract_transcript(response: RecognitionResponse) -> Optional[str]:
    """
    Return the trimmed top transcript, or None when there is nothing usable.
    """
    if not response.results or not response.results[0].alternatives:
        logger.warning("STT returned no usable results.")
        return None

    transcript = (response.results[0].alternatives[0].transcript or "").strip()
    if not transcript:
        logger.warning("Transcript was empty.")
        return None

    return transcript

class TranscriptParser:
    """Extracts the final transcript and forwards it to the prompt sink."""

    def __init__(self, sink: Optional[PromptSink] = None):
        self.sink = sink

    async def handle(self, body: Union[str, bytes]) -> Optional[str]:
        """
        Parse a response body and deliver its transcript.

        Malformed responses and prompt handler failures are logged and
        yield None.
        """
        try:
            response = parse_recognition_response(body)
        except ParseError as e:
            logger.error(f"Failed to parse STT response: {e}")
            return None

        transcript = extract_transcript(response)
        if transcript is None:
            return None

        logger.info(f"Final Transcript: {transcript}")
        if self.sink is None:
            return transcript

        try:
            result = self.sink(transcript)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"Prompt handler failed: {e}")
            return None
        return transcript
