"""
Speech-to-text module for the push-to-talk prompt client.

This module records microphone audio and transcribes it with the
Google Cloud Speech-to-Text REST API using a service-account credential.
"""

import logging
from speech_to_text.exceptions import (
    STTError,
    CredentialLoadError,
    KeyParseError,
    TokenRequestError,
    NoMicrophoneError,
    CaptureStateError,
    RecognitionRequestError,
    ParseError
)
from speech_to_text.models import ServiceCredential, AccessToken, AudioBuffer
from speech_to_text.microphone import MicrophoneCapture
from speech_to_text.session import SpeechSession

__version__ = "0.1.0"

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

__all__ = [
    "SpeechSession",
    "MicrophoneCapture",
    "ServiceCredential",
    "AccessToken",
    "AudioBuffer",
    "STTError",
    "CredentialLoadError",
    "KeyParseError",
    "TokenRequestError",
    "NoMicrophoneError",
    "CaptureStateError",
    "RecognitionRequestError",
    "ParseError"
]
