"""
Exceptions for the speech-to-text module.
"""
from typing import Optional


class STTError(Exception):
    """Base exception for STT module errors."""
    pass

class CredentialLoadError(STTError):
    """The service-account file is missing or malformed."""
    pass

class KeyParseError(STTError):
    """The service-account private key could not be parsed."""
    pass

class TokenRequestError(STTError):
    """Exception for OAuth2 token endpoint failures."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status

class NoMicrophoneError(STTError):
    """No audio input device is available."""
    pass

class CaptureStateError(STTError):
    """Recording was started or stopped in the wrong state."""
    pass

class RecognitionRequestError(STTError):
    """Exception for Google Cloud Speech API request failures."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status

class ParseError(STTError):
    """The recognition response could not be parsed."""
    pass
