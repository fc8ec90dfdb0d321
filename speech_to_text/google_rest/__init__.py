"""
Google Cloud Speech-to-Text REST integration.
"""
from .client import GoogleSpeechClient
from .parser import TranscriptParser, parse_recognition_response, extract_transcript

__all__ = [
    'GoogleSpeechClient',
    'TranscriptParser',
    'parse_recognition_response',
    'extract_transcript'
]
