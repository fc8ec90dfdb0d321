"""
UI integration for the push-to-talk speech client.
"""
from .record_button import RecordButtonHandler

__all__ = ['RecordButtonHandler']
