"""
Audio helpers for the speech-to-text module.
"""
