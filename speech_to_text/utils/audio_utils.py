"""
Audio utilities for the speech-to-text module.

Conversions between float sample arrays and the LINEAR16 payload
expected by Google Cloud Speech-to-Text.
"""

import numpy as np
import logging
from math import gcd
from pathlib import Path
from typing import Tuple, Union
from scipy import signal
from scipy.io import wavfile

logger = logging.getLogger(__name__)

PCM16_MAX = 32767
PCM16_MIN = -32768

def normalize_audio(audio: np.ndarray) -> np.ndarray:
    """
    Normalize audio to float32 in [-1.0, 1.0] range.

    Args:
        audio: Input audio array

    Returns:
        Normalized audio array
    """
    if audio.dtype == np.float32 and (audio.size == 0 or np.max(np.abs(audio)) <= 1.0):
        return audio

    # Convert to float32 if needed
    if audio.dtype != np.float32:
        if audio.dtype == np.int16:
            audio = audio.astype(np.float32) / 32768.0
        elif audio.dtype == np.int32:
            audio = audio.astype(np.float32) / 2147483648.0
        elif audio.dtype == np.uint8:
            audio = (audio.astype(np.float32) - 128) / 128.0
        else:
            audio = audio.astype(np.float32)

    if audio.size == 0:
        return audio

    # Normalize to [-1.0, 1.0] if needed
    max_val = np.max(np.abs(audio))
    if max_val > 1.0:
        audio = audio / max_val

    return audio

def convert_to_mono(audio: np.ndarray) -> np.ndarray:
    """
    Convert multi-channel audio to mono.

    Args:
        audio: Input audio array, shape (frames,) or (frames, channels)

    Returns:
        Mono audio array
    """
    if len(audio.shape) == 1:
        return audio

    if len(audio.shape) == 2 and audio.shape[1] > 1:
        return np.mean(audio, axis=1)

    return audio.reshape(-1)

def resample_audio(audio: np.ndarray, orig_sr: int, target_sr: int) -> np.ndarray:
    """
    Resample audio to target sample rate.

    Args:
        audio: Input audio array
        orig_sr: Original sample rate
        target_sr: Target sample rate

    Returns:
        Resampled audio array
    """
    if orig_sr == target_sr:
        return audio

    divisor = gcd(orig_sr, target_sr)
    resampled = signal.resample_poly(audio, target_sr // divisor, orig_sr // divisor)
    logger.debug(f"Resampled {len(audio)} samples from {orig_sr} Hz to {target_sr} Hz")
    return resampled.astype(np.float32)

def load_audio_file(
    file_path: Union[str, Path],
    target_sr: int = 16000,
    convert_to_mono: bool = True,
    normalize: bool = True
) -> Tuple[np.ndarray, int]:
    """
    Load a WAV file and convert it to float samples at the target rate.

    Args:
        file_path: Path to audio file
        target_sr: Target sample rate
        convert_to_mono: Whether to convert to mono
        normalize: Whether to normalize audio

    Returns:
        Tuple of (audio_data, sample_rate)
    """
    orig_sr, audio = wavfile.read(str(file_path))

    # Convert to mono if needed
    if convert_to_mono and len(audio.shape) > 1 and audio.shape[1] > 1:
        audio = np.mean(normalize_audio(audio), axis=1)

    # Normalize if needed
    if normalize:
        audio = normalize_audio(audio)

    # Resample if needed
    if orig_sr != target_sr:
        audio = resample_audio(audio, orig_sr, target_sr)

    return audio, target_sr

def float_to_pcm16(audio: np.ndarray) -> bytes:
    """
    Convert float samples in [-1.0, 1.0] to LINEAR16 bytes.

    Samples are clipped to [-1.0, 1.0]. Positive values scale by 32767 and
    negative values by 32768 so both full-scale ends map onto the int16
    range, then values are rounded to nearest.

    Args:
        audio: Float audio array (any shape, flattened in C order)

    Returns:
        Little-endian signed 16-bit PCM bytes
    """
    samples = np.clip(np.asarray(audio, dtype=np.float64).reshape(-1), -1.0, 1.0)
    scaled = np.where(samples < 0, samples * -PCM16_MIN, samples * PCM16_MAX)
    pcm = np.clip(np.rint(scaled), PCM16_MIN, PCM16_MAX).astype("<i2")
    return pcm.tobytes()

def pcm16_to_float(pcm: bytes) -> np.ndarray:
    """Decode LINEAR16 bytes into float32 samples in [-1.0, 1.0]."""
    samples = np.frombuffer(pcm, dtype="<i2").astype(np.float32)
    return np.where(samples < 0, samples / -PCM16_MIN, samples / PCM16_MAX).astype(np.float32)
