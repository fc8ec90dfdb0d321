#!/usr/bin/env python3
"""
Record from the microphone (or read a WAV file) and print the transcript.

Usage:
    speech-prompt --credentials /path/to/service-account.json --duration 5
    speech-prompt --audio /path/to/test.wav --language en-GB
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config import config
from .exceptions import CredentialLoadError
from .session import SpeechSession

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Push-to-talk Google Cloud speech recognition")
    parser.add_argument("--credentials", type=str, help="Path to the service-account JSON file")
    parser.add_argument("--duration", type=float, help="Recording length in seconds")
    parser.add_argument("--language", type=str, help="Recognition language code, e.g. en-US")
    parser.add_argument("--audio", type=str, help="Transcribe this WAV file instead of recording")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default from STT_LOG_LEVEL)")
    return parser

async def run(args: argparse.Namespace) -> int:
    """Run a single recognition and return the process exit code."""
    try:
        session = SpeechSession.from_config(
            prompt_sink=print,
            credentials_path=args.credentials,
            language_code=args.language,
            record_duration=args.duration
        )
    except CredentialLoadError as e:
        logger.error(str(e))
        return 1

    async with session:
        if args.audio:
            transcript = await session.transcribe_file(args.audio)
        else:
            if not await session.authenticate():
                return 1
            transcript = await session.record_once()

    return 0 if transcript else 1

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = (args.log_level or config.log_level).upper()
    logging.getLogger().setLevel(getattr(logging, level, logging.INFO))
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 1

if __name__ == "__main__":
    sys.exit(main())
