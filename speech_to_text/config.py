# speech_to_text/config.py
"""
Configuration settings for the Google Cloud Speech REST client.
"""
import os
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

# Load environment variables from .env file
load_dotenv()

class STTConfig(BaseSettings):
    """Configuration for the Speech-to-Text module."""

    # Google Cloud credentials
    credentials_path: str = Field(
        default=os.getenv("GOOGLE_APPLICATION_CREDENTIALS", ""),
        description="Path to the service-account JSON file"
    )

    # Recognition settings
    language_code: str = Field(
        default="en-US",
        description="Language code for speech recognition"
    )

    sample_rate: int = Field(
        default=16000,
        description="Audio sample rate in Hz (LINEAR16 mono)"
    )

    recognize_url: str = Field(
        default="https://speech.googleapis.com/v1/speech:recognize",
        description="Google Speech-to-Text recognize endpoint"
    )

    # Recording settings
    record_duration: float = Field(
        default=5.0,
        description="Length of a push-to-talk recording in seconds"
    )

    # OAuth2 settings
    token_scope: str = Field(
        default="https://www.googleapis.com/auth/cloud-platform",
        description="Scope requested in the JWT assertion"
    )

    token_lifetime: int = Field(
        default=3600,
        description="Lifetime of the JWT assertion in seconds"
    )

    token_expiry_margin: int = Field(
        default=60,
        description="Re-acquire the access token this many seconds before expiry"
    )

    # Network settings
    request_timeout: float = Field(
        default=30.0,
        description="Total timeout for each HTTP request in seconds"
    )

    log_level: str = Field(
        default="INFO",
        description="Log level used by the command-line entry point"
    )

    class Config:
        env_prefix = "STT_"
        case_sensitive = False

# Create a global config instance
config = STTConfig()
