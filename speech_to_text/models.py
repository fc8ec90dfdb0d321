"""
Data models for the Google Cloud Speech REST integration.
"""
import base64
import time
from dataclasses import dataclass
from typing import List, Optional
from pydantic import BaseModel, Field

class ServiceCredential(BaseModel):
    """Google service-account credential as stored in its JSON key file."""

    type: Optional[str] = Field(
        default=None,
        description="Credential type, normally 'service_account'"
    )

    project_id: Optional[str] = Field(default=None, description="Google Cloud project id")

    private_key_id: Optional[str] = Field(default=None, description="Id of the signing key")

    private_key: str = Field(
        description="PKCS#8 PEM encoded RSA private key"
    )

    client_email: str = Field(
        description="Service-account email, used as the JWT issuer"
    )

    client_id: Optional[str] = Field(default=None, description="Numeric client id")

    auth_uri: Optional[str] = Field(default=None, description="OAuth2 authorization endpoint")

    token_uri: str = Field(
        description="OAuth2 token endpoint, used as the JWT audience"
    )

    auth_provider_x509_cert_url: Optional[str] = Field(default=None)

    client_x509_cert_url: Optional[str] = Field(default=None)

    class Config:
        frozen = True
        extra = "ignore"

class AccessToken(BaseModel):
    """OAuth2 bearer token with its expiry time."""

    token: str = Field(description="Opaque bearer token")

    expires_at: float = Field(
        description="Epoch seconds after which the token is no longer valid"
    )

    def is_expired(self, now: Optional[float] = None, margin: float = 0.0) -> bool:
        """Check whether the token expires within ``margin`` seconds of ``now``."""
        now = time.time() if now is None else now
        return now + margin >= self.expires_at

@dataclass(frozen=True)
class AudioBuffer:
    """Little-endian signed 16-bit PCM audio."""
    pcm: bytes
    sample_rate: int = 16000
    channels: int = 1

    @property
    def sample_count(self) -> int:
        return len(self.pcm) // (2 * self.channels)

    @property
    def duration(self) -> float:
        if not self.sample_rate:
            return 0.0
        return self.sample_count / self.sample_rate

    def to_base64(self) -> str:
        return base64.b64encode(self.pcm).decode("ascii")

class RecognitionConfig(BaseModel):
    """The ``config`` section of a recognize request."""

    encoding: str = Field(default="LINEAR16")

    sample_rate_hertz: int = Field(default=16000, alias="sampleRateHertz")

    language_code: str = Field(default="en-US", alias="languageCode")

    class Config:
        populate_by_name = True

class RecognitionAudio(BaseModel):
    """The ``audio`` section of a recognize request."""

    content: str = Field(description="Base64 encoded audio bytes")

class RecognitionRequest(BaseModel):
    """Body of a ``speech:recognize`` call."""

    config: RecognitionConfig
    audio: RecognitionAudio

    @classmethod
    def from_audio(cls, audio: AudioBuffer, language_code: str) -> "RecognitionRequest":
        return cls(
            config=RecognitionConfig(
                sample_rate_hertz=audio.sample_rate,
                language_code=language_code
            ),
            audio=RecognitionAudio(content=audio.to_base64())
        )

    def to_json_dict(self) -> dict:
        """Serialize with the API's camelCase field names."""
        return self.model_dump(by_alias=True)

class SpeechRecognitionAlternative(BaseModel):
    """One hypothesis for a recognized utterance."""

    transcript: Optional[str] = Field(default="")

    confidence: Optional[float] = Field(default=0.0)

class SpeechRecognitionResult(BaseModel):
    """A recognized portion of the audio."""

    alternatives: Optional[List[SpeechRecognitionAlternative]] = Field(default_factory=list)

class RecognitionResponse(BaseModel):
    """Body returned by ``speech:recognize``."""

    results: Optional[List[SpeechRecognitionResult]] = Field(default_factory=list)
