"""Shared fixtures for the speech-to-text tests."""

from __future__ import annotations

import json

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from speech_to_text.auth.credentials import credential_from_info
from speech_to_text.exceptions import CaptureStateError
from speech_to_text.models import AudioBuffer


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_pem(rsa_key) -> str:
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture(scope="session")
def public_pem(rsa_key) -> str:
    return rsa_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


@pytest.fixture
def credential_info(private_pem) -> dict:
    return {
        "type": "service_account",
        "project_id": "demo-project",
        "private_key_id": "abc123",
        "private_key": private_pem,
        "client_email": "stt-bot@demo-project.iam.gserviceaccount.com",
        "client_id": "1234567890",
        "auth_uri": "https://accounts.google.com/o/oauth2/auth",
        "token_uri": "https://oauth2.example/token",
        "auth_provider_x509_cert_url": "https://www.googleapis.com/oauth2/v1/certs",
        "client_x509_cert_url": "https://www.googleapis.com/robot/v1/metadata/x509/stt-bot",
    }


@pytest.fixture
def credential(credential_info):
    return credential_from_info(credential_info)


@pytest.fixture
def credential_file(tmp_path, credential_info):
    path = tmp_path / "service-account.json"
    path.write_text(json.dumps(credential_info), encoding="utf-8")
    return path


class FakeResponse:
    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self._body = body

    async def text(self) -> str:
        return self._body

    async def json(self, content_type=None):
        return json.loads(self._body)

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None


class FakeHTTPSession:
    """Stands in for aiohttp.ClientSession; replies from a url -> (status, body) table."""

    def __init__(self, routes: dict) -> None:
        self.routes = routes
        self.calls: list[dict] = []
        self.closed = False

    def post(self, url, **kwargs) -> FakeResponse:
        self.calls.append({"url": str(url), **kwargs})
        status, body = self.routes[str(url)]
        if not isinstance(body, str):
            body = json.dumps(body)
        return FakeResponse(status, body)

    def calls_to(self, url: str) -> list[dict]:
        return [call for call in self.calls if call["url"] == url]

    async def close(self) -> None:
        self.closed = True


class FakeMicrophone:
    """Microphone double that returns a fixed clip."""

    def __init__(self, pcm: bytes = b"\x01\x00" * 1600, sample_rate: int = 16000) -> None:
        self.pcm = pcm
        self.sample_rate = sample_rate
        self.is_recording = False
        self.starts = 0
        self.closed = False

    def start(self) -> None:
        if self.is_recording:
            raise CaptureStateError("Recording already in progress")
        self.is_recording = True
        self.starts += 1

    def stop(self) -> AudioBuffer:
        if not self.is_recording:
            raise CaptureStateError("No recording to stop")
        self.is_recording = False
        return AudioBuffer(pcm=self.pcm, sample_rate=self.sample_rate)

    def close(self) -> None:
        self.is_recording = False
        self.closed = True


@pytest.fixture
def fake_microphone():
    return FakeMicrophone()
