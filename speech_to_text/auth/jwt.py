"""
JWT assertion signing for the OAuth2 JWT-bearer flow.
"""
import base64
import json
import logging
import time
from typing import Any, Dict, Optional, Union

from google.auth import crypt

from ..config import config
from ..exceptions import KeyParseError
from ..models import ServiceCredential

logger = logging.getLogger(__name__)

JWT_HEADER = {"alg": "RS256", "typ": "JWT"}

def base64url_encode(data: Union[bytes, str]) -> str:
    """Base64url encode without padding."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")

def base64url_decode(data: str) -> bytes:
    """Inverse of base64url_encode; restores the stripped padding."""
    padding = -len(data) % 4
    return base64.urlsafe_b64decode(data + "=" * padding)

def _encode_json(obj: Dict[str, Any]) -> str:
    return base64url_encode(json.dumps(obj, separators=(",", ":")))

def decode_segment(token: str, index: int) -> Dict[str, Any]:
    """Decode the header (0) or payload (1) segment of a JWT."""
    segment = token.split(".")[index]
    return json.loads(base64url_decode(segment))

def build_claims(
    credential: ServiceCredential,
    now: int,
    scope: Optional[str] = None,
    lifetime: Optional[int] = None
) -> Dict[str, Any]:
    """Claims asserted to the token endpoint."""
    return {
        "iss": credential.client_email,
        "scope": scope or config.token_scope,
        "aud": credential.token_uri,
        "iat": now,
        "exp": now + (lifetime or config.token_lifetime),
    }

def sign_jwt(
    credential: ServiceCredential,
    now: Optional[int] = None,
    scope: Optional[str] = None,
    lifetime: Optional[int] = None
) -> str:
    """
    Build and RS256-sign a JWT assertion for the credential.

    Args:
        credential: Service-account credential holding the private key
        now: Issue time in epoch seconds (defaults to the current time)
        scope: OAuth2 scope (defaults to config)
        lifetime: Assertion lifetime in seconds (defaults to config)

    Returns:
        The compact serialized JWT

    Raises:
        KeyParseError: If the private key cannot be used for RSA signing
    """
    now = int(time.time()) if now is None else int(now)
    claims = build_claims(credential, now, scope=scope, lifetime=lifetime)
    signing_input = f"{_encode_json(JWT_HEADER)}.{_encode_json(claims)}"

    # RSASigner parses the PKCS#8 PEM; a non-RSA key fails when signing.
    try:
        signer = crypt.RSASigner.from_string(credential.private_key)
        signature = signer.sign(signing_input.encode("utf-8"))
    except (ValueError, TypeError) as e:
        raise KeyParseError(f"Invalid private key for {credential.client_email}: {e}") from e

    logger.debug(f"Signed JWT assertion for {credential.client_email}, expires at {claims['exp']}")
    return f"{signing_input}.{base64url_encode(signature)}"
