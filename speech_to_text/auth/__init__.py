"""
Service-account authentication for Google Cloud REST APIs.
"""
from .credentials import load_credential, credential_from_info
from .jwt import sign_jwt, base64url_encode, base64url_decode, decode_segment
from .token import TokenAcquirer, JWT_BEARER_GRANT

__all__ = [
    'load_credential',
    'credential_from_info',
    'sign_jwt',
    'base64url_encode',
    'base64url_decode',
    'decode_segment',
    'TokenAcquirer',
    'JWT_BEARER_GRANT'
]
