"""
Service-account credential loading.
"""
import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from ..config import config
from ..exceptions import CredentialLoadError
from ..models import ServiceCredential

logger = logging.getLogger(__name__)

def load_credential(path: Optional[Union[str, Path]] = None) -> ServiceCredential:
    """
    Load a Google service-account credential from a JSON key file.

    Args:
        path: Path to the key file (defaults to config.credentials_path)

    Returns:
        The parsed credential

    Raises:
        CredentialLoadError: If the file is missing, unreadable or malformed
    """
    path = path or config.credentials_path
    if not path:
        raise CredentialLoadError(
            "No credentials path configured. Set STT_CREDENTIALS_PATH or GOOGLE_APPLICATION_CREDENTIALS."
        )

    path = Path(path)
    if not path.is_file():
        raise CredentialLoadError(f"Service-account file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise CredentialLoadError(f"Could not read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CredentialLoadError(f"Service-account file {path} is not valid JSON: {e}") from e

    return credential_from_info(data, source=str(path))

def credential_from_info(data: object, source: str = "<memory>") -> ServiceCredential:
    """Build a credential from an already decoded JSON document."""
    if not isinstance(data, dict):
        raise CredentialLoadError(f"Service-account data from {source} must be a JSON object")

    try:
        credential = ServiceCredential(**data)
    except ValidationError as e:
        raise CredentialLoadError(f"Malformed service-account data in {source}: {e}") from e

    logger.info(f"Loaded service-account credential for {credential.client_email}")
    return credential
