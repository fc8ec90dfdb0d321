"""
OAuth2 access token acquisition using the JWT-bearer grant.
"""
import asyncio
import json
import logging
import time
from typing import Optional

import aiohttp

from ..config import config
from ..exceptions import TokenRequestError
from ..models import AccessToken

logger = logging.getLogger(__name__)

JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"

class TokenAcquirer:
    """
    Exchanges a signed JWT assertion for a bearer access token.

    A single attempt is made per call; failures surface as TokenRequestError.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        timeout: Optional[float] = None,
        default_lifetime: Optional[int] = None
    ):
        """
        Initialize the token acquirer.

        Args:
            session: HTTP session used for the token request
            timeout: Total request timeout in seconds (defaults to config)
            default_lifetime: Lifetime assumed when the response has no expires_in
        """
        self.session = session
        self.timeout = aiohttp.ClientTimeout(total=timeout or config.request_timeout)
        self.default_lifetime = default_lifetime or config.token_lifetime

    async def acquire(self, assertion: str, token_uri: str, now: Optional[float] = None) -> AccessToken:
        """
        Request an access token from the token endpoint.

        Args:
            assertion: Signed JWT
            token_uri: OAuth2 token endpoint from the credential
            now: Request time in epoch seconds, used to compute expiry

        Returns:
            The access token

        Raises:
            TokenRequestError: On transport failure, non-2xx status or a malformed body
        """
        now = time.time() if now is None else now
        form = {
            "grant_type": JWT_BEARER_GRANT,
            "assertion": assertion,
        }

        try:
            async with self.session.post(token_uri, data=form, timeout=self.timeout) as response:
                body = await response.text()
                if response.status < 200 or response.status >= 300:
                    raise TokenRequestError(
                        f"Token request failed with HTTP {response.status}: {body[:200]}",
                        status=response.status
                    )
                try:
                    data = json.loads(body)
                except ValueError as e:
                    raise TokenRequestError(f"Token response is not valid JSON: {e}") from e
        except aiohttp.ClientError as e:
            raise TokenRequestError(f"Token request to {token_uri} failed: {e}") from e
        except asyncio.TimeoutError as e:
            raise TokenRequestError(f"Token request to {token_uri} timed out") from e

        if not isinstance(data, dict) or not data.get("access_token"):
            raise TokenRequestError("Token response has no access_token field")

        expires_in = data.get("expires_in")
        if expires_in is None:
            expires_in = self.default_lifetime
        try:
            expires_at = now + float(expires_in)
        except (TypeError, ValueError):
            expires_at = now + self.default_lifetime

        logger.info("Access token acquired")
        return AccessToken(token=str(data["access_token"]), expires_at=expires_at)
