"""Twitch app access token cache"""

import asyncio
from typing import Optional

import httpx

from ..protocol.errors import AuthError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class TwitchCredentialCache:
    """Acquires and memoizes a client-credentials bearer token

    The token lives for the process lifetime and is only replaced after an
    explicit ``invalidate()``. Expiry is not tracked; callers react to a 401.
    """

    def __init__(self, client_id: Optional[str], client_secret: Optional[str],
                 http_client: httpx.AsyncClient, auth_url: str):
        self.client_id = client_id
        self.client_secret = client_secret
        self.auth_url = auth_url
        self._http = http_client

        self._token: Optional[str] = None
        self._lock = asyncio.Lock()
        self.exchange_count = 0

    @property
    def has_credential(self) -> bool:
        return self._token is not None

    def invalidate(self) -> None:
        """Drop the cached token so the next call re-exchanges"""
        if self._token is not None:
            logger.info("Twitch app token invalidated")
        self._token = None

    async def get_credential(self) -> str:
        """
        Return the cached app token, exchanging credentials if needed

        Returns:
            Bearer token string

        Raises:
            AuthError: If the exchange request fails or returns no token
        """
        if self._token:
            return self._token

        async with self._lock:
            # Double-check after acquiring lock
            if self._token:
                return self._token

            self._token = await self._exchange()
            return self._token

    async def _exchange(self) -> str:
        if not self.client_id or not self.client_secret:
            raise AuthError("TWITCH_CLIENT_ID and TWITCH_CLIENT_SECRET must be set")

        self.exchange_count += 1
        logger.info(f"Requesting Twitch app token (exchange #{self.exchange_count})")

        try:
            response = await self._http.post(
                self.auth_url,
                data={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "grant_type": "client_credentials",
                },
            )
        except httpx.HTTPError as e:
            logger.error(f"Token request to {self.auth_url} failed: {e!r}")
            raise AuthError(f"token request failed: {e!r}") from e

        if not response.is_success:
            message = upstream_message(response)
            logger.error(f"Failed to get app token: {response.status_code} {message}")
            raise AuthError(message, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise AuthError("token response is not JSON", status_code=response.status_code) from e

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            logger.error("No access_token in token response")
            raise AuthError("no access token received from Twitch", status_code=response.status_code)

        logger.info(f"Twitch app token acquired (expires_in={data.get('expires_in')})")
        return token


def upstream_message(response: httpx.Response) -> str:
    """Best-effort error text from a Twitch error body"""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)[:200]
    return str(body)[:200]
