"""Live status resolution against the Twitch Helix streams endpoint"""

from typing import Any, Dict, List, Optional, Sequence

import httpx

from ..models.stream import StreamLookup, StreamStatus
from ..protocol.errors import AuthError, NetworkError
from ..utils.logger import get_logger
from .credential_cache import TwitchCredentialCache, upstream_message

logger = get_logger(__name__)


class StreamStatusResolver:
    """Resolves live/offline state for one or many channels"""

    def __init__(self, credentials: TwitchCredentialCache, http_client: httpx.AsyncClient,
                 client_id: Optional[str], api_url: str):
        self.credentials = credentials
        self.client_id = client_id
        self.api_url = api_url.rstrip("/")
        self._http = http_client

    def _headers(self, token: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {token}", "Client-Id": self.client_id or ""}

    async def _get_streams(self, login: str, token: str) -> httpx.Response:
        try:
            return await self._http.get(
                f"{self.api_url}/streams",
                params={"user_login": login},
                headers=self._headers(token),
            )
        except httpx.HTTPError as e:
            logger.error(f"Helix GET /streams for {login} failed: {e!r}")
            raise NetworkError(f"stream lookup for '{login}' failed: {e!r}") from e

    async def resolve_one(self, name: str) -> StreamStatus:
        """
        Look up whether a channel is live

        Args:
            name: Channel name in any casing; the query uses its lower-case form

        Returns:
            StreamStatus carrying ``name`` as given

        Raises:
            AuthError: If no valid token can be obtained
            NetworkError: If the Helix request fails or returns an unusable body
        """
        login = name.lower()
        token = await self.credentials.get_credential()
        response = await self._get_streams(login, token)

        if response.status_code == 401:
            # Token revoked or expired: re-exchange once
            logger.warning(f"Helix rejected app token for {login}, refreshing and retrying")
            self.credentials.invalidate()
            token = await self.credentials.get_credential()
            response = await self._get_streams(login, token)
            if response.status_code == 401:
                raise AuthError(upstream_message(response), status_code=401)

        if not response.is_success:
            message = upstream_message(response)
            logger.error(f"Helix GET /streams for {login}: {response.status_code} {message}")
            raise NetworkError(message, status_code=response.status_code)

        streams = self._parse_streams(login, response)
        logger.debug(f"Helix /streams for {login} returned {len(streams)} record(s)")

        if streams:
            return StreamStatus.from_helix(name, streams[0])
        return StreamStatus.offline(name)

    @staticmethod
    def _parse_streams(login: str, response: httpx.Response) -> List[Dict[str, Any]]:
        try:
            body = response.json()
        except ValueError as e:
            raise NetworkError(f"invalid JSON in stream lookup for '{login}'",
                               status_code=response.status_code) from e

        streams = body.get("data") if isinstance(body, dict) else None
        if not isinstance(streams, list):
            raise NetworkError(f"unexpected stream lookup payload for '{login}'",
                               status_code=response.status_code)
        return [s for s in streams if isinstance(s, dict)]

    async def resolve_many(self, names: Sequence[str]) -> List[StreamLookup]:
        """
        Resolve each channel in order, isolating per-channel failures

        An AuthError aborts the whole batch since no channel can be checked
        without a token. A NetworkError only marks its own entry as failed.
        """
        results: List[StreamLookup] = []
        if not names:
            return results

        for name in names:
            try:
                status = await self.resolve_one(name)
            except NetworkError as e:
                logger.warning(f"Could not resolve live status for {name}: {e.message}")
                results.append(StreamLookup(name=name, error=e.message))
                continue
            results.append(StreamLookup(name=name, status=status))

        live = sum(1 for r in results if r.is_live)
        failed = sum(1 for r in results if not r.ok)
        logger.info(f"Resolved {len(results)} streamers: {live} live, {failed} failed")
        return results
