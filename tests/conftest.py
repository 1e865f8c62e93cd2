"""Shared fixtures: a fake Twitch backend served through httpx.MockTransport."""

from typing import Dict, List, Set

import httpx
import pytest

from streamer_mcp.adapters.utils import Services, set_services
from streamer_mcp.services import StreamerRegistry, StreamStatusResolver, TwitchCredentialCache

AUTH_URL = "https://id.twitch.tv/oauth2/token"
API_URL = "https://api.twitch.tv/helix"
CLIENT_ID = "test-client-id"
CLIENT_SECRET = "test-client-secret"


def helix_stream(login: str, **overrides) -> Dict:
    stream = {
        "id": "40952121085",
        "user_id": "101051819",
        "user_login": login,
        "user_name": login.capitalize(),
        "game_id": "743",
        "game_name": "Chess",
        "type": "live",
        "title": "Rapid games",
        "viewer_count": 120,
        "started_at": "2026-10-17T18:00:00Z",
        "language": "en",
        "thumbnail_url": f"https://static-cdn.jtvnw.net/previews-ttv/live_user_{login}-{{width}}x{{height}}.jpg",
    }
    stream.update(overrides)
    return stream


class FakeTwitch:
    """Minimal stand-in for the Twitch OAuth and Helix streams endpoints"""

    def __init__(self):
        self.live: Dict[str, Dict] = {}
        self.unreachable: Set[str] = set()
        self.rejected_tokens: Set[str] = set()
        # login -> canned Helix response, served after the token check
        self.responses: Dict[str, httpx.Response] = {}
        self.auth_status = 200
        self.auth_body = None
        self.auth_calls = 0
        self.stream_calls: List[str] = []
        self.auth_requests: List[httpx.Request] = []
        self.stream_requests: List[httpx.Request] = []

    def go_live(self, login: str, **overrides) -> None:
        self.live[login] = helix_stream(login, **overrides)

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "id.twitch.tv":
            return self._token(request)
        if request.url.path.endswith("/streams"):
            return self._streams(request)
        return httpx.Response(404, json={"message": "not found"})

    def _token(self, request: httpx.Request) -> httpx.Response:
        self.auth_calls += 1
        self.auth_requests.append(request)
        if self.auth_status != 200:
            return httpx.Response(self.auth_status,
                                  json={"status": self.auth_status, "message": "invalid client secret"})
        if self.auth_body is not None:
            return httpx.Response(200, json=self.auth_body)
        return httpx.Response(200, json={
            "access_token": f"token-{self.auth_calls}",
            "expires_in": 5011271,
            "token_type": "bearer",
        })

    def _streams(self, request: httpx.Request) -> httpx.Response:
        login = request.url.params["user_login"]
        self.stream_calls.append(login)
        self.stream_requests.append(request)

        token = request.headers.get("Authorization", "").removeprefix("Bearer ")
        if token in self.rejected_tokens:
            return httpx.Response(401, json={"error": "Unauthorized", "status": 401,
                                             "message": "Invalid OAuth token"})
        if login in self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)
        if login in self.responses:
            return self.responses[login]

        data = [self.live[login]] if login in self.live else []
        return httpx.Response(200, json={"data": data, "pagination": {}})


@pytest.fixture
def fake_twitch() -> FakeTwitch:
    return FakeTwitch()


@pytest.fixture
async def http_client(fake_twitch):
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake_twitch.handler))
    yield client
    await client.aclose()


@pytest.fixture
def registry(tmp_path) -> StreamerRegistry:
    return StreamerRegistry(str(tmp_path / "streamers.json"))


@pytest.fixture
def credentials(http_client) -> TwitchCredentialCache:
    return TwitchCredentialCache(CLIENT_ID, CLIENT_SECRET, http_client, AUTH_URL)


@pytest.fixture
def resolver(credentials, http_client) -> StreamStatusResolver:
    return StreamStatusResolver(credentials, http_client, CLIENT_ID, API_URL)


@pytest.fixture
def services(registry, credentials, resolver, http_client):
    """Install test services as the adapter singletons"""
    svc = Services(registry=registry, credentials=credentials,
                   resolver=resolver, http_client=http_client)
    set_services(svc)
    yield svc
    set_services(None)
