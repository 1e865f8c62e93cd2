"""Shared utilities for MCP adapters"""

from dataclasses import dataclass
from typing import Optional

import httpx

from ..config import config
from ..services.registry_store import StreamerRegistry
from ..services.credential_cache import TwitchCredentialCache
from ..services.status_resolver import StreamStatusResolver
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Services:
    """Service instances shared by all adapters"""
    registry: StreamerRegistry
    credentials: TwitchCredentialCache
    resolver: StreamStatusResolver
    http_client: httpx.AsyncClient


_services: Optional[Services] = None


def build_services(streamers_file: Optional[str] = None,
                   http_client: Optional[httpx.AsyncClient] = None) -> Services:
    """Wire the registry, token cache and resolver from configuration

    Args:
        streamers_file: Override for the registry file path
        http_client: Override for the shared HTTP client (tests pass one
            backed by ``httpx.MockTransport``)
    """
    twitch = config.twitch
    client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(twitch.timeout))

    registry = StreamerRegistry(streamers_file or config.storage.streamers_file)
    credentials = TwitchCredentialCache(
        client_id=twitch.client_id,
        client_secret=twitch.client_secret,
        http_client=client,
        auth_url=twitch.auth_url
    )
    resolver = StreamStatusResolver(
        credentials=credentials,
        http_client=client,
        client_id=twitch.client_id,
        api_url=twitch.api_url
    )
    return Services(registry=registry, credentials=credentials,
                    resolver=resolver, http_client=client)


def get_services() -> Services:
    """Get singleton service instances, creating them on first use"""
    global _services
    if _services is None:
        _services = build_services()
    return _services


def set_services(services: Optional[Services]) -> None:
    """Replace the singleton services (None resets to lazy creation)"""
    global _services
    _services = services


async def close_services() -> None:
    """Close the shared HTTP client. Call on server shutdown."""
    global _services
    if _services is not None:
        await _services.http_client.aclose()
        _services = None
