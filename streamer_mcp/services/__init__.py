"""Services: registry storage, token caching and live status resolution"""

from .registry_store import StreamerRegistry
from .credential_cache import TwitchCredentialCache
from .status_resolver import StreamStatusResolver

__all__ = [
    'StreamerRegistry',
    'TwitchCredentialCache',
    'StreamStatusResolver'
]
