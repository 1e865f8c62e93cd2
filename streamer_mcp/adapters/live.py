"""Live status operations for MCP adapters"""

from .utils import get_services
from ..formatters.stream import format_live_status, format_live_list
from ..protocol.errors import ErrorHandler
from ..utils.logger import get_logger

logger = get_logger(__name__)


async def check_live_status(name: str) -> str:
    """Look up any channel, tracked or not

    AuthError and NetworkError propagate to the caller.
    """
    name = ErrorHandler.validate_name(name, "name")
    status = await get_services().resolver.resolve_one(name)
    logger.info(f"{name} is {'live' if status.is_live else 'offline'}")
    return format_live_status(status)


async def list_live_streamers() -> str:
    """Check every tracked streamer in registry order"""
    services = get_services()
    streamers = services.registry.load()
    if not streamers:
        return "No streamers in the list."

    lookups = await services.resolver.resolve_many(streamers)
    return format_live_list(lookups)
