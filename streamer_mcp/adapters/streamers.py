"""Registry operations for MCP adapters

Every mutation runs load -> mutate -> save under the registry lock; the
save runs in a worker thread.
"Not found" and "already exists" are ordinary results, not errors.
"""

import asyncio
from typing import List

from .utils import get_services
from ..formatters.stream import format_streamer_list
from ..protocol.errors import ErrorHandler
from ..utils.logger import get_logger

logger = get_logger(__name__)


async def add_streamer(name: str) -> str:
    """Append a streamer unless an identical name is already tracked"""
    name = ErrorHandler.validate_name(name, "name")
    registry = get_services().registry

    async with registry.lock:
        streamers = registry.load()
        if name in streamers:
            logger.info(f"Streamer {name} already tracked")
            return f'Streamer "{name}" already exists.'

        streamers.append(name)
        await asyncio.to_thread(registry.save, streamers)

    logger.info(f"Added streamer {name} ({len(streamers)} tracked)")
    return f'Streamer "{name}" added.'


async def update_streamer(old_name: str, new_name: str) -> str:
    """Rename a tracked streamer in place

    Renaming onto another tracked name is refused so the registry stays
    free of duplicates.
    """
    old_name = ErrorHandler.validate_name(old_name, "oldName")
    new_name = ErrorHandler.validate_name(new_name, "newName")
    registry = get_services().registry

    async with registry.lock:
        streamers = registry.load()
        if old_name not in streamers:
            return f'Streamer "{old_name}" not found.'

        index = streamers.index(old_name)
        if new_name != old_name and new_name in streamers:
            logger.info(f"Refusing rename {old_name} -> {new_name}: target already tracked")
            return f'Streamer "{new_name}" already exists.'

        streamers[index] = new_name
        await asyncio.to_thread(registry.save, streamers)

    logger.info(f"Renamed streamer {old_name} -> {new_name}")
    return f'Streamer "{old_name}" updated to "{new_name}".'


async def delete_streamer(name: str) -> str:
    """Remove the first matching streamer"""
    name = ErrorHandler.validate_name(name, "name")
    registry = get_services().registry

    async with registry.lock:
        streamers = registry.load()
        if name not in streamers:
            return f'Streamer "{name}" not found.'

        streamers.remove(name)
        await asyncio.to_thread(registry.save, streamers)

    logger.info(f"Deleted streamer {name} ({len(streamers)} tracked)")
    return f'Streamer "{name}" deleted.'


def get_streamers() -> List[str]:
    return get_services().registry.load()


async def list_streamers() -> str:
    return format_streamer_list(get_streamers())
