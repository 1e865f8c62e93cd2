#!/usr/bin/env python3
"""
Streamer Control MCP Server - FastMCP Implementation

Tracks a list of Twitch streamers and answers whether they are live.

Tools:
- add-streamer / update-streamer / delete-streamer / list-streamers
  manage the tracked list stored in STREAMERS_FILE
- check-live-status looks up any channel on Twitch
- list-live-streamers checks every tracked streamer

Registry misses ("not found", "already exists") come back as normal text.
Authentication, Twitch API and storage write failures are tool errors.
"""

import json
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from .adapters.streamers import (
    add_streamer as add_adapter,
    update_streamer as update_adapter,
    delete_streamer as delete_adapter,
    list_streamers as list_adapter,
    get_streamers
)
from .adapters.live import (
    check_live_status as check_live_adapter,
    list_live_streamers as list_live_adapter
)
from .adapters.utils import close_services
from .config import config
from .protocol.errors import ErrorHandler
from .utils import setup_mcp_logging, get_logger, get_mcp_operations_logger

logger = get_logger(__name__)
mcp_ops_logger = get_mcp_operations_logger()

SERVER_NAME = "streamer-control"
SERVER_VERSION = "1.0.0"


@asynccontextmanager
async def server_lifespan(server: FastMCP) -> AsyncIterator[None]:
    try:
        yield
    finally:
        await close_services()
        logger.info("HTTP client closed")


mcp = FastMCP(SERVER_NAME, lifespan=server_lifespan)


async def handle_tool_execution(tool_name: str, adapter_func, **kwargs) -> str:
    """Run an adapter with request/response logging

    Failures are re-raised as ToolError so the client receives an error
    result instead of normal text.
    """
    start_time = time.time()
    mcp_ops_logger.log_tool_request(tool_name, {"parameters": kwargs})
    logger.debug(f"[{tool_name}] Parameters: {json.dumps(kwargs, default=str)}")

    try:
        result = await adapter_func(**kwargs)
    except Exception as e:
        execution_time_ms = (time.time() - start_time) * 1000
        error = ErrorHandler.wrap_exception(e)
        mcp_ops_logger.log_tool_error(tool_name, error, execution_time_ms)
        logger.error(f"[{tool_name}] {error.message} (after {execution_time_ms:.2f}ms)",
                     exc_info=error is not e)
        raise ToolError(error.message) from e

    execution_time_ms = (time.time() - start_time) * 1000
    mcp_ops_logger.log_tool_response(tool_name, result, execution_time_ms)
    logger.info(f"[{tool_name}] Execution successful in {execution_time_ms:.2f}ms")
    return result


# ============================================================================
# REGISTRY TOOLS
# ============================================================================

@mcp.tool(name="add-streamer", description="Adds a new streamer to the list")
async def add_streamer(name: str) -> str:
    """Add a streamer by channel name."""
    return await handle_tool_execution("add-streamer", add_adapter, name=name)


@mcp.tool(name="update-streamer", description="Updates an existing streamer's name")
async def update_streamer(oldName: str, newName: str) -> str:
    """Rename a tracked streamer, keeping its position in the list."""
    return await handle_tool_execution("update-streamer", update_adapter,
                                       old_name=oldName, new_name=newName)


@mcp.tool(name="delete-streamer", description="Deletes a streamer from the list")
async def delete_streamer(name: str) -> str:
    """Remove a streamer from the tracked list."""
    return await handle_tool_execution("delete-streamer", delete_adapter, name=name)


@mcp.tool(name="list-streamers", description="Lists all current streamers")
async def list_streamers() -> str:
    """List tracked streamers."""
    return await handle_tool_execution("list-streamers", list_adapter)


# ============================================================================
# LIVE STATUS TOOLS
# ============================================================================

@mcp.tool(
    name="check-live-status",
    description="Checks if a given streamer is currently live on Twitch and returns stream info if live."
)
async def check_live_status(name: str) -> str:
    """Check one channel; it does not have to be in the tracked list."""
    return await handle_tool_execution("check-live-status", check_live_adapter, name=name)


@mcp.tool(
    name="list-live-streamers",
    description="Returns the list of streamers from your list who are currently live on Twitch"
)
async def list_live_streamers() -> str:
    """Check every tracked streamer."""
    return await handle_tool_execution("list-live-streamers", list_live_adapter)


# ============================================================================
# RESOURCES
# ============================================================================

@mcp.resource("streamers://list")
async def streamers_resource() -> str:
    """Tracked streamers as a JSON array"""
    return json.dumps(get_streamers(), ensure_ascii=False)


# ============================================================================
# MAIN SERVER RUNNER
# ============================================================================

def main():
    """Main entry point"""
    setup_mcp_logging(debug=config.logging.level.upper() == "DEBUG",
                      log_file=config.logging.file)

    if not config.validate():
        # Registry tools still work; live status tools will fail with AuthError
        logger.warning("Twitch credentials missing, live status tools are unavailable")

    logger.info("=" * 60)
    logger.info(f"Streamer Control MCP Server {SERVER_VERSION} (FastMCP)")
    logger.info("=" * 60)
    logger.info(f"Registry file: {config.storage.streamers_file}")
    logger.info(f"Twitch API: {config.twitch.api_url}")
    logger.debug(f"Configuration: {config.to_dict()}")
    logger.info("Total Tools: 6 (Registry: 4, Live status: 2)")
    logger.info("STDIO transport ready for MCP client connection")

    try:
        mcp.run()
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")


if __name__ == "__main__":
    main()
