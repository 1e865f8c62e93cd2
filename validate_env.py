#!/usr/bin/env python3
"""
Environment validation script for the Streamer Control MCP Server
Checks required environment variables and, with --check-token, performs a
trial Twitch token exchange
"""

import argparse
import asyncio
import logging
import os
import sys

import httpx

from streamer_mcp.config import config
from streamer_mcp.protocol.errors import AuthError
from streamer_mcp.services.credential_cache import TwitchCredentialCache

logging.basicConfig(level=logging.INFO)
# httpx logs every request URL at INFO
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def validate_env() -> bool:
    """Validate required environment variables"""

    required_vars = {
        "TWITCH_CLIENT_ID": "Twitch application client ID",
        "TWITCH_CLIENT_SECRET": "Twitch application client secret",
    }

    optional_vars = {
        "STREAMERS_FILE": "Path of the tracked streamers JSON file (default: ./streamers.json)",
        "TWITCH_REQUEST_TIMEOUT": "Twitch request timeout in seconds (default: 10)",
        "LOG_LEVEL": "Logging level (default: INFO)",
    }

    errors = []
    warnings = []

    for var, description in required_vars.items():
        value = os.getenv(var)
        if not value:
            errors.append(f"❌ {var}: {description} - NOT SET")
        else:
            masked_value = value[:4] + "..." if len(value) > 4 else "***"
            logger.info(f"✅ {var}: {masked_value}")

    for var, description in optional_vars.items():
        value = os.getenv(var)
        if not value:
            warnings.append(f"⚠️  {var}: {description} - NOT SET (using default)")
        else:
            logger.info(f"✅ {var}: {value}")

    if errors:
        logger.error("\n=== VALIDATION FAILED ===")
        for error in errors:
            logger.error(error)
        logger.error("\nPlease set the required environment variables in your .env file")
        logger.error("Copy .env.example to .env and fill in the values")
        return False

    if warnings:
        logger.warning("\n=== WARNINGS ===")
        for warning in warnings:
            logger.warning(warning)

    timeout = os.getenv("TWITCH_REQUEST_TIMEOUT", "")
    if timeout:
        try:
            float(timeout)
        except ValueError:
            logger.error("❌ TWITCH_REQUEST_TIMEOUT must be a number")
            return False

    logger.info("\n✅ Environment validation passed")
    return True


async def check_token() -> bool:
    """Exchange the configured credentials for an app token once"""
    async with httpx.AsyncClient(timeout=httpx.Timeout(config.twitch.timeout)) as client:
        cache = TwitchCredentialCache(
            client_id=config.twitch.client_id,
            client_secret=config.twitch.client_secret,
            http_client=client,
            auth_url=config.twitch.auth_url
        )
        try:
            token = await cache.get_credential()
        except AuthError as e:
            logger.error(f"❌ {e.message}")
            return False

    logger.info(f"✅ Twitch app token obtained ({token[:6]}...)")
    return True


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--check-token", action="store_true",
                        help="also request a Twitch app token with the configured credentials")
    args = parser.parse_args()

    if not validate_env():
        return 1
    if args.check_token and not asyncio.run(check_token()):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
