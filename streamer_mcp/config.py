"""Configuration management for Streamer Control MCP Server"""

import os
from dataclasses import dataclass
from typing import Optional, Dict, Any, List, Tuple
from dotenv import load_dotenv
import logging

# Load environment variables
load_dotenv()

# Note: logging is configured by setup_mcp_logging() at server start.
# MCP servers must keep stdout clean for JSON-RPC communication


@dataclass
class TwitchConfig:
    """Twitch API configuration"""
    client_id: Optional[str]
    client_secret: Optional[str]
    auth_url: str = "https://id.twitch.tv/oauth2/token"
    api_url: str = "https://api.twitch.tv/helix"
    timeout: float = 10.0


@dataclass
class StorageConfig:
    """Registry storage configuration"""
    streamers_file: str = "./streamers.json"


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _parse_timeout(raw: Optional[str], default: float = 10.0) -> Tuple[float, Optional[str]]:
    """Parse a timeout in seconds, falling back to the default on bad input"""
    if raw is None or not raw.strip():
        return default, None
    try:
        return float(raw), None
    except ValueError:
        return default, f"TWITCH_REQUEST_TIMEOUT must be a number, got {raw!r}"


def _mask(value: Optional[str]) -> str:
    if not value:
        return "<not set>"
    return value[:4] + "..." if len(value) > 4 else "***"


class Config:
    """Main configuration class"""

    def __init__(self):
        # Problems found while reading the environment, reported by validate()
        self.env_errors: List[str] = []

        timeout, timeout_error = _parse_timeout(os.getenv("TWITCH_REQUEST_TIMEOUT"))
        if timeout_error:
            self.env_errors.append(timeout_error)

        self.twitch = TwitchConfig(
            client_id=os.getenv("TWITCH_CLIENT_ID"),
            client_secret=os.getenv("TWITCH_CLIENT_SECRET"),
            auth_url=os.getenv("TWITCH_AUTH_URL", "https://id.twitch.tv/oauth2/token"),
            api_url=os.getenv("TWITCH_API_URL", "https://api.twitch.tv/helix").rstrip("/"),
            timeout=timeout
        )

        self.storage = StorageConfig(
            streamers_file=os.path.expanduser(os.getenv("STREAMERS_FILE", "./streamers.json"))
        )

        self.logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            file=os.getenv("LOG_FILE")
        )

    def validate(self) -> bool:
        """Validate configuration"""
        errors = list(self.env_errors)

        if not self.twitch.client_id:
            errors.append("TWITCH_CLIENT_ID is required")
        if not self.twitch.client_secret:
            errors.append("TWITCH_CLIENT_SECRET is required")
        if self.twitch.timeout <= 0:
            errors.append("TWITCH_REQUEST_TIMEOUT must be positive")
        if not self.storage.streamers_file:
            errors.append("STREAMERS_FILE must not be empty")

        if errors:
            for error in errors:
                logging.error(f"Configuration error: {error}")
            return False

        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary (secrets masked)"""
        return {
            "twitch": {
                "client_id": _mask(self.twitch.client_id),
                "client_secret": _mask(self.twitch.client_secret),
                "auth_url": self.twitch.auth_url,
                "api_url": self.twitch.api_url,
                "timeout": self.twitch.timeout
            },
            "storage": {
                "streamers_file": self.storage.streamers_file
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file
            }
        }


# Global configuration instance
config = Config()
