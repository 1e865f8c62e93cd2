"""Data models for Streamer Control MCP"""

from .stream import StreamStatus, StreamLookup

__all__ = [
    'StreamStatus',
    'StreamLookup'
]
