"""Logging utilities for MCP Server"""

import logging
import sys
import json
import os
from datetime import datetime, timezone
from typing import Optional, Dict, Any


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a configured logger instance

    Args:
        name: Logger name (usually __name__)
        level: Optional log level override

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if level:
        log_level = getattr(logging, level.upper(), logging.INFO)
        logger.setLevel(log_level)

    return logger


def setup_mcp_logging(debug: bool = False, log_file: Optional[str] = None):
    """
    Setup logging appropriate for MCP server

    MCP servers should only output JSON-RPC messages to stdout,
    so we redirect all logging to stderr.

    Args:
        debug: Enable debug logging
        log_file: Optional file to mirror log records into
    """
    log_level_str = os.getenv('LOG_LEVEL', 'INFO').upper()
    log_level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    if debug:
        log_level = logging.DEBUG

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # stderr only, stdout belongs to JSON-RPC
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(log_level)
    stderr_handler.setFormatter(formatter)
    root_logger.addHandler(stderr_handler)

    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(f"Could not create log file {log_file}: {e}")

    # Suppress noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return root_logger


class MCPOperationsLogger:
    """Structured JSON logging of MCP tool calls"""

    def __init__(self):
        self.debug_level = os.getenv('MCP_DEBUG_LEVEL', 'BASIC').upper()
        self.max_log_size = int(os.getenv('MCP_LOG_MAX_SIZE', '2000'))
        self.logger = logging.getLogger('mcp_operations')

    def _truncate_data(self, data: Any) -> Any:
        """Truncate large data structures for logging"""
        json_str = json.dumps(data, default=str)
        if len(json_str) <= self.max_log_size:
            return data

        truncated_str = json_str[:self.max_log_size] + '...[TRUNCATED]'
        return {"_truncated": True, "_size": len(json_str), "_data": truncated_str}

    @staticmethod
    def _timestamp() -> str:
        return datetime.now(timezone.utc).isoformat()

    def log_tool_request(self, tool_name: str, request_data: Dict[str, Any]):
        """Log MCP tool request"""
        if self.debug_level == 'BASIC':
            return

        log_entry = {
            "timestamp": self._timestamp(),
            "event_type": "mcp_request",
            "tool": tool_name,
            "request": self._truncate_data(request_data)
        }

        self.logger.info(f"[REQUEST] {json.dumps(log_entry, separators=(',', ':'))}")

    def log_tool_response(self, tool_name: str, response_text: str,
                          execution_time_ms: float, status: str = "success"):
        """Log MCP tool response with execution time"""
        log_entry = {
            "timestamp": self._timestamp(),
            "event_type": "mcp_response",
            "tool": tool_name,
            "execution_time_ms": round(execution_time_ms, 2),
            "status": status,
            "response": response_text if self.debug_level == 'FULL' else response_text[:200]
        }

        self.logger.info(f"[RESPONSE] {json.dumps(log_entry, separators=(',', ':'))}")

    def log_tool_error(self, tool_name: str, error: Exception, execution_time_ms: float):
        """Log MCP tool error"""
        log_entry = {
            "timestamp": self._timestamp(),
            "event_type": "mcp_error",
            "tool": tool_name,
            "execution_time_ms": round(execution_time_ms, 2),
            "status": "error",
            "error": {
                "type": type(error).__name__,
                "message": str(error)[:500]
            }
        }

        self.logger.error(f"[ERROR] {json.dumps(log_entry, separators=(',', ':'))}")


# Global instance
_mcp_operations_logger = None


def get_mcp_operations_logger() -> MCPOperationsLogger:
    """Get global MCP operations logger instance"""
    global _mcp_operations_logger
    if _mcp_operations_logger is None:
        _mcp_operations_logger = MCPOperationsLogger()
    return _mcp_operations_logger
