"""File-backed registry of tracked streamer names"""

import asyncio
import json
import os
import tempfile
from typing import List

from ..protocol.errors import StorageError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class StreamerRegistry:
    """Ordered list of streamer names persisted as a JSON array

    Reads never fail: a missing or unreadable file is treated as an empty
    registry. Writes replace the whole file atomically.
    """

    def __init__(self, file_path: str):
        """
        Initialize registry store

        Args:
            file_path: Path of the JSON file holding the streamer list
        """
        self.file_path = os.path.abspath(file_path)
        # Held by callers around every load -> mutate -> save sequence
        self.lock = asyncio.Lock()
        logger.info(f"StreamerRegistry initialized with file: {self.file_path}")

    def load(self) -> List[str]:
        """
        Read the tracked streamers

        Returns:
            Streamer names in stored order, or an empty list if the file is
            missing or corrupt
        """
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.debug(f"Registry file {self.file_path} not found, starting empty")
            return []
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read registry file {self.file_path}: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"Registry file {self.file_path} does not hold a list, ignoring it")
            return []

        streamers = [item for item in data if isinstance(item, str)]
        if len(streamers) != len(data):
            logger.warning(f"Dropped {len(data) - len(streamers)} non-string entries from registry")
        return streamers

    def save(self, streamers: List[str]) -> None:
        """
        Overwrite the registry file with the given names

        Args:
            streamers: Streamer names in the order to store them

        Raises:
            StorageError: If the file could not be written
        """
        directory = os.path.dirname(self.file_path)
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix='.streamers-', suffix='.tmp', dir=directory)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(list(streamers), f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.file_path)
            tmp_path = None
        except OSError as e:
            logger.error(f"Failed to save registry to {self.file_path}: {e}")
            raise StorageError(self.file_path, str(e)) from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        logger.debug(f"Saved {len(streamers)} streamers to {self.file_path}")
