"""
Filesystem access for template generation
Blocking calls run in a worker thread so the event loop stays free
"""
import asyncio
import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)


class LocalFileSystem:
    """Writes generated project files to the local disk"""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding
        self._files_written = 0
        self._directories_ensured = 0

    async def ensure_directory(self, path: str):
        """Create a directory and its parents; no error if it already exists"""
        await asyncio.to_thread(os.makedirs, path, exist_ok=True)
        self._directories_ensured += 1

    async def write_file(self, path: str, content: str):
        """Write text content, replacing any existing file"""
        await asyncio.to_thread(self._write_text, path, content)
        self._files_written += 1
        logger.debug(f"Wrote {path}")

    async def write_structured_file(self, path: str, data: Any):
        """Write an object as JSON with 2-space indentation"""
        await self.write_file(path, json.dumps(data, indent=2) + "\n")

    def _write_text(self, path: str, content: str):
        with open(path, "w", encoding=self.encoding) as handle:
            handle.write(content)

    def get_statistics(self) -> dict:
        return {
            "files_written": self._files_written,
            "directories_ensured": self._directories_ensured,
        }
