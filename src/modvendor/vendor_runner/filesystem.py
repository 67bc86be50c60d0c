"""
Filesystem access used by the vendor orchestrator.

Blocking calls run in a worker thread so the event loop is never held up.
"""

import asyncio
import os
from typing import Protocol


class FileSystem(Protocol):
    async def stat(self, path: str) -> os.stat_result:
        ...

    async def ensure_dir(self, path: str) -> None:
        ...

    async def remove_if_exists(self, path: str) -> bool:
        ...


class LocalFileSystem:
    """
    FileSystem backed by the local disk.
    """

    async def stat(self, path: str) -> os.stat_result:
        """Raises FileNotFoundError when nothing exists at ``path``."""
        return await asyncio.to_thread(os.stat, path)

    async def ensure_dir(self, path: str) -> None:
        await asyncio.to_thread(os.makedirs, path, exist_ok=True)

    async def remove_if_exists(self, path: str) -> bool:
        """
        Delete the file at ``path``.

        Returns:
            True if a file was removed, False if there was nothing to remove
        """
        try:
            await asyncio.to_thread(os.remove, path)
        except FileNotFoundError:
            return False
        return True
