"""Blob store: uploaded file contents on the local filesystem."""
import logging
from pathlib import Path
from typing import Awaitable, Protocol

import aiofiles
import aiofiles.os

from zencloud.exceptions import BlobStoreError, UploadTooLarge

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 1024 * 1024


class AsyncReadable(Protocol):
    def read(self, size: int = -1) -> Awaitable[bytes]: ...


class BlobStore:
    """Reads and writes ``<id><extension>`` files under one directory."""

    def __init__(self, base_path: str | Path):
        self.base_path = Path(base_path)

    def ensure_dir(self) -> None:
        self.base_path.mkdir(parents=True, exist_ok=True)

    def path_for(self, blob_name: str) -> Path:
        return self.base_path / blob_name

    async def exists(self, blob_name: str) -> bool:
        return await aiofiles.os.path.isfile(self.path_for(blob_name))

    async def save(self, blob_name: str, source: AsyncReadable, max_bytes: int) -> int:
        """Copy ``source`` into a new blob. Returns the number of bytes written.

        Raises UploadTooLarge (after removing the partial blob) once more than
        ``max_bytes`` have been read, and BlobStoreError on any OS failure.
        """
        path = self.path_for(blob_name)
        written = 0
        try:
            async with aiofiles.open(path, "wb") as dst:
                while True:
                    chunk = await source.read(COPY_CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > max_bytes:
                        raise UploadTooLarge(max_bytes)
                    await dst.write(chunk)
        except UploadTooLarge:
            await self._discard(path)
            raise
        except OSError as e:
            logger.error("Failed to write blob %s: %s", path, e)
            raise BlobStoreError(str(e)) from e
        return written

    async def delete(self, blob_name: str) -> None:
        """Remove a blob. A missing blob is an error, like any other OS failure."""
        path = self.path_for(blob_name)
        try:
            await aiofiles.os.remove(path)
        except OSError as e:
            logger.error("Failed to delete blob %s: %s", path, e)
            raise BlobStoreError(str(e)) from e

    async def _discard(self, path: Path) -> None:
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            pass
