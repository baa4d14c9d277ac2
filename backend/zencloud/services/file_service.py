"""Upload, download, list and delete, composed over the blob and metadata stores.

Neither two-step sequence is atomic. Upload writes the blob and then inserts
the row; delete removes the blob and then the row. A failure between the two
steps leaves an orphaned blob or row behind, and nothing reconciles it. Both
sequences live here so a compensating step only has to be added in one place.

Identifiers are random UUID4 strings. Uniqueness is assumed, not checked; a
collision would surface as a primary-key error from the metadata store.
"""
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path

from zencloud.exceptions import FileRecordNotFound
from zencloud.models.file_record import FileRecord
from zencloud.services.blob_store import AsyncReadable, BlobStore
from zencloud.services.metadata_store import MetadataStore

logger = logging.getLogger(__name__)


def derive_extension(filename: str) -> str:
    """Return the suffix of the last path element from its final dot, or ''.

    >>> derive_extension("archive.tar.gz")
    '.gz'
    >>> derive_extension(".bashrc")
    '.bashrc'
    >>> derive_extension("dir.d/README")
    ''
    """
    name = filename.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


class FileService:
    def __init__(self, metadata: MetadataStore, blobs: BlobStore, max_upload_bytes: int):
        self.metadata = metadata
        self.blobs = blobs
        self.max_upload_bytes = max_upload_bytes

    async def upload(self, filename: str, source: AsyncReadable) -> FileRecord:
        """Store the bytes of ``source`` and record them under a new id."""
        record = FileRecord(
            id=str(uuid.uuid4()),
            filename=filename,
            extension=derive_extension(filename),
        )
        size = await self.blobs.save(record.blob_name, source, self.max_upload_bytes)
        record.upload_date = datetime.now(timezone.utc)
        await self.metadata.add(record)
        logger.info(f"Stored {record.filename!r} as {record.blob_name} ({size} bytes)")
        return record

    async def get(self, file_id: str) -> FileRecord:
        record = await self.metadata.get(file_id)
        if record is None:
            raise FileRecordNotFound(file_id)
        return record

    async def locate(self, file_id: str) -> tuple[FileRecord, Path]:
        """Find a file's record and the on-disk path of its bytes.

        A row whose blob has gone missing is reported as not found.
        """
        record = await self.get(file_id)
        if not await self.blobs.exists(record.blob_name):
            logger.warning(f"File record {file_id} has no blob at {record.blob_name}")
            raise FileRecordNotFound(file_id)
        return record, self.blobs.path_for(record.blob_name)

    async def list_files(self) -> list[FileRecord]:
        return await self.metadata.list_all()

    async def delete(self, record: FileRecord) -> None:
        """Remove the blob, then the row. The row stays if the blob removal fails."""
        await self.blobs.delete(record.blob_name)
        await self.metadata.delete(record.id)
        logger.info(f"Deleted file {record.id}")
