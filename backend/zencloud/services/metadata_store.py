"""Metadata store: FileRecord rows in the ``filemeta`` table."""
import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from zencloud.exceptions import MetadataStoreError
from zencloud.models.file_record import FileRecord

logger = logging.getLogger(__name__)


class MetadataStore:
    """Parameterized insert/select/delete over one session.

    Driver connection failures (``OSError`` from asyncpg) are reported the same
    way as SQLAlchemy errors, as MetadataStoreError.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, record: FileRecord) -> FileRecord:
        self.db.add(record)
        try:
            await self.db.commit()
        except (SQLAlchemyError, OSError) as e:
            await self.db.rollback()
            logger.error(f"Failed to insert file record {record.id}: {e}")
            raise MetadataStoreError(str(e)) from e
        return record

    async def get(self, file_id: str) -> FileRecord | None:
        try:
            result = await self.db.execute(
                select(FileRecord).where(FileRecord.id == file_id)
            )
        except (SQLAlchemyError, OSError) as e:
            raise MetadataStoreError(str(e)) from e
        return result.scalar_one_or_none()

    async def list_all(self) -> list[FileRecord]:
        try:
            result = await self.db.execute(
                select(FileRecord).order_by(FileRecord.upload_date, FileRecord.id)
            )
        except (SQLAlchemyError, OSError) as e:
            raise MetadataStoreError(str(e)) from e
        return list(result.scalars().all())

    async def delete(self, file_id: str) -> None:
        try:
            await self.db.execute(delete(FileRecord).where(FileRecord.id == file_id))
            await self.db.commit()
        except (SQLAlchemyError, OSError) as e:
            await self.db.rollback()
            logger.error(f"Failed to delete file record {file_id}: {e}")
            raise MetadataStoreError(str(e)) from e
