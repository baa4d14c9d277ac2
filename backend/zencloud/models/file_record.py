"""FileRecord model - file metadata (actual bytes live in the blob store)."""
from datetime import datetime

from sqlalchemy import DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from zencloud.models.base import Base


class FileRecord(Base):
    __tablename__ = "filemeta"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    filename: Mapped[str] = mapped_column(Text)
    extension: Mapped[str] = mapped_column(Text, default="")
    upload_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    @property
    def blob_name(self) -> str:
        """Name of the blob holding this record's bytes."""
        return f"{self.id}{self.extension}"

    def __repr__(self):
        return f"<FileRecord {self.id} {self.filename!r}>"
