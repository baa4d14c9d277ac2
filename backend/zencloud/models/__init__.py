"""Import all models so SQLAlchemy metadata knows about them."""
from zencloud.models.base import Base
from zencloud.models.file_record import FileRecord

__all__ = ["Base", "FileRecord"]
