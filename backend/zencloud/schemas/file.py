"""File response schemas."""
from datetime import datetime

from pydantic import BaseModel


class FileRecordResponse(BaseModel):
    id: str
    filename: str
    extension: str
    upload_date: datetime

    model_config = {"from_attributes": True}
