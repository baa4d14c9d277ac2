"""Exceptions raised by the file services."""


class FileRecordNotFound(Exception):
    """Raised when no file with the given id is known."""

    def __init__(self, file_id: str) -> None:
        self.file_id = file_id
        super().__init__(f"File not found: {file_id}")


class UploadTooLarge(Exception):
    """Raised when an upload grows past the configured size cap."""

    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes
        super().__init__(f"Upload exceeds maximum size of {max_bytes} bytes")


class BlobStoreError(Exception):
    """Raised when the blob directory cannot be written or cleaned up."""


class MetadataStoreError(Exception):
    """Raised when a metadata query or commit fails."""
