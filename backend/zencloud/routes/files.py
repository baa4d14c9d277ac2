"""Files API routes."""
from fastapi import APIRouter, Depends, File, HTTPException, Query, Request, UploadFile
from fastapi.responses import FileResponse, PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from zencloud.database import get_db
from zencloud.exceptions import BlobStoreError, FileRecordNotFound, MetadataStoreError, UploadTooLarge
from zencloud.models.file_record import FileRecord
from zencloud.schemas.file import FileRecordResponse
from zencloud.services.blob_store import BlobStore
from zencloud.services.file_service import FileService
from zencloud.services.metadata_store import MetadataStore

router = APIRouter(tags=["files"])


def get_file_service(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> FileService:
    """Build the operations object over this request's session."""
    blob_store: BlobStore = request.app.state.blob_store
    return FileService(
        metadata=MetadataStore(db),
        blobs=blob_store,
        max_upload_bytes=request.app.state.settings.MAX_UPLOAD_BYTES,
    )


@router.post("/upload", response_model=FileRecordResponse)
async def upload_file(
    file: UploadFile | None = File(None),
    service: FileService = Depends(get_file_service),
):
    """Upload a file and create a file record."""
    if file is None:
        raise HTTPException(status_code=400, detail="File not provided")

    try:
        record = await service.upload(file.filename or "", file)
    except UploadTooLarge as e:
        raise HTTPException(status_code=400, detail=str(e))
    except BlobStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except MetadataStoreError as e:
        raise HTTPException(status_code=500, detail=f"Database error: {e}")
    finally:
        await file.close()

    return FileRecordResponse.model_validate(record)


@router.get("/download")
async def download_file(
    file_id: str | None = Query(None, alias="id"),
    service: FileService = Depends(get_file_service),
):
    """Download a file by ID."""
    _require_id(file_id)
    try:
        record, path = await service.locate(file_id)
    except FileRecordNotFound:
        raise HTTPException(status_code=404, detail="File not found")
    except MetadataStoreError as e:
        raise HTTPException(status_code=500, detail=f"Database error: {e}")

    return FileResponse(path=path, filename=record.filename or None)


@router.get("/files", response_model=list[FileRecordResponse])
async def list_files(
    service: FileService = Depends(get_file_service),
):
    """List every file record."""
    try:
        records = await service.list_files()
    except MetadataStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [FileRecordResponse.model_validate(r) for r in records]


@router.delete("/delete", response_class=PlainTextResponse)
async def delete_file(
    file_id: str | None = Query(None, alias="id"),
    service: FileService = Depends(get_file_service),
):
    """Delete a file and its record."""
    _require_id(file_id)
    record = await _get_or_404(service, file_id)

    try:
        await service.delete(record)
    except BlobStoreError as e:
        raise HTTPException(status_code=500, detail=f"Error deleting file from disk: {e}")
    except MetadataStoreError as e:
        raise HTTPException(status_code=500, detail=f"Error deleting metadata: {e}")

    return PlainTextResponse("File deleted successfully")


def _require_id(file_id: str | None) -> None:
    if not file_id:
        raise HTTPException(status_code=400, detail="Missing id parameter")


async def _get_or_404(service: FileService, file_id: str) -> FileRecord:
    try:
        return await service.get(file_id)
    except FileRecordNotFound:
        raise HTTPException(status_code=404, detail="File not found")
    except MetadataStoreError as e:
        raise HTTPException(status_code=500, detail=f"Database error: {e}")
