"""Tests for the file operations over real stores."""

import asyncio
import io

import pytest
from starlette.datastructures import UploadFile

from zencloud.database import build_engine, build_session_factory
from zencloud.exceptions import BlobStoreError, FileRecordNotFound, MetadataStoreError
from zencloud.models import Base
from zencloud.services.file_service import FileService
from zencloud.services.metadata_store import MetadataStore

pytestmark = pytest.mark.anyio


def _source(content, filename='a.txt'):
    return UploadFile(file=io.BytesIO(content), filename=filename)


@pytest.fixture
async def session_factory(settings):
    """Session factory over a freshly created metadata table.

    Yields:
        async_sessionmaker bound to a temporary SQLite database.
    """
    engine = build_engine(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield build_session_factory(engine)
    await engine.dispose()


async def test_upload_then_get(session_factory, blob_store):
    """Test that an upload is retrievable by its id."""
    async with session_factory() as db:
        service = FileService(MetadataStore(db), blob_store, max_upload_bytes=1024)

        record = await service.upload('a.txt', _source(b'hello'))
        found, path = await service.locate(record.id)

    assert found.filename == 'a.txt'
    assert found.extension == '.txt'
    assert found.upload_date is not None
    assert path.read_bytes() == b'hello'


async def test_concurrent_uploads_get_distinct_ids(session_factory, blob_store):
    """Test that parallel uploads never collide and both stay readable."""

    async def upload(name, content):
        async with session_factory() as db:
            service = FileService(MetadataStore(db), blob_store, max_upload_bytes=1024)
            return await service.upload(name, _source(content, name))

    first, second = await asyncio.gather(
        upload('one.txt', b'first'),
        upload('two.txt', b'second'),
    )

    assert first.id != second.id
    assert blob_store.path_for(first.blob_name).read_bytes() == b'first'
    assert blob_store.path_for(second.blob_name).read_bytes() == b'second'


async def test_get_unknown_id(session_factory, blob_store):
    """Test that an unknown id raises FileRecordNotFound."""
    async with session_factory() as db:
        service = FileService(MetadataStore(db), blob_store, max_upload_bytes=1024)

        with pytest.raises(FileRecordNotFound):
            await service.get('does-not-exist')


async def test_delete_removes_blob_and_row(session_factory, blob_store):
    """Test that delete clears both stores."""
    async with session_factory() as db:
        service = FileService(MetadataStore(db), blob_store, max_upload_bytes=1024)
        record = await service.upload('a.txt', _source(b'hello'))

        await service.delete(record)

        assert await service.list_files() == []
    assert not blob_store.path_for(record.blob_name).exists()


async def test_delete_keeps_row_when_blob_removal_fails(session_factory, blob_store):
    """Test that a failed blob removal leaves the metadata in place."""
    async with session_factory() as db:
        service = FileService(MetadataStore(db), blob_store, max_upload_bytes=1024)
        record = await service.upload('a.txt', _source(b'hello'))
        blob_store.path_for(record.blob_name).unlink()

        with pytest.raises(BlobStoreError):
            await service.delete(record)

        assert [r.id for r in await service.list_files()] == [record.id]


async def test_upload_leaves_blob_when_insert_fails(session_factory, blob_store):
    """Test that a failed insert does not roll back the written blob."""

    class FailingMetadataStore(MetadataStore):
        async def add(self, record):
            raise MetadataStoreError('insert refused')

    async with session_factory() as db:
        service = FileService(FailingMetadataStore(db), blob_store, max_upload_bytes=1024)

        with pytest.raises(MetadataStoreError):
            await service.upload('a.txt', _source(b'hello'))

    assert len(list(blob_store.base_path.iterdir())) == 1
