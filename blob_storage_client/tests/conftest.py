"""
Shared fixtures for the blob storage client tests.

The Azure SDK container client is replaced by an in-memory fake that
implements the handful of async calls the client makes (exists, list,
download, upload, delete), so no test touches the network.
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest
from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from loguru import logger

from blob_storage_client.config.settings import StorageConfig
from blob_storage_client.providers.azure_providers import BlobStorageClient

CONNECTION_STRING = (
    "DefaultEndpointsProtocol=https;AccountName=devaccount;"
    "AccountKey=ZGV2a2V5;EndpointSuffix=core.windows.net"
)


class FakeDownloader:
    def __init__(self, data: bytes):
        self._data = data

    async def readall(self) -> bytes:
        return self._data


class FakeBlobClient:
    def __init__(self, container: "FakeContainerClient", name: str):
        self.container = container
        self.blob_name = name

    async def exists(self) -> bool:
        return self.blob_name in self.container.store

    async def download_blob(self, **kwargs) -> FakeDownloader:
        if self.blob_name in self.container.download_errors:
            raise self.container.download_errors[self.blob_name]
        if self.blob_name not in self.container.store:
            raise ResourceNotFoundError(message=f"The specified blob does not exist: {self.blob_name}")
        return FakeDownloader(self.container.store[self.blob_name])

    async def upload_blob(self, data, blob_type=None, length=None, metadata=None, overwrite=False, **kwargs):
        self.container.uploads.append(
            {"name": self.blob_name, "data": data, "metadata": metadata, "overwrite": overwrite, **kwargs}
        )
        if self.container.upload_error is not None:
            raise self.container.upload_error
        if not overwrite and self.blob_name in self.container.store:
            raise ResourceExistsError(message="The specified blob already exists.")
        self.container.store[self.blob_name] = bytes(data)
        self.container.metadata[self.blob_name] = metadata
        return {"etag": "0x1"}

    async def delete_blob(self, **kwargs):
        self.container.deletes.append({"name": self.blob_name, **kwargs})
        if self.blob_name in self.container.delete_errors:
            raise self.container.delete_errors[self.blob_name]
        if self.blob_name not in self.container.store:
            raise ResourceNotFoundError(message=f"The specified blob does not exist: {self.blob_name}")
        del self.container.store[self.blob_name]
        self.container.metadata.pop(self.blob_name, None)


class FakeContainerClient:
    """In-memory stand-in for azure.storage.blob.aio.ContainerClient."""

    def __init__(self):
        self.store: Dict[str, bytes] = {}
        self.metadata: Dict[str, Optional[Dict[str, str]]] = {}
        self.uploads: List[dict] = []
        self.deletes: List[dict] = []
        self.list_calls: List[dict] = []
        self.download_errors: Dict[str, Exception] = {}
        self.delete_errors: Dict[str, Exception] = {}
        self.upload_error: Optional[Exception] = None
        self.list_error: Optional[Exception] = None
        self.closed = False

    def put(self, name: str, data) -> None:
        self.store[name] = data.encode("utf-8") if isinstance(data, str) else data

    def get_blob_client(self, blob: str) -> FakeBlobClient:
        return FakeBlobClient(self, blob)

    def list_blobs(self, name_starts_with: Optional[str] = None, **kwargs):
        self.list_calls.append({"name_starts_with": name_starts_with, **kwargs})
        prefix = name_starts_with or ""
        names = sorted(name for name in self.store if name.startswith(prefix))

        async def _pages():
            if self.list_error is not None:
                raise self.list_error
            for name in names:
                yield SimpleNamespace(
                    name=name,
                    blob_type="BlockBlob",
                    creation_time=datetime(2024, 1, 2, tzinfo=timezone.utc),
                    last_modified=datetime(2024, 1, 3, tzinfo=timezone.utc),
                    last_accessed_on=None,
                    size=len(self.store[name]),
                    content_settings=SimpleNamespace(content_type="application/octet-stream"),
                    metadata=self.metadata.get(name) or {},
                )

        return _pages()

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_container() -> FakeContainerClient:
    return FakeContainerClient()


@pytest.fixture
def storage_config() -> StorageConfig:
    return StorageConfig(connection_string=CONNECTION_STRING, container_name="unit-tests")


@pytest.fixture
def client(storage_config, fake_container) -> BlobStorageClient:
    return BlobStorageClient(storage_config, container_client=fake_container)


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "AZURE_BLOB_CONNECTION_STRING",
        "AZURE_BLOB_CONNECTIONSTRING",
        "AZURE_BLOB_CONTAINER_NAME",
        "AZURE_BLOB_CONTAINERNAME",
        "AZURE_BLOB_ENCODING",
        "CONNECTION_STRING",
        "CONTAINER_NAME",
        "ENCODING",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def log_messages():
    messages = []
    sink_id = logger.add(lambda message: messages.append(str(message)), level="DEBUG", format="{level} {message}")
    yield messages
    logger.remove(sink_id)
