"""Provider system for the blob storage client."""

from .base import StorageProvider
from .azure_providers import (
    BlobStorageClient,
    create_blob_service_client,
    create_container_client,
)

__all__ = [
    # Base classes
    'StorageProvider',
    # Azure providers
    'BlobStorageClient',
    'create_blob_service_client',
    'create_container_client',
]
