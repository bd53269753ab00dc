"""Path-oriented CRUD client for an Azure Blob Storage container."""

from .client_manager import ClientManager, create_storage_client
from .config import BlobStorageConfig, LoggingConfig, StorageConfig
from .exceptions import (
    BlobStorageException,
    ConfigurationException,
    ProviderException,
    ResourceNotFoundException,
    ValidationException,
)
from .models import BatchResult, BlobFailure, BlobItem, DataUrl, StructuredContent, TextContent
from .providers import BlobStorageClient, StorageProvider, create_blob_service_client, create_container_client

__version__ = "1.0.0"

__all__ = [
    "BlobStorageClient",
    "StorageProvider",
    "ClientManager",
    "create_storage_client",
    "create_blob_service_client",
    "create_container_client",
    "BlobStorageConfig",
    "LoggingConfig",
    "StorageConfig",
    "BlobStorageException",
    "ConfigurationException",
    "ProviderException",
    "ResourceNotFoundException",
    "ValidationException",
    "BatchResult",
    "BlobFailure",
    "BlobItem",
    "DataUrl",
    "StructuredContent",
    "TextContent",
]
