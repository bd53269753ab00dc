from .storage_provider import (
    BlobStorageClient,
    create_blob_service_client,
    create_container_client,
    validate_config,
)

__all__ = [
    "BlobStorageClient",
    "create_blob_service_client",
    "create_container_client",
    "validate_config",
]
