from typing import Optional
from loguru import logger

from .config.settings import BlobStorageConfig, StorageConfig
from .providers.azure_providers import BlobStorageClient
from .utils.logging_config import setup_logging


def create_storage_client(connection_string: Optional[str] = None,
                          container_name: Optional[str] = None,
                          **client_options) -> BlobStorageClient:
    """
    Build a BlobStorageClient, resolving each setting from the argument first
    and then from the environment (AZURE_BLOB_CONNECTION_STRING,
    AZURE_BLOB_CONTAINER_NAME).

    Raises:
        ConfigurationException: If either value cannot be resolved
    """
    config = StorageConfig(connection_string=connection_string, container_name=container_name)
    return BlobStorageClient(config, **client_options)


class ClientManager:
    """
    Bootstrap for applications using the blob storage client.

    Reads configuration once, installs logging sinks and owns the storage
    client for the lifetime of the manager.
    """

    def __init__(self, config: Optional[BlobStorageConfig] = None, configure_logging: bool = True, **client_options):
        self.config = config or BlobStorageConfig()

        if configure_logging:
            setup_logging(self.config.logging)

        self.storage_client = BlobStorageClient(self.config.storage, **client_options)
        logger.info(f"{self.config.app_name} ready ({self.config.environment})")

    def get_storage_client(self) -> BlobStorageClient:
        """Get the storage client."""
        return self.storage_client

    async def close(self):
        await self.storage_client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
