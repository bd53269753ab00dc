from .settings import BlobStorageConfig, LoggingConfig, StorageConfig

__all__ = ["BlobStorageConfig", "LoggingConfig", "StorageConfig"]
