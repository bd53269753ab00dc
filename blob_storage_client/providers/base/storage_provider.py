from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from ...models import BatchResult, BlobItem


class StorageProvider(ABC):
    """Abstract base class for path-oriented blob storage clients."""

    @abstractmethod
    async def list(self, path: str, options: Optional[Dict[str, Any]] = None) -> List[BlobItem]:
        """List blobs whose path starts with `path` ("*" lists everything)."""
        pass

    @abstractmethod
    async def get(self, path: str, encoding: Optional[str] = None) -> BatchResult[BlobItem]:
        """Download a single blob, or every blob under a common prefix."""
        pass

    @abstractmethod
    async def save(self, path: str, content: Any, options: Optional[Dict[str, Any]] = None) -> str:
        """Upload content to `path`, overwriting any existing blob."""
        pass

    @abstractmethod
    async def remove(self, path: str, exclude_blob_names: Optional[Iterable[str]] = None,
                     options: Optional[Dict[str, Any]] = None) -> BatchResult[str]:
        """Delete every blob under `path` except the excluded names."""
        pass

    @abstractmethod
    async def move(self, source_path: str, destination_path: str,
                   save_options: Optional[Dict[str, Any]] = None,
                   remove_options: Optional[Dict[str, Any]] = None) -> str:
        """Move a single blob to a new path."""
        pass

    @abstractmethod
    async def close(self):
        """Close the underlying client and cleanup."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
