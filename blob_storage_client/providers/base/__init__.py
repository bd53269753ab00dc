from .storage_provider import StorageProvider

__all__ = [
    'StorageProvider',
]
