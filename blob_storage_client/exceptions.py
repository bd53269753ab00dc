from typing import Dict, Optional


class BlobStorageException(Exception):
    """Base exception for the blob storage client."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ProviderException(BlobStorageException):
    """Raised when the storage service or its SDK fails."""
    pass


class ConfigurationException(BlobStorageException):
    """Raised when configuration is invalid."""
    pass


class ValidationException(BlobStorageException):
    """Raised when input validation fails."""
    pass


class ResourceNotFoundException(BlobStorageException):
    """Raised when requested blob or folder is not found."""
    pass
