import json
from typing import Any, Dict, Iterable, List, Optional

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.storage.blob import BlobType
from azure.storage.blob.aio import BlobServiceClient, ContainerClient
from loguru import logger

from ...config.settings import StorageConfig
from ...exceptions import ConfigurationException, ProviderException, ValidationException
from ...exceptions import ResourceNotFoundException
from ...models import BatchResult, BlobFailure, BlobItem, DataUrl, StructuredContent, TextContent
from ...utils.data_url import JSON_MIME_TYPE, is_json, parse_data_url, to_json_data_url
from ...utils.error_handler import ErrorHandler, convert_exceptions, log_exceptions
from ...utils.validation import (
    UNALLOWED_PATH_CHARACTERS,
    as_content,
    blob_extension,
    blob_name,
    require_path,
    to_prefix,
    validate_save_path,
)
from ..base import StorageProvider


def validate_config(config: Optional[StorageConfig]) -> StorageConfig:
    """Fail fast unless both the connection string and container name are set."""
    if config is None or not config.connection_string:
        raise ConfigurationException("Connection string for Azure Blob Storage is not provided")
    if not config.container_name:
        raise ConfigurationException("Container name for Azure Blob Storage is not provided")
    return config


def create_blob_service_client(config: StorageConfig, **kwargs) -> BlobServiceClient:
    """
    Create a BlobServiceClient, useful for lower level API access.
    Not necessary for the CRUD operations of BlobStorageClient.
    """
    if config is None or not config.connection_string:
        raise ConfigurationException("Connection string for Azure Blob Storage is not provided")
    return BlobServiceClient.from_connection_string(config.connection_string, **kwargs)


def create_container_client(config: StorageConfig, **kwargs) -> ContainerClient:
    """Create a container-scoped client from a validated configuration."""
    config = validate_config(config)
    return ContainerClient.from_connection_string(
        config.connection_string, config.container_name, **kwargs
    )


def _to_blob_item(blob) -> BlobItem:
    """Translate SDK BlobProperties into a metadata-only BlobItem."""
    blob_type = getattr(blob, "blob_type", None)
    content_settings = getattr(blob, "content_settings", None)
    return BlobItem(
        name=blob_name(blob.name),
        path=blob.name,
        blob_type=getattr(blob_type, "value", blob_type),
        created_on=getattr(blob, "creation_time", None),
        last_modified=getattr(blob, "last_modified", None),
        last_accessed_on=getattr(blob, "last_accessed_on", None),
        size=getattr(blob, "size", None),
        content_type=getattr(content_settings, "content_type", None),
        metadata=getattr(blob, "metadata", None) or None,
    )


class BlobStorageClient(StorageProvider):
    """Convenient storage client for interacting with an Azure Blob Storage container."""

    UNALLOWED_PATH_CHARACTERS = UNALLOWED_PATH_CHARACTERS

    def __init__(self, config: StorageConfig, container_client: Optional[ContainerClient] = None, **kwargs):
        """
        Initialize the client.

        Args:
            config: Resolved StorageConfig. The environment is never consulted
                here; build the config with `StorageConfig()` or use
                `create_storage_client` to fall back to environment variables.
            container_client: Pre-built container client to use instead of
                creating one from the connection string.
            **kwargs: Passed to `ContainerClient.from_connection_string`
                (transport and pipeline options).
        """
        self.config = validate_config(config)
        self.container_client = container_client or create_container_client(self.config, **kwargs)
        logger.info(f"Initialized blob storage client for container {self.config.container_name}")

    @convert_exceptions({AzureError: ProviderException})
    async def list(self, path: str, options: Optional[Dict[str, Any]] = None) -> List[BlobItem]:
        """List blob metadata for every blob whose path starts with `path`."""
        require_path(path, "list blobs")
        options = dict(options or {})
        options["name_starts_with"] = to_prefix(path)

        logger.debug(f"Listing blobs with prefix '{options['name_starts_with']}'")
        blobs = []
        async for blob in self.container_client.list_blobs(**options):
            blobs.append(_to_blob_item(blob))
        return blobs

    @convert_exceptions({AzureError: ProviderException})
    async def get(self, path: str, encoding: Optional[str] = None) -> BatchResult[BlobItem]:
        """
        Download a blob, or every blob under a common prefix.

        An exact blob match wins; otherwise `path` is used as a prefix. Items
        that fail to download or decode are reported in `failures` instead of
        aborting the batch.
        """
        require_path(path, "get blobs")
        encoding = encoding or self.config.encoding

        if await self.container_client.get_blob_client(path).exists():
            blob_paths = [path]
        else:
            blob_paths = [blob.path for blob in await self.list(path)]
            if not blob_paths:
                raise ResourceNotFoundException(
                    f"The path {path} does not exist as a folder or blob",
                    error_code="BlobNotFound",
                    details={"path": path},
                )

        result: BatchResult[BlobItem] = BatchResult()
        for blob_path in blob_paths:
            try:
                result.items.append(await self._download(blob_path, encoding))
            except (AzureError, UnicodeDecodeError, LookupError, ValueError, ValidationException) as e:
                logger.error(f"Failed to get blob at path {blob_path}: {e}")
                result.failures.append(
                    BlobFailure(path=blob_path, error=str(e), error_code=getattr(e, "error_code", None))
                )
        return result

    async def _download(self, blob_path: str, encoding: str) -> BlobItem:
        downloader = await self.container_client.get_blob_client(blob_path).download_blob()
        text = (await downloader.readall()).decode(encoding)

        item = BlobItem(name=blob_name(blob_path), path=blob_path, data=text)
        item.extension = blob_extension(item.name)

        data_url = parse_data_url(text)
        if data_url:
            item.type = data_url.type
            item.encoding = data_url.encoding
            item.data = json.loads(data_url.data) if is_json(data_url) else data_url.data
        return item

    @convert_exceptions({AzureError: ProviderException})
    async def save(self, path: str, content: Any, options: Optional[Dict[str, Any]] = None) -> str:
        """
        Upload content to `path`, overwriting whatever is there.

        Strings are uploaded as-is; a string formatted as a data URL also has
        its type and encoding stored as blob metadata unless `options` already
        carries metadata. Any other value is stored as JSON inside an
        application/json data URL so that `get` returns it parsed.
        """
        validate_save_path(path)
        content = as_content(content)
        options = dict(options or {})

        if isinstance(content, StructuredContent):
            savable = to_json_data_url(content.value)
        elif isinstance(content, TextContent):
            savable = content.text
            data_url = parse_data_url(savable)
            if data_url and options.get("metadata") is None:
                options["metadata"] = {"encoding": data_url.encoding, "type": data_url.type}
        else:
            raise ValidationException(f"Unsupported content type: {type(content).__name__}")

        logger.debug(f"Saving {type(content).__name__} to {path}")
        options.setdefault("overwrite", True)
        data = savable.encode("utf-8")
        try:
            await self.container_client.get_blob_client(path).upload_blob(
                data, blob_type=BlobType.BLOCKBLOB, length=len(data), **options
            )
        except AzureError as e:
            raise ErrorHandler.handle_provider_error(e, f"upload of {path}") from e

        logger.info(f"Saved blob {path}")
        return path

    @convert_exceptions({AzureError: ProviderException})
    async def remove(self, path: str, exclude_blob_names: Optional[Iterable[str]] = None,
                     options: Optional[Dict[str, Any]] = None) -> BatchResult[str]:
        """
        Delete every blob under `path` whose name is not excluded.

        Returns the deleted paths. Blobs that fail to delete are logged and
        reported in `failures`; blobs already gone are skipped silently.
        """
        require_path(path, "remove blobs")
        excluded = set(exclude_blob_names or [])

        result: BatchResult[str] = BatchResult()
        for blob in await self.list(path):
            if blob.name in excluded:
                continue
            try:
                if await self._delete_if_exists(blob.path, options):
                    result.items.append(blob.path)
            except AzureError as e:
                logger.error(f"Failed to delete blob at path {blob.path} :: ErrorCode: {getattr(e, 'error_code', None)}")
                result.failures.append(
                    BlobFailure(path=blob.path, error=str(e), error_code=getattr(e, "error_code", None))
                )

        logger.info(f"Removed {len(result)} blob(s) under {path}")
        return result

    async def _delete_if_exists(self, blob_path: str, options: Optional[Dict[str, Any]] = None) -> bool:
        try:
            await self.container_client.get_blob_client(blob_path).delete_blob(**(options or {}))
        except ResourceNotFoundError:
            logger.debug(f"Blob {blob_path} was already deleted")
            return False
        return True

    @log_exceptions(log_level="ERROR", include_traceback=False, custom_message="Failed to move blob")
    async def move(self, source_path: str, destination_path: str,
                   save_options: Optional[Dict[str, Any]] = None,
                   remove_options: Optional[Dict[str, Any]] = None) -> str:
        """
        Move a single blob: get the source, save it at the destination, then
        delete the source.

        Not atomic. If deleting the source fails after the save succeeded,
        both copies remain and ProviderException is raised.
        """
        require_path(source_path, "move blob")
        blobs = await self.get(source_path)
        matched = len(blobs.items) + len(blobs.failures)
        if matched != 1 or blobs.failures:
            raise ValidationException(
                f"Move requires exactly one source blob, found {matched} at {source_path}",
                details={"source": source_path, "failures": [f.path for f in blobs.failures]},
            )

        source = blobs[0]
        if source.data is None:
            raise ProviderException(f"Blob at {source_path} has no content to move")
        if destination_path == source.path:
            logger.info(f"Blob {source.path} is already at its destination")
            return destination_path

        # Re-assemble the stored form so the destination reads back the same
        if source.type == JSON_MIME_TYPE:
            content = StructuredContent(value=source.data)
        elif source.type:
            content = TextContent(text=DataUrl(type=source.type, encoding=source.encoding, data=source.data).to_string())
        else:
            content = TextContent(text=source.data)

        saved_path = await self.save(destination_path, content, save_options)
        if not saved_path:
            raise ProviderException(f"Failed to save blob to {destination_path}")

        try:
            removed = await self._delete_if_exists(source.path, remove_options)
        except AzureError as e:
            raise ErrorHandler.handle_provider_error(e, f"removal of moved source {source.path}") from e
        if not removed:
            raise ProviderException(f"Failed to remove source blob {source.path} after copying it to {destination_path}")

        logger.info(f"Moved blob {source.path} -> {destination_path}")
        return destination_path

    async def close(self):
        """Close the underlying container client."""
        logger.info("Closing Azure Blob Storage client")
        await self.container_client.close()
