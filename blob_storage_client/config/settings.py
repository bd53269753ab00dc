from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field, PrivateAttr
from typing import Optional
from dotenv import load_dotenv, find_dotenv


def _drop_empty(kwargs: dict) -> dict:
    # Explicit None/"" arguments fall through to the environment
    return {k: v for k, v in kwargs.items() if v is not None and v != ""}


class StorageConfig(BaseSettings):
    """Azure Blob Storage configuration."""

    connection_string: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "connection_string", "AZURE_BLOB_CONNECTION_STRING", "AZURE_BLOB_CONNECTIONSTRING"
        ),
    )
    container_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "container_name", "AZURE_BLOB_CONTAINER_NAME", "AZURE_BLOB_CONTAINERNAME"
        ),
    )
    encoding: str = Field(
        default="utf-8",
        validation_alias=AliasChoices("encoding", "AZURE_BLOB_ENCODING"),
    )

    model_config = SettingsConfigDict(
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    def __init__(self, **kwargs):
        # Force load environment variables before validation
        load_dotenv(find_dotenv(usecwd=True))

        super().__init__(**_drop_empty(kwargs))

    def is_complete(self) -> bool:
        return bool(self.connection_string) and bool(self.container_name)


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="INFO", validation_alias=AliasChoices("level", "LOG_LEVEL"))
    log_file: Optional[str] = Field(default=None, validation_alias=AliasChoices("log_file", "LOG_FILE"))
    enable_json: bool = Field(default=False, validation_alias=AliasChoices("enable_json", "LOG_ENABLE_JSON"))
    enable_file_logging: bool = Field(
        default=False, validation_alias=AliasChoices("enable_file_logging", "LOG_ENABLE_FILE")
    )
    max_file_size: str = Field(default="10 MB", validation_alias=AliasChoices("max_file_size", "LOG_MAX_FILE_SIZE"))
    retention_days: int = Field(default=7, validation_alias=AliasChoices("retention_days", "LOG_RETENTION_DAYS"))

    model_config = SettingsConfigDict(
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )


class BlobStorageConfig(BaseSettings):
    """Main configuration class."""

    app_name: str = Field(default="Blob Storage Client", validation_alias=AliasChoices("app_name", "APP_NAME"))
    debug: bool = Field(default=False, validation_alias=AliasChoices("debug", "DEBUG"))
    environment: str = Field(default="development", validation_alias=AliasChoices("environment", "ENVIRONMENT"))

    model_config = SettingsConfigDict(
        validate_assignment=True,
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    _storage: Optional[StorageConfig] = PrivateAttr(default=None)
    _logging: Optional[LoggingConfig] = PrivateAttr(default=None)

    def __init__(self, storage: Optional[StorageConfig] = None,
                 logging: Optional[LoggingConfig] = None, **kwargs):
        load_dotenv(find_dotenv(usecwd=True))

        super().__init__(**kwargs)
        # Sub-configurations are built on first access unless given
        self._storage = storage
        self._logging = logging

    @property
    def storage(self) -> StorageConfig:
        if self._storage is None:
            self._storage = StorageConfig()
        return self._storage

    @property
    def logging(self) -> LoggingConfig:
        if self._logging is None:
            self._logging = LoggingConfig()
        return self._logging
