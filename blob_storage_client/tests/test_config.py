"""Tests for configuration resolution and the fail-fast construction rules."""

from unittest.mock import MagicMock, patch

import pytest

from blob_storage_client.client_manager import create_storage_client
from blob_storage_client.config.settings import BlobStorageConfig, LoggingConfig, StorageConfig
from blob_storage_client.exceptions import ConfigurationException
from blob_storage_client.providers.azure_providers import (
    BlobStorageClient,
    create_blob_service_client,
    create_container_client,
)


PROVIDER_MODULE = "blob_storage_client.providers.azure_providers.storage_provider"


class TestStorageConfig:
    def test_explicit_values(self, clean_env):
        config = StorageConfig(connection_string="conn", container_name="box")

        assert config.connection_string == "conn"
        assert config.container_name == "box"
        assert config.encoding == "utf-8"

    def test_environment_fallback(self, clean_env):
        clean_env.setenv("AZURE_BLOB_CONNECTION_STRING", "env-conn")
        clean_env.setenv("AZURE_BLOB_CONTAINER_NAME", "env-box")

        config = StorageConfig()

        assert config.connection_string == "env-conn"
        assert config.container_name == "env-box"

    def test_argument_wins_over_environment(self, clean_env):
        clean_env.setenv("AZURE_BLOB_CONNECTION_STRING", "env-conn")
        clean_env.setenv("AZURE_BLOB_CONTAINER_NAME", "env-box")

        config = StorageConfig(connection_string="arg-conn")

        assert config.connection_string == "arg-conn"
        assert config.container_name == "env-box"

    @pytest.mark.parametrize("empty", [None, ""])
    def test_empty_argument_falls_through_to_environment(self, clean_env, empty):
        clean_env.setenv("AZURE_BLOB_CONTAINER_NAME", "env-box")

        config = StorageConfig(container_name=empty)

        assert config.container_name == "env-box"

    def test_legacy_variable_names(self, clean_env):
        clean_env.setenv("AZURE_BLOB_CONNECTIONSTRING", "legacy-conn")
        clean_env.setenv("AZURE_BLOB_CONTAINERNAME", "legacy-box")

        config = StorageConfig()

        assert config.is_complete()
        assert config.connection_string == "legacy-conn"
        assert config.container_name == "legacy-box"

    def test_incomplete_config(self, clean_env):
        assert not StorageConfig(connection_string="conn").is_complete()


class TestClientConstruction:
    def test_missing_connection_string(self, clean_env):
        with pytest.raises(ConfigurationException, match="Connection string"):
            BlobStorageClient(StorageConfig(container_name="box"), container_client=MagicMock())

    def test_missing_container_name(self, clean_env):
        with pytest.raises(ConfigurationException, match="Container name"):
            BlobStorageClient(StorageConfig(connection_string="conn"), container_client=MagicMock())

    def test_missing_config(self):
        with pytest.raises(ConfigurationException):
            BlobStorageClient(None)

    def test_creates_container_client_from_config(self, storage_config):
        with patch(f"{PROVIDER_MODULE}.ContainerClient") as container_cls:
            client = BlobStorageClient(storage_config, connection_timeout=5)

        container_cls.from_connection_string.assert_called_once_with(
            storage_config.connection_string, "unit-tests", connection_timeout=5
        )
        assert client.container_client is container_cls.from_connection_string.return_value

    def test_create_storage_client_reads_environment(self, clean_env):
        clean_env.setenv("AZURE_BLOB_CONNECTION_STRING", "UseDevelopmentStorage=true")
        clean_env.setenv("AZURE_BLOB_CONTAINER_NAME", "from-env")

        with patch(f"{PROVIDER_MODULE}.ContainerClient") as container_cls:
            client = create_storage_client()

        assert client.config.container_name == "from-env"
        container_cls.from_connection_string.assert_called_once_with("UseDevelopmentStorage=true", "from-env")

    def test_create_storage_client_fails_without_settings(self, clean_env):
        with pytest.raises(ConfigurationException, match="Connection string"):
            create_storage_client()

    def test_create_blob_service_client(self, storage_config):
        with patch(f"{PROVIDER_MODULE}.BlobServiceClient") as service_cls:
            service = create_blob_service_client(storage_config)

        service_cls.from_connection_string.assert_called_once_with(storage_config.connection_string)
        assert service is service_cls.from_connection_string.return_value

    def test_create_container_client_validates(self, clean_env):
        with pytest.raises(ConfigurationException, match="Container name"):
            create_container_client(StorageConfig(connection_string="conn"))


class TestBlobStorageConfig:
    def test_sub_configs_are_built_lazily(self, clean_env):
        clean_env.setenv("AZURE_BLOB_CONNECTION_STRING", "conn")
        clean_env.setenv("AZURE_BLOB_CONTAINER_NAME", "box")
        clean_env.setenv("LOG_LEVEL", "DEBUG")

        config = BlobStorageConfig()

        assert config.storage.container_name == "box"
        assert config.logging.level == "DEBUG"
        assert config.storage is config.storage

    def test_explicit_sub_configs(self):
        storage = StorageConfig(connection_string="conn", container_name="box")
        logging = LoggingConfig(level="WARNING")

        config = BlobStorageConfig(storage=storage, logging=logging, app_name="svc")

        assert config.storage is storage
        assert config.logging is logging
        assert config.app_name == "svc"
