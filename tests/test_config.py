"""Tests for configuration loading.

Server settings follow env > TOML > defaults. Client credentials follow
explicit values > environment > defaults and are never read from TOML.
"""

import dataclasses
import os
from unittest.mock import patch

import pytest

from contentstack_mcp.config import ClientConfig, ServerConfig, get_config, set_config


@pytest.fixture
def toml_config(tmp_path):
    config_file = tmp_path / "contentstack-mcp.toml"
    config_file.write_text(
        """
[logging]
level = "debug"
structured = false

[server]
name = "cms-bridge"
version = "9.9.9"

[contentstack]
region = "eu"
branch = "develop"
"""
    )
    return config_file


class TestClientConfigResolve:
    def test_defaults(self):
        config = ClientConfig.resolve({}, {})
        assert config.region == "NA"
        assert config.api_key is None
        assert config.management_token is None
        assert config.branch is None

    def test_environment(self, stack_env):
        config = ClientConfig.resolve(None, {**stack_env, "CONTENTSTACK_BRANCH": "main"})
        assert config.api_key == "blt_test_api_key"
        assert config.management_token == "cs_test_management_token"
        assert config.delivery_token == "cs_test_delivery_token"
        assert config.branch == "main"

    def test_explicit_wins_over_environment(self, stack_env):
        config = ClientConfig.resolve({"region": "GCP_EU", "api_key": "mine"}, stack_env)
        assert config.region == "GCP_EU"
        assert config.api_key == "mine"
        assert config.management_token == "cs_test_management_token"

    def test_none_override_falls_through(self, stack_env):
        config = ClientConfig.resolve({"region": None}, {**stack_env, "CONTENTSTACK_REGION": "EU"})
        assert config.region == "EU"

    def test_empty_env_value_uses_default(self):
        config = ClientConfig.resolve({}, {"CONTENTSTACK_REGION": ""})
        assert config.region == "NA"

    def test_unknown_field(self):
        with pytest.raises(TypeError, match="colour"):
            ClientConfig.resolve({"colour": "blue"}, {})

    def test_reads_os_environ_by_default(self):
        with patch.dict(os.environ, {"CONTENTSTACK_API_KEY": "from_os"}, clear=True):
            assert ClientConfig.resolve().api_key == "from_os"

    def test_immutable(self, client_config):
        with pytest.raises(dataclasses.FrozenInstanceError):
            client_config.region = "EU"

    def test_resolve_does_not_touch_other_instances(self, stack_env):
        first = ClientConfig.resolve({"region": "EU"}, stack_env)
        second = ClientConfig.resolve({}, stack_env)
        assert first.region == "EU"
        assert second.region == "NA"

    def test_log_dict_hides_secrets(self, stack_env):
        logged = ClientConfig.resolve(None, stack_env).to_log_dict()
        assert "blt_test_api_key" not in str(logged)
        assert logged["api_key_set"] is True


class TestServerConfig:
    def test_defaults(self, tmp_path):
        original_cwd = os.getcwd()
        try:
            os.chdir(tmp_path)
            with patch.dict(os.environ, {}, clear=True):
                config = ServerConfig.from_env()
        finally:
            os.chdir(original_cwd)

        assert config.log_level == "INFO"
        assert config.structured_logging is True
        assert config.server_name == "contentstack-mcp"
        assert config.default_region == "NA"
        assert config.default_branch is None

    def test_toml_values(self, toml_config):
        with patch.dict(os.environ, {}, clear=True):
            config = ServerConfig.from_env(str(toml_config))

        assert config.log_level == "DEBUG"
        assert config.structured_logging is False
        assert config.server_name == "cms-bridge"
        assert config.server_version == "9.9.9"
        assert config.default_region == "EU"
        assert config.default_branch == "develop"

    def test_default_file_discovered_in_cwd(self, toml_config):
        original_cwd = os.getcwd()
        try:
            os.chdir(toml_config.parent)
            with patch.dict(os.environ, {}, clear=True):
                config = ServerConfig.from_env()
        finally:
            os.chdir(original_cwd)

        assert config.server_name == "cms-bridge"

    def test_config_file_env_var(self, toml_config):
        env = {"CONTENTSTACK_MCP_CONFIG_FILE": str(toml_config)}
        with patch.dict(os.environ, env, clear=True):
            config = ServerConfig.from_env()
        assert config.default_region == "EU"

    def test_env_overrides_toml(self, toml_config):
        env = {
            "CONTENTSTACK_MCP_LOG_LEVEL": "warning",
            "CONTENTSTACK_MCP_STRUCTURED_LOGGING": "true",
        }
        with patch.dict(os.environ, env, clear=True):
            config = ServerConfig.from_env(str(toml_config))

        assert config.log_level == "WARNING"
        assert config.structured_logging is True

    def test_missing_file_keeps_defaults(self, tmp_path):
        with patch.dict(os.environ, {}, clear=True):
            config = ServerConfig.from_env(str(tmp_path / "absent.toml"))
        assert config.server_name == "contentstack-mcp"

    def test_malformed_toml_keeps_defaults(self, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("[logging\nlevel = ")
        with patch.dict(os.environ, {}, clear=True):
            config = ServerConfig.from_env(str(bad))
        assert config.log_level == "INFO"

    def test_client_config_uses_stack_defaults(self):
        config = ServerConfig(default_region="AZURE_NA", default_branch="develop")
        client = config.client_config({}, {"CONTENTSTACK_API_KEY": "k"})
        assert client.region == "AZURE_NA"
        assert client.branch == "develop"
        assert client.api_key == "k"

    def test_client_config_env_branch_wins(self):
        config = ServerConfig(default_branch="develop")
        client = config.client_config({}, {"CONTENTSTACK_BRANCH": "main"})
        assert client.branch == "main"

    def test_setup_logging(self):
        config = ServerConfig(log_level="DEBUG", structured_logging=False)
        with patch("contentstack_mcp.core.logging_config.configure_logging") as configure:
            config.setup_logging()
        configure.assert_called_once_with(level=10, format="human")


class TestGlobalConfig:
    def test_set_and_get(self, server_config):
        set_config(server_config)
        try:
            assert get_config() is server_config
        finally:
            set_config(None)
