"""
Server and client configuration for contentstack-mcp.

Server settings support:
1. Environment variables (highest priority)
2. TOML config file (contentstack-mcp.toml)
3. Default values (lowest priority)

Environment variables:
- CONTENTSTACK_MCP_CONFIG_FILE: Path to TOML config file
- CONTENTSTACK_MCP_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
- CONTENTSTACK_MCP_STRUCTURED_LOGGING: Emit JSON log lines (true/false)

Stack credentials are resolved per call into an immutable ``ClientConfig``:
- CONTENTSTACK_REGION: Region code (NA, EU, AZURE_NA, AZURE_EU, GCP_NA, GCP_EU)
- CONTENTSTACK_API_KEY: Stack API key
- CONTENTSTACK_MANAGEMENT_TOKEN: Management token
- CONTENTSTACK_DELIVERY_TOKEN: Delivery token
- CONTENTSTACK_BRANCH: Branch UID (optional)

Credentials are only ever read from the environment, never from TOML.
"""

import logging
import os
from dataclasses import dataclass, field, replace
from importlib.metadata import version as get_package_version, PackageNotFoundError
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # Python < 3.11 fallback


logger = logging.getLogger(__name__)

DEFAULT_REGION = "NA"

ENV_REGION = "CONTENTSTACK_REGION"
ENV_API_KEY = "CONTENTSTACK_API_KEY"
ENV_MANAGEMENT_TOKEN = "CONTENTSTACK_MANAGEMENT_TOKEN"
ENV_DELIVERY_TOKEN = "CONTENTSTACK_DELIVERY_TOKEN"
ENV_BRANCH = "CONTENTSTACK_BRANCH"


def _get_version() -> str:
    """Get package version from metadata (single source of truth: pyproject.toml)."""
    try:
        return get_package_version("contentstack-mcp")
    except PackageNotFoundError:
        return "1.1.0"  # Fallback for dev without install


_PACKAGE_VERSION = _get_version()


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"true", "1", "yes", "on"}


@dataclass(frozen=True)
class ClientConfig:
    """Immutable snapshot of the settings for one Contentstack client.

    Attributes:
        region: Region code; validated when a request is built
        api_key: Stack API key
        management_token: Management token sent as ``authorization``
        delivery_token: Delivery token (kept for callers, not sent)
        branch: Optional branch UID
    """

    region: str = DEFAULT_REGION
    api_key: Optional[str] = None
    management_token: Optional[str] = None
    delivery_token: Optional[str] = None
    branch: Optional[str] = None

    @classmethod
    def resolve(
        cls,
        overrides: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
        *,
        default_region: str = DEFAULT_REGION,
    ) -> "ClientConfig":
        """Build a config from explicit values, then the environment.

        Args:
            overrides: Explicit values; ``None`` entries are ignored
            environ: Environment lookup (defaults to ``os.environ``)
            default_region: Region used when neither source provides one

        Returns:
            New ClientConfig; nothing shared is modified
        """
        env = os.environ if environ is None else environ
        explicit = {k: v for k, v in (overrides or {}).items() if v is not None}

        unknown = set(explicit) - set(cls.__dataclass_fields__)
        if unknown:
            raise TypeError(f"Unknown client config fields: {sorted(unknown)}")

        def pick(name: str, env_name: str, default: Optional[str] = None) -> Optional[str]:
            if name in explicit:
                return explicit[name]
            return env.get(env_name) or default

        return cls(
            region=pick("region", ENV_REGION, default_region),
            api_key=pick("api_key", ENV_API_KEY),
            management_token=pick("management_token", ENV_MANAGEMENT_TOKEN),
            delivery_token=pick("delivery_token", ENV_DELIVERY_TOKEN),
            branch=pick("branch", ENV_BRANCH),
        )

    def to_log_dict(self) -> Dict[str, Any]:
        """Describe the config without exposing credentials."""
        return {
            "region": self.region,
            "branch": self.branch,
            "api_key_set": bool(self.api_key),
            "management_token_set": bool(self.management_token),
        }


@dataclass
class ServerConfig:
    """Server configuration with support for env vars and TOML overrides."""

    # Logging configuration
    log_level: str = "INFO"
    structured_logging: bool = True

    # Server configuration
    server_name: str = "contentstack-mcp"
    server_version: str = field(default_factory=lambda: _PACKAGE_VERSION)

    # Stack defaults (credentials always come from the environment)
    default_region: str = DEFAULT_REGION
    default_branch: Optional[str] = None

    @classmethod
    def from_env(cls, config_file: Optional[str] = None) -> "ServerConfig":
        """
        Create configuration from environment variables and optional TOML file.

        Priority (highest to lowest):
        1. Environment variables
        2. TOML config file
        3. Default values
        """
        config = cls()

        toml_path = config_file or os.environ.get("CONTENTSTACK_MCP_CONFIG_FILE")
        if toml_path:
            config._load_toml(Path(toml_path))
        else:
            for default_path in ["contentstack-mcp.toml", ".contentstack-mcp.toml"]:
                if Path(default_path).exists():
                    config._load_toml(Path(default_path))
                    break

        config._load_env()

        return config

    def _load_toml(self, path: Path) -> None:
        """Load configuration from TOML file."""
        if not path.exists():
            logger.warning(f"Config file not found: {path}")
            return

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error(f"Error loading config file {path}: {e}")
            return

        if "logging" in data:
            log = data["logging"]
            if "level" in log:
                self.log_level = str(log["level"]).upper()
            if "structured" in log:
                self.structured_logging = _parse_bool(log["structured"])

        if "server" in data:
            srv = data["server"]
            if "name" in srv:
                self.server_name = srv["name"]
            if "version" in srv:
                self.server_version = srv["version"]

        if "contentstack" in data:
            cs = data["contentstack"]
            if "region" in cs:
                self.default_region = str(cs["region"]).upper()
            if "branch" in cs:
                self.default_branch = cs["branch"]

    def _load_env(self) -> None:
        """Load configuration from environment variables."""
        if level := os.environ.get("CONTENTSTACK_MCP_LOG_LEVEL"):
            self.log_level = level.upper()

        if structured := os.environ.get("CONTENTSTACK_MCP_STRUCTURED_LOGGING"):
            self.structured_logging = _parse_bool(structured)

    def client_config(
        self,
        overrides: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> ClientConfig:
        """Resolve a ClientConfig using this server's stack defaults."""
        resolved = ClientConfig.resolve(
            overrides, environ, default_region=self.default_region
        )
        if resolved.branch is None and self.default_branch:
            resolved = replace(resolved, branch=self.default_branch)
        return resolved

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        from contentstack_mcp.core.logging_config import configure_logging

        configure_logging(
            level=getattr(logging, self.log_level, logging.INFO),
            format="structured" if self.structured_logging else "human",
        )


# Global configuration instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def set_config(config: ServerConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
