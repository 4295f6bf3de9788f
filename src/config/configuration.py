"""Configuration module for the product service.

Loads settings from environment-specific config files:
- APP_ENV=dev  → config_dev.yaml
- APP_ENV=test → config_test.yaml
- Default      → config.yaml

The Cosmos DB key (and endpoint, when not in the YAML file) is loaded from .env.
Fails fast with clear error messages if required configuration is missing.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_project_root() -> Path:
    """Get the project root directory (where config.yaml lives)."""
    # Navigate from src/config/ up to project root
    return Path(__file__).parent.parent.parent


def _get_config_filename() -> str:
    """Get config filename based on APP_ENV environment variable."""
    app_env = os.environ.get("APP_ENV", "").lower()

    if app_env == "dev":
        return "config_dev.yaml"
    elif app_env == "test":
        return "config_test.yaml"
    else:
        return "config.yaml"


def _load_yaml_config() -> dict:
    """Load configuration from environment-specific config file."""
    config_filename = _get_config_filename()
    config_path = _get_project_root() / config_filename

    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}. "
            f"Set APP_ENV to 'dev' or 'test', or create {config_filename}."
        )

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def _get_required_env(key: str) -> str:
    """Get required environment variable or raise ConfigurationError."""
    value = os.environ.get(key)
    if not value:
        raise ConfigurationError(
            f"Required environment variable '{key}' is not set. "
            f"Please add it to your .env file."
        )
    return value


@dataclass(frozen=True)
class CosmosDBConfig:
    """Azure Cosmos DB configuration for the products container."""
    endpoint: str
    key: str
    database_name: str
    container_name: str
    partition_key_path: str


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server configuration."""
    host: str
    port: int


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration container."""
    cosmosdb: CosmosDBConfig
    server: ServerConfig
    logging: LoggingConfig


def load_config() -> AppConfig:
    """
    Load and validate all application configuration.

    Loads from the YAML config file for non-sensitive settings and .env for
    the Cosmos DB key. Fails fast if required configuration is missing.

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    # Load environment variables from .env file
    load_dotenv()

    yaml_config = _load_yaml_config()

    # Endpoint may come from YAML (local emulator) or from the environment
    cosmosdb_section = yaml_config.get("cosmosdb", {})
    endpoint = os.environ.get("COSMOSDB_ENDPOINT") or cosmosdb_section.get("endpoint")
    if not endpoint:
        endpoint = _get_required_env("COSMOSDB_ENDPOINT")

    cosmosdb_config = CosmosDBConfig(
        endpoint=endpoint,
        key=_get_required_env("COSMOSDB_KEY"),
        database_name=cosmosdb_section.get("database_name", "testProductDB"),
        container_name=cosmosdb_section.get("container_name", "products"),
        partition_key_path=cosmosdb_section.get("partition_key_path", "/id"),
    )

    server_section = yaml_config.get("server", {})
    try:
        port = int(server_section.get("port", 3000))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid server port: {server_section.get('port')!r}") from e

    server_config = ServerConfig(
        host=server_section.get("host", "127.0.0.1"),
        port=port,
    )

    logging_section = yaml_config.get("logging", {})

    logging_config = LoggingConfig(
        level=str(logging_section.get("level", "INFO")).upper(),
    )

    return AppConfig(
        cosmosdb=cosmosdb_config,
        server=server_config,
        logging=logging_config,
    )


# Module-level singleton for convenience
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the application configuration singleton.

    Lazy-loads configuration on first access.
    Config file is selected based on APP_ENV environment variable.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_environment() -> str:
    """Get current environment name: 'dev', 'test', or 'default'."""
    app_env = os.environ.get("APP_ENV", "").lower()
    return app_env if app_env in ("dev", "test") else "default"


def reset_config() -> None:
    """Reset the config singleton. Useful for testing."""
    global _config
    _config = None
