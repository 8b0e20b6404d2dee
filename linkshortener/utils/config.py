"""Utility functions for application configuration management.

This module provides a standardized interface for building a UrlRegistry's
configuration. Configuration is stored as a YAML document per application
environment (`APP_ENV`) and may be overridden by environment variables:

    config/
    ├── local.yml
    ├── dev.yml
    └── prod.yml

The configuration YAML follows this structure (every key is optional):

    registry:
        code_length: 6
        max_attempts: 1000
        shards: 16
        timezone: UTC
        timeline_limit: 10
    backend: redis          # omit for a purely in-memory registry
    redis:                  # omit to read REDIS_* environment variables
        host: localhost
        port: 6379
        db: 0

Lookup order for the YAML document:
    1. explicit `path` argument to load_config()
    2. `LINKSHORTENER_CONFIG` environment variable
    3. `<project root>/config/<APP_ENV>.yml`, if present
    4. built-in defaults

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the key prefix for DAOs, or None if `APP_NAME` is not set.

    project_root() -> Path
        Return the project root directory, using `PROJECT_ROOT` when available.

    load_yaml(path: Path) -> dict
        Safely load a YAML document, defaulting to {} for empty files.

    redis_config_from_env() -> dict
        Build Redis connection parameters from REDIS_* environment variables.

    load_config(path: str | Path | None = None) -> RegistryConfig
        Load, override and validate the registry configuration.

Example:
    >>> from linkshortener.utils.config import load_config
    >>> config = load_config()
    >>> config.code_length
    6
"""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from linkshortener.types import ConfigDocument, RedisConfiguration
from linkshortener.constants import ENV, Defaults
from linkshortener.exceptions import BadConfigurationError
from linkshortener.utils.helpers import require_environment


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistryConfig:
    """Validated UrlRegistry configuration.

    Attributes:
        code_length (int): length of generated shortcodes
        max_attempts (int): random generation retry cap
        shards (int): number of independently locked link table shards
        timezone (str): IANA time zone name used for calendar day bucketing
        timeline_limit (int): default number of visits in a timeline
        redis (dict | None): Redis connection parameters, or None for in-memory only
    """

    code_length: int = Defaults.CODE_LENGTH
    max_attempts: int = Defaults.MAX_ATTEMPTS
    shards: int = Defaults.SHARDS
    timezone: str = Defaults.TIMEZONE
    timeline_limit: int = Defaults.TIMELINE_LIMIT
    redis: RedisConfiguration | None = None

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def project_root() -> Path:
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, Path(__file__).resolve().parents[2]))


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'linkshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'linkshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def load_yaml(path: Path) -> ConfigDocument:
    """Load a YAML file into a Python dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        BadConfigurationError: If the document is not a YAML mapping.
    """
    if not path.is_file():
        raise FileNotFoundError(f'YAML not found: {path}')
    with path.open('r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise BadConfigurationError(f'Malformed YAML configuration in {path}.') from e
    if data is not None and not isinstance(data, dict):
        raise BadConfigurationError(f'Configuration in {path} must be a mapping (given type: {type(data)}).')
    return data or {}


@require_environment(ENV.Redis.HOST)
def redis_config_from_env() -> RedisConfiguration:
    """Build Redis connection parameters from REDIS_* environment variables.

    Keys match the `redis_` keyword arguments of RedisClientMixin once prefixed.

    Raises:
        MissingEnvironmentVariableError: If REDIS_HOST is not set.
    """
    return {
        'host': os.environ[ENV.Redis.HOST],
        'port': os.environ.get(ENV.Redis.PORT, 6379),
        'db': os.environ.get(ENV.Redis.DB, 0),
        'username': os.environ.get(ENV.Redis.USERNAME),
        'password': os.environ.get(ENV.Redis.PASSWORD),
    }


def _resolve_config_path(path: str | Path | None) -> Path | None:
    if path is not None:
        return Path(path)
    if env_path := os.environ.get(ENV.Registry.CONFIG_PATH):
        return Path(env_path)
    default_path = project_root() / 'config' / f'{app_env()}.yml'
    return default_path if default_path.is_file() else None


def _positive_int(name: str, value) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f"'{name}' must be an integer (given value: {value!r}).") from e
    if number <= 0:
        raise BadConfigurationError(f"'{name}' must be a positive integer (given value: {number}).")
    return number


def _timezone(value) -> str:
    if not isinstance(value, str) or not value:
        raise BadConfigurationError(f"'timezone' must be a non-empty string (given value: {value!r}).")
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise BadConfigurationError(f"Unknown time zone '{value}'.") from e
    return value


def load_config(path: str | Path | None = None) -> RegistryConfig:
    """Load the registry configuration.

    Reads the YAML document (see module docstring for lookup order), applies
    `LINKSHORTENER_*` environment overrides and validates every value.

    Args:
        path (str | Path | None):
            Explicit YAML file. A missing explicit file is an error, while a
            missing default `config/<env>.yml` silently falls back to defaults.

    Returns:
        RegistryConfig: validated configuration

    Raises:
        FileNotFoundError: If an explicitly requested file does not exist.
        BadConfigurationError: If any value is invalid.
        MissingEnvironmentVariableError: If `backend: redis` is requested without
            a `redis` section and REDIS_HOST is not set.

    Example:
        >>> os.environ['LINKSHORTENER_CODE_LENGTH'] = '8'
        >>> load_config().code_length
        8
    """
    config_path = _resolve_config_path(path)
    document = load_yaml(config_path) if config_path is not None else {}
    logger.debug('Loaded registry configuration document.', extra={'configPath': str(config_path), 'appEnv': app_env()})

    registry = document.get('registry') or {}
    if not isinstance(registry, dict):
        raise BadConfigurationError("'registry' section must be a mapping.")

    # Environment variables take precedence over the YAML document
    overrides = {
        'code_length': os.environ.get(ENV.Registry.CODE_LENGTH),
        'max_attempts': os.environ.get(ENV.Registry.MAX_ATTEMPTS),
        'timezone': os.environ.get(ENV.Registry.TIMEZONE),
    }
    registry = {**registry, **{k: v for k, v in overrides.items() if v}}

    redis_config = document.get('redis')
    if redis_config is None and document.get('backend') == 'redis':
        redis_config = redis_config_from_env()
    if redis_config is not None and not isinstance(redis_config, dict):
        raise BadConfigurationError("'redis' section must be a mapping.")

    return RegistryConfig(
        code_length=_positive_int('code_length', registry.get('code_length', Defaults.CODE_LENGTH)),
        max_attempts=_positive_int('max_attempts', registry.get('max_attempts', Defaults.MAX_ATTEMPTS)),
        shards=_positive_int('shards', registry.get('shards', Defaults.SHARDS)),
        timezone=_timezone(registry.get('timezone', Defaults.TIMEZONE)),
        timeline_limit=_positive_int('timeline_limit', registry.get('timeline_limit', Defaults.TIMELINE_LIMIT)),
        redis=redis_config,
    )
