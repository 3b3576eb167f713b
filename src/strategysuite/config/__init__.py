"""StrategySuite configuration.

Example:
    >>> from strategysuite.config import Settings
    >>> settings = Settings.load()
    >>> settings.sync.debounce_seconds
    1.0
"""

from strategysuite.exceptions import ConfigError, ConfigLoadError

from ._defaults import DEFAULT_CONFIG
from ._loader import (
    COMPAT_ENV_VARS,
    CONFIG_PATH_ENV_VAR,
    ENV_PREFIX,
    copy_value,
    deep_merge,
    parse_compat_env_vars,
    parse_env_value,
    parse_env_vars,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    AIConfig,
    ClientConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    ServerConfig,
    Settings,
    StorageBackend,
    StorageConfig,
    SyncConfig,
)

__all__ = [
    "COMPAT_ENV_VARS",
    "CONFIG_PATH_ENV_VAR",
    "DEFAULT_CONFIG",
    "ENV_PREFIX",
    "AIConfig",
    "ClientConfig",
    "ConfigError",
    "ConfigLoadError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ServerConfig",
    "Settings",
    "StorageBackend",
    "StorageConfig",
    "SyncConfig",
    "copy_value",
    "deep_merge",
    "parse_compat_env_vars",
    "parse_env_value",
    "parse_env_vars",
    "read_toml_file",
    "set_nested_key",
]
