# pyright: reportExplicitAny=false, reportAny=false
"""Typed configuration models.

Settings is the root model; each section is a frozen pydantic model that
ignores unknown keys so older or newer config files still load.
"""

import os
from enum import StrEnum
from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from strategysuite.config._defaults import DEFAULT_CONFIG
from strategysuite.config._loader import (
    CONFIG_PATH_ENV_VAR,
    deep_merge,
    parse_compat_env_vars,
    parse_env_vars,
    read_toml_file,
)
from strategysuite.exceptions import ConfigLoadError
from strategysuite.utils import CONFIG_FILE_NAME, get_default_database_path


class LogLevel(StrEnum):
    """Log level threshold values."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class StorageBackend(StrEnum):
    """Document store implementations available to the server."""

    MEMORY = "memory"
    SQLITE = "sqlite"
    FIRESTORE = "firestore"


class _Section(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")


class ServerConfig(_Section):
    host: str = "0.0.0.0"  # noqa: S104
    port: int = Field(default=8080, ge=1, le=65535)
    reload: bool = False


class LoggingConfig(_Section):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty writes to stderr).
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""


class StorageConfig(_Section):
    """Document store configuration section.

    Attributes:
        backend: Which document store the server uses.
        path: SQLite database path; empty selects the user data directory.
        collection: Top-level collection holding per-user project documents.
        firestore_project: Google Cloud project for the Firestore backend.
        credentials_file: Service account key file; empty uses application
            default credentials.
    """

    backend: StorageBackend = StorageBackend.SQLITE
    path: str = ""
    collection: str = "users"
    firestore_project: str = ""
    credentials_file: str = ""

    @property
    def database_path(self) -> Path:
        return Path(self.path) if self.path else get_default_database_path()


class AIConfig(_Section):
    """Generative model configuration section."""

    api_key: str = Field(default="", repr=False)
    model: str = "gemini-3-flash-preview"

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)


class SyncConfig(_Section):
    debounce_seconds: float = Field(default=1.0, ge=0)
    load_timeout: float = Field(default=10.0, gt=0)


class ClientConfig(_Section):
    base_url: str = "http://127.0.0.1:8080"
    timeout: float = Field(default=10.0, gt=0)


class Settings(_Section):
    """Root configuration.

    Use ``Settings.load()`` to build settings from every source, or
    ``Settings.from_dict()`` to build them from a plain dictionary.
    """

    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    ai: AIConfig = Field(default_factory=AIConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create settings from a dictionary merged over the defaults.

        Raises:
            ConfigLoadError: If a value has the wrong type or range.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            msg = f"Invalid configuration: {e.error_count()} error(s)\n{e}"
            raise ConfigLoadError(msg) from e

    @classmethod
    def load(
        cls,
        config_path: Path | None = None,
        *,
        cwd: Path | None = None,
        include_env: bool = True,
        environ: dict[str, str] | None = None,
    ) -> Self:
        """Load settings from defaults, a TOML file and the environment.

        Sources in ascending precedence: defaults, the config file (the
        explicit path, else the file named by ``STRATEGYSUITE_CONFIG``, else
        ``strategysuite.toml`` in ``cwd`` when present),
        ``STRATEGYSUITE_`` variables, then the compatibility variables.

        Args:
            config_path: Explicit config file; it must exist.
            cwd: Directory searched for ``strategysuite.toml``.
            include_env: Whether to read environment variables.
            environ: Mapping used instead of ``os.environ``.

        Raises:
            ConfigLoadError: If the file is missing, unparsable or invalid.
        """
        data: dict[str, Any] = {}

        if config_path is None and include_env:
            env_path = (os.environ if environ is None else environ).get(
                CONFIG_PATH_ENV_VAR, ""
            )
            config_path = Path(env_path) if env_path else None

        if config_path is not None:
            if not config_path.exists():
                msg = f"Config file not found: {config_path}"
                raise ConfigLoadError(msg, path=config_path)
            data = read_toml_file(config_path)
        else:
            candidate = (cwd or Path.cwd()) / CONFIG_FILE_NAME
            if candidate.is_file():
                data = read_toml_file(candidate)

        if include_env:
            data = deep_merge(data, parse_env_vars(environ=environ))
            data = deep_merge(data, parse_compat_env_vars(environ))

        return cls.from_dict(data)
