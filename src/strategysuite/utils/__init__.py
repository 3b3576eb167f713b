"""Shared utilities: logging, JSON, HTTP and filesystem locations."""

from strategysuite.utils._http import error_message, send_with_retry
from strategysuite.utils._json import dump_json, load_json, load_json_file
from strategysuite.utils._logging import (
    LogFormatType,
    create_cli_logger,
    create_logger,
    create_server_logger,
)
from strategysuite.utils._paths import (
    CONFIG_FILE_NAME,
    LEGACY_CACHE_FILE_NAME,
    get_data_dir,
    get_default_database_path,
    get_default_legacy_cache_path,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "LEGACY_CACHE_FILE_NAME",
    "LogFormatType",
    "create_cli_logger",
    "create_logger",
    "create_server_logger",
    "dump_json",
    "error_message",
    "get_data_dir",
    "get_default_database_path",
    "get_default_legacy_cache_path",
    "load_json",
    "load_json_file",
    "send_with_retry",
]
