# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""TOML configuration file loading and merging."""

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path  # noqa: TC003 - used at runtime in annotations
from typing import Any, Final

import orjson

from strategysuite.exceptions import ConfigLoadError

ENV_PREFIX: Final = "STRATEGYSUITE_"

# Names an explicit config file when no path is passed to Settings.load
CONFIG_PATH_ENV_VAR: Final = "STRATEGYSUITE_CONFIG"

# Variables understood by the original deployment, mapped to config paths.
# Earlier entries win when several map to the same path.
COMPAT_ENV_VARS: Final[tuple[tuple[str, str], ...]] = (
    ("GEMINI_API_KEY", "ai.api_key"),
    ("VITE_GEMINI_API_KEY", "ai.api_key"),
    ("PORT", "server.port"),
    ("GOOGLE_CLOUD_PROJECT", "storage.firestore_project"),
    ("GOOGLE_APPLICATION_CREDENTIALS", "storage.credentials_file"),
)


def read_toml_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read and parse a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed TOML content as dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file cannot be parsed.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file: {e}"
        raise ConfigLoadError(
            msg,
            path=path,
            line=getattr(e, "lineno", None),
            column=getattr(e, "colno", None),
        ) from e


def deep_merge(
    base: Mapping[str, Any],  # pyright: ignore[reportExplicitAny]
    override: Mapping[str, Any],  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Deep merge two dictionaries.

    Merges `override` into `base`, returning a new dictionary. Neither input
    is modified.

    Merge rules:
        - Dictionaries are recursively merged
        - Arrays are replaced entirely (no element-wise merge)
        - Scalars are replaced with override value
        - Missing keys in override preserve base values
    """
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key in base.keys() | override.keys():
        if key not in override:
            result[key] = copy_value(base[key])
        elif key not in base:
            result[key] = copy_value(override[key])
        else:
            base_val = base[key]
            override_val = override[key]
            if isinstance(base_val, Mapping) and isinstance(override_val, Mapping):
                result[key] = deep_merge(base_val, override_val)
            else:
                result[key] = copy_value(override_val)

    return result


def copy_value(value: Any) -> Any:  # pyright: ignore[reportExplicitAny]
    """Recursively copy dicts and lists so the result shares nothing."""
    if isinstance(value, Mapping):
        return {k: copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    return value


def parse_env_vars(
    prefix: str = ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Parse prefixed environment variables into a config dictionary.

    Environment variable naming:
        - Add prefix (STRATEGYSUITE_)
        - Convert to uppercase
        - Replace dots with double underscores
        - Example: sync.debounce_seconds -> STRATEGYSUITE_SYNC__DEBOUNCE_SECONDS

    Variables without a nested section (for example STRATEGYSUITE_DEBUG) are
    not configuration keys and are skipped.

    Args:
        prefix: Environment variable prefix.
        environ: Mapping to read instead of ``os.environ``.

    Returns:
        Dictionary of parsed config values with nested structure.
    """
    source = os.environ if environ is None else environ
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key, value in source.items():
        if not key.startswith(prefix):
            continue
        config_key = key[len(prefix) :]
        if "__" not in config_key:
            continue
        config_path = config_key.replace("__", ".").lower()
        set_nested_key(result, config_path, parse_env_value(value))

    return result


def parse_compat_env_vars(
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Parse the unprefixed variables of the original deployment.

    Empty values are ignored.
    """
    source = os.environ if environ is None else environ
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    seen: set[str] = set()

    for env_name, config_path in COMPAT_ENV_VARS:
        value = source.get(env_name, "")
        if not value or config_path in seen:
            continue
        seen.add(config_path)
        parsed = parse_env_value(value) if config_path == "server.port" else value
        set_nested_key(result, config_path, parsed)

    return result


def parse_env_value(value: str) -> Any:  # pyright: ignore[reportExplicitAny]
    """Parse an environment variable value with type inference.

    Order of type inference:
        1. Boolean: true/false (case-insensitive)
        2. Integer: parseable as int
        3. Float: parseable as float (with decimal point)
        4. JSON array or object
        5. String: anything else
    """
    lower_value = value.lower()
    if lower_value in ("true", "false"):
        return lower_value == "true"

    try:
        return int(value)
    except ValueError:
        pass

    if "." in value:
        try:
            return float(value)
        except ValueError:
            pass

    if (value.startswith("[") and value.endswith("]")) or (
        value.startswith("{") and value.endswith("}")
    ):
        try:
            return orjson.loads(value)
        except orjson.JSONDecodeError:
            pass

    return value


def set_nested_key(
    d: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    key_path: str,
    value: Any,  # pyright: ignore[reportExplicitAny]
) -> None:
    """Set a value at a dotted key path in a nested dictionary.

    Creates intermediate dictionaries as needed.

    Example:
        >>> d = {}
        >>> set_nested_key(d, "logging.level", "debug")
        >>> d
        {'logging': {'level': 'debug'}}
    """
    parts = key_path.split(".")
    current = d

    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]

    current[parts[-1]] = value
