"""Default configuration values.

DEFAULT_CONFIG is a plain dict so it can be passed straight to deep_merge.
The merge functions copy values, so the original is never mutated.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "server": {
        "host": "0.0.0.0",  # noqa: S104
        "port": 8080,
        "reload": False,
    },
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
    "storage": {
        "backend": "sqlite",
        "path": "",
        "collection": "users",
        "firestore_project": "",
        "credentials_file": "",
    },
    "ai": {
        "api_key": "",
        "model": "gemini-3-flash-preview",
    },
    "sync": {
        "debounce_seconds": 1.0,
        "load_timeout": 10.0,
    },
    "client": {
        "base_url": "http://127.0.0.1:8080",
        "timeout": 10.0,
    },
}
