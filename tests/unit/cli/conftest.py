from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from strategysuite.cli import create_app


@pytest.fixture(autouse=True)
def cli_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point storage at a throwaway SQLite file and silence logging."""
    database = tmp_path / "projects.db"
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("STRATEGYSUITE_CONFIG", raising=False)
    monkeypatch.setenv("STRATEGYSUITE_STORAGE__BACKEND", "sqlite")
    monkeypatch.setenv("STRATEGYSUITE_STORAGE__PATH", str(database))
    monkeypatch.setenv("STRATEGYSUITE_LOGGING__LEVEL", "error")
    return database


@pytest.fixture
def run_cli(console: Console) -> Callable[..., int]:
    """Run the CLI with global options and return the exit code."""
    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        try:
            app.meta(list(args))
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run
