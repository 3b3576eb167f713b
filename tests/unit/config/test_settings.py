from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem

from strategysuite.config import (
    CONFIG_PATH_ENV_VAR,
    ConfigLoadError,
    LogFormat,
    Settings,
    StorageBackend,
)


class TestDefaults:
    def test_default_values(self) -> None:
        settings = Settings.load(cwd=Path("/nonexistent"), include_env=False)

        assert settings.server.host == "0.0.0.0"
        assert settings.server.port == 8080
        assert settings.logging.format is LogFormat.JSON
        assert settings.storage.backend is StorageBackend.SQLITE
        assert settings.ai.model == "gemini-3-flash-preview"
        assert settings.ai.enabled is False
        assert settings.sync.debounce_seconds == 1.0
        assert settings.sync.load_timeout == 10.0
        assert settings.client.base_url == "http://127.0.0.1:8080"

    def test_explicit_storage_path(self) -> None:
        settings = Settings.from_dict({"storage": {"path": "/data/p.db"}})

        assert settings.storage.database_path == Path("/data/p.db")

    def test_api_key_hidden_from_repr(self) -> None:
        settings = Settings.from_dict({"ai": {"api_key": "secret-key"}})

        assert settings.ai.enabled
        assert "secret-key" not in repr(settings)


class TestFromDict:
    def test_ignores_unknown_keys(self) -> None:
        settings = Settings.from_dict({"server": {"port": 9000, "color": "blue"}})

        assert settings.server.port == 9000

    def test_invalid_value_raises_load_error(self) -> None:
        with pytest.raises(ConfigLoadError, match="Invalid configuration"):
            _ = Settings.from_dict({"server": {"port": 70000}})

    def test_settings_are_frozen(self) -> None:
        settings = Settings.from_dict({})

        with pytest.raises(ValueError, match="frozen"):
            settings.server.port = 1  # pyright: ignore[reportAttributeAccessIssue]


class TestLoad:
    def test_reads_file_from_cwd(self, fs: FakeFilesystem) -> None:
        fs.create_file(
            "/work/strategysuite.toml",
            contents='[sync]\ndebounce_seconds = 0.25\n[storage]\nbackend = "memory"\n',
        )

        settings = Settings.load(cwd=Path("/work"), include_env=False)

        assert settings.sync.debounce_seconds == 0.25
        assert settings.storage.backend is StorageBackend.MEMORY

    def test_explicit_path_must_exist(self, fs: FakeFilesystem) -> None:
        with pytest.raises(ConfigLoadError, match="not found"):
            _ = Settings.load(Path("/missing.toml"), include_env=False)

    def test_config_path_from_environment(self, fs: FakeFilesystem) -> None:
        fs.create_file("/etc/ss.toml", contents='[server]\nport = 7000\n')

        settings = Settings.load(
            cwd=Path("/work"), environ={CONFIG_PATH_ENV_VAR: "/etc/ss.toml"}
        )

        assert settings.server.port == 7000

    def test_precedence_file_then_prefixed_then_compat(
        self, fs: FakeFilesystem
    ) -> None:
        fs.create_file(
            "/work/strategysuite.toml",
            contents='[server]\nport = 7000\nhost = "127.0.0.1"\n',
        )
        environ = {
            "STRATEGYSUITE_SERVER__PORT": "7100",
            "PORT": "7200",
            "STRATEGYSUITE_AI__MODEL": "other-model",
        }

        settings = Settings.load(cwd=Path("/work"), environ=environ)

        assert settings.server.host == "127.0.0.1"
        assert settings.server.port == 7200
        assert settings.ai.model == "other-model"

    def test_include_env_false_ignores_environment(self, fs: FakeFilesystem) -> None:
        settings = Settings.load(
            cwd=Path("/work"),
            include_env=False,
            environ={"GEMINI_API_KEY": "key"},
        )

        assert settings.ai.api_key == ""
