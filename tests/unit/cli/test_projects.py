from collections.abc import Callable
from pathlib import Path

import orjson
import pytest

from strategysuite.cli import ExitCode
from strategysuite.project import ProjectState
from strategysuite.sync import LegacyProjectCache


def _json_list(capsys: pytest.CaptureFixture[str]) -> list[dict[str, object]]:
    return orjson.loads(capsys.readouterr().out)


class TestCreateAndList:
    def test_created_project_is_listed(
        self, run_cli: Callable[..., int], capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run_cli("projects", "create", "Acme", "--user", "u1") == 0
        assert "Created project 'Acme'" in capsys.readouterr().out

        assert run_cli("projects", "list", "--user", "u1", "--format", "json") == 0

        projects = _json_list(capsys)
        assert len(projects) == 1
        assert projects[0]["name"] == "Acme"
        assert projects[0]["selectedIdeas"] == 0

    def test_table_output(
        self, run_cli: Callable[..., int], capsys: pytest.CaptureFixture[str]
    ) -> None:
        _ = run_cli("projects", "create", "Acme Coffee", "-u", "u1")
        _ = capsys.readouterr()

        assert run_cli("projects", "list", "-u", "u1") == 0

        out = capsys.readouterr().out
        assert "Last Updated" in out
        assert "Acme Coffee" in out

    def test_empty_list(
        self, run_cli: Callable[..., int], capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run_cli("projects", "list", "-u", "nobody") == 0
        assert "No projects found" in capsys.readouterr().out

    def test_blank_name_is_rejected(self, run_cli: Callable[..., int]) -> None:
        code = run_cli("projects", "create", "   ", "-u", "u1")

        assert code == ExitCode.VALIDATION_ERROR

    def test_users_are_isolated(
        self, run_cli: Callable[..., int], capsys: pytest.CaptureFixture[str]
    ) -> None:
        _ = run_cli("projects", "create", "Acme", "-u", "u1")
        _ = capsys.readouterr()

        _ = run_cli("projects", "list", "-u", "u2", "--format", "json")

        assert _json_list(capsys) == []


class TestDelete:
    def test_deletes_existing_project(
        self, run_cli: Callable[..., int], capsys: pytest.CaptureFixture[str]
    ) -> None:
        _ = run_cli("projects", "create", "Acme", "-u", "u1")
        _ = capsys.readouterr()
        _ = run_cli("projects", "list", "-u", "u1", "--format", "json")
        project_id = str(_json_list(capsys)[0]["id"])

        assert run_cli("projects", "delete", project_id, "-u", "u1") == 0
        assert f"Deleted project {project_id}" in capsys.readouterr().out

        _ = run_cli("projects", "list", "-u", "u1", "--format", "json")
        assert _json_list(capsys) == []

    def test_missing_project_is_not_found(self, run_cli: Callable[..., int]) -> None:
        assert run_cli("projects", "delete", "nope", "-u", "u1") == ExitCode.NOT_FOUND


class TestExport:
    def test_writes_report_into_directory(
        self,
        run_cli: Callable[..., int],
        capsys: pytest.CaptureFixture[str],
        tmp_path: Path,
    ) -> None:
        _ = run_cli("projects", "create", "Acme Co", "-u", "u1")
        _ = capsys.readouterr()
        _ = run_cli("projects", "list", "-u", "u1", "--format", "json")
        project_id = str(_json_list(capsys)[0]["id"])
        out_dir = tmp_path / "reports"
        out_dir.mkdir()

        code = run_cli(
            "projects", "export", project_id, "-u", "u1", "--output", str(out_dir)
        )

        assert code == 0
        reports = list(out_dir.glob("Strategy_Report_Acme_Co_*.html"))
        assert len(reports) == 1
        assert "Strategic Analysis Report" in reports[0].read_text(encoding="utf-8")

    def test_missing_project_is_not_found(self, run_cli: Callable[..., int]) -> None:
        assert run_cli("projects", "export", "nope", "-u", "u1") == ExitCode.NOT_FOUND


class TestMigrate:
    def test_no_cache(
        self,
        run_cli: Callable[..., int],
        capsys: pytest.CaptureFixture[str],
        tmp_path: Path,
    ) -> None:
        cache = tmp_path / "missing.json"

        assert run_cli("projects", "migrate", "-u", "u1", "--cache", str(cache)) == 0
        assert "No legacy cache found" in capsys.readouterr().out

    def test_uploads_and_clears_cache(
        self,
        run_cli: Callable[..., int],
        capsys: pytest.CaptureFixture[str],
        make_project: Callable[..., ProjectState],
        tmp_path: Path,
    ) -> None:
        cache = LegacyProjectCache(tmp_path / "cache.json")
        cache.write([make_project("a", "First"), make_project("b", "Second")])

        code = run_cli("projects", "migrate", "-u", "u1", "--cache", str(cache.path))

        assert code == 0
        assert "Migrated 2 project(s) for u1" in capsys.readouterr().out
        assert not cache.exists()
        _ = run_cli("projects", "list", "-u", "u1", "--format", "json")
        assert {p["id"] for p in _json_list(capsys)} == {"a", "b"}

    def test_corrupt_cache_is_io_error(
        self, run_cli: Callable[..., int], tmp_path: Path
    ) -> None:
        cache = tmp_path / "cache.json"
        _ = cache.write_text('{"not": "a list"}')

        code = run_cli("projects", "migrate", "-u", "u1", "--cache", str(cache))

        assert code == ExitCode.IO_ERROR
        assert cache.exists()


class TestGlobalOptions:
    def test_missing_config_file_is_load_error(
        self, run_cli: Callable[..., int], tmp_path: Path
    ) -> None:
        code = run_cli(
            "--config", str(tmp_path / "nope.toml"), "projects", "list", "-u", "u1"
        )

        assert code == ExitCode.LOAD_ERROR

    def test_config_file_selects_storage(
        self,
        run_cli: Callable[..., int],
        capsys: pytest.CaptureFixture[str],
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.delenv("STRATEGYSUITE_STORAGE__PATH")
        other = tmp_path / "other.db"
        config = tmp_path / "custom.toml"
        _ = config.write_text(f'[storage]\npath = "{other.as_posix()}"\n')

        _ = run_cli("--config", str(config), "projects", "create", "Acme", "-u", "u1")

        assert other.exists()
        assert "Created project" in capsys.readouterr().out
