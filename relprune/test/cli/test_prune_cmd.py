from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from relprune import __version__
from relprune.cli.app import app
from relprune.core.errors import ErrorCode
from relprune.github.http import HttpError, MockHttpClient
from relprune.output.console import MockConsole

BASE = "https://api.github.com/repos/octo/app"

_ENV_KEYS = (
    "INPUT_TAG_NAMES",
    "INPUT_KEEP_DAYS_ASSETS",
    "INPUT_TOKEN",
    "INPUT_DRY_RUN",
    "GITHUB_ACTIONS",
    "GITHUB_API_URL",
    "GITHUB_EVENT_PATH",
    "GITHUB_REPOSITORY",
)

runner = CliRunner()


class _Harness:
    def __init__(self) -> None:
        self.console = MockConsole()
        self.client = MockHttpClient()
        self.tokens: list[str] = []

    def http(self, token: str) -> MockHttpClient:
        self.tokens.append(token)
        return self.client


@pytest.fixture
def harness(monkeypatch: pytest.MonkeyPatch) -> _Harness:
    import relprune.cli.commands.prune as prune_cmd

    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("GITHUB_REPOSITORY", "octo/app")

    h = _Harness()
    monkeypatch.setattr(prune_cmd, "make_console", lambda environ: h.console)
    monkeypatch.setattr(prune_cmd, "RealHttpClient", h.http)
    return h


def _old_release(client: MockHttpClient, tag: str = "v1.0", release_id: int = 1) -> None:
    client.set_json(f"{BASE}/releases/tags/{tag}", {"id": release_id, "name": tag})
    client.set_pages(
        f"{BASE}/releases/{release_id}/assets?per_page=100",
        [
            {"id": 10, "name": "a.zip", "created_at": "2001-01-01T00:00:00Z"},
            {"id": 11, "name": "b.zip", "created_at": "2001-01-02T00:00:00Z"},
            {"id": 12, "name": "c.zip", "created_at": "2999-01-01T00:00:00Z"},
        ],
    )
    client.set_delete(f"{BASE}/releases/assets/10")
    client.set_delete(f"{BASE}/releases/assets/11")


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_prune_deletes_and_reports(harness: _Harness) -> None:
    _old_release(harness.client)

    result = runner.invoke(app, ["prune", "--tags", "v1.0", "--token", "abc"])

    assert result.exit_code == 0
    assert harness.tokens == ["abc"]
    assert harness.console.messages[-1] == (
        "Process completed. 3 assets considered, 2 assets deleted successfully."
    )


def test_empty_tags_fail_without_api_calls(harness: _Harness) -> None:
    result = runner.invoke(app, ["prune", "--tags", "", "--token", "abc"])

    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert "error: No valid tag names provided" in harness.console.messages
    assert harness.client.calls == []
    assert harness.tokens == []


def test_missing_token(harness: _Harness) -> None:
    result = runner.invoke(app, ["prune", "--tags", "v1.0"])

    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert harness.console.find("Input required and not supplied: token")


def test_reads_actions_inputs(harness: _Harness, monkeypatch: pytest.MonkeyPatch) -> None:
    _old_release(harness.client, tag="nightly")
    monkeypatch.setenv("INPUT_TAG_NAMES", "nightly")
    monkeypatch.setenv("INPUT_TOKEN", "from-env")
    monkeypatch.setenv("INPUT_DRY_RUN", "true")

    result = runner.invoke(app, ["prune"])

    assert result.exit_code == 0
    assert harness.tokens == ["from-env"]
    assert harness.client.calls_for("delete") == []
    assert harness.console.messages[-1] == (
        "Process completed. 3 assets considered, 0 would be deleted (dry run)."
    )


def test_dry_run_env_requires_exact_literal(
    harness: _Harness, monkeypatch: pytest.MonkeyPatch
) -> None:
    _old_release(harness.client)
    monkeypatch.setenv("INPUT_DRY_RUN", "TRUE")

    result = runner.invoke(app, ["prune", "--tags", "v1.0", "--token", "abc"])

    assert result.exit_code == 0
    assert len(harness.client.calls_for("delete")) == 2


def test_cli_overrides_env_and_config(
    harness: _Harness, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    _old_release(harness.client, tag="cli-tag")
    config = tmp_path / "relprune.toml"
    config.write_text('[prune]\ntag_names = "file-tag"\ntoken = "file-token"\n', encoding="utf-8")
    monkeypatch.setenv("INPUT_TAG_NAMES", "env-tag")

    result = runner.invoke(
        app, ["prune", "--config", str(config), "--tags", "cli-tag", "--dry-run"]
    )

    assert result.exit_code == 0
    assert harness.tokens == ["file-token"]
    assert harness.console.find("Processing tags: cli-tag")


def test_bad_config_file(harness: _Harness, tmp_path: Path) -> None:
    result = runner.invoke(app, ["prune", "--config", str(tmp_path / "missing.toml")])

    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert harness.console.find("Config file not found")


def test_unresolvable_repository(harness: _Harness, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_REPOSITORY", "not-a-slug")

    result = runner.invoke(app, ["prune", "--tags", "v1.0", "--token", "abc"])

    assert result.exit_code == int(ErrorCode.ENV_ERROR)
    assert harness.console.find("Action failed with error: Invalid repository 'not-a-slug'")
    assert harness.client.calls == []
    assert harness.console.messages[:2] == [
        "Processing tags: v1.0",
        "Keeping assets newer than: 30 days",
    ]


def test_repo_option(harness: _Harness) -> None:
    harness.client.set_json(
        "https://api.github.com/repos/other/proj/releases/tags/v1", {"id": 1, "name": "v1"}
    )
    harness.client.set_pages(
        "https://api.github.com/repos/other/proj/releases/1/assets?per_page=100", []
    )

    result = runner.invoke(
        app, ["prune", "--tags", "v1", "--token", "abc", "--repo", "other/proj"]
    )

    assert result.exit_code == 0
    assert harness.console.find("Found 0 assets in release")


def test_api_url_from_environment(harness: _Harness, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3")

    result = runner.invoke(app, ["prune", "--tags", "v1", "--token", "abc"])

    assert result.exit_code == 0
    assert harness.client.calls[0] == (
        "get_json",
        "https://ghe.example.com/api/v3/repos/octo/app/releases/tags/v1",
    )


def test_non_numeric_keep_days_fails_run(harness: _Harness) -> None:
    result = runner.invoke(
        app, ["prune", "--tags", "v1.0", "--token", "abc", "--keep-days", "soon"]
    )

    assert result.exit_code == int(ErrorCode.INTERNAL_ERROR)
    assert harness.console.find("Action failed with error: Invalid time value")
    assert harness.client.calls == []


def test_partial_delete_failure_still_succeeds(harness: _Harness) -> None:
    _old_release(harness.client)
    harness.client.set_delete(
        f"{BASE}/releases/assets/10",
        HttpError(url="u", status=500, message="boom"),
    )

    result = runner.invoke(app, ["prune", "--tags", "v1.0", "--token", "abc"])

    assert result.exit_code == 0
    assert harness.console.messages[-1] == (
        "Process completed. 3 assets considered, 1 assets deleted successfully."
    )


def test_config_directory_is_reported(harness: _Harness, tmp_path: Path) -> None:
    result = runner.invoke(app, ["prune", "--config", str(tmp_path)])

    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert harness.console.has_error()
    assert harness.client.calls == []
