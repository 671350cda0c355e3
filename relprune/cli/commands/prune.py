"""Prune command - delete release assets older than the retention window."""

from __future__ import annotations

import os
from pathlib import Path

import typer

from relprune.cli.commands._helpers import exit_with_code, value_or_exit
from relprune.core.config import load_config
from relprune.core.context import resolve_repo
from relprune.core.errors import ContextError, ErrorCode
from relprune.core.inputs import (
    DRY_RUN,
    KEEP_DAYS_ASSETS,
    TAG_NAMES,
    TOKEN,
    env_inputs,
    merge_inputs,
    resolve_inputs,
)
from relprune.github.api import DEFAULT_API_URL
from relprune.github.http import RealHttpClient
from relprune.output.console import make_console
from relprune.output.report import report_inputs, report_summary, report_unexpected
from relprune.services.prune import PruneService


def prune(
    tags: str | None = typer.Option(
        None, "--tags", help="Comma-separated release tags to process [env: INPUT_TAG_NAMES]"
    ),
    keep_days: str | None = typer.Option(
        None,
        "--keep-days",
        help="Keep assets newer than this many days (default 30) [env: INPUT_KEEP_DAYS_ASSETS]",
    ),
    token: str | None = typer.Option(
        None, "--token", help="GitHub token [env: INPUT_TOKEN]", show_default=False
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="List what would be deleted [env: INPUT_DRY_RUN=true]"
    ),
    repo: str | None = typer.Option(
        None, "--repo", help="Target repository as owner/name (default: from the Actions context)"
    ),
    config: Path | None = typer.Option(
        None, "--config", help="TOML file with a [prune] table of default inputs"
    ),
    api_url: str | None = typer.Option(
        None, "--api-url", help="API base URL [env: GITHUB_API_URL]"
    ),
) -> None:
    """Delete release assets older than the retention window."""
    environ = os.environ
    console = make_console(environ)

    file_inputs: dict[str, str] = {}
    if config is not None:
        file_inputs = value_or_exit(load_config(config), console)

    raw = merge_inputs(
        file_inputs,
        env_inputs(environ),
        {
            TAG_NAMES: tags,
            KEEP_DAYS_ASSETS: keep_days,
            TOKEN: token,
            DRY_RUN: "true" if dry_run else None,
        },
    )
    inputs = value_or_exit(resolve_inputs(raw), console)
    report_inputs(console, inputs)

    try:
        target = resolve_repo(environ, repo)
    except ContextError as e:
        report_unexpected(console, e)
        exit_with_code(int(ErrorCode.ENV_ERROR))

    service = PruneService(
        http=RealHttpClient(inputs.token),
        repo=target,
        console=console,
        base_url=api_url or environ.get("GITHUB_API_URL") or DEFAULT_API_URL,
    )
    try:
        summary = service.run(inputs)
    except Exception as e:  # noqa: BLE001
        report_unexpected(console, e)
        exit_with_code(int(ErrorCode.INTERNAL_ERROR))

    report_summary(console, summary)
