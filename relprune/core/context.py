"""Execution context: which repository the run targets.

The repository is never an explicit input in CI. It comes from the
triggering event payload, or from the runner's ``GITHUB_REPOSITORY``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .errors import ContextError
from .structured import as_str_dict, get_str, get_table

__all__ = ["RepoRef", "parse_repo_slug", "resolve_repo"]


@dataclass(frozen=True, slots=True)
class RepoRef:
    owner: str
    name: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"


def parse_repo_slug(slug: str) -> RepoRef:
    """Parse ``owner/name``.

    Raises:
        ContextError: If the slug is not exactly two non-empty parts.
    """
    parts = slug.strip().split("/")
    if len(parts) != 2 or not all(parts):
        raise ContextError(f"Invalid repository '{slug}', expected owner/name")
    return RepoRef(owner=parts[0], name=parts[1])


def _event_full_name(event_path: str) -> str | None:
    try:
        obj: object = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ContextError(f"Cannot read event payload {event_path}: {e}") from e

    payload = as_str_dict(obj)
    if payload is None:
        return None
    repository = get_table(payload, "repository")
    if repository is None:
        return None
    return get_str(repository, "full_name")


def resolve_repo(environ: Mapping[str, str], override: str | None = None) -> RepoRef:
    """Determine the target repository.

    Precedence: explicit override, ``repository.full_name`` from the event
    payload at ``GITHUB_EVENT_PATH``, then ``GITHUB_REPOSITORY``.

    Raises:
        ContextError: If no source names a repository or the value is malformed.
    """
    if override:
        return parse_repo_slug(override)

    event_path = environ.get("GITHUB_EVENT_PATH")
    if event_path:
        full_name = _event_full_name(event_path)
        if full_name:
            return parse_repo_slug(full_name)

    slug = environ.get("GITHUB_REPOSITORY", "").strip()
    if slug:
        return parse_repo_slug(slug)

    raise ContextError("Cannot determine repository: set GITHUB_REPOSITORY or pass --repo")
