"""GitHub release endpoints used by the pruner.

Pure functions over an ``HttpClient`` so tests can inject ``MockHttpClient``:
- get_release_by_tag: resolve a tag to a release
- list_release_assets: every asset of a release, across pages
- delete_release_asset: remove one asset
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast
from urllib.parse import quote

from relprune.core.result import Err, Ok, Result
from relprune.core.structured import as_str_dict
from relprune.github.http import HttpError
from relprune.github.model import Asset, Release, asset_from_json, release_from_json

if TYPE_CHECKING:
    from relprune.core.context import RepoRef
    from relprune.github.http import HttpClient

__all__ = [
    "DEFAULT_API_URL",
    "ASSETS_PER_PAGE",
    "get_release_by_tag",
    "list_release_assets",
    "delete_release_asset",
]

DEFAULT_API_URL = "https://api.github.com"
ASSETS_PER_PAGE = 100


def _repo_url(base_url: str, repo: RepoRef) -> str:
    return f"{base_url.rstrip('/')}/repos/{quote(repo.owner, safe='')}/{quote(repo.name, safe='')}"


def get_release_by_tag(
    http: HttpClient,
    repo: RepoRef,
    tag: str,
    *,
    base_url: str = DEFAULT_API_URL,
) -> Result[Release, HttpError]:
    """Fetch the release published for ``tag``.

    Returns:
        Ok with Release, or Err with HttpError (404 when no release has the tag)

    Example:
        >>> result = get_release_by_tag(client, RepoRef("octo", "app"), "v1.0")
        >>> if is_ok(result):
        ...     print(result.value.id)
    """
    url = f"{_repo_url(base_url, repo)}/releases/tags/{quote(tag, safe='')}"
    result = http.get_json(url)
    if isinstance(result, Err):
        return result

    try:
        return Ok(release_from_json(result.value, tag))
    except ValueError as e:
        return Err(HttpError(url=url, status=0, message=str(e)))


def list_release_assets(
    http: HttpClient,
    repo: RepoRef,
    release_id: int,
    *,
    base_url: str = DEFAULT_API_URL,
) -> Result[list[Asset], HttpError]:
    """List all assets of a release, in API order, across every page."""
    url = f"{_repo_url(base_url, repo)}/releases/{release_id}/assets?per_page={ASSETS_PER_PAGE}"
    result = http.get_json_pages(url)
    if isinstance(result, Err):
        return result

    assets: list[Asset] = []
    for item in result.value:
        data = as_str_dict(item)
        if data is None:
            return Err(HttpError(url=url, status=0, message="Expected asset object"))
        try:
            assets.append(asset_from_json(cast(dict[str, Any], data)))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
    return Ok(assets)


def delete_release_asset(
    http: HttpClient,
    repo: RepoRef,
    asset_id: int,
    *,
    base_url: str = DEFAULT_API_URL,
) -> Result[None, HttpError]:
    """Delete one release asset. Irreversible."""
    return http.delete(f"{_repo_url(base_url, repo)}/releases/assets/{asset_id}")
