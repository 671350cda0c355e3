"""Release processing: resolve, list, filter and delete assets per tag.

Every failure past input validation is best-effort: a tag whose release
cannot be resolved or listed is skipped, an asset whose delete fails is
skipped, and the run moves on. Nothing is retried.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from relprune.core.context import RepoRef
from relprune.core.inputs import PruneInputs
from relprune.core.result import Err
from relprune.github.api import (
    DEFAULT_API_URL,
    delete_release_asset,
    get_release_by_tag,
    list_release_assets,
)
from relprune.github.http import HttpClient
from relprune.github.model import Asset
from relprune.output.console import ConsoleProtocol
from relprune.services.retention import compute_cutoff, format_cutoff, select_expired

__all__ = ["RunCounters", "PruneSummary", "PruneService"]


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class RunCounters:
    considered: int = 0
    deleted: int = 0


@dataclass(frozen=True, slots=True)
class PruneSummary:
    considered: int
    deleted: int
    dry_run: bool
    cutoff: datetime | None


def _describe(asset: Asset) -> str:
    return f"{asset.name} (ID: {asset.id}, Created: {asset.created_at_raw})"


class PruneService:
    """Prune expired assets from the releases of one repository.

    The console is the run's log sink; the clock is injectable so the cutoff
    is deterministic in tests.
    """

    def __init__(
        self,
        *,
        http: HttpClient,
        repo: RepoRef,
        console: ConsoleProtocol,
        base_url: str = DEFAULT_API_URL,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._http = http
        self._repo = repo
        self._console = console
        self._base_url = base_url
        self._clock = clock

    def run(self, inputs: PruneInputs) -> PruneSummary:
        """Process every tag in order and return the run totals.

        Raises:
            InvalidCutoffError: If the retention window does not yield a valid
                cutoff. Raised before any API call.
        """
        # One cutoff for the whole run, shared by every tag.
        cutoff = compute_cutoff(self._clock(), inputs.keep_days)
        self._console.info(f"Deleting assets older than: {format_cutoff(cutoff)}")

        counters = RunCounters()
        for tag in inputs.tag_names:
            self._process_tag(tag, inputs, cutoff, counters)

        return PruneSummary(
            considered=counters.considered,
            deleted=counters.deleted,
            dry_run=inputs.dry_run,
            cutoff=cutoff,
        )

    def _process_tag(
        self,
        tag: str,
        inputs: PruneInputs,
        cutoff: datetime | None,
        counters: RunCounters,
    ) -> None:
        console = self._console
        console.header(f"Processing tag: {tag}")

        release = get_release_by_tag(self._http, self._repo, tag, base_url=self._base_url)
        if isinstance(release, Err):
            console.warning(f"Release with tag {tag} not found: {release.error}")
            return
        console.info(f"Found release: {release.value.name} (ID: {release.value.id})")

        assets = list_release_assets(
            self._http, self._repo, release.value.id, base_url=self._base_url
        )
        if isinstance(assets, Err):
            console.error(f"Error listing assets for release {tag}: {assets.error}")
            return
        console.info(f"Found {len(assets.value)} assets in release")

        counters.considered += len(assets.value)

        expired = select_expired(assets.value, cutoff)
        console.info(f"Found {len(expired)} assets older than {inputs.keep_days_label} days")
        if not expired:
            console.info("No assets to delete for this release")
            return

        for asset in expired:
            if inputs.dry_run:
                console.info(f"[DRY RUN] Would delete: {_describe(asset)}")
                continue
            self._delete(asset, counters)

    def _delete(self, asset: Asset, counters: RunCounters) -> None:
        console = self._console
        console.info(f"Deleting: {_describe(asset)}")
        result = delete_release_asset(self._http, self._repo, asset.id, base_url=self._base_url)
        if isinstance(result, Err):
            console.error(f"Failed to delete asset {asset.name}: {result.error}")
            return
        console.success(f"Successfully deleted: {asset.name}")
        counters.deleted += 1
