"""Retention cutoff and asset selection."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from relprune.core.errors import InvalidCutoffError
from relprune.github.model import Asset

__all__ = ["compute_cutoff", "format_cutoff", "is_expired", "select_expired"]


def compute_cutoff(now: datetime, keep_days: int | None) -> datetime | None:
    """Return ``now`` minus ``keep_days`` calendar days, in UTC.

    None stands for an invalid instant: a non-numeric retention window, or one
    so large the result falls outside the representable range.
    """
    if keep_days is None:
        return None
    try:
        return now.astimezone(UTC) - timedelta(days=keep_days)
    except OverflowError:
        return None


def format_cutoff(cutoff: datetime | None) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. ``2024-05-01T12:00:00.000Z``.

    Raises:
        InvalidCutoffError: If ``cutoff`` is the invalid instant.
    """
    if cutoff is None:
        raise InvalidCutoffError("Invalid time value")
    return cutoff.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def is_expired(asset: Asset, cutoff: datetime | None) -> bool:
    # Nothing compares as older than an invalid instant.
    if cutoff is None:
        return False
    return asset.created_at < cutoff


def select_expired(assets: Iterable[Asset], cutoff: datetime | None) -> list[Asset]:
    """Assets created strictly before ``cutoff``, in their original order."""
    return [asset for asset in assets if is_expired(asset, cutoff)]
