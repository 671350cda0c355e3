from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class Release:
    id: int
    name: str
    tag: str


@dataclass(frozen=True, slots=True)
class Asset:
    """A downloadable file attached to a release."""

    id: int
    name: str
    created_at: datetime
    # As returned by the API; used verbatim in log lines.
    created_at_raw: str


def parse_timestamp(raw: str) -> datetime:
    """Parse an API timestamp (``2024-05-01T12:00:00Z``) as an aware UTC datetime.

    Raises:
        ValueError: If the value is not ISO-8601.
    """
    value = datetime.fromisoformat(raw)
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def release_from_json(data: dict[str, Any], tag: str) -> Release:
    """Build a Release from an API object.

    Raises:
        ValueError: If ``id`` is missing or not an integer.
    """
    release_id = data.get("id")
    if isinstance(release_id, bool) or not isinstance(release_id, int):
        raise ValueError("Missing release id in response")
    name = data.get("name")
    # Releases without a title have name null; the tag is what users see then.
    return Release(id=release_id, name=name if isinstance(name, str) and name else tag, tag=tag)


def asset_from_json(data: dict[str, Any]) -> Asset:
    """Build an Asset from an API object.

    Raises:
        ValueError: If a required field is missing or malformed.
    """
    asset_id = data.get("id")
    name = data.get("name")
    created = data.get("created_at")
    if isinstance(asset_id, bool) or not isinstance(asset_id, int):
        raise ValueError("Missing asset id in response")
    if not isinstance(name, str):
        raise ValueError(f"Missing name for asset {asset_id}")
    if not isinstance(created, str):
        raise ValueError(f"Missing created_at for asset {asset_id}")
    return Asset(
        id=asset_id,
        name=name,
        created_at=parse_timestamp(created),
        created_at_raw=created,
    )
