"""GitHub REST API access."""

from .api import delete_release_asset, get_release_by_tag, list_release_assets
from .http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from .model import Asset, Release

__all__ = [
    "Asset",
    "Release",
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    "delete_release_asset",
    "get_release_by_tag",
    "list_release_assets",
]
