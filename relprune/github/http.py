"""HTTP client abstraction for the GitHub REST API.

This module provides:
- HttpClient: Protocol for HTTP operations (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import http.client
import json
import re
import ssl
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any, Protocol, cast, runtime_checkable

from relprune import __version__
from relprune.core.result import Err, Ok, Result
from relprune.core.structured import as_obj_list, as_str_dict, get_str

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
    "HttpError",
    "DEFAULT_TIMEOUT_SECONDS",
]

DEFAULT_TIMEOUT_SECONDS = 30.0
API_VERSION = "2022-11-28"

_LINK_PART = re.compile(r'<([^>]+)>\s*;\s*rel="([^"]+)"')


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    This abstraction allows injecting mock clients for testing,
    avoiding real network calls in unit tests.
    """

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        """Fetch URL and parse the body as a JSON object."""
        ...

    def get_json_pages(self, url: str) -> Result[list[object], HttpError]:
        """Fetch a paginated JSON array, following ``rel="next"`` links.

        Returns:
            Ok with the items of every page, in order, or Err with HttpError
        """
        ...

    def delete(self, url: str) -> Result[None, HttpError]:
        """Send a DELETE request."""
        ...


def next_link(link_header: str | None) -> str | None:
    """Return the ``rel="next"`` target of a Link header, if any."""
    if not link_header:
        return None
    for part in link_header.split(","):
        match = _LINK_PART.search(part)
        if match and "next" in match.group(2).split():
            return match.group(1)
    return None


def _error_message(e: urllib.error.HTTPError) -> str:
    # GitHub puts the useful part in the JSON body, e.g. {"message": "Not Found"}
    try:
        body: object = json.loads(e.read().decode("utf-8"))
    except (OSError, ValueError, http.client.HTTPException):
        return str(e.reason)
    data = as_str_dict(body)
    message = get_str(data, "message") if data is not None else None
    return message or str(e.reason)


@dataclass(frozen=True, slots=True)
class _Response:
    body: bytes
    link: str | None


class RealHttpClient:
    """Real HTTP client using urllib.

    Handles:
    - Bearer token authentication
    - HTTPS with system certificates
    - Link-header pagination
    - Timeout handling
    """

    def __init__(
        self,
        token: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        user_agent: str = f"relprune/{__version__}",
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._token = token
        self._ssl_context = ssl.create_default_context()

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self._token}",
            "User-Agent": self.user_agent,
            "X-GitHub-Api-Version": API_VERSION,
        }

    def _request(self, url: str, method: str = "GET") -> Result[_Response, HttpError]:
        try:
            req = urllib.request.Request(url, headers=self._headers(), method=method)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(_Response(body=response.read(), link=response.headers.get("Link")))
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=_error_message(e)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except http.client.HTTPException as e:
            # Truncated or malformed responses, e.g. IncompleteRead
            return Err(HttpError(url=url, status=0, message=str(e) or type(e).__name__))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

    @staticmethod
    def _decode(url: str, body: bytes) -> Result[object, HttpError]:
        try:
            data: object = json.loads(body.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=0, message=f"JSON parse error: {e}"))
        return Ok(data)

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        result = self._request(url)
        if isinstance(result, Err):
            return result

        decoded = self._decode(url, result.value.body)
        if isinstance(decoded, Err):
            return decoded
        data = as_str_dict(decoded.value)
        if data is None:
            return Err(HttpError(url=url, status=0, message="Expected JSON object"))
        # Values are dynamic; preserve as Any for callers.
        return Ok(cast(dict[str, Any], data))

    def get_json_pages(self, url: str) -> Result[list[object], HttpError]:
        items: list[object] = []
        page_url: str | None = url
        seen: set[str] = set()
        while page_url is not None and page_url not in seen:
            seen.add(page_url)
            result = self._request(page_url)
            if isinstance(result, Err):
                return result

            decoded = self._decode(page_url, result.value.body)
            if isinstance(decoded, Err):
                return decoded
            page = as_obj_list(decoded.value)
            if page is None:
                return Err(HttpError(url=page_url, status=0, message="Expected JSON array"))
            items.extend(page)
            page_url = next_link(result.value.link)
        return Ok(items)

    def delete(self, url: str) -> Result[None, HttpError]:
        result = self._request(url, method="DELETE")
        if isinstance(result, Err):
            return result
        return Ok(None)


class MockHttpClient:
    """Mock HTTP client for testing.

    Allows setting predefined responses for specific URLs. Unknown URLs
    answer 404, like the API does for a missing release.

    Usage:
        client = MockHttpClient()
        client.set_json("https://api.example.com/release", {"id": 1})
        result = client.get_json("https://api.example.com/release")
        assert result == Ok({"id": 1})
    """

    def __init__(self) -> None:
        self._json_responses: dict[str, dict[str, Any] | HttpError] = {}
        self._page_responses: dict[str, list[object] | HttpError] = {}
        self._delete_responses: dict[str, HttpError | None] = {}
        self.calls: list[tuple[str, str]] = []

    def set_json(self, url: str, response: dict[str, Any] | HttpError) -> None:
        self._json_responses[url] = response

    def set_pages(self, url: str, response: list[object] | HttpError) -> None:
        """Set the concatenated items a paginated listing returns."""
        self._page_responses[url] = response

    def set_delete(self, url: str, response: HttpError | None = None) -> None:
        """Register a DELETE target; None means success."""
        self._delete_responses[url] = response

    def get_json(self, url: str) -> Result[dict[str, Any], HttpError]:
        self.calls.append(("get_json", url))

        if url not in self._json_responses:
            return Err(HttpError(url=url, status=404, message="Not Found"))

        response = self._json_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)

    def get_json_pages(self, url: str) -> Result[list[object], HttpError]:
        self.calls.append(("get_json_pages", url))

        if url not in self._page_responses:
            return Err(HttpError(url=url, status=404, message="Not Found"))

        response = self._page_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(list(response))

    def delete(self, url: str) -> Result[None, HttpError]:
        self.calls.append(("delete", url))

        if url not in self._delete_responses:
            return Err(HttpError(url=url, status=404, message="Not Found"))

        response = self._delete_responses[url]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(None)

    def calls_for(self, method: str) -> list[str]:
        """URLs requested with a given method, in call order."""
        return [url for m, url in self.calls if m == method]
