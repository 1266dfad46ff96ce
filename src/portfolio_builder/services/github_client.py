"""Minimal GitHub REST client used by repository sync.

Only the calls the sync needs are implemented. Failures surface as
:class:`GitHubAPIError` carrying the upstream status so callers can map
them to their own errors.
"""

from __future__ import annotations

from typing import Any

import httpx

from portfolio_builder.config import get_github_api_url

__all__ = ["GitHubAPIError", "GitHubClient"]

GITHUB_API_VERSION = "2022-11-28"
REPOS_PER_PAGE = 100


class GitHubAPIError(RuntimeError):
    """Raised when a GitHub request fails.

    Attributes:
        status_code: Upstream HTTP status, or None for transport errors.
        rate_limited: True when GitHub throttled the request.
    """

    def __init__(self, status_code: int | None, message: str, rate_limited: bool = False) -> None:
        self.status_code = status_code
        self.rate_limited = rate_limited
        super().__init__(message)


def _is_rate_limited(response: httpx.Response, message: str) -> bool:
    if response.status_code == 429:
        return True
    if response.status_code != 403:
        return False
    return (
        response.headers.get("x-ratelimit-remaining") == "0"
        or "rate limit" in message.lower()
    )


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.reason_phrase


class GitHubClient:
    """Authenticated GitHub client for one user token.

    Usable as a context manager; pass ``transport`` to substitute the
    network (``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url or get_github_api_url(),
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            },
            transport=transport,
        )

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        try:
            response = self._client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise GitHubAPIError(None, f"GitHub request failed: {exc}") from exc

        if response.is_error:
            message = _error_message(response)
            raise GitHubAPIError(
                response.status_code, message, rate_limited=_is_rate_limited(response, message)
            )
        return response

    def list_owned_repositories(self) -> list[dict[str, Any]]:
        """Return every repository the token's user owns, most recently pushed first.

        Follows ``Link: rel="next"`` until the last page. A next link that was
        already fetched is treated as a failure rather than followed again.

        Raises:
            GitHubAPIError: On any non-2xx response or transport failure.
        """
        repos: list[dict[str, Any]] = []
        response = self._get(
            "/user/repos",
            params={
                "type": "owner",
                "sort": "pushed",
                "direction": "desc",
                "per_page": REPOS_PER_PAGE,
            },
        )
        seen: set[str] = set()
        while True:
            repos.extend(response.json())
            next_link = response.links.get("next", {}).get("url")
            if not next_link:
                break
            if next_link in seen:
                raise GitHubAPIError(None, f"GitHub pagination loops back to {next_link}")
            seen.add(next_link)
            response = self._get(next_link)

        return repos
