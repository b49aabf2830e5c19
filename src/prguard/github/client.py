"""Minimal GitHub REST client for the three calls PR Size Guard needs."""

from __future__ import annotations

import logging
from typing import Any

import requests

from prguard import __version__
from prguard.exceptions import PermanentHttpError, http_error_for
from prguard.github.context import DEFAULT_API_URL

logger = logging.getLogger("prguard.github.client")

PER_PAGE = 100


class GitHubClient:
    """Thin wrapper over `requests.Session` that raises typed HTTP errors."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        session: requests.Session | None = None,
        timeout: float = 30,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": f"pr-size-guard/{__version__}",
        })

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise PermanentHttpError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            try:
                payload = response.json()
                detail = payload.get("message", "") if isinstance(payload, dict) else ""
            except ValueError:
                detail = response.text[:200]
            raise http_error_for(
                response.status_code,
                f"{method} {path} returned {response.status_code}"
                + (f": {detail}" if detail else ""),
            )
        return response

    def _json(self, response: requests.Response, method: str, path: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise PermanentHttpError(
                f"{method} {path} returned a body that is not JSON",
                status=response.status_code,
            ) from e

    def get_pull_request(self, owner: str, repo: str, number: int) -> dict:
        path = f"/repos/{owner}/{repo}/pulls/{number}"
        return self._json(self._request("GET", path), "GET", path)

    def list_pull_files_page(
        self, owner: str, repo: str, number: int, page: int, per_page: int = PER_PAGE
    ) -> tuple[list[dict], bool]:
        """Fetch one page of changed files.

        Returns:
            (records, has_next) where `has_next` reflects the `Link` header.
        """
        path = f"/repos/{owner}/{repo}/pulls/{number}/files"
        response = self._request("GET", path, params={"per_page": per_page, "page": page})
        records = self._json(response, "GET", path)
        if not isinstance(records, list):
            raise PermanentHttpError(
                f"GET {path} returned {type(records).__name__}, expected a list",
                status=response.status_code,
            )
        return records, "next" in response.links

    def create_issue_comment(self, owner: str, repo: str, number: int, body: str) -> None:
        self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues/{number}/comments",
            json={"body": body},
        )
