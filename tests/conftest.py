"""Shared test fixtures for PR Size Guard."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from prguard.config import PolicyConfig
from prguard.github.client import GitHubClient
from prguard.github.context import RunContext
from prguard.models import ChangedFile

OWNER = "octo"
REPO = "widgets"
PR_NUMBER = 7
API = "https://api.github.com"
PR_PATH = f"/repos/{OWNER}/{REPO}/pulls/{PR_NUMBER}"
FILES_PATH = f"{PR_PATH}/files"
COMMENTS_PATH = f"/repos/{OWNER}/{REPO}/issues/{PR_NUMBER}/comments"


class FakeResponse:
    """Just enough of `requests.Response` for the client."""

    def __init__(
        self,
        status_code: int = 200,
        payload: Any = None,
        links: dict | None = None,
        text: str = "",
    ) -> None:
        self.status_code = status_code
        self._payload = payload
        self.links = links or {}
        self.text = text

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class FakeSession:
    """Queue-backed stand-in for `requests.Session`.

    Responses are queued per (method, path, page); a queued exception is
    raised instead of returned.
    """

    def __init__(self) -> None:
        self.headers: dict[str, str] = {}
        self.calls: list[tuple[str, str, dict | None, Any]] = []
        self._queues: dict[tuple, list] = {}

    def queue(self, method: str, path: str, *responses, page: int | None = None) -> None:
        self._queues.setdefault((method, path, page), []).extend(responses)

    def request(self, method, url, timeout=None, params=None, json=None, **kwargs):
        path = url[len(API):] if url.startswith(API) else url
        page = (params or {}).get("page")
        self.calls.append((method, path, params, json))
        queue = self._queues.get((method, path, page)) or self._queues.get((method, path, None))
        if not queue:
            raise AssertionError(f"Unexpected request: {method} {path} page={page}")
        response = queue.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def calls_to(self, method: str, path: str) -> list:
        return [c for c in self.calls if c[0] == method and c[1] == path]


def file_record(
    filename: str,
    changes: int | None = None,
    additions: int = 0,
    deletions: int = 0,
    status: str = "modified",
    **extra: Any,
) -> dict:
    """A `pulls/{n}/files` record as GitHub returns it."""
    record = {
        "filename": filename,
        "status": status,
        "additions": additions,
        "deletions": deletions,
        **extra,
    }
    if changes is not None:
        record["changes"] = changes
    return record


def changed(path: str, changes: int | None = None, **kwargs: Any) -> ChangedFile:
    return ChangedFile.from_api(file_record(path, changes=changes, **kwargs))


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(session: FakeSession) -> GitHubClient:
    return GitHubClient("t0ken", base_url=API, session=session)


@pytest.fixture
def ctx() -> RunContext:
    return RunContext(owner=OWNER, repo=REPO, pr_number=PR_NUMBER, api_url=API)


@pytest.fixture
def config() -> PolicyConfig:
    return PolicyConfig()


@pytest.fixture
def sleeps() -> list[float]:
    """Collects retry delays instead of sleeping."""
    return []


@pytest.fixture
def event_file(tmp_path: Path) -> Path:
    path = tmp_path / "event.json"
    path.write_text(json.dumps({"pull_request": {"number": PR_NUMBER}}))
    return path


@pytest.fixture
def github_env(monkeypatch: pytest.MonkeyPatch, event_file: Path) -> None:
    """A clean GitHub Actions environment for a pull_request event."""
    for name in ("GITHUB_TOKEN", "GH_TOKEN", "GITHUB_ACTIONS", "GITHUB_API_URL"):
        monkeypatch.delenv(name, raising=False)
    for name in ("MAX_LINES", "MAX_FILES", "TEST_PATHS", "EXCLUDE", "MODE", "RETRIES", "TOKEN"):
        monkeypatch.delenv(f"INPUT_{name}", raising=False)
    monkeypatch.setenv("GITHUB_TOKEN", "t0ken")
    monkeypatch.setenv("GITHUB_REPOSITORY", f"{OWNER}/{REPO}")
    monkeypatch.setenv("GITHUB_EVENT_PATH", str(event_file))
