"""GitHub Actions run context: token, repository and pull request number."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from prguard.exceptions import AuthError, ContextError

logger = logging.getLogger("prguard.github.context")

DEFAULT_API_URL = "https://api.github.com"
TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")


@dataclass(frozen=True)
class RunContext:
    """Where the current run points on GitHub."""
    owner: str
    repo: str
    pr_number: int
    api_url: str = DEFAULT_API_URL

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


def resolve_token(explicit: str | None = None, env: Mapping[str, str] | None = None) -> str:
    """Resolve the API token: GITHUB_TOKEN, then GH_TOKEN, then the input.

    Raises:
        AuthError: If none of them is set.
    """
    env = os.environ if env is None else env
    for name in TOKEN_ENV_VARS:
        value = env.get(name, "").strip()
        if value:
            return value
    if explicit and explicit.strip():
        return explicit.strip()
    raise AuthError(
        "Missing GITHUB_TOKEN. Add `env: { GITHUB_TOKEN: ${{ secrets.GITHUB_TOKEN }} }` "
        "and ensure workflow permissions."
    )


def _pr_number_from_event(event_path: str | None) -> int | None:
    if not event_path or not Path(event_path).is_file():
        return None
    try:
        with open(event_path, encoding="utf-8") as f:
            event = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read event payload {event_path}: {e}")
        return None
    if not isinstance(event, dict):
        return None
    pr = event.get("pull_request") or {}
    number = pr.get("number") if isinstance(pr, dict) else None
    return number if isinstance(number, int) else None


def load_run_context(
    repository: str | None = None,
    pr_number: int | None = None,
    env: Mapping[str, str] | None = None,
) -> RunContext:
    """Build the run context from explicit values or the Actions environment.

    Raises:
        ContextError: If no pull request or repository can be determined.
    """
    env = os.environ if env is None else env

    number = pr_number if pr_number is not None else _pr_number_from_event(
        env.get("GITHUB_EVENT_PATH")
    )
    if number is None:
        raise ContextError("No pull request found. Use `on: pull_request`.")

    slug = repository or env.get("GITHUB_REPOSITORY", "")
    owner, _, repo = slug.partition("/")
    if not owner or not repo:
        raise ContextError(
            f"Cannot determine the repository (got '{slug}'). Expected 'owner/repo'."
        )

    api_url = env.get("GITHUB_API_URL") or DEFAULT_API_URL
    return RunContext(owner=owner, repo=repo, pr_number=number, api_url=api_url.rstrip("/"))
