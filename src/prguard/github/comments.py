"""Posting the advisory comment to the pull request thread."""

from __future__ import annotations

import time
from collections.abc import Callable

from prguard.exceptions import CommentPostError, HttpError
from prguard.github.client import GitHubClient
from prguard.github.context import RunContext
from prguard.retry import DEFAULT_DELAY, with_retry


def post_comment(
    client: GitHubClient,
    ctx: RunContext,
    body: str,
    retries: int,
    delay: float = DEFAULT_DELAY,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Create one issue comment, retrying transient failures.

    A post that fails transiently and is retried may still have landed,
    so a retry can leave two identical comments.

    Raises:
        CommentPostError: If the comment could not be created.
    """
    try:
        with_retry(
            lambda: client.create_issue_comment(ctx.owner, ctx.repo, ctx.pr_number, body),
            retries,
            delay=delay,
            sleep=sleep,
        )
    except HttpError as e:
        raise CommentPostError(str(e), status=e.status) from e
